from .exceptions import AssetLoadError, ConfigError, DrilldownException, NewsFetchError
from .logger_config import setup_logger

__all__ = [
    "AssetLoadError",
    "ConfigError",
    "DrilldownException",
    "NewsFetchError",
    "setup_logger",
]
