class DrilldownException(Exception):
    """Base Exception Class"""
    pass
class AssetLoadError(DrilldownException):
    """Error class for when a map image or offense table can't be read"""
    pass
class NewsFetchError(DrilldownException):
    """Error for a failed or rejected headline search request"""
    pass
class ConfigError(DrilldownException):
    """Config Error"""
    pass
