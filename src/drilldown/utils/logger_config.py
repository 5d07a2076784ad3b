import logging
import os
from datetime import datetime

from drilldown.config import LOG_DIR


def setup_logger(name):
    """
    Basic Custom Logging formatting and handling for the drill-down console

    Parameters
    name (str) : Name of the logger

    Returns:
    logging.Logger : Configured Logger Instance
    """

    # handlers are attached once per logger name
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    os.makedirs(LOG_DIR, exist_ok=True)
    logger.setLevel(logging.DEBUG)

    # Configs for how logs will appear in logs/
    file_format = logging.Formatter(
        '%(levelname)s : %(name)s : %(funcName)s : %(lineno)d : %(message)s'
    )

    log_file = os.path.join(LOG_DIR, f'drilldown_{datetime.now().strftime("%m%d%Y")}.log')
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_format)

    # Console logs configs
    console_format = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_format)

    # Add the config to the Logger obj
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger
