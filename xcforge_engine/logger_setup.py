import logging
import coloredlogs

LOGGER_NAME = "xcforge"
LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'

def setup_global_logger(level: str = "INFO"):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # coloredlogs installs its own console handler on 'logger'
    coloredlogs.install(level=level, logger=logger, fmt=LOG_FORMAT)
    return logger

def set_log_level(level: str):
    """Changes the level of the package logger and its coloredlogs handler."""
    level_name = level.upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise ValueError(f"Unknown log level '{level}'.")
    logger.setLevel(level_name)
    for handler in logger.handlers:
        handler.setLevel(level_name)

# Initialize global logger
logger = setup_global_logger()
