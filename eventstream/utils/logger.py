"""
Logging configuration for EventStream
"""
import logging
import sys
from loguru import logger
from ..config import config


class InterceptHandler(logging.Handler):
    """Route standard logging records into loguru"""

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(log_to_file: bool = True):
    """Configure application logging"""

    # Remove default loguru handler
    logger.remove()

    if log_to_file:
        config.LOGS_DIR.mkdir(exist_ok=True, parents=True)
        logger.add(
            config.LOG_FILE,
            rotation="100 MB",
            retention="14 days",
            level=config.LOG_LEVEL,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {module}:{function}:{line} - {message}",
            backtrace=True,
            diagnose=False
        )

    # Add console handler with color
    logger.add(
        sys.stdout,
        level=config.LOG_LEVEL,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan> - <level>{message}</level>",
        colorize=True
    )

    # Replace standard logging with loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Werkzeug logs every request line at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    logger.debug("Logging configured")
    return logger
