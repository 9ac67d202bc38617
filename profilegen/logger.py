import logging
import sys
from typing import Optional

from profilegen.exceptions import InvalidSettingError

ROOT_LOGGER_NAME = "profilegen"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stderr handler to the package logger once.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    if level:
        try:
            logger.setLevel(level.upper())
        except ValueError:
            raise InvalidSettingError(f"Unknown log level {level!r}", field_name="log_level") from None
    return logger


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
