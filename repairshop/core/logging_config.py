# repairshop/core/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER = "repairshop"


class RepairShopHandler(logging.StreamHandler):
    """Stream handler installed by :func:`configure_logging`."""

    def __init__(self, stream=None):
        super().__init__(stream)
        self.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger. Safe to call twice."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    if not any(isinstance(h, RepairShopHandler) for h in logger.handlers):
        logger.addHandler(RepairShopHandler())
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
