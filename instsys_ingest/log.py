import logging

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_ROOT = 'instsys_ingest'


def setup_logging(level="INFO") -> logging.Logger:
    """Setup the package logger (one stream handler, shared by every module)"""
    logger = logging.getLogger(_ROOT)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger of the package logger, e.g. get_logger(__name__)"""
    if not logging.getLogger(_ROOT).handlers:
        setup_logging()
    if not name.startswith(_ROOT):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
