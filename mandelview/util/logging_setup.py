import logging
import logging.handlers
from typing import Optional, Union

_LOGGER_NAME = "mandelview"

def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    if suffix:
        return logging.getLogger(f"{_LOGGER_NAME}.{suffix}")
    return logging.getLogger(_LOGGER_NAME)

def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value

def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03dZ %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

def configure_root_logging(
    *,
    level: Union[int, str] = logging.INFO,
    console: bool = True,
    log_file: Optional[str] = "mandelview.log",
    rotate_bytes: int = 5 * 1024 * 1024,
    rotate_count: int = 5,
) -> logging.Logger:
    """(Re)install the viewer's handlers on the ``mandelview`` logger.

    Child loggers (``mandelview.pipeline``, ``mandelview.scheduler`` ...)
    propagate here; nothing reaches the root logger.
    """
    level = resolve_level(level)
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    shutdown_logging()

    handlers = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file and log_file.strip():
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=rotate_bytes, backupCount=rotate_count, encoding="utf-8"
        ))
    fmt = _build_formatter()
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        logger.addHandler(h)
    return logger

def shutdown_logging() -> None:
    logger = get_logger()
    for h in list(logger.handlers):
        h.flush()
        h.close()
        logger.removeHandler(h)
