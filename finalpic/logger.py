import logging
import sys


def setup_logger(level: int = logging.INFO, name: str = "finalpic") -> logging.Logger:
    """Create or update the project logger.

    - Ensures there is exactly one stderr StreamHandler on the base logger and
      updates its formatter instead of bailing out early, so repeated calls are safe.
    - Nothing is written to disk.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    stream_handler: logging.StreamHandler | None = None
    for h in list(logger.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr:
            stream_handler = h
            break

    if stream_handler is None:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        logger.addHandler(stream_handler)

    # Do not include the full logger name in messages to keep output concise
    fmt = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    stream_handler.setFormatter(fmt)

    # Do not propagate beyond the project logger
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger("finalpic")
    if not base.handlers:
        base = setup_logger()
    return base if not name else base.getChild(name)
