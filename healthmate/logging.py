"""
Logging configuration.
Uvicorn and application logger levels; service failures are logged with logger.exception
(see healthmate/services/summarizer.py and healthmate/main.py).
"""
import logging
import sys


def setup_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
) -> None:
    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stdout,
        force=True,
    )
    # Keep uvicorn access and error loggers at the same level
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        log = logging.getLogger(name)
        if level is not None:
            log.setLevel(level)
    logging.getLogger("healthmate").setLevel(level)
    # httpx logs every request at INFO, including the Gemini URL with its key
    logging.getLogger("httpx").setLevel(logging.WARNING)
