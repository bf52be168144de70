import logging
import sys

from docextract.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _configured
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # uvicorn installs its own access logger; ours already records every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
