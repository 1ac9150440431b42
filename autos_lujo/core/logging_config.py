"""
Logging setup for the API.

``setup_logging`` attaches a single console handler to the root logger.
Calling it again (for instance when the app module is re-imported by the
test suite) is a no-op.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
