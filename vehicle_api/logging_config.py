"""
Logging setup for the service.

``setup_logging`` attaches a single console handler to the root logger.
It is called once from ``create_app``; repeated calls (tests, reloads)
leave an already configured root logger untouched.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a console handler.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``), case insensitive.
        Unknown names fall back to ``INFO``.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
