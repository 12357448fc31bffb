"""Singleton logging configuration.

setup_logging() configures the root logger once per process. The CLI
calls it before importing the rest of the package; library users can
skip it and configure logging themselves.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger. A second call is a no-op."""
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )


def set_level(level: str) -> None:
    """Change the root level after setup (``--verbose`` / settings)."""
    logging.getLogger().setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )
