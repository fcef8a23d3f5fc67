"""Console logging configuration."""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger for console output.

    Audit entries go to the category files written by ``EventLogService``;
    this only covers operational messages.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
