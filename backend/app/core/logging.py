"""
Logging setup. Importing this module configures the root logger once,
using the level from the medication safety config.
"""

import logging

from app.services.medication_safety.config import get_config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger; later calls only adjust the level."""
    level = (level or get_config().log_level).upper()
    root = logging.getLogger()

    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)

    # Quieter third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)


configure_logging()
