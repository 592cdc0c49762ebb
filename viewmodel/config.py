"""Runtime configuration for viewmodel.

Defaults are read from the environment once at import time. Request-scoped
values (locale, timezone, units) still come from the caller's UserContext;
these only fill in what the caller leaves out.
"""

import logging
import os
from typing import Optional

DEFAULT_TIMEZONE = os.environ.get("VIEWMODEL_DEFAULT_TIMEZONE", "UTC")
DEFAULT_LOCALE = os.environ.get("VIEWMODEL_DEFAULT_LOCALE", "de")
DEFAULT_LANGUAGE = os.environ.get("VIEWMODEL_DEFAULT_LANGUAGE", "de")
LOG_LEVEL = os.environ.get("VIEWMODEL_LOG_LEVEL", "INFO").upper()

# Field delimiter for CSV exports
CSV_DELIMITER = os.environ.get("VIEWMODEL_CSV_DELIMITER", ";")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for an application embedding viewmodel."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
    )
