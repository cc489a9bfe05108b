"""Core app configuration, database and security."""

from ratestore.core.config import get_settings, settings
from ratestore.core.database import get_db
from ratestore.core.logging_config import configure_logging

__all__ = ["configure_logging", "get_settings", "settings", "get_db"]
