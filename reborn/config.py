"""Configuration management"""
import logging
import os

import pytz
from dotenv import load_dotenv

from reborn.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Users created without an explicit timezone get this IANA zone
DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "UTC")

# Scheduling limits
MAX_SLOTS_PER_SCHEDULE: int = int(os.getenv("MAX_SLOTS_PER_SCHEDULE", "50"))
SLOT_ALIGNMENT_MINUTES: int = int(os.getenv("SLOT_ALIGNMENT_MINUTES", "15"))


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        raise ConfigurationError(
            f"Unknown LOG_LEVEL: '{LOG_LEVEL}'",
            config_key="LOG_LEVEL",
        )
    if DEFAULT_TIMEZONE not in pytz.all_timezones_set:
        raise ConfigurationError(
            f"DEFAULT_TIMEZONE is not an IANA timezone: '{DEFAULT_TIMEZONE}'",
            config_key="DEFAULT_TIMEZONE",
        )
    if MAX_SLOTS_PER_SCHEDULE < 1:
        raise ConfigurationError(
            "MAX_SLOTS_PER_SCHEDULE must be positive",
            config_key="MAX_SLOTS_PER_SCHEDULE",
        )
    if SLOT_ALIGNMENT_MINUTES < 1 or 60 % SLOT_ALIGNMENT_MINUTES != 0:
        raise ConfigurationError(
            "SLOT_ALIGNMENT_MINUTES must divide an hour evenly",
            config_key="SLOT_ALIGNMENT_MINUTES",
        )
