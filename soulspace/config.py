"""Configuration management"""
import logging
import os
from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Rewards
# When disabled, level-ups are reported but no level_up_bonus grant is issued
LEVEL_UP_BONUS_ENABLED: bool = os.getenv("LEVEL_UP_BONUS_ENABLED", "true").lower() == "true"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# Validation
def validate_config() -> None:
    """Validate configuration"""
    if LOG_LEVEL.upper() not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"LOG_LEVEL must be one of {', '.join(_VALID_LOG_LEVELS)}, got {LOG_LEVEL!r}"
        )


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL"""
    validate_config()
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, LOG_LEVEL.upper())
    )
