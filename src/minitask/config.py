"""
Runtime settings for minitask, read from ``MINITASK_*`` environment variables.
"""
import os
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from minitask.logs import get_logger, setup_logging

log = get_logger("config")

DEFAULT_DATE_FORMAT = "%m/%d/%Y"

ENV_VARS = {
    'log_level': 'MINITASK_LOG_LEVEL',
    'debug': 'MINITASK_DEBUG',
    'log_file': 'MINITASK_LOG_FILE',
    'date_format': 'MINITASK_DATE_FORMAT',
}

class Settings(BaseModel):
    """Settings shared by the models, the renderer and the menu."""

    log_level: str = Field(default="WARNING", description="Console log level")
    debug: bool = Field(default=False, description="Verbose console logging")
    log_file: Optional[str] = Field(default=None, description="Optional path for a detailed log file")
    date_format: str = Field(
        default=DEFAULT_DATE_FORMAT,
        description="strftime/strptime pattern used for due dates"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid log level: {v}")
        return v

    @field_validator('date_format')
    @classmethod
    def validate_date_format(cls, v):
        if not v or '%' not in v:
            raise ValueError(f"Invalid date format: {v!r}")
        # Must survive a round trip or due dates could never be entered
        sample = date(2000, 12, 31)
        try:
            parsed = datetime.strptime(sample.strftime(v), v).date()
        except ValueError as e:
            raise ValueError(f"Invalid date format: {v!r}") from e
        if parsed != sample:
            raise ValueError(f"Date format does not round-trip: {v!r}")
        return v

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from the environment. Raises ValidationError on a bad value."""
        return cls(**env_values())

    def parse_date(self, text: str) -> date:
        """Parse a due date entered by the user; raises ValueError on bad input."""
        return datetime.strptime(text.strip(), self.date_format).date()

    def format_date(self, value: date) -> str:
        return value.strftime(self.date_format)


def env_values() -> Dict[str, object]:
    """Raw setting values for every ``MINITASK_*`` variable that is set."""
    values = {}
    for field_name, var in ENV_VARS.items():
        raw = os.getenv(var)
        if not raw:
            continue
        if field_name == 'debug':
            values[field_name] = raw.lower() in ('1', 'true', 'yes')
        else:
            values[field_name] = raw
    return values

def load_settings() -> Tuple[Settings, List[str]]:
    """
    Load settings from the environment, dropping invalid values.

    Returns:
        The settings, with defaults in place of rejected values, and one
        message per rejected variable.
    """
    values = env_values()
    try:
        return Settings(**values), []
    except ValidationError as e:
        rejected = {}
        for err in e.errors():
            if err['loc']:
                rejected.setdefault(str(err['loc'][0]), err['msg'])
        problems = [f"{ENV_VARS[name]}={values[name]!r}: {msg}" for name, msg in rejected.items()]
        kept = {name: value for name, value in values.items() if name not in rejected}
        return Settings(**kept), problems

_settings: Optional[Settings] = None

def install_settings(settings: Settings):
    """Make ``settings`` the process settings and reconfigure logging from them."""
    global _settings
    _settings = settings
    setup_logging(settings)
    log.debug(f"Loaded settings: {settings.model_dump()}")

def get_settings() -> Settings:
    """Return the process settings, loading them from the environment on first use."""
    if _settings is None:
        settings, problems = load_settings()
        install_settings(settings)
        for problem in problems:
            log.warning(f"Ignoring invalid setting {problem}")
    return _settings

def reset_settings():
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
