"""
Process configuration - read once at startup, immutable afterwards.

Values come from environment variables (a .env file is loaded first).
Missing advisory settings are not an error: every pipeline run simply
takes the rule-based path.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BUDGET_PER_PERSON = 15.0
DEFAULT_PLANNED_HEADCOUNT = 10
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_MAX_POLL_ATTEMPTS = 60
DEFAULT_PORT = 3001


@dataclass(frozen=True)
class Settings:
    advisory_endpoint: Optional[str] = None
    advisory_agent_id: Optional[str] = None
    advisory_api_key: Optional[str] = None
    budget_per_person: float = DEFAULT_BUDGET_PER_PERSON
    planned_headcount: int = DEFAULT_PLANNED_HEADCOUNT
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_poll_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def advisory_configured(self) -> bool:
        return bool(self.advisory_endpoint and self.advisory_agent_id)


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_number(name: str, default, cast, minimum=None):
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}={raw!r}, using default {default}")
        return default
    if minimum is None and value <= 0:
        logger.warning(f"Non-positive value for {name}={raw!r}, using default {default}")
        return default
    if minimum is not None and value < minimum:
        logger.warning(f"Value for {name}={raw!r} below {minimum}, using default {default}")
        return default
    return value


def resolve_log_level(raw: Optional[str], default: str = "INFO") -> str:
    """Upper-cased level name, or the default when the name is not a registered level."""
    if raw is None or not raw.strip():
        return default
    level = raw.strip().upper()
    # getLevelName returns the numeric level only for registered names
    if not isinstance(logging.getLevelName(level), int):
        logger.warning(f"Unknown log level {raw!r}, using default {default}")
        return default
    return level


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    load_dotenv()
    return Settings(
        advisory_endpoint=_env_str("ADVISORY_ENDPOINT"),
        advisory_agent_id=_env_str("ADVISORY_AGENT_ID"),
        advisory_api_key=_env_str("ADVISORY_API_KEY") or _env_str("OPENAI_API_KEY"),
        budget_per_person=_env_number("LUNCH_BUDGET_PER_PERSON", DEFAULT_BUDGET_PER_PERSON, float),
        planned_headcount=_env_number("HEADCOUNT", DEFAULT_PLANNED_HEADCOUNT, int, minimum=0),
        poll_interval_seconds=_env_number(
            "ADVISORY_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS, float
        ),
        max_poll_attempts=_env_number("ADVISORY_MAX_POLL_ATTEMPTS", DEFAULT_MAX_POLL_ATTEMPTS, int),
        port=_env_number("PORT", DEFAULT_PORT, int),
        log_level=resolve_log_level(_env_str("LOG_LEVEL")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded on first use."""
    return load_settings()
