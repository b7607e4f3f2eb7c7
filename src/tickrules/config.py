"""Configuration for next-occurrence search.

The configuration is an explicit value passed to the search functions; there
is no process-wide instance. Defaults can be overridden from the environment:

    TICKRULES_MAX_DAY_STEPS=5000
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime

from tickrules.errors import ConfigError

# Returned when no occurrence is found within the search cap.
FAR_FUTURE = datetime(9999, 12, 31, 23, 59)

# Enough day steps to cover every day-of-month, month and weekday combination
# at least twice.
DEFAULT_MAX_DAY_STEPS = 31 * 8 * 12


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for next-occurrence search.

    Attributes:
        max_day_steps: Maximum number of whole-day steps before giving up.
        sentinel: Timestamp returned when the search gives up.
    """

    max_day_steps: int = DEFAULT_MAX_DAY_STEPS
    sentinel: datetime = FAR_FUTURE

    def __post_init__(self) -> None:
        if self.max_day_steps < 1:
            raise ConfigError(
                f"max_day_steps must be positive, got {self.max_day_steps}"
            )

    @classmethod
    def from_env(cls, prefix: str = "TICKRULES") -> "SearchConfig":
        """Build a configuration from environment variables.

        Args:
            prefix: Environment variable prefix.

        Returns:
            SearchConfig with overrides applied.

        Raises:
            ConfigError: If a variable holds an invalid value.
        """
        key = f"{prefix}_MAX_DAY_STEPS"
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return cls()

        try:
            steps = int(raw)
        except ValueError:
            raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
        return cls(max_day_steps=steps)


DEFAULT_CONFIG = SearchConfig()
