"""Search configuration for Concept Search.

Centralizes feature flags and tuning parameters for the concept search
service.  Values are loaded from environment variables with defaults so the
service works out-of-the-box.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Hard upper bound on rows returned by a single search.
RESULT_LIMIT = 1000


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


# ---------------------------------------------------------------------------
# Feature flags
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchFeatureFlags:
    """Runtime feature flags for the search subsystem."""

    enable_search_logging: bool = field(
        default_factory=lambda: _env_bool("SEARCH_ENABLE_LOGGING", default=True),
    )
    debug_search: bool = field(
        default_factory=lambda: _env_bool("SEARCH_DEBUG", default=False),
    )


# ---------------------------------------------------------------------------
# Search tuning
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchTuning:
    """Operational limits and thresholds."""

    min_query_length: int = field(
        default_factory=lambda: _env_int("SEARCH_MIN_QUERY_LENGTH", 2),
    )
    # Seconds; 0 or less disables the deadline.
    timeout_seconds: float = field(
        default_factory=lambda: _env_float("SEARCH_TIMEOUT_SECONDS", 30.0),
    )
    relationship_batch_size: int = field(
        default_factory=lambda: _env_int("SEARCH_RELATIONSHIP_BATCH_SIZE", 1000),
    )

    @property
    def default_timeout(self) -> float | None:
        return self.timeout_seconds if self.timeout_seconds > 0 else None


# ---------------------------------------------------------------------------
# Singleton instances (importable)
# ---------------------------------------------------------------------------

search_feature_flags = SearchFeatureFlags()
search_tuning = SearchTuning()
