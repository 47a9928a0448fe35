"""Engine settings with code-baked defaults.

Priority chain (highest to lowest):
  1. Init kwargs  — ``EngineSettings(skip_ahead=True)``
  2. Env vars     — ``CHRONOSPAN_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Tuning knobs for the duration engine, frozen after construction."""

    model_config = SettingsConfigDict(env_prefix="CHRONOSPAN_", frozen=True)

    # Let interval decomposition jump ahead by a canonical-length estimate
    # before stepping unit by unit.  Results are identical either way.
    skip_ahead: bool = False

    # Upper bound on the number of instants materialize() may produce.
    materialize_limit: int | None = Field(default=None, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    return EngineSettings()
