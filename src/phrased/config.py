"""Runtime settings loaded from the environment."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WAIT_TIMEOUT_MS = 2000
DEFAULT_MAX_DEPTH = 10


class PhrasedSettings(BaseSettings):
    """Settings for assertion execution and diagnostics.

    Every field can be overridden with a ``PHRASED_``-prefixed environment
    variable, e.g. ``PHRASED_WAIT_TIMEOUT_MS=500``.
    """

    model_config = SettingsConfigDict(env_prefix="PHRASED_", extra="ignore")

    wait_timeout_ms: float = Field(default=DEFAULT_WAIT_TIMEOUT_MS, gt=0)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    render_max_depth: int | None = 4
    render_max_length: int | None = 20
    render_max_string: int | None = 200


@lru_cache(maxsize=1)
def get_settings() -> PhrasedSettings:
    """Return the process-wide settings, loading them on first use."""
    return PhrasedSettings()
