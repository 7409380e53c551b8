"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with DEEPMAP_ prefix
3. .env file named by DEEPMAP_ENV_FILE (if set and present)
4. Field defaults (lowest)

Settings only supply defaults; DeepMap keyword arguments override them
per instance:
  DEEPMAP_STRICT_KEYS=true  -> DeepMap() rejects "abc" as a key-sequence
  DeepMap(strict_keys=False) -> accepts it regardless of the environment
"""

import functools as _functools
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    DEEPMAP_ENV_FILE names the file explicitly. If it is unset, or names a
    file that does not exist, no .env file is loaded.
    """
    if env_file := _os.environ.get("DEEPMAP_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    DeepMap configuration settings.

    All settings can be overridden via environment variables with DEEPMAP_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="DEEPMAP_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strict_keys: bool = _pydantic.Field(
        default=False,
        description="Reject str/bytes objects passed as key-sequences",
    )

    verify: bool = _pydantic.Field(
        default=False,
        description="Audit the trie after every mutation and raise on violations",
    )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file."""
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]


@_functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide settings.

    The .env file named by DEEPMAP_ENV_FILE is resolved here rather than at
    import time, so reset_settings() also picks up a changed file selector.
    """
    return Settings(_env_file=_get_env_file())  # type: ignore[call-arg]


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
