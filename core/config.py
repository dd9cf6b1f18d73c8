"""
core/config.py -- Centralized checker configuration via pydantic-settings.

All environment variable reads for authcheck happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Environment variables carry the AUTHCHECK_ prefix:

  AUTHCHECK_TARGET_PACKAGE    import name of the auth package (auth_system)
  AUTHCHECK_TARGET_PATH       directory prepended to sys.path before probing
  AUTHCHECK_STRICT_CALLABLES  treat a non-callable authenticate/authorize as fatal
  AUTHCHECK_LOG_LEVEL         logging level for the CLI and API (WARNING)
  AUTHCHECK_DEBUG             forces DEBUG logging

Layer rule: core/ is the kernel. This module may not import from api/.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models import DEFAULT_TARGET

logger = logging.getLogger("authcheck.config")

DOTTED_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Checker settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in tests
    without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTHCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # ------------------------------------------------------------------
    # Target
    # ------------------------------------------------------------------

    target_package: str = DEFAULT_TARGET
    # Empty string means "use sys.path as-is".
    target_path: str = ""

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------

    strict_callables: bool = False
    log_level: str = "WARNING"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("target_package")
    @classmethod
    def validate_target_package(cls, value: str) -> str:
        value = value.strip()
        if not DOTTED_NAME_RE.match(value):
            raise ValueError(f"TARGET_PACKAGE must be a dotted import name, got {value!r}.")
        return value

    @field_validator("target_path")
    @classmethod
    def validate_target_path(cls, value: str) -> str:
        value = value.strip()
        if value and not Path(value).is_dir():
            raise ValueError(f"TARGET_PATH {value!r} is not a directory.")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}.")
        return value

    @model_validator(mode="after")
    def apply_debug(self) -> "Settings":
        """DEBUG=true overrides whatever LOG_LEVEL says."""
        if self.debug and self.log_level != "DEBUG":
            logger.debug("DEBUG set, raising log level from %s to DEBUG", self.log_level)
            self.log_level = "DEBUG"
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
