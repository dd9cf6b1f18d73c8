"""Unit tests for core/config.py — Settings validation and the cached singleton."""

import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings


class TestDefaults:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.target_package == "auth_system"
        assert settings.target_path == ""
        assert settings.strict_callables is False
        assert settings.log_level == "WARNING"

    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AUTHCHECK_TARGET_PACKAGE", "my_auth.core")
        monkeypatch.setenv("AUTHCHECK_TARGET_PATH", str(tmp_path))
        monkeypatch.setenv("AUTHCHECK_STRICT_CALLABLES", "true")
        settings = Settings(_env_file=None)
        assert settings.target_package == "my_auth.core"
        assert settings.target_path == str(tmp_path)
        assert settings.strict_callables is True

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("TARGET_PACKAGE", "other")
        assert Settings(_env_file=None).target_package == "auth_system"


class TestValidation:
    @pytest.mark.parametrize("value", ["", "1auth", "auth-system", "auth..system", "auth/system"])
    def test_invalid_package_rejected(self, value):
        with pytest.raises(ValidationError, match="dotted import name"):
            Settings(_env_file=None, target_package=value)

    def test_package_whitespace_stripped(self):
        assert Settings(_env_file=None, target_package="  auth_system ").target_package == "auth_system"

    def test_missing_target_path_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="not a directory"):
            Settings(_env_file=None, target_path=str(tmp_path / "nope"))

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="info").log_level == "INFO"

    def test_bad_log_level_rejected(self):
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            Settings(_env_file=None, log_level="chatty")

    def test_debug_forces_debug_level(self):
        assert Settings(_env_file=None, debug=True, log_level="ERROR").log_level == "DEBUG"


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_picks_up_env(self, monkeypatch):
        assert get_settings().target_package == "auth_system"
        monkeypatch.setenv("AUTHCHECK_TARGET_PACKAGE", "changed")
        assert get_settings().target_package == "auth_system"
        get_settings.cache_clear()
        assert get_settings().target_package == "changed"
