"""
tests/conftest.py -- Shared fixtures for authcheck tests.

This module provides:
  - make_target: writes a throwaway auth package into tmp_path and puts it
    on sys.path
  - a sys.modules sweep so one test's fake package never leaks into the next
  - fresh Settings and color state for every test

Design: every fake package uses the real default name (auth_system) so the
tests exercise the same manifest the CLI builds. That only works because the
sweep below drops auth_system* from sys.modules before and after each test.
"""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from core.config import get_settings
from core.formatter import disable_color, reset_color
from core.models import DEFAULT_TARGET

# ---------------------------------------------------------------------------
# Sample module bodies
# ---------------------------------------------------------------------------

CORE_AUTH = """
def authenticate(credentials):
    return credentials

def authorize(user, action):
    return True
"""

FULL_PACKAGE = {
    "__init__.py": CORE_AUTH,
    "adapters/jwt.py": "def sign(payload):\n    return payload\n",
    "adapters/memory.py": "class MemoryStore:\n    pass\n",
    "utils/password.py": "def hash_password(raw):\n    return raw\n",
    "utils/token.py": "def new_token():\n    return 't'\n",
    "utils/validation.py": "def is_email(value):\n    return '@' in value\n",
}


def _sweep_modules(prefix: str = DEFAULT_TARGET) -> None:
    for name in list(sys.modules):
        if name == prefix or name.startswith(prefix + "."):
            del sys.modules[name]


@pytest.fixture(autouse=True)
def _isolate_modules(monkeypatch) -> Generator[None, None, None]:
    # add_search_path() mutates sys.path; hand each test its own copy.
    monkeypatch.setattr(sys, "path", sys.path.copy())
    _sweep_modules()
    yield
    _sweep_modules()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch) -> Generator[None, None, None]:
    for var in (
        "AUTHCHECK_TARGET_PACKAGE",
        "AUTHCHECK_TARGET_PATH",
        "AUTHCHECK_STRICT_CALLABLES",
        "AUTHCHECK_LOG_LEVEL",
        "AUTHCHECK_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _no_color() -> Generator[None, None, None]:
    disable_color()
    yield
    reset_color()


def write_package(root: Path, files: dict[str, str], package: str = DEFAULT_TARGET) -> Path:
    """Write files under root/package, adding empty __init__.py where missing."""
    base = root / package
    for relative, source in files.items():
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
    for directory in [base, *[p for p in base.rglob("*") if p.is_dir()]]:
        init = directory / "__init__.py"
        if not init.exists():
            init.write_text("")
    return base


@pytest.fixture
def full_package() -> dict[str, str]:
    """Core with authenticate/authorize plus all five optional units."""
    return dict(FULL_PACKAGE)


@pytest.fixture
def make_target(tmp_path, monkeypatch) -> Generator[Callable[..., Path], None, None]:
    """Yield a builder that writes a fake auth package and makes it importable."""
    packages: list[str] = []

    def _make(files: dict[str, str], package: str = DEFAULT_TARGET) -> Path:
        base = write_package(tmp_path, files, package)
        monkeypatch.syspath_prepend(str(tmp_path))
        packages.append(package)
        return base

    yield _make

    for package in packages:
        _sweep_modules(package)


@pytest.fixture
def package_writer() -> Callable[..., Path]:
    """write_package() without touching sys.path, for subprocess-based tests."""
    return write_package
