"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from objcopier import Copier, CopierSettings, CopyConfiguration

SETTINGS_ENV = (
    "OBJCOPIER_IGNORE_EMPTY",
    "OBJCOPIER_DEEP_COPY",
    "OBJCOPIER_IGNORE_PRIVATE_FIELDS",
    "OBJCOPIER_REGISTRY_SIZE",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove OBJCOPIER_* variables so settings fall back to their defaults."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def copier():
    """Fresh Copier with explicit default settings and a private registry."""
    return Copier(
        settings=CopierSettings(
            ignore_empty=False, deep_copy=False, ignore_private_fields=False
        )
    )


@pytest.fixture
def deep():
    """Deep copy configuration."""
    return CopyConfiguration(deep_copy=True)
