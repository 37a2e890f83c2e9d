"""Shared test fixtures."""

from __future__ import annotations

import pytest

from fetchbatch.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> object:
    """Isolate tests from FETCHBATCH_* environment and cached settings."""
    for var in ("FETCHBATCH_DEBUG", "FETCHBATCH_RUNTIME_VALIDATE_RESOLVED",
                "FETCHBATCH_RUNTIME_SKIP_EMPTY_RESOLVE", "FETCHBATCH_LOG_LEVEL", "FETCHBATCH_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def values() -> dict[int, str]:
    """Backing data for recording resources."""
    return {i: f"v{i}" for i in range(10)}
