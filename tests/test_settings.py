"""Settings are read from the environment at import time."""

from __future__ import annotations

import importlib

import pytest

import settings


@pytest.fixture
def reload_settings():
    yield lambda: importlib.reload(settings)
    importlib.reload(settings)


def test_defaults(monkeypatch: pytest.MonkeyPatch, reload_settings) -> None:
    for name in ("FX_RATES_URL", "FX_BASE_CURRENCY", "FX_REFRESH_INTERVAL_SECS", "FX_REQUEST_TIMEOUT_SECS"):
        monkeypatch.delenv(name, raising=False)
    module = reload_settings()
    assert module.rates_url() == "https://api.exchangerate-api.com/v4/latest/USD"
    assert module.REFRESH_INTERVAL_SECS == 300
    assert module.ERROR_MESSAGE == "Failed to fetch exchange rates. Try again later."


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, reload_settings) -> None:
    monkeypatch.setenv("FX_RATES_URL", "http://localhost:8000/rates/{base}")
    monkeypatch.setenv("FX_BASE_CURRENCY", "eur")
    monkeypatch.setenv("FX_REFRESH_INTERVAL_SECS", "60")
    module = reload_settings()
    assert module.BASE_CURRENCY == "EUR"
    assert module.rates_url() == "http://localhost:8000/rates/EUR"
    assert module.rates_url("gbp") == "http://localhost:8000/rates/GBP"
    assert module.REFRESH_INTERVAL_SECS == 60.0
