from __future__ import annotations

import pytest

from pyshelly.config import DeviceConfig
from pyshelly.exceptions import ShellyConfigError


def test_defaults() -> None:
    config = DeviceConfig()
    assert config.ttl_padding_ms == 0
    assert config.raise_listener_errors is False


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYSHELLY_TTL_PADDING_MS", "500")
    monkeypatch.setenv("PYSHELLY_RAISE_LISTENER_ERRORS", "yes")

    config = DeviceConfig.from_env()
    assert config.ttl_padding_ms == 500
    assert config.raise_listener_errors is True


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYSHELLY_TTL_PADDING_MS", "500")
    monkeypatch.setenv("PYSHELLY_RAISE_LISTENER_ERRORS", "1")

    config = DeviceConfig.from_env(ttl_padding_ms=0, raise_listener_errors=False)
    assert config.ttl_padding_ms == 0
    assert config.raise_listener_errors is False


def test_invalid_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYSHELLY_TTL_PADDING_MS", "soon")
    with pytest.raises(ShellyConfigError):
        DeviceConfig.from_env()


def test_negative_padding_rejected() -> None:
    with pytest.raises(ShellyConfigError):
        DeviceConfig(ttl_padding_ms=-1)
