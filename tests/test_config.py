from __future__ import annotations

import pytest

from eventsync.config import EventSyncConfig
from eventsync.exceptions import EventSyncConfigError


def test_defaults_and_normalization() -> None:
    config = EventSyncConfig(base_url=" https://events.example.com/api/ ")

    assert config.base_url == "https://events.example.com/api"
    assert config.scope == "eventpro"
    assert config.auth_header == "x-auth-token"
    assert config.events_url == "https://events.example.com/api/events"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": ""},
        {"base_url": "https://x", "scope": " "},
        {"base_url": "https://x", "events_path": "events"},
        {"base_url": "https://x", "auth_header": ""},
    ],
)
def test_invalid_config_rejected(kwargs: dict[str, str]) -> None:
    with pytest.raises(EventSyncConfigError):
        EventSyncConfig(**kwargs)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENTSYNC_BASE_URL", "https://env.example.com")
    monkeypatch.setenv("EVENTSYNC_SCOPE", "eventease")
    monkeypatch.setenv("EVENTSYNC_TOKEN", "tok-env")
    monkeypatch.setenv("EVENTSYNC_REQUEST_TIMEOUT", "5")

    config = EventSyncConfig.from_env(scope="override")

    assert config.base_url == "https://env.example.com"
    assert config.scope == "override"
    assert config.token == "tok-env"
    assert config.request_timeout == 5.0


def test_from_env_requires_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EVENTSYNC_BASE_URL", raising=False)

    with pytest.raises(EventSyncConfigError, match="EVENTSYNC_BASE_URL"):
        EventSyncConfig.from_env()


def test_from_env_rejects_bad_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENTSYNC_BASE_URL", "https://env.example.com")
    monkeypatch.setenv("EVENTSYNC_REQUEST_TIMEOUT", "soon")

    with pytest.raises(EventSyncConfigError):
        EventSyncConfig.from_env()
