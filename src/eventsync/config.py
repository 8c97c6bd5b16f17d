"""Client configuration for eventsync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from eventsync.exceptions import EventSyncConfigError

DEFAULT_USER_AGENT = "eventsync/1 (+aiohttp)"


@dataclasses.dataclass(frozen=True)
class EventSyncConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Base URL of the event service API (e.g. ``"https://api.example.com/api"``).
    scope : str
        Product line that owns the records. Sent as the ``platform`` tag on
        every create/update body and as a query parameter when listing.
    events_path : str
        Path of the event collection resource, relative to ``base_url``.
    auth_header : str
        Name of the request header carrying the credential.
    token : str or None
        Initial credential used to seed the default session gate.
    request_timeout : float
        Total per-request timeout in seconds. ``0`` or a negative value
        disables the transport timeout.
    user_agent : str
        User-Agent header sent with every request.
    """

    base_url: str
    scope: str = "eventpro"
    events_path: str = "/events"
    auth_header: str = "x-auth-token"
    token: str | None = None
    request_timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise EventSyncConfigError("base_url is required")
        if not self.scope or not self.scope.strip():
            raise EventSyncConfigError("scope must be non-empty")
        if not self.events_path.startswith("/"):
            raise EventSyncConfigError(f"events_path must start with '/': {self.events_path!r}")
        if not self.auth_header.strip():
            raise EventSyncConfigError("auth_header must be non-empty")
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))
        object.__setattr__(self, "scope", self.scope.strip())

    @property
    def events_url(self) -> str:
        return f"{self.base_url}{self.events_path}"

    @classmethod
    def from_env(cls, **overrides: Any) -> EventSyncConfig:
        """Create configuration from environment variables.

        Reads ``EVENTSYNC_BASE_URL`` and the optional ``EVENTSYNC_*``
        variables listed below. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        EventSyncConfig
            Populated configuration.

        Raises
        ------
        EventSyncConfigError
            If no base URL is configured or a numeric variable is malformed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "EVENTSYNC_BASE_URL": "base_url",
            "EVENTSYNC_SCOPE": "scope",
            "EVENTSYNC_EVENTS_PATH": "events_path",
            "EVENTSYNC_AUTH_HEADER": "auth_header",
            "EVENTSYNC_TOKEN": "token",
            "EVENTSYNC_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request_timeout is numeric, handle separately
        timeout_env = env.get("EVENTSYNC_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise EventSyncConfigError(f"EVENTSYNC_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        if "base_url" not in config_kwargs:
            raise EventSyncConfigError("EVENTSYNC_BASE_URL is not set")

        return cls(**config_kwargs)
