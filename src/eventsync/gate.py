"""Authentication gate: the single source of the request credential."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from eventsync.exceptions import EventSyncAuthenticationError

_logger = logging.getLogger(__name__)

#: Message used for every "no credential" failure.
NOT_AUTHENTICATED_MESSAGE = "User is not authenticated"


@runtime_checkable
class CredentialProvider(Protocol):
    """Anything that can hand out the current credential.

    Implementations must not have side effects: the store calls this once
    per operation.
    """

    def current_credential(self) -> str | None:
        ...


class SessionGate:
    """In-memory holder of the current authentication token.

    Usage::

        gate = SessionGate()
        gate.sign_in(token_from_login_screen)
        store = EventStore(api, gate)
    """

    def __init__(self, token: str | None = None) -> None:
        self._token: str | None = None
        if token is not None and token.strip():
            self._token = token.strip()

    def current_credential(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def sign_in(self, token: str) -> None:
        """Install *token* as the current credential."""
        stripped = token.strip() if token else ""
        if not stripped:
            raise EventSyncAuthenticationError("Cannot sign in with an empty token")
        self._token = stripped
        _logger.debug("Session credential installed")

    def sign_out(self) -> None:
        """Forget the current credential."""
        self._token = None
        _logger.debug("Session credential cleared")


def require_credential(provider: CredentialProvider) -> str:
    """Return the provider's credential or raise the uniform auth failure."""
    credential = provider.current_credential()
    if credential is None or not credential.strip():
        raise EventSyncAuthenticationError(NOT_AUTHENTICATED_MESSAGE)
    return credential
