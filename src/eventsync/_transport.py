"""HTTP transport for the event collection resource."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from eventsync._redact import redact_for_log
from eventsync.config import EventSyncConfig
from eventsync.exceptions import EventSyncApiError, EventSyncAuthenticationError, EventSyncTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def _decode_json(text: str) -> Any:
    """Decode a response body, returning ``None`` for empty or non-JSON text."""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


class HttpTransport:
    """JSON-over-HTTP transport backed by an ``aiohttp.ClientSession``.

    Returns the decoded JSON body of 2xx responses (``None`` for an empty
    body). Non-2xx responses raise :class:`EventSyncApiError` carrying the
    decoded error payload; 401/403 raise :class:`EventSyncAuthenticationError`.
    Network failures and timeouts raise :class:`EventSyncTransportError`.
    """

    def __init__(
        self,
        config: EventSyncConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        if config.request_timeout > 0:
            self._timeout: aiohttp.ClientTimeout | None = aiohttp.ClientTimeout(total=config.request_timeout)
        else:
            self._timeout = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> Any:
        url = f"{self._config.base_url}{path}"
        request_headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        if json_body is not None:
            request_headers["content-type"] = "application/json"
        if headers:
            request_headers.update(headers)

        _logger.debug(
            "%s %s headers=%s body=%s",
            method,
            url,
            redact_for_log(request_headers, extra_keys=(self._config.auth_header,)),
            redact_for_log(json_body),
        )

        kwargs: dict[str, Any] = {"headers": request_headers}
        if params:
            kwargs["params"] = dict(params)
        if json_body is not None:
            kwargs["data"] = json.dumps(json_body)
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                status = resp.status
                body = await resp.read()
                charset = resp.charset or "utf-8"
        except aiohttp.ClientError as exc:
            raise EventSyncTransportError(
                f"{method} {path} failed: {exc}",
                endpoint=path,
            ) from exc
        except asyncio.TimeoutError as exc:
            raise EventSyncTransportError(
                f"{method} {path} timed out",
                endpoint=path,
            ) from exc

        try:
            text = body.decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            raise EventSyncTransportError(
                f"Undecodable {charset} body from {path} (HTTP {status})",
                status_code=status,
                endpoint=path,
            ) from exc

        payload = _decode_json(text)
        _logger.debug("%s %s -> HTTP %s %s", method, path, status, redact_for_log(payload))

        if status in (401, 403):
            raise EventSyncAuthenticationError(
                f"HTTP {status} from {path}: {text[:200]}",
                status_code=status,
                endpoint=path,
                payload=payload,
            )
        if not 200 <= status < 300:
            raise EventSyncApiError(
                f"HTTP {status} from {path}: {text[:200]}",
                status_code=status,
                endpoint=path,
                payload=payload,
            )
        if payload is None and text.strip():
            raise EventSyncTransportError(
                f"Invalid JSON from {path}: {text[:200]}",
                status_code=status,
                endpoint=path,
            )
        return payload
