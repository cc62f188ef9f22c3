"""
Transport layer for AT&T Speech HTTP communication.

This module provides the Transport class that handles low-level HTTP
communication with the AT&T Speech API: session management, TLS settings,
default headers and translation of aiohttp failures into SDK exceptions.
"""

from __future__ import annotations

import asyncio
import json
import sys
import uuid
from collections.abc import Mapping
from typing import Any
from typing import Optional

import aiohttp

from ._exceptions import ConnectionError
from ._exceptions import ParseError
from ._exceptions import TimeoutError
from ._exceptions import TransportError
from ._helpers import get_version
from ._helpers import underscore_keys
from ._logging import get_logger
from ._models import ConnectionConfig


class Transport:
    """
    HTTP transport layer for AT&T Speech API communication.

    The underlying aiohttp session is created lazily on first use and carries
    a fixed default ``Accept`` header for its whole lifetime. Per-request
    headers take precedence over the session defaults.

    Args:
        url: Base URL for the AT&T Speech API.
        conn_config: Connection configuration with timeouts.
        accept: Default Accept header for every request on this session.
        ssl_verify: Verify the peer certificate. Disabling it is insecure.
        request_id: Optional unique identifier for log correlation. Generated
                   automatically if not provided.

    Examples:
        >>> transport = Transport("https://api.att.com", ConnectionConfig())
        >>> audio = await transport.post("/speech/v3/textToSpeech", data=b"Hello")
        >>> await transport.close()
    """

    def __init__(
        self,
        url: str,
        conn_config: ConnectionConfig,
        *,
        accept: str = "application/json",
        ssl_verify: bool = True,
        request_id: Optional[str] = None,
    ) -> None:
        self._url = url
        self._conn_config = conn_config
        self._accept = accept
        self._ssl_verify = ssl_verify
        self._request_id = request_id or str(uuid.uuid4())
        self._session: Optional[aiohttp.ClientSession] = None
        self._closed = False
        self._logger = get_logger(__name__)

        if not ssl_verify:
            self._logger.warning("SSL peer verification is disabled for %s; this is insecure", self._url)

        self._logger.debug(
            "Transport initialized (request_id=%s, url=%s, accept=%s)", self._request_id, self._url, self._accept
        )

    async def __aenter__(self) -> Transport:
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def accept(self) -> str:
        return self._accept

    @property
    def is_connected(self) -> bool:
        """True while the transport holds an open session."""
        return self._session is not None and not self._closed

    async def post(
        self,
        path: str,
        *,
        data: Optional[bytes] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """
        Send POST request to the API.

        The body is returned whatever the HTTP status; error statuses are logged.

        Args:
            path: API endpoint path
            data: Optional raw request body
            params: Optional query parameters
            headers: Optional request headers, overriding session defaults
            timeout: Optional request timeout

        Returns:
            Raw response body

        Raises:
            ConnectionError: If the request cannot be completed
            TimeoutError: If the request times out
            TransportError: For any other transport failure
        """
        return await self._request("POST", path, data=data, params=params, headers=headers, timeout=timeout)

    async def post_json(
        self,
        path: str,
        *,
        data: Optional[bytes] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Send POST request and return the key-normalized JSON body.

        Raises:
            ParseError: If the body is not valid JSON
            ConnectionError: If the request cannot be completed
            TimeoutError: If the request times out
            TransportError: For any other transport failure
        """
        body = await self.post(path, data=data, params=params, headers=headers, timeout=timeout)
        try:
            parsed = json.loads(body)
        except ValueError as e:
            self._logger.error("Failed to parse JSON response from %s: %s", path, e)
            raise ParseError(f"Failed to parse response: {e}") from e
        return underscore_keys(parsed)

    async def close(self) -> None:
        """
        Close the HTTP session and cleanup resources.

        Safe to call multiple times.
        """
        if self._session:
            try:
                await self._session.close()
            except Exception:
                pass  # Best effort cleanup
            finally:
                self._session = None
                self._closed = True

    def _ensure_session(self) -> None:
        """Ensure HTTP session is created."""
        if self._session is None and not self._closed:
            self._logger.debug(
                "Creating HTTP session (connect_timeout=%.1fs, operation_timeout=%.1fs, ssl_verify=%s)",
                self._conn_config.connect_timeout,
                self._conn_config.operation_timeout,
                self._ssl_verify,
            )
            timeout = aiohttp.ClientTimeout(
                total=self._conn_config.operation_timeout,
                connect=self._conn_config.connect_timeout,
            )
            connector = aiohttp.TCPConnector(ssl=False) if not self._ssl_verify else None
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers={
                    "Accept": self._accept,
                    "User-Agent": (
                        f"att-speech-v{get_version()} python/{sys.version_info.major}.{sys.version_info.minor}"
                    ),
                },
            )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        data: Optional[bytes] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        self._ensure_session()

        if self._session is None:
            raise ConnectionError("Failed to create HTTP session: transport is closed")

        url = f"{self._url.rstrip('/')}{path}"
        self._logger.debug(
            "Sending HTTP request %s %s (request_id=%s, body_bytes=%d)",
            method,
            url,
            self._request_id,
            len(data) if data else 0,
        )
        kwargs: dict[str, Any] = {"data": data, "params": params, "headers": headers}
        if timeout:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            response = await self._session.request(method, url, **kwargs)
            body = await response.read()
        except asyncio.TimeoutError as e:
            self._logger.error("Request timeout %s %s: %r", method, path, e)
            raise TimeoutError(f"Request timeout for {method} {path}: {str(e) or type(e).__name__}") from e
        except aiohttp.ClientError as e:
            self._logger.error("Request failed %s %s: %s", method, path, e)
            raise ConnectionError(f"Request failed: {e}") from e
        except Exception as e:
            self._logger.error("Unexpected error %s %s: %s", method, path, e)
            raise TransportError(f"Unexpected error: {e}") from e

        if response.status >= 400:
            self._logger.warning("HTTP %d %s returned for %s %s", response.status, response.reason, method, path)
        else:
            self._logger.debug("HTTP %d received for %s %s (bytes=%d)", response.status, method, path, len(body))
        return body
