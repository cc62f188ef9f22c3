"""
Synchronous client for the AT&T Speech API.

Client wraps AsyncClient and drives it on a private event loop, so every
method blocks until its HTTP round trip completes.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Coroutine
from collections.abc import Mapping
from typing import Any
from typing import Callable
from typing import Optional
from typing import TypeVar
from typing import Union

from ._async_client import AsyncClient
from ._exceptions import TransportError
from ._helpers import AudioSource
from ._helpers import TextSource
from ._logging import get_logger
from ._models import AudioType
from ._models import ClientConfig
from ._models import ConnectionConfig
from ._models import Scope
from ._models import SpeechContext

T = TypeVar("T")


class Client:
    """
    Blocking client for AT&T Speech transcription and synthesis.

    The OAuth token exchange runs inside the constructor: a Client that has
    been returned is always authenticated. When the exchange fails the HTTP
    session is released and the error propagates. Tokens are never refreshed;
    create a new Client once the access token expires.

    Calls made from several threads on the same instance are serialized.
    Inside a running event loop use AsyncClient instead.

    Args:
        api_key: AT&T Speech API key, a complete ClientConfig, or a mapping of
            ClientConfig fields.
        secret_key: AT&T Speech API secret key.
        scope: Authorization scope, "SPEECH" or "TTS".
        base_url: Service root URL. Defaults to https://api.att.com.
        ssl_verify: Set to False to skip peer certificate verification.
        config: Complete client configuration. Overrides the fields above.
        conn_config: Connection timeouts.

    Raises:
        ConfigurationError: If no settings are given or the scope is invalid.
        AuthenticationError: If the service does not return a token pair.
        TransportError: If the token request fails.

    Examples:
        >>> with Client("key", "secret", "TTS") as client:
        ...     audio = client.text_to_speech("Hello world")

        From a configuration object:
            >>> config = ClientConfig(api_key="key", secret_key="secret", scope=Scope.SPEECH)
            >>> client = Client(config)
            >>> client.speech_to_text(Path("hello.wav"))
    """

    def __init__(
        self,
        api_key: Union[str, ClientConfig, Mapping[str, Any], None] = None,
        secret_key: Optional[str] = None,
        scope: Union[Scope, str, None] = None,
        base_url: Optional[str] = None,
        ssl_verify: Optional[bool] = None,
        *,
        config: Optional[ClientConfig] = None,
        conn_config: Optional[ConnectionConfig] = None,
    ) -> None:
        self._async_client = AsyncClient(
            api_key,
            secret_key,
            scope,
            base_url,
            ssl_verify,
            config=config,
            conn_config=conn_config,
        )
        self._loop = asyncio.new_event_loop()
        self._lock = threading.Lock()
        self._owner: Optional[int] = None
        self._logger = get_logger(__name__)

        try:
            self._run(self._async_client.authenticate())
        except BaseException:
            self.close()
            raise

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._async_client.config

    @property
    def api_key(self) -> Optional[str]:
        return self._async_client.api_key

    @property
    def secret_key(self) -> Optional[str]:
        return self._async_client.secret_key

    @property
    def scope(self) -> Scope:
        return self._async_client.scope

    @property
    def base_url(self) -> str:
        return self._async_client.base_url

    @property
    def ssl_verify(self) -> bool:
        return self._async_client.ssl_verify

    @property
    def access_token(self) -> str:
        return self._async_client.access_token

    @property
    def refresh_token(self) -> str:
        return self._async_client.refresh_token

    def speech_to_text(
        self,
        file_contents: AudioSource,
        content_type: Union[AudioType, str] = AudioType.WAV,
        speech_context: Union[SpeechContext, str] = SpeechContext.GENERIC,
        callback: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        Transcribe audio and return the key-normalized JSON result.

        ``callback`` is called with the result before it is returned. It must not
        call back into this Client; doing so raises TransportError.
        See AsyncClient.speech_to_text for the request details.
        """
        return self._run(self._async_client.speech_to_text(file_contents, content_type, speech_context, callback))

    def text_to_speech(self, text_data: TextSource, options: Optional[Mapping[str, str]] = None) -> bytes:
        """
        Synthesize speech and return the raw audio bytes.

        See AsyncClient.text_to_speech for how ``options`` override the default headers.
        """
        return self._run(self._async_client.text_to_speech(text_data, options))

    def close(self) -> None:
        """Release the HTTP session and the private event loop. Safe to call multiple times."""
        self._check_reentry("close()")
        with self._lock:
            if self._loop.is_closed():
                return
            try:
                self._loop.run_until_complete(self._async_client.close())
            finally:
                self._loop.close()
                self._logger.debug("Client closed")

    def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        try:
            self._check_reentry("a request")
        except TransportError:
            coro.close()
            raise
        with self._lock:
            if self._loop.is_closed():
                coro.close()
                raise TransportError("Client is closed")
            self._owner = threading.get_ident()
            try:
                return self._loop.run_until_complete(coro)
            finally:
                self._owner = None

    def _check_reentry(self, action: str) -> None:
        # The lock is not reentrant; a callback calling back in would block forever
        if self._owner == threading.get_ident():
            raise TransportError(f"Cannot run {action} on this Client from inside its own callback")
