"""
Asynchronous client for the AT&T Speech API.

This module provides the AsyncClient class that handles the OAuth token
exchange, speech-to-text transcription and text-to-speech synthesis.
"""

from __future__ import annotations

import inspect
import uuid
from collections.abc import Mapping
from typing import Any
from typing import Callable
from typing import Optional
from typing import Union

from multidict import CIMultiDict

from ._auth import ClientCredentialsAuth
from ._exceptions import AuthenticationError
from ._exceptions import ConfigurationError
from ._helpers import AudioSource
from ._helpers import TextSource
from ._helpers import header_name
from ._helpers import load_audio
from ._helpers import load_text
from ._logging import get_logger
from ._models import AudioType
from ._models import ClientConfig
from ._models import ConnectionConfig
from ._models import Scope
from ._models import SpeechContext
from ._transport import Transport

SPEECH_TO_TEXT_PATH = "/speech/v3/speechToText"
TEXT_TO_SPEECH_PATH = "/speech/v3/textToSpeech"


class AsyncClient:
    """
    Asynchronous client for the AT&T Speech API.

    Entering the client as an async context manager performs the OAuth token
    exchange; ``authenticate()`` does the same when the client is used without
    ``async with``. The scope chosen at construction fixes the session's
    default Accept header: ``application/json`` for SPEECH and
    ``audio/x-wav`` for TTS.

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

    Examples:
        >>> async with AsyncClient("key", "secret", "SPEECH") as client:
        ...     result = await client.speech_to_text(Path("hello.wav"))
        ...     print(result["recognition"]["n_best"][0]["hypothesis"])
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
        if isinstance(api_key, ClientConfig):
            config, api_key = api_key, None
        elif isinstance(api_key, Mapping):
            config, api_key = _config_from_mapping(api_key), None

        if config is None:
            if all(value is None for value in (api_key, secret_key, scope, base_url, ssl_verify)):
                raise ConfigurationError("Requires at least the api_key, secret_key, and scope when instantiating")
            config = ClientConfig(
                api_key=api_key,
                secret_key=secret_key,
                scope=scope,
                base_url=base_url,
                ssl_verify=ssl_verify,
            )

        self._config = config
        self._conn_config = conn_config or ConnectionConfig()
        self._request_id = str(uuid.uuid4())
        self._auth = ClientCredentialsAuth(config)
        self._transport = Transport(
            config.base_url,
            self._conn_config,
            accept=config.scope.accept_type,
            ssl_verify=config.ssl_verify,
            request_id=self._request_id,
        )

        self._logger = get_logger(__name__)
        self._logger.debug(
            "AsyncClient initialized (request_id=%s, url=%s, scope=%s)",
            self._request_id,
            config.base_url,
            config.scope.value,
        )

    async def __aenter__(self) -> AsyncClient:
        """
        Async context manager entry. Performs the token exchange.

        The transport is closed again if the exchange fails.
        """
        try:
            await self.authenticate()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_key(self) -> Optional[str]:
        return self._config.api_key

    @property
    def secret_key(self) -> Optional[str]:
        return self._config.secret_key

    @property
    def scope(self) -> Scope:
        return self._config.scope

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def ssl_verify(self) -> bool:
        return self._config.ssl_verify

    @property
    def access_token(self) -> str:
        return self._auth.tokens.access_token

    @property
    def refresh_token(self) -> str:
        return self._auth.tokens.refresh_token

    async def authenticate(self) -> None:
        """
        Exchange the client credentials for an access/refresh token pair.

        Raises:
            AuthenticationError: If the service does not return both tokens.
            TransportError: If the request fails.
        """
        await self._auth.fetch_tokens(self._transport)
        self._logger.info("Authenticated with %s (scope=%s)", self._config.base_url, self._config.scope.value)

    async def speech_to_text(
        self,
        file_contents: AudioSource,
        content_type: Union[AudioType, str] = AudioType.WAV,
        speech_context: Union[SpeechContext, str] = SpeechContext.GENERIC,
        callback: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        Transcribe audio and return the key-normalized JSON result.

        Args:
            file_contents: Audio bytes, a path to an audio file or a binary file object.
            content_type: Audio content type. ``application/octet-stream`` is sent
                as ``audio/amr``.
            speech_context: Context the service uses to evaluate the audio.
            callback: Called with the result before it is returned. Coroutine
                functions are awaited.

        Returns:
            The parsed response with snake_case keys.

        Raises:
            AuthenticationError: If the client has not authenticated yet.
            TransportError: If the request fails or the body is not JSON.

        Examples:
            >>> result = await client.speech_to_text(Path("hello.wav"))
            >>> result["recognition"]["status"]
            'OK'
        """
        self._ensure_authenticated()
        content_type = _value(content_type)
        if content_type == AudioType.OCTET_STREAM.value:
            content_type = AudioType.AMR.value

        audio = await load_audio(file_contents)
        headers = {
            **self._auth.get_auth_headers(),
            "Content-Transfer-Encoding": "chunked",
            "X-SpeechContext": _value(speech_context),
            "Content-Type": content_type,
            "Accept": "application/json",
        }

        self._logger.debug(
            "Submitting audio for transcription (bytes=%d, content_type=%s, context=%s)",
            len(audio),
            content_type,
            headers["X-SpeechContext"],
        )
        result = await self._transport.post_json(SPEECH_TO_TEXT_PATH, data=audio, headers=headers)

        if callback is not None:
            outcome = callback(result)
            if inspect.isawaitable(outcome):
                await outcome
        return result

    async def text_to_speech(self, text_data: TextSource, options: Optional[Mapping[str, str]] = None) -> bytes:
        """
        Synthesize speech and return the raw audio bytes.

        Args:
            text_data: Text to speak, or a path / file object with the text.
            options: Extra request headers. Entries override the defaults
                (Authorization, ``Content-Type: text/plain`` and
                ``Accept: audio/x-wav``) regardless of case, and keys written
                with underscores are converted, so ``X_Arg`` is sent as ``X-Arg``.

        Returns:
            The response body exactly as received.

        Raises:
            AuthenticationError: If the client has not authenticated yet.
            TransportError: If the request fails.

        Examples:
            >>> audio = await client.text_to_speech("Hello world", {"X-Arg": "VoiceName=crystal"})
            >>> Path("hello.wav").write_bytes(audio)
        """
        self._ensure_authenticated()
        headers: CIMultiDict[str] = CIMultiDict(self._auth.get_auth_headers())
        headers["Content-Type"] = "text/plain"
        headers["Accept"] = "audio/x-wav"
        for key, value in (options or {}).items():
            headers[header_name(_value(key))] = _value(value)

        payload = await load_text(text_data)
        self._logger.debug("Submitting text for synthesis (bytes=%d)", len(payload))
        return await self._transport.post(TEXT_TO_SPEECH_PATH, data=payload, headers=headers)

    async def close(self) -> None:
        """
        Close the client and release the HTTP session.

        Safe to call multiple times.
        """
        await self._transport.close()

    def _ensure_authenticated(self) -> None:
        if not self._auth.tokens.is_set:
            raise AuthenticationError("Client is not authenticated; call authenticate() or use 'async with'")


def _value(item: Any) -> str:
    return item.value if isinstance(item, (AudioType, SpeechContext)) else str(item)


def _config_from_mapping(settings: Mapping[str, Any]) -> ClientConfig:
    try:
        return ClientConfig(**settings)
    except TypeError as e:
        raise ConfigurationError(f"Invalid client settings: {e}") from e
