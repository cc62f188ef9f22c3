"""
Models for the AT&T Speech SDK.

This module contains the configuration classes, enums and token state used
throughout the SDK.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Optional
from typing import Union

from ._exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.att.com"


class Scope(str, Enum):
    """
    Authorization scope requested during the token exchange.

    Attributes:
        SPEECH: Speech-to-text access.
        TTS: Text-to-speech access.
    """

    SPEECH = "SPEECH"
    TTS = "TTS"

    @property
    def accept_type(self) -> str:
        """Default Accept header for a session opened with this scope."""
        if self is Scope.SPEECH:
            return "application/json"
        return "audio/x-wav"


class SpeechContext(str, Enum):
    """
    Speech context used by the service to evaluate the audio.

    Sent in the X-SpeechContext header of a transcription request.
    """

    BUSINESS_SEARCH = "BusinessSearch"
    GAMING = "Gaming"
    GENERIC = "Generic"
    QUESTION_AND_ANSWER = "QuestionAndAnswer"
    SMS = "SMS"
    SOCIAL_MEDIA = "SocialMedia"
    TV = "TV"
    VOICE_MAIL = "VoiceMail"
    WEB_SEARCH = "WebSearch"


class AudioType(str, Enum):
    """
    Audio content types accepted by the transcription endpoint.

    OCTET_STREAM is never sent as-is; it is transmitted as AMR.
    """

    WAV = "audio/wav"
    AMR = "audio/amr"
    OCTET_STREAM = "application/octet-stream"


@dataclass
class ConnectionConfig:
    """
    Configuration for HTTP connection parameters.

    Attributes:
        connect_timeout: Timeout in seconds for connection establishment.
        operation_timeout: Default timeout for API operations.
    """

    connect_timeout: float = 30.0
    operation_timeout: float = 300.0


@dataclass(frozen=True)
class ClientConfig:
    """
    Credentials and endpoint settings for a speech client.

    The configuration is immutable once built. ``scope`` must be exactly
    ``"SPEECH"`` or ``"TTS"``; anything else raises ConfigurationError.
    ``ssl_verify`` is only disabled by an explicit ``False``.

    Attributes:
        api_key: AT&T Speech API key.
        secret_key: AT&T Speech API secret key.
        scope: Authorization scope, SPEECH or TTS.
        base_url: Root URL of the service.
        ssl_verify: Whether the peer certificate is verified.

    Examples:
        >>> config = ClientConfig(api_key="key", secret_key="secret", scope="SPEECH")
        >>> config.scope
        <Scope.SPEECH: 'SPEECH'>
    """

    api_key: Optional[str] = None
    secret_key: Optional[str] = None
    scope: Union[Scope, str, None] = None
    base_url: Optional[str] = DEFAULT_BASE_URL
    ssl_verify: Any = True

    def __post_init__(self) -> None:
        # Frozen dataclass, so normalized values are written through object.__setattr__
        object.__setattr__(self, "scope", _parse_scope(self.scope))
        object.__setattr__(self, "base_url", self.base_url or DEFAULT_BASE_URL)
        object.__setattr__(self, "ssl_verify", self.ssl_verify is not False)


@dataclass
class TokenPair:
    """
    OAuth tokens held by a client.

    Both tokens start empty and are filled once by the token exchange.
    """

    access_token: str = ""
    refresh_token: str = ""
    grant_type: str = field(default="client_credentials", init=False)

    @property
    def is_set(self) -> bool:
        return bool(self.access_token)


def _parse_scope(value: Any) -> Scope:
    if isinstance(value, Scope):
        return value
    try:
        return Scope(value)
    except ValueError:
        raise ConfigurationError("scope must be either 'SPEECH' or 'TTS'") from None
