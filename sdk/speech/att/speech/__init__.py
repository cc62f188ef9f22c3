__version__ = "0.0.0"

from ._async_client import AsyncClient
from ._auth import ClientCredentialsAuth
from ._client import Client
from ._exceptions import AuthenticationError
from ._exceptions import ConfigurationError
from ._exceptions import ConnectionError
from ._exceptions import ParseError
from ._exceptions import TimeoutError
from ._exceptions import TransportError
from ._helpers import underscore
from ._helpers import underscore_keys
from ._models import AudioType
from ._models import ClientConfig
from ._models import ConnectionConfig
from ._models import Scope
from ._models import SpeechContext
from ._models import TokenPair

__all__ = [
    "AsyncClient",
    "Client",
    "ClientCredentialsAuth",
    "AuthenticationError",
    "ConfigurationError",
    "ConnectionError",
    "ParseError",
    "TimeoutError",
    "TransportError",
    "AudioType",
    "ClientConfig",
    "ConnectionConfig",
    "Scope",
    "SpeechContext",
    "TokenPair",
    "underscore",
    "underscore_keys",
]
