class ConfigurationError(ValueError):
    """Raised when the client is created with missing or invalid settings."""

    pass


class AuthenticationError(RuntimeError):
    """Raised when the OAuth token exchange does not return a token pair."""

    pass


class TransportError(RuntimeError):
    """Raised when there's an error in the transport layer."""

    pass


class ConnectionError(TransportError):
    """Raised when connection to the service fails."""

    pass


class TimeoutError(TransportError):
    """Raised when a request times out."""

    pass


class ParseError(TransportError):
    """Raised when a response expected to be JSON cannot be decoded."""

    pass
