from __future__ import annotations

from typing import Any

from ._exceptions import AuthenticationError
from ._logging import get_logger
from ._models import ClientConfig
from ._models import TokenPair
from ._transport import Transport

TOKEN_PATH = "/oauth/access_token"


class ClientCredentialsAuth:
    """
    OAuth2 client-credentials authentication for the AT&T Speech API.

    Exchanges the API key and secret for an access/refresh token pair and
    presents the access token as a bearer credential. The exchange happens
    once; tokens are not refreshed.

    Args:
        config: Client configuration holding the credentials and scope.

    Examples:
        >>> auth = ClientCredentialsAuth(config)
        >>> await auth.fetch_tokens(transport)
        >>> auth.get_auth_headers()
        {'Authorization': 'Bearer abc123'}
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._tokens = TokenPair()
        self._logger = get_logger(__name__)

    @property
    def tokens(self) -> TokenPair:
        return self._tokens

    async def fetch_tokens(self, transport: Transport) -> TokenPair:
        """
        Perform the token exchange and store the resulting tokens.

        The response body is inspected whatever the HTTP status, since the
        service reports credential problems as a JSON ``error`` field.

        Args:
            transport: Transport bound to the service base URL.

        Returns:
            The populated token pair.

        Raises:
            AuthenticationError: If the response lacks either token.
            TransportError: If the request fails or the body is not JSON.
        """
        params = {
            "client_id": self._config.api_key or "",
            "client_secret": self._config.secret_key or "",
            "grant_type": self._tokens.grant_type,
            "scope": self._config.scope.value,
        }

        self._logger.debug("Requesting OAuth tokens (scope=%s)", self._config.scope.value)
        result = await transport.post_json(TOKEN_PATH, params=params)

        if not isinstance(result, dict) or result.get("access_token") is None or result.get("refresh_token") is None:
            detail = _error_detail(result)
            self._logger.warning("OAuth token exchange rejected: %s", detail)
            raise AuthenticationError(f"Unable to complete oauth: {detail}")

        self._tokens.access_token = str(result["access_token"])
        self._tokens.refresh_token = str(result["refresh_token"])
        self._logger.debug("OAuth tokens acquired (scope=%s)", self._config.scope.value)
        return self._tokens

    def get_auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._tokens.access_token}"}


def _error_detail(result: Any) -> str:
    if not isinstance(result, dict):
        return str(result)
    error = result.get("error")
    description = result.get("error_description")
    if error and description:
        return f"{error} ({description})"
    return str(error or description or result)
