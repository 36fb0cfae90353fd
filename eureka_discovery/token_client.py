import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from eureka_discovery.constants import (
    CLIENT_CREDENTIALS_GRANT,
    CONTENT_TYPE_HEADER,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    FORM_CONTENT_TYPE,
    HTTP_OK,
    LOG_TOKEN_REQUESTED,
)
from eureka_discovery.errors import AuthServerError, DecodeError
from eureka_discovery.http_utils import send_request
from eureka_discovery.types import Token

logger = logging.getLogger(__name__)


class TokenClient:
    """Fetches OAuth2 access tokens with the client-credentials grant"""

    def __init__(
        self,
        token_url: str,
        client_name: str,
        client_secret: str,
        http_client: Optional[httpx.Client] = None,
    ):
        self.token_url = token_url
        self.client_name = client_name
        self._client_secret = client_secret
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=DEFAULT_HTTP_TIMEOUT_SECONDS
        )

    def get_token(self) -> str:
        """
        Request a new access token.

        Every call is a fresh round trip to the token endpoint; tokens are
        never cached.

        Raises:
            TransportError: the request could not be sent or read
            AuthServerError: the token endpoint did not answer 200
            DecodeError: the body is not JSON with a string access_token
        """
        logger.debug(LOG_TOKEN_REQUESTED.format(self.token_url))

        response = send_request(
            self._http_client,
            "POST",
            self.token_url,
            data={"grant_type": CLIENT_CREDENTIALS_GRANT},
            auth=(self.client_name, self._client_secret),
            headers={CONTENT_TYPE_HEADER: FORM_CONTENT_TYPE},
        )

        if response.status_code != HTTP_OK:
            logger.warning(
                f"Token request failed with status {response.status_code}",
                extra={"status_code": response.status_code, "event_type": "token_failure"},
            )
            raise AuthServerError(response.status_code, response.text, self.token_url)

        try:
            token = Token.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"unmarshal token response: {e}") from e

        return token.access_token

    def close(self):
        """Close the HTTP client if this instance created it"""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "TokenClient":
        return self

    def __exit__(self, *exc_info):
        self.close()
