"""
OAuth client-credentials token exchange for the Viki API
"""
import logging

import requests

from .errors import AuthenticationError, RequestTimeoutError

logger = logging.getLogger('AccessToken')


class AccessTokenProvider:
    """Exchanges a client id/secret pair for a bearer token."""

    TOKEN_URL = "https://www.viki.com/oauth/token"

    def __init__(self, client_id: str, client_secret: str, session: requests.Session = None,
                 timeout: float = 30):
        self.client_id = client_id
        self.client_secret = client_secret
        self.session = session or requests.Session()
        self.timeout = timeout

    def acquire(self) -> str:
        """
        POST the credentials to the token endpoint.

        Returns:
            str: the access token

        Raises:
            AuthenticationError: the endpoint answered with anything but 200
            RequestTimeoutError: the endpoint could not be reached in time
        """
        form = {
            'grant_type': 'client_credentials',
            'client_id': self.client_id,
            'client_secret': self.client_secret,
        }

        try:
            response = self.session.post(self.TOKEN_URL, data=form, timeout=self.timeout)
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.error(f"Token endpoint unreachable: {e}")
            raise RequestTimeoutError() from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code != 200:
            description = body.get('error_description') if isinstance(body, dict) else None
            logger.error(f"Token request rejected ({response.status_code}): {description}")
            raise AuthenticationError(response.status_code,
                                      description or f"Authentication failed (HTTP {response.status_code})")

        token = body.get('access_token') if isinstance(body, dict) else None
        if not token:
            raise AuthenticationError(response.status_code, "Token endpoint returned no access_token")

        logger.info("Acquired Viki access token")
        return token

    def refresh(self) -> str:
        """Same as acquire(); there is no refresh-token flow."""
        return self.acquire()
