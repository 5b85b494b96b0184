"""
Viki API Abstraction Layer
Fluent call chains, token renewal and error mapping for the Viki v3 REST API
"""
import os
import logging
from pathlib import Path

import requests
from dotenv import load_dotenv

from .AccessToken import AccessTokenProvider
from .APIObject import APIObject
from .CallChain import CallChain, Namespace
from .errors import RequestTimeoutError, ResourceError, TransientAuthError, UnsupportedOperation

# Define project root (goes up from VikiClient/ to project root)
PROJECT_ROOT = Path(__file__).parent.parent

# Load environment variables from project root
load_dotenv(PROJECT_ROOT / ".env")

# Configure logging
logger = logging.getLogger('VikiAbstraction')


class VikiAbstraction:
    """
    Viki API client.

    Namespace calls accumulate a call chain; get() sends it:

        client.movies(21713).subtitles('en').get()
    """

    DEFAULT_HOST = "http://www.viki.com"
    API_PATH = "/api/v3/"

    def __init__(self, client_id: str = None, client_secret: str = None, domain: str = None,
                 debug: bool = None, timeout: float = None, session: requests.Session = None):
        """
        Initialize the client and fetch an access token.

        Args:
            client_id: OAuth client id (default: VIKI_CLIENT_ID env var)
            client_secret: OAuth client secret (default: VIKI_CLIENT_SECRET env var)
            domain: API host (default: VIKI_API_HOST env var or http://www.viki.com)
            debug: Enable debug output (default: from VIKI_DEBUG env var or False)
            timeout: Per-request timeout in seconds (default: VIKI_TIMEOUT env var or 30)
            session: requests session to reuse (default: a new one)
        """
        # Set debug mode
        if debug is None:
            debug = os.getenv('VIKI_DEBUG', 'false').lower() in ('true', '1', 'yes')
        self.debug = debug

        if client_id is None:
            client_id = os.getenv('VIKI_CLIENT_ID')
        if client_secret is None:
            client_secret = os.getenv('VIKI_CLIENT_SECRET')
        if not client_id or not client_secret:
            raise ValueError("Viki client_id and client_secret are required")

        if domain is None:
            domain = os.getenv('VIKI_API_HOST', self.DEFAULT_HOST)
        self.domain = domain.rstrip('/')

        if timeout is None:
            timeout = float(os.getenv('VIKI_TIMEOUT', '30'))
        self.timeout = timeout

        # Initialize HTTP session
        if session is None:
            session = requests.Session()
            user_agent = os.getenv('VIKI_USER_AGENT', 'VikiClient/1.0')
            session.headers.update({
                'User-Agent': user_agent
            })
        self.session = session

        self._call_chain = CallChain()
        self._token_provider = AccessTokenProvider(client_id, client_secret, session=self.session,
                                                   timeout=self.timeout)
        self.access_token = self._token_provider.acquire()

    @property
    def host(self) -> str:
        return self.domain + self.API_PATH

    # Namespace calls

    def call(self, namespace, *args) -> "VikiAbstraction":
        """
        Append one namespace segment to the pending call chain.

        Args:
            namespace: Namespace member or name, e.g. 'movies'
            *args: optional resource id and/or params mapping

        Returns:
            VikiAbstraction: self, so calls can be chained
        """
        self._call_chain.append(namespace, *args)
        return self

    def movies(self, *args):
        return self.call(Namespace.MOVIES, *args)

    def series(self, *args):
        return self.call(Namespace.SERIES, *args)

    def episodes(self, *args):
        return self.call(Namespace.EPISODES, *args)

    def music_videos(self, *args):
        return self.call(Namespace.MUSIC_VIDEOS, *args)

    def newscasts(self, *args):
        return self.call(Namespace.NEWSCASTS, *args)

    def newsclips(self, *args):
        return self.call(Namespace.NEWSCLIPS, *args)

    def artists(self, *args):
        return self.call(Namespace.ARTISTS, *args)

    def featured(self, *args):
        return self.call(Namespace.FEATURED, *args)

    def coming_soon(self, *args):
        return self.call(Namespace.COMING_SOON, *args)

    def subtitles(self, *args):
        return self.call(Namespace.SUBTITLES, *args)

    def hardsubs(self, *args):
        return self.call(Namespace.HARDSUBS, *args)

    def genres(self, *args):
        return self.call(Namespace.GENRES, *args)

    def countries(self, *args):
        return self.call(Namespace.COUNTRIES, *args)

    def search(self, *args):
        return self.call(Namespace.SEARCH, *args)

    def languages(self, *args):
        return self.call(Namespace.LANGUAGES, *args)

    def __getattr__(self, name):
        # Only reached for names that aren't real attributes
        if name.startswith('_'):
            raise AttributeError(name)
        raise UnsupportedOperation(name)

    # Terminal calls

    def get(self) -> APIObject:
        """
        Send the pending call chain as one GET.

        The chain is cleared before the request goes out, so the client is
        ready for a new chain whether or not this call succeeds.

        Returns:
            APIObject: the first page of the response
        """
        current_chain, self._call_chain = self._call_chain, CallChain()
        return self.request(current_chain)

    def get_paginated(self) -> list:
        """
        Send the pending call chain and follow every next link.

        Returns:
            list: content of all pages, concatenated
        """
        all_data = []
        for page_number, page in enumerate(self.get().pages(), start=1):
            if isinstance(page.content, list):
                all_data.extend(page.content)
            else:
                all_data.append(page.content)
            if self.debug:
                print(f"> Page {page_number}: Fetched {page.count} items (Total: {len(all_data)})")
        return all_data

    def reset_access_token(self) -> str:
        """Replace the current access token with a freshly acquired one."""
        self.access_token = self._token_provider.refresh()
        return self.access_token

    # Request execution

    def request(self, call_chain: CallChain) -> APIObject:
        """
        Execute a composed call chain, renewing the token once on a 401.

        Raises:
            ResourceError: non-success response (including a second 401)
            RequestTimeoutError: the API could not be reached in time
        """
        path, params = call_chain.compose(self.access_token)
        url = self.host + path

        try:
            response = self._fetch(url, params)
        except TransientAuthError:
            logger.warning(f"Access token rejected for {path}, requesting a new one")
            params = {**params, 'access_token': self.reset_access_token()}
            response = self._fetch(url, params, allow_retry=False)

        return self._build_response(response)

    def direct_request(self, url: str) -> APIObject:
        """
        GET an absolute URL, as handed out in pagination links.

        The current access token is attached only when the URL has none.
        """
        params = None if 'access_token=' in url else {'access_token': self.access_token}
        response = self._fetch(url, params, allow_retry=False)
        return self._build_response(response)

    def _fetch(self, url: str, params: dict = None, allow_retry: bool = True) -> requests.Response:
        if self.debug:
            print(f"\n{'='*80}")
            print(f"GET REQUEST: {url}")
            print(f"PARAMS: {params}")
            print(f"{'='*80}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.error(f"Request to {url} failed: {e}")
            raise RequestTimeoutError() from e

        if self.debug:
            print(f"\nRESPONSE STATUS: {response.status_code}")
            print(f"RESPONSE HEADERS:")
            for key, value in response.headers.items():
                print(f"  {key}: {value}")
            print(f"{'='*80}\n")

        self._capture(response, allow_retry)
        return response

    def _capture(self, response: requests.Response, allow_retry: bool):
        """Map a non-success response onto the error taxonomy."""
        status = response.status_code
        if status == 200:
            return

        if status == 408:
            logger.error(f"Timeout from API ({response.url})")
            raise RequestTimeoutError()

        description = self._error_description(response)
        if status == 401 and allow_retry:
            raise TransientAuthError(status, description or "Access token rejected")

        logger.error(f"API error {status}: {description}")
        raise ResourceError(status, description or f"Request failed (HTTP {status})")

    @staticmethod
    def _error_description(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        for key in ('error_description', 'error', 'message'):
            if isinstance(body.get(key), str):
                return body[key]
        return None

    def _build_response(self, response: requests.Response) -> APIObject:
        try:
            return APIObject(response.text, fetcher=self.direct_request)
        except ValueError as e:
            raise ResourceError(response.status_code, "Response body is not valid JSON") from e
