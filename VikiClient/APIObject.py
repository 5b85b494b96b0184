"""
Paginated wrapper around one Viki API response
"""
import json
import logging

from .Resource import Resource

logger = logging.getLogger('APIObject')


class APIObject:
    """
    One fetched page.

    The payload is either the bare content (array or object) or an envelope
    of the form {"response": ..., "count": N, "pagination": {"next": url, "previous": url}}.
    Content is passed through untouched.
    """

    def __init__(self, body, fetcher=None):
        """
        Args:
            body: response text, or an already parsed JSON value
            fetcher: callable(url) -> APIObject used by next()/prev()
        """
        payload = json.loads(body) if isinstance(body, (str, bytes)) else body
        self._fetcher = fetcher

        if isinstance(payload, dict) and 'response' in payload:
            self.content = payload['response']
            pagination = payload.get('pagination') or {}
            self.next_url = pagination.get('next')
            self.previous_url = pagination.get('previous')
            count = payload.get('count')
        else:
            self.content = payload
            self.next_url = None
            self.previous_url = None
            count = None

        if count is None:
            count = len(self.content) if isinstance(self.content, list) else 1
        self.count = int(count)

    def __repr__(self):
        return f"APIObject(count={self.count}, next={self.has_next()}, previous={self.has_previous()})"

    def has_next(self) -> bool:
        return bool(self.next_url)

    def has_previous(self) -> bool:
        return bool(self.previous_url)

    def next(self):
        """Fetch the following page, or None on the last one."""
        if not self.has_next():
            return None
        return self._direct_request(self.next_url)

    def prev(self):
        """Fetch the preceding page, or None on the first one."""
        if not self.has_previous():
            return None
        return self._direct_request(self.previous_url)

    def pages(self):
        """Yield this page and then every following page in order."""
        page = self
        while page is not None:
            yield page
            page = page.next()

    def wrap(self, model=Resource):
        """Content as model instances: a list for array content, a single model otherwise."""
        if isinstance(self.content, list):
            return [model(item) for item in self.content]
        return model(self.content)

    def _direct_request(self, url: str):
        if self._fetcher is None:
            raise RuntimeError("APIObject was built without a fetcher and cannot navigate")
        logger.debug(f"Following page link {url}")
        return self._fetcher(url)
