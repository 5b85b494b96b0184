"""Shared fixtures: a fake requests session with canned responses."""

import json
from unittest.mock import MagicMock

import pytest
import requests

CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"


def make_response(status=200, payload=None, text=None, url="http://www.viki.com/api/v3/"):
    """Build a real requests.Response carrying the given body."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    if text is None:
        text = json.dumps(payload if payload is not None else {})
    response._content = text.encode("utf-8")
    return response


def token_response(token="token-1"):
    return make_response(200, {"access_token": token})


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def make_client(session):
    """Factory building a client whose token request succeeds with 'token-1'."""
    from VikiClient import VikiAbstraction

    def _make(**kwargs):
        if not session.post.side_effect:
            session.post.side_effect = [token_response("token-1")]
        kwargs.setdefault("debug", False)
        return VikiAbstraction(CLIENT_ID, CLIENT_SECRET, session=session, **kwargs)

    return _make


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep VIKI_* settings from the developer's shell or .env out of the tests."""
    for name in ("VIKI_CLIENT_ID", "VIKI_CLIENT_SECRET", "VIKI_API_HOST",
                 "VIKI_DEBUG", "VIKI_USER_AGENT", "VIKI_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
