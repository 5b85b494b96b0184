from .VikiAbstraction import VikiAbstraction
from .AccessToken import AccessTokenProvider
from .APIObject import APIObject
from .CallChain import CallChain, CallSegment, Namespace
from .Resource import Resource, Newscast
from .errors import (
    VikiError,
    AuthenticationError,
    ResourceError,
    RequestTimeoutError,
    TransientAuthError,
    UnsupportedOperation,
)

__version__ = "1.0.0"
__all__ = [
    "VikiAbstraction",
    "AccessTokenProvider",
    "APIObject",
    "CallChain",
    "CallSegment",
    "Namespace",
    "Resource",
    "Newscast",
    "VikiError",
    "AuthenticationError",
    "ResourceError",
    "RequestTimeoutError",
    "TransientAuthError",
    "UnsupportedOperation",
    "new",
]


def new(client_id: str = None, client_secret: str = None, domain: str = None, **kwargs) -> VikiAbstraction:
    """Shorthand for VikiAbstraction(client_id, client_secret, domain)."""
    return VikiAbstraction(client_id, client_secret, domain, **kwargs)
