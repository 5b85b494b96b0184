"""
Viki client error taxonomy
"""


class VikiError(Exception):
    """Base error for anything the Viki API (or talking to it) rejects."""

    def __init__(self, code, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self):
        return self.message


class AuthenticationError(VikiError):
    """The token endpoint refused the client credentials."""


class ResourceError(VikiError):
    """Non-success response from a resource endpoint."""


class RequestTimeoutError(VikiError):
    """Connection or read timeout talking to the API."""

    def __init__(self, message: str = "Timeout error"):
        super().__init__("timeout", message)


class TransientAuthError(VikiError):
    """First 401 on a resource call. Only ever seen inside the client."""


class UnsupportedOperation(AttributeError):
    """
    Namespace outside the known set.

    Not a VikiError: raised before any request is made, like any unknown attribute.
    """

    def __init__(self, name: str):
        super().__init__(f"'{name}' is not a supported Viki API namespace")
        self.name = name
