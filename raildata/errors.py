"""
Exceptions raised by the RailData client.

Every failure surfaced by the request pipeline is a RailDataError subclass.
InvalidTokenError is handled inside the client and only reaches callers when
the single retry after a token refresh is rejected as well.
"""

from __future__ import annotations

from typing import Optional


class RailDataError(Exception):
    """Base class for RailData API failures."""

    def __init__(
        self,
        message: str,
        *,
        method: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.method = method
        self.status_code = status_code


class MissingCredentialsError(RailDataError):
    """Token absent or rejected, and no credentials available to get a new one."""

    def __init__(self, method: Optional[str] = None):
        super().__init__("missing or malformed credentials in request", method=method)


class BadCredentialsError(RailDataError):
    """The token-issuance endpoint rejected the username or password."""

    def __init__(self):
        super().__init__("invalid username or password in request", method="getToken")


class InvalidTokenError(RailDataError):
    """The server reported "Invalid token."."""

    def __init__(self, method: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(
            "invalid token in request", method=method, status_code=status_code
        )


class ApiError(RailDataError):
    """Any other error message reported by the API. str() is the server's text."""


class HttpStatusError(RailDataError):
    """Non-2xx response whose body is not a recognizable error envelope."""


class TransportError(RailDataError):
    """The HTTP exchange itself failed (connection, protocol, ...)."""


class RequestTimeoutError(TransportError):
    """The HTTP exchange did not complete within the configured timeout."""


class DecodeError(RailDataError):
    """A success response could not be decoded into the expected shape."""
