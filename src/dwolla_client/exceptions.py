"""
Exception and Error Definitions Module

Defines the exception hierarchy raised by the Dwolla client. Transport
failures, API errors and configuration problems all inherit from DwollaError
for unified exception handling.

Exception Hierarchy:
    DwollaError (root)
    ├── RestException
    ├── DwollaException
    ├── AuthenticationError
    └── ConfigurationError
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .rest.transport import RestResponse
    from .schemas.https import ErrorResponse


class DwollaError(Exception):
    """
    Root exception class for all library-specific exceptions.

    Catch this class to handle every error the client can raise.
    """
    pass


class RestException(DwollaError):
    """
    Raised (or attached to a RestResponse) when the transport layer fails.

    This includes scenarios such as:
    - Non-2xx HTTP status codes
    - Network and timeout failures
    - Response bodies that cannot be parsed into the requested type

    Attributes:
        status_code: HTTP status code, None when no response was received
        content: Raw response body, None when no response was received
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        content: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.content = content
        self.cause = cause


class DwollaException(DwollaError):
    """
    Raised when an API call does not succeed.

    The message identifies the failed resource and the request id assigned by
    the API, e.g. ``API Error, Resource="GET https://...", RequestId="abc"``.

    Attributes:
        request_id: Value of the ``x-request-id`` response header
        response: RestResponse returned by the transport
        content: Raw error body
        error: Parsed ErrorResponse, None when the body is not a Dwolla error
    """

    def __init__(
        self,
        message: str,
        request_id: Optional[str],
        response: "RestResponse",
        content: Optional[str],
        error: Optional["ErrorResponse"] = None,
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id
        self.response = response
        self.content = content
        self.error = error


class AuthenticationError(DwollaError):
    """
    Raised when the token endpoint answers successfully but without a token.
    """
    pass


class ConfigurationError(DwollaError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Missing API key or secret
    - Unknown environment name
    - Non-numeric timeout value
    """
    pass
