"""
Dwolla API client.

Typed, asynchronous wrapper over the Dwolla HAL+JSON REST API built on httpx
and pydantic.
"""

from .version import __version__
from .clients import DwollaClient, AppTokenProvider
from .config import DwollaSettings
from .exceptions import DwollaError, RestException, DwollaException, AuthenticationError, ConfigurationError
from .rest import RestClient, HttpxRestClient, RestResponse
from .schemas import DwollaModel, HalResource, Link, ErrorResponse, AppTokenRequest, TokenResponse, File, UploadDocumentRequest

__all__ = [
    "__version__",
    "DwollaClient",
    "AppTokenProvider",
    "DwollaSettings",
    "DwollaError",
    "RestException",
    "DwollaException",
    "AuthenticationError",
    "ConfigurationError",
    "RestClient",
    "HttpxRestClient",
    "RestResponse",
    "DwollaModel",
    "HalResource",
    "Link",
    "ErrorResponse",
    "AppTokenRequest",
    "TokenResponse",
    "File",
    "UploadDocumentRequest",
]
