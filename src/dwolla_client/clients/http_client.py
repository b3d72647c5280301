"""
Dwolla API Client

Builds requests for each verb the API uses (GET, POST, DELETE, multipart
upload and the OAuth2 token POST), hands them to a RestClient transport, and
turns every failed RestResponse into a DwollaException.
"""

import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from ..config import DwollaSettings, get_environment
from ..exceptions import DwollaException
from ..rest.transport import HttpxRestClient, RestClient, RestResponse
from ..schemas.bases import HalResource, serialize_body
from ..schemas.https import ErrorResponse, Headers, TokenResponse, UploadDocumentRequest
from ..version import __version__

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONTENT_TYPE = "application/vnd.dwolla.v1.hal+json"
AUTH_CONTENT_TYPE = "application/json"
USER_AGENT = f"dwolla-v2-python/{__version__}"
UPLOAD_BOUNDARY = "----------Upload"
DEFAULT_TIMEOUT = 30.0


# =========================================================================
# Request Builders
# =========================================================================

def build_request(
    method: str,
    uri: Any,
    headers: Optional[Headers] = None,
) -> httpx.Request:
    """Build a bodiless request carrying the caller's headers."""
    return httpx.Request(method, uri, headers=httpx.Headers(headers or {}))


def build_json_request(
    method: str,
    uri: Any,
    content: Any,
    media_type: str = CONTENT_TYPE,
    headers: Optional[Headers] = None,
) -> httpx.Request:
    """
    Build a request with a UTF-8 JSON body.

    A ``None`` content produces a request without body or Content-Type.

    Args:
        method: HTTP method
        uri: Absolute request URL
        content: Pydantic model or JSON-serializable value
        media_type: Media type placed in Content-Type (charset is appended)
        headers: Caller headers
    """
    if content is None:
        return build_request(method, uri, headers)

    merged = httpx.Headers(headers or {})
    merged["Content-Type"] = f"{media_type}; charset=utf-8"
    body = serialize_body(content).encode("utf-8")
    return httpx.Request(method, uri, headers=merged, content=body)


def build_upload_request(
    uri: Any,
    upload: UploadDocumentRequest,
    headers: Optional[Headers] = None,
) -> httpx.Request:
    """
    Build a multipart/form-data POST for a document upload.

    The body holds a ``documentType`` field followed by a ``file`` part with
    the document's filename and content type.
    """
    merged = httpx.Headers(headers or {})
    merged["Content-Type"] = f"multipart/form-data; boundary={UPLOAD_BOUNDARY}"
    return httpx.Request(
        "POST",
        uri,
        headers=merged,
        data=upload.multipart_fields(),
        files=upload.multipart_files(),
    )


def parse_error(content: Optional[str]) -> Optional[ErrorResponse]:
    """Parse an error body, returning None unless it is a ``{code, message}`` object."""
    if not content:
        return None
    try:
        return ErrorResponse.model_validate_json(content)
    except ValidationError:
        return None


def error_message(rest_response: RestResponse) -> str:
    request = rest_response.request
    return (
        f'API Error, Resource="{request.method} {request.url}", '
        f'RequestId="{rest_response.request_id or ""}"'
    )


# =========================================================================
# Client
# =========================================================================

class DwollaClient:
    """
    Typed client for the Dwolla HAL+JSON API.

    Every call returns the transport's RestResponse on success and raises
    DwollaException otherwise.

    Usage:
        ```python
        async with DwollaClient.create(is_sandbox=True) as client:
            token = await client.post_auth(
                f"{client.auth_base_address}/token",
                AppTokenRequest(key=key, secret=secret),
            )
            headers = {"Authorization": f"Bearer {token.content.access_token}"}
            root = await client.get(client.api_base_address, HalResource, headers)
        ```
    """

    def __init__(self, rest_client: RestClient, is_sandbox: bool = True):
        """
        Args:
            rest_client: Transport used to send requests
            is_sandbox: Target the sandbox environment instead of production
        """
        self._rest = rest_client
        self.is_sandbox = is_sandbox
        environment = get_environment("sandbox" if is_sandbox else "production")
        self.api_base_address = environment.api_base_address
        self.auth_base_address = environment.auth_base_address

    @classmethod
    def create(cls, is_sandbox: bool = True, timeout: Optional[float] = None) -> "DwollaClient":
        """Create a client backed by a new httpx.AsyncClient."""
        return cls(HttpxRestClient(cls.create_http_client(timeout)), is_sandbox)

    @classmethod
    def from_settings(cls, settings: DwollaSettings) -> "DwollaClient":
        return cls.create(is_sandbox=settings.is_sandbox, timeout=settings.timeout)

    @staticmethod
    def create_http_client(timeout: Optional[float] = None, **kwargs) -> httpx.AsyncClient:
        """
        Create the httpx client used by the default transport.

        Sets the default ``User-Agent`` and ``Accept`` headers sent with every
        request.

        Args:
            timeout: Request timeout in seconds (default: 30)
            **kwargs: Extra httpx.AsyncClient arguments
        """
        headers = {"User-Agent": USER_AGENT, "Accept": CONTENT_TYPE}
        return httpx.AsyncClient(
            headers=headers,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            **kwargs
        )

    # =========================================================================
    # Verbs
    # =========================================================================

    async def post_auth(
        self,
        uri: Any,
        content: Any,
        response_type: Type[T] = TokenResponse,
    ) -> RestResponse[T]:
        """POST to a token endpoint with a plain ``application/json`` body."""
        request = build_json_request("POST", uri, content, AUTH_CONTENT_TYPE)
        return await self._send(request, response_type)

    async def get(
        self,
        uri: Any,
        response_type: Optional[Type[T]] = HalResource,
        headers: Optional[Headers] = None,
    ) -> RestResponse[T]:
        return await self._send(build_request("GET", uri, headers), response_type)

    async def post(
        self,
        uri: Any,
        content: Any,
        response_type: Optional[Type[T]] = None,
        headers: Optional[Headers] = None,
    ) -> RestResponse[T]:
        """
        POST a HAL+JSON body.

        Created resources are usually answered with an empty body and a
        ``Location`` header, available as ``RestResponse.location``.
        """
        request = build_json_request("POST", uri, content, CONTENT_TYPE, headers)
        return await self._send(request, response_type)

    async def delete(
        self,
        uri: Any,
        content: Any = None,
        response_type: Optional[Type[T]] = None,
        headers: Optional[Headers] = None,
    ) -> RestResponse[T]:
        request = build_json_request("DELETE", uri, content, CONTENT_TYPE, headers)
        return await self._send(request, response_type)

    async def upload(
        self,
        uri: Any,
        upload: UploadDocumentRequest,
        headers: Optional[Headers] = None,
    ) -> RestResponse[None]:
        return await self._send(build_upload_request(uri, upload, headers), None)

    # =========================================================================
    # Dispatch and Error Translation
    # =========================================================================

    async def _send(self, request: httpx.Request, response_type: Optional[Type[T]]) -> RestResponse[T]:
        rest_response = await self._rest.send(request, response_type)
        return self._raise_for_error(rest_response)

    @staticmethod
    def _raise_for_error(rest_response: RestResponse[T]) -> RestResponse[T]:
        exception = rest_response.exception
        if exception is None:
            return rest_response

        message = error_message(rest_response)
        logger.warning("%s: %s", message, exception.message)
        raise DwollaException(
            message,
            request_id=rest_response.request_id,
            response=rest_response,
            content=exception.content,
            error=parse_error(exception.content),
        ) from exception

    async def aclose(self) -> None:
        await self._rest.aclose()

    async def __aenter__(self) -> "DwollaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
