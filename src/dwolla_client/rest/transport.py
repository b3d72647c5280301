"""
HTTP Transport Layer

Sends prepared ``httpx.Request`` objects and wraps the outcome in a uniform
RestResponse. The transport never raises for HTTP-level failures: non-2xx
statuses, network errors and unparseable bodies are reported through
``RestResponse.exception`` so the client can translate them in one place.
"""

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Generic, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from ..exceptions import RestException

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUEST_ID_HEADER = "x-request-id"


@lru_cache(maxsize=None)
def type_adapter(response_type: Any) -> TypeAdapter:
    """Return the TypeAdapter for a response type, built once per type."""
    return TypeAdapter(response_type)


class RestResponse(Generic[T]):
    """
    Result of sending one request.

    Exactly one of ``content``/``exception`` is meaningful: a successful
    response may still have ``content`` of None when no response type was
    requested or the body was empty.

    Attributes:
        request: The request that was sent
        response: The HTTP response, None when the request never got one
        content: Body parsed into the requested type
        raw_content: Body as text
        exception: Transport failure, None on success
    """

    def __init__(
        self,
        request: httpx.Request,
        response: Optional[httpx.Response] = None,
        content: Optional[T] = None,
        raw_content: Optional[str] = None,
        exception: Optional[RestException] = None,
    ):
        self.request = request
        self.response = response
        self.content = content
        self.raw_content = raw_content
        self.exception = exception

    @property
    def is_success(self) -> bool:
        return self.exception is None

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None

    @property
    def request_id(self) -> Optional[str]:
        """Correlation id assigned by the API (``x-request-id``)."""
        if self.response is None:
            return None
        return self.response.headers.get(REQUEST_ID_HEADER)

    @property
    def location(self) -> Optional[str]:
        """URL of a newly created resource (``Location`` header)."""
        if self.response is None:
            return None
        return self.response.headers.get("location")

    def __repr__(self) -> str:
        return f"<RestResponse [{self.request.method} {self.request.url}] status={self.status_code}>"


class RestClient(ABC):
    """
    Abstract transport.

    Implementations send the request as-is and report every failure through
    the returned RestResponse instead of raising.
    """

    @abstractmethod
    async def send(
        self,
        request: httpx.Request,
        response_type: Optional[Type[T]] = None,
    ) -> RestResponse[T]:
        """
        Send a prepared request.

        Args:
            request: Fully built request (method, URL, headers, body)
            response_type: Type to parse a successful body into, None for no model

        Returns:
            RestResponse wrapping the parsed body or the failure
        """
        ...

    async def aclose(self) -> None:
        pass


class HttpxRestClient(RestClient):
    """
    RestClient backed by ``httpx.AsyncClient``.

    The wrapped client's default headers (User-Agent, Accept, ...) are applied
    to every request that does not set them itself.

    Usage:
        ```python
        async with HttpxRestClient(httpx.AsyncClient()) as rest:
            result = await rest.send(httpx.Request("GET", url), dict)
        ```
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def send(
        self,
        request: httpx.Request,
        response_type: Optional[Type[T]] = None,
    ) -> RestResponse[T]:
        self._apply_default_headers(request)
        logger.debug("Sending %s %s", request.method, request.url)

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            logger.debug("Transport error for %s %s: %r", request.method, request.url, e)
            return RestResponse(
                request,
                exception=RestException(str(e) or type(e).__name__, cause=e),
            )

        raw_content = response.text
        if not response.is_success:
            return RestResponse(
                request,
                response,
                raw_content=raw_content,
                exception=RestException(
                    "Response status code does not indicate success: "
                    f"{response.status_code} ({response.reason_phrase}).",
                    status_code=response.status_code,
                    content=raw_content,
                ),
            )

        if response_type is None or not raw_content:
            return RestResponse(request, response, raw_content=raw_content)

        try:
            content = self._parse(raw_content, response_type)
        except ValidationError as e:
            return RestResponse(
                request,
                response,
                raw_content=raw_content,
                exception=RestException(
                    f"Unable to deserialize response body as {getattr(response_type, '__name__', response_type)}.",
                    status_code=response.status_code,
                    content=raw_content,
                    cause=e,
                ),
            )
        return RestResponse(request, response, content, raw_content)

    def _apply_default_headers(self, request: httpx.Request) -> None:
        for key, value in self._client.headers.items():
            if key not in request.headers:
                request.headers[key] = value

    @staticmethod
    def _parse(raw_content: str, response_type: Type[T]) -> Any:
        return type_adapter(response_type).validate_json(raw_content)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxRestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
