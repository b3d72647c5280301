"""
HTTP Request/Response Schema Models for the Dwolla API

This module defines the Pydantic models exchanged with the API outside of
resource-specific payloads: the error body returned on failure, the OAuth2
client-credentials token exchange, and document uploads.

The token flow consists of:
1. Client posts its key and secret to the token endpoint (AppTokenRequest)
2. Server answers with a bearer token (TokenResponse)
3. Client sends ``Authorization: Bearer <token>`` on every resource call
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .bases import DwollaModel, Link

Headers = Mapping[str, str]


# ============================================================================
# Error Responses
# ============================================================================

class ErrorDetail(DwollaModel):
    """A single validation error nested inside an ErrorResponse.

    Attributes:
        code: Machine-readable error code (e.g. "Required").
        message: Human-readable description.
        path: JSON pointer to the offending request field.
        links: Related links (``_links``).
    """
    code: str
    message: str
    path: Optional[str] = None
    links: Dict[str, Link] = Field(default_factory=dict, alias="_links")


class ErrorEmbedded(DwollaModel):
    errors: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(DwollaModel):
    """Error body returned by the API on failure.

    Attributes:
        code: Machine-readable error code (e.g. "ExpiredAccessToken").
        message: Human-readable description.
        embedded: Nested validation errors (``_embedded``), when present.
    """
    code: str
    message: str
    embedded: Optional[ErrorEmbedded] = Field(default=None, alias="_embedded")


# ============================================================================
# OAuth2 Client Credentials
# ============================================================================

class AppTokenRequest(BaseModel):
    """Client-credentials token request.

    Sent as a plain ``application/json`` POST to the token endpoint.

    Attributes:
        key: Application key (``client_id``).
        secret: Application secret (``client_secret``).
        grant_type: OAuth2 grant type.
    """
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., alias="client_id")
    secret: str = Field(..., alias="client_secret")
    grant_type: str = Field(default="client_credentials")


class TokenResponse(BaseModel):
    """Server response containing an access token.

    Attributes:
        access_token: Bearer token for authenticating subsequent requests.
        token_type: Type of token (typically "Bearer").
        expires_in: Token lifetime in seconds. None means no expiry was given.
    """
    access_token: str = Field(
        ...,
        description="Bearer token for accessing protected resources"
    )
    token_type: str = Field(
        default="Bearer",
        description="Token type (typically Bearer)"
    )
    expires_in: Optional[int] = Field(
        None,
        ge=0,
        description="Token lifetime in seconds"
    )


# ============================================================================
# Document Upload
# ============================================================================

class File(BaseModel):
    """A file to be sent as a multipart part.

    Attributes:
        filename: Name reported in the part's Content-Disposition.
        content_type: MIME type of the file (e.g. "image/png").
        stream: Binary file-like object holding the file content.
    """
    filename: str
    content_type: str
    stream: Any


class UploadDocumentRequest(BaseModel):
    """Document upload for customer verification.

    Attributes:
        document_type: One of "passport", "license", "idCard" or "other".
        document: The document file.
    """
    document_type: str
    document: File

    def multipart_fields(self) -> Dict[str, Any]:
        """Form fields for the multipart body."""
        return {"documentType": self.document_type}

    def multipart_files(self) -> Dict[str, Any]:
        """File parts for the multipart body, in httpx ``files=`` form."""
        doc = self.document
        return {"file": (doc.filename, doc.stream, doc.content_type)}
