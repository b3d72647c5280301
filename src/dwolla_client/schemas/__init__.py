from .bases import DwollaModel, HalResource, Link, dumps, serialize_body
from .https import Headers, ErrorDetail, ErrorEmbedded, ErrorResponse, AppTokenRequest, TokenResponse, File, UploadDocumentRequest

__all__ = [
    "DwollaModel",
    "HalResource",
    "Link",
    "dumps",
    "serialize_body",
    "Headers",
    "ErrorDetail",
    "ErrorEmbedded",
    "ErrorResponse",
    "AppTokenRequest",
    "TokenResponse",
    "File",
    "UploadDocumentRequest",
]
