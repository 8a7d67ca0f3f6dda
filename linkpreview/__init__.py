from linkpreview.errors import (
    ConfigError,
    InvalidRequestError,
    LinkPreviewError,
    RemoteApiError,
    RequestTimeoutError,
    ResponseDecodeError,
    TransportError,
    UnexpectedError,
)
from linkpreview.models.fields import OptionalField, encode_fields
from linkpreview.models.options import LinkPreviewOptions
from linkpreview.models.preview import LinkPreviewResponse
from linkpreview.services.client import LinkPreviewService

__all__ = [
    "ConfigError",
    "InvalidRequestError",
    "LinkPreviewError",
    "LinkPreviewOptions",
    "LinkPreviewResponse",
    "LinkPreviewService",
    "OptionalField",
    "RemoteApiError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "TransportError",
    "UnexpectedError",
    "encode_fields",
]
