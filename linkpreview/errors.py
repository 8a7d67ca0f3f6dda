from http import HTTPStatus
from typing import Optional


def _status_label(status_code: int) -> str:
    try:
        return f"{status_code} ({HTTPStatus(status_code).phrase})"
    except ValueError:
        return str(status_code)


class LinkPreviewError(Exception):
    """Base class for every failure raised by the LinkPreview client."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigError(LinkPreviewError):
    """Options are invalid; the service refuses to be built."""


class InvalidRequestError(LinkPreviewError):
    status_code = HTTPStatus.BAD_REQUEST


class RemoteApiError(LinkPreviewError):
    """The API answered with a non-2xx status and a structured error body."""

    def __init__(self, status_code: int, error_code: int, description: str, url: Optional[str] = None):
        message = (
            f"LinkPreview API Error: HTTP {_status_label(status_code)}, "
            f"Error Code: {error_code}, Description: {description}"
        )
        if url:
            message += f", URL: {url}"
        super().__init__(message, status_code)
        self.error_code = error_code
        self.description = description
        self.url = url or None


class TransportError(LinkPreviewError):
    """Non-2xx status without a usable body, or an HTTP-level failure."""


class RequestTimeoutError(LinkPreviewError):
    status_code = HTTPStatus.REQUEST_TIMEOUT

    def __init__(self, message: str = "The request timed out."):
        super().__init__(message)


class ResponseDecodeError(LinkPreviewError):
    pass


class UnexpectedError(LinkPreviewError):
    def __init__(self, message: str):
        super().__init__(f"An unexpected error occurred: {message}")
