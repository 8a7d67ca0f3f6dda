import asyncio
import functools
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional
from urllib.parse import quote, urlencode

import requests
from pydantic import ValidationError

from linkpreview.errors import (
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
from linkpreview.models.preview import LinkPreviewErrorResponse, LinkPreviewResponse
from linkpreview.services.cache import PreviewCache, utcnow
from linkpreview.services.transport import build_session
from linkpreview.services.validation import is_absolute_url, validate_options

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Linkpreview-Api-Key"


def cache_key(url: str, fields: Optional[OptionalField] = None) -> str:
    return f"preview:{url}:{encode_fields(fields)}"


def build_query(url: str, fields: Optional[OptionalField] = None) -> str:
    params = {"q": url}
    encoded_fields = encode_fields(fields)
    if encoded_fields:
        params["fields"] = encoded_fields
    return urlencode(params, safe="", quote_via=quote)


class LinkPreviewService:
    """Fetches link previews from the LinkPreview API and caches them per (url, fields).

    Options are validated here, so an instance only exists if it can serve
    requests. ``cache`` needs ``get(key)`` and ``set(key, value, expires_at)``;
    ``session`` needs a ``requests.Session``-style ``get``.
    """

    def __init__(
        self,
        options: LinkPreviewOptions,
        cache=None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        validate_options(options)
        self.options = options
        self._cache = cache if cache is not None else PreviewCache(clock=clock)
        self._session = session if session is not None else build_session(options)
        self._clock = clock
        self._endpoint = options.api_base_url.rstrip("/") + "/"
        self._ttl = timedelta(minutes=options.cache_ttl_minutes)

    def get_preview(
        self,
        url: str,
        fields: Optional[OptionalField] = None,
        timeout: Optional[float] = None,
    ) -> LinkPreviewResponse:
        key = cache_key(url, fields)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Preview cache hit", extra={"cacheKey": key})
            return cached

        preview = self.fetch(url, fields, timeout)
        self._store(key, preview)
        return preview

    async def aget_preview(
        self,
        url: str,
        fields: Optional[OptionalField] = None,
        timeout: Optional[float] = None,
    ) -> LinkPreviewResponse:
        key = cache_key(url, fields)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Preview cache hit", extra={"cacheKey": key})
            return cached

        # requests is blocking: run the fetch in the thread pool
        loop = asyncio.get_event_loop()
        try:
            preview = await loop.run_in_executor(None, functools.partial(self.fetch, url, fields, timeout))
        except asyncio.CancelledError:
            logger.info("Preview request cancelled", extra={"url": url})
            raise
        self._store(key, preview)
        return preview

    def fetch(
        self,
        url: str,
        fields: Optional[OptionalField] = None,
        timeout: Optional[float] = None,
    ) -> LinkPreviewResponse:
        """Call the API once, without touching the cache.

        Every failure is raised as a LinkPreviewError subclass.
        """
        if not is_absolute_url(url):
            raise InvalidRequestError("The URL is not valid.")

        target = f"{self._endpoint}?{build_query(url, fields)}"
        try:
            response = self._session.get(
                target,
                headers={API_KEY_HEADER: self.options.api_key},
                timeout=timeout if timeout is not None else self.options.request_timeout,
            )
        except requests.Timeout as exc:
            logger.warning("LinkPreview request timed out", extra={"url": url})
            raise RequestTimeoutError() from exc
        except requests.ConnectionError as exc:
            logger.warning(f"LinkPreview connection failed: {exc}", extra={"url": url})
            raise UnexpectedError(str(exc)) from exc
        except requests.RequestException as exc:
            logger.warning(f"LinkPreview request failed: {exc}", extra={"url": url})
            raise TransportError(str(exc)) from exc
        except Exception as exc:
            raise UnexpectedError(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            error = self._error_from_response(response)
            logger.warning(error.message, extra={"url": url, "status": response.status_code})
            raise error

        return self._decode(response)

    def close(self) -> None:
        self._session.close()

    def _store(self, key: str, preview: LinkPreviewResponse) -> None:
        self._cache.set(key, preview, self._clock() + self._ttl)

    @staticmethod
    def _error_from_response(response: requests.Response) -> LinkPreviewError:
        try:
            body = LinkPreviewErrorResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            message = response.reason or response.text or "The LinkPreview API request failed."
            return TransportError(message, response.status_code)
        return RemoteApiError(response.status_code, body.error, body.description, body.url)

    @staticmethod
    def _decode(response: requests.Response) -> LinkPreviewResponse:
        try:
            return LinkPreviewResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ResponseDecodeError(f"Failed to deserialize the API response: {exc}") from exc
