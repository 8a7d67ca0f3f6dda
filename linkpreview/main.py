import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linkpreview.config import LOG_LEVEL, load_options
from linkpreview.errors import LinkPreviewError, RemoteApiError
from linkpreview.models.fields import parse_fields
from linkpreview.models.preview import LinkPreviewResponse
from linkpreview.services.client import LinkPreviewService

logging.basicConfig(level=LOG_LEVEL.upper())
logger = logging.getLogger("linkpreview-service")


@lru_cache()
def get_link_preview_service() -> LinkPreviewService:
    """Process-wide service instance, so every request shares one cache and session."""
    service = LinkPreviewService(load_options())
    logger.info(f"LinkPreview service configured ({service.options})")
    return service


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_link_preview_service.cache_info().currsize:
        get_link_preview_service().close()
        get_link_preview_service.cache_clear()


app = FastAPI(title="LinkPreview Service", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(LinkPreviewError)
async def link_preview_exception_handler(request: Request, exc: LinkPreviewError):
    content = {"status": int(exc.status_code), "detail": exc.message}
    if isinstance(exc, RemoteApiError):
        content["error_code"] = exc.error_code
    return JSONResponse(status_code=int(exc.status_code), content=content)


@app.get("/preview", response_model=LinkPreviewResponse, response_model_by_alias=False)
def get_preview(
    url: str = Query(..., description="The URL to fetch metadata for"),
    fields: Optional[str] = Query(None, description="Comma-separated optional fields, e.g. icon,icon_size"),
    service: LinkPreviewService = Depends(get_link_preview_service),
):
    return service.get_preview(url, parse_fields(fields))


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/ready")
def ready():
    return {"status": "ready"}
