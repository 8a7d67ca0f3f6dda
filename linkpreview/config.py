from dotenv import load_dotenv
import os

from linkpreview.models.options import DEFAULT_API_BASE_URL, LinkPreviewOptions

load_dotenv()

LINKPREVIEW_API_BASE_URL = os.getenv("LINKPREVIEW_API_BASE_URL", DEFAULT_API_BASE_URL)
LINKPREVIEW_API_KEY = os.getenv("LINKPREVIEW_API_KEY", "")
LINKPREVIEW_CACHE_TTL_MINUTES = int(os.getenv("LINKPREVIEW_CACHE_TTL_MINUTES", "60"))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "5"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "info")


def load_options() -> LinkPreviewOptions:
    return LinkPreviewOptions(
        api_base_url=LINKPREVIEW_API_BASE_URL,
        api_key=LINKPREVIEW_API_KEY,
        cache_ttl_minutes=LINKPREVIEW_CACHE_TTL_MINUTES,
        request_timeout=REQUEST_TIMEOUT,
        max_retries=MAX_RETRIES,
    )
