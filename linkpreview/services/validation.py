from urllib.parse import urlparse

from linkpreview.errors import ConfigError
from linkpreview.models.options import LinkPreviewOptions


def is_absolute_url(url: str) -> bool:
    try:
        result = urlparse(url)
        return bool(result.scheme) and bool(result.netloc)
    except (TypeError, ValueError):
        return False


def validate_options(options: LinkPreviewOptions) -> None:
    """Raise ConfigError if the options cannot be used to reach the API."""
    if not options.api_key or not options.api_key.strip():
        raise ConfigError("API Key must not be empty")

    if not is_absolute_url(options.api_base_url):
        raise ConfigError("API Base URL must be a valid absolute URL")

    if options.cache_ttl_minutes < 1:
        raise ConfigError("Cache TTL must be a positive number")
