from pydantic import BaseModel

DEFAULT_API_BASE_URL = "https://api.linkpreview.net"


class LinkPreviewOptions(BaseModel):
    api_base_url: str = DEFAULT_API_BASE_URL
    api_key: str = ""
    cache_ttl_minutes: int = 60  # one hour
    request_timeout: float = 5
    max_retries: int = 3

    def __str__(self) -> str:
        if len(self.api_key) <= 6:
            masked_key = "***"
        else:
            masked_key = f"{self.api_key[:3]}...{self.api_key[-3:]}"
        return f"API Base URL: {self.api_base_url}, API Key: {masked_key}"
