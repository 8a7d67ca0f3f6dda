import logging
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

logger = logging.getLogger(__name__)

# language_TERRITORY, e.g. en_US
LOCALE_PATTERN = re.compile(r"^[a-z]{2}_[A-Z]{2}$")


class LinkPreviewResponse(BaseModel):
    """Decoded API answer, covering both the default and the extended response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    description: str = ""
    image: str = ""
    url: str = ""
    canonical: Optional[str] = None
    site_name: Optional[str] = None
    image_size: Optional[int] = None
    image_type: Optional[str] = None
    image_width: Optional[int] = Field(default=None, alias="image_x")
    image_height: Optional[int] = Field(default=None, alias="image_y")
    icon: Optional[str] = None
    icon_type: Optional[str] = None
    icon_width: Optional[int] = Field(default=None, alias="icon_x")
    icon_height: Optional[int] = Field(default=None, alias="icon_y")
    locale: Optional[str] = None

    @field_validator("title", "description", "image", "url", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("locale", mode="before")
    @classmethod
    def _unknown_locale_as_none(cls, value):
        if not value:
            return None
        if isinstance(value, str) and LOCALE_PATTERN.match(value):
            return value
        logger.debug("Ignoring locale not in language_TERRITORY form", extra={"locale": value})
        return None

    def is_extended(self) -> bool:
        return any(
            (
                self.canonical,
                self.site_name,
                self.image_size is not None,
                self.image_type,
                self.image_width is not None,
                self.image_height is not None,
                self.icon,
                self.icon_type,
                self.icon_width is not None,
                self.icon_height is not None,
                self.locale,
            )
        )

    def __str__(self) -> str:
        return f"Title: {self.title}, URL: {self.url}, Is Extended Response: {self.is_extended()}"


class LinkPreviewErrorResponse(BaseModel):
    title: str = ""
    description: str = ""
    image: str = ""
    url: str = ""
    error: int

    @field_validator("title", "description", "image", "url", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value
