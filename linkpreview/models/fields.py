from enum import Flag
from typing import Optional

from linkpreview.errors import InvalidRequestError


class OptionalField(Flag):
    """Extended fields that can be requested on top of title/description/image/url."""

    NONE = 0
    CANONICAL = 1 << 0
    LOCALE = 1 << 1
    SITE_NAME = 1 << 2
    IMAGE_X = 1 << 3
    IMAGE_Y = 1 << 4
    IMAGE_SIZE = 1 << 5
    IMAGE_TYPE = 1 << 6
    ICON = 1 << 7
    ICON_X = 1 << 8
    ICON_Y = 1 << 9
    ICON_SIZE = 1 << 10
    ICON_TYPE = 1 << 11


# Order matters: the API expects the tokens in this sequence.
FIELD_TOKENS = (
    (OptionalField.CANONICAL, "canonical"),
    (OptionalField.LOCALE, "locale"),
    (OptionalField.SITE_NAME, "site_name"),
    (OptionalField.IMAGE_X, "image_x"),
    (OptionalField.IMAGE_Y, "image_y"),
    (OptionalField.IMAGE_SIZE, "image_size"),
    (OptionalField.IMAGE_TYPE, "image_type"),
    (OptionalField.ICON, "icon"),
    (OptionalField.ICON_X, "icon_x"),
    (OptionalField.ICON_Y, "icon_y"),
    (OptionalField.ICON_SIZE, "icon_size"),
    (OptionalField.ICON_TYPE, "icon_type"),
)

_BY_TOKEN = {token: member for member, token in FIELD_TOKENS}


def encode_fields(fields: Optional[OptionalField] = None) -> str:
    """Comma-joined field tokens, always in declaration order. Empty for no fields."""
    if not fields:
        return ""
    return ",".join(token for member, token in FIELD_TOKENS if member in fields)


def parse_fields(value: Optional[str]) -> OptionalField:
    fields = OptionalField.NONE
    if not value:
        return fields
    for token in value.split(","):
        token = token.strip().lower()
        if not token:
            continue
        if token not in _BY_TOKEN:
            raise InvalidRequestError(f"Unknown optional field: {token}")
        fields |= _BY_TOKEN[token]
    return fields
