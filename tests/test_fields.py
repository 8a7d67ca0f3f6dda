import pytest

from linkpreview.errors import InvalidRequestError
from linkpreview.models.fields import FIELD_TOKENS, OptionalField, encode_fields, parse_fields


def test_encode_none():
    assert encode_fields(None) == ""
    assert encode_fields(OptionalField.NONE) == ""


def test_encode_icon_and_icon_size():
    assert encode_fields(OptionalField.ICON | OptionalField.ICON_SIZE) == "icon,icon_size"


def test_encode_order_does_not_depend_on_combination_order():
    a = OptionalField.ICON_TYPE | OptionalField.CANONICAL | OptionalField.IMAGE_Y
    b = OptionalField.IMAGE_Y | OptionalField.ICON_TYPE | OptionalField.CANONICAL
    assert encode_fields(a) == encode_fields(b) == "canonical,image_y,icon_type"


def test_encode_all_fields_in_declared_order():
    everything = OptionalField.NONE
    for member, _ in reversed(FIELD_TOKENS):
        everything |= member
    assert encode_fields(everything) == (
        "canonical,locale,site_name,image_x,image_y,image_size,image_type,"
        "icon,icon_x,icon_y,icon_size,icon_type"
    )


def test_parse_fields():
    assert parse_fields("icon_size, ICON") == OptionalField.ICON | OptionalField.ICON_SIZE


def test_parse_fields_empty():
    assert parse_fields(None) == OptionalField.NONE
    assert parse_fields("") == OptionalField.NONE
    assert parse_fields(" , ") == OptionalField.NONE


def test_parse_fields_unknown_token():
    with pytest.raises(InvalidRequestError) as exc_info:
        parse_fields("icon,favicon")
    assert exc_info.value.status_code == 400
    assert "favicon" in exc_info.value.message
