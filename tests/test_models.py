# ruff: noqa: S101
import pytest

from courier.errors import CompositionError
from courier.models import ContentType, HttpMethod


@pytest.mark.parametrize("raw", ["GET", "get", " patch ", "Options"])
def test_parse_accepts_known_methods(raw):
    assert HttpMethod.parse(raw).value == raw.strip().upper()


@pytest.mark.parametrize("raw", ["", "BREW", "G ET", 5])
def test_parse_rejects_unknown_methods(raw):
    with pytest.raises(CompositionError, match="Unsupported HTTP method"):
        HttpMethod.parse(raw)


def test_composition_error_is_a_value_error():
    with pytest.raises(ValueError):
        HttpMethod.parse("TRACE")


def test_content_type_labels():
    assert [content_type.label for content_type in ContentType] == ["JSON", "Text", "HTML", "XML"]
