"""Unit tests for payment-link slugs"""

import pytest
from trustrail_gateway.domain.businesses import slugify, unique_slug
from trustrail_gateway.domain.exceptions import ValidationError


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Lagos Auto Repairs", "lagos-auto-repairs"),
        ("  Mama Put   Kitchen ", "mama-put-kitchen"),
        ("Ade & Sons Ltd.", "ade--sons-ltd"),
        ("already-a-slug", "already-a-slug"),
        ("Shop 24/7", "shop-247"),
        ("!!!", ""),
    ],
)
def test_slugify(value, expected):
    assert slugify(value) == expected


def test_unique_slug_free():
    assert unique_slug("Lagos Auto Repairs", lambda slug: False) == "lagos-auto-repairs"


def test_unique_slug_appends_suffix_until_free():
    taken = {"kano-textiles", "kano-textiles-2"}
    assert unique_slug("Kano Textiles", taken.__contains__) == "kano-textiles-3"


def test_unique_slug_rejects_name_without_slug_characters():
    with pytest.raises(ValidationError):
        unique_slug("***", lambda slug: False)
