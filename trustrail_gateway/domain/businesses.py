"""Business payment-link slugs"""

import re
from typing import Callable

from trustrail_gateway.domain.exceptions import ValidationError


def slugify(value: str) -> str:
    """Lowercase, whitespace runs to '-', drop anything outside [a-z0-9-]"""
    slug = re.sub(r"\s+", "-", value.strip().lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def unique_slug(business_name: str, is_taken: Callable[[str], bool]) -> str:
    """Slug for a new business, suffixed -2, -3, ... until it is free"""
    base = slugify(business_name)
    if not base:
        raise ValidationError("Business name must contain letters or digits")

    slug = base
    suffix = 2
    while is_taken(slug):
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug
