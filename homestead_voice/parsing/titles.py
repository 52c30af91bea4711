"""Inventory title normalisation."""

from __future__ import annotations

import re

# Product names that legitimately start with "i"
I_PRODUCTS: tuple[str, ...] = (
    "ipod",
    "iphone",
    "ipad",
    "imac",
    "itunes",
    "iwatch",
    "iwallet",
    "icloud",
    "intel",
    "ikea",
    "ibm",
    "irobot",
    "isuzu",
    "ibanez",
)

_LEADING_I_RE = re.compile(r"^[Ii]\s+")


def clean_item_title(title: str) -> str:
    """Remove a stray leading ``I`` from an item title.

    ``"I need shovels"`` becomes ``"need shovels"``, while ``"I iPad case"``
    is left alone because the remainder starts with a known i-product.
    Repeated tokens (``"I I shovels"``) are all removed so the result is a
    fixed point.
    """
    while title:
        match = _LEADING_I_RE.match(title)
        if not match:
            break
        remaining = title[match.end() :]
        if remaining.lower().startswith(I_PRODUCTS):
            break
        title = remaining
    return title
