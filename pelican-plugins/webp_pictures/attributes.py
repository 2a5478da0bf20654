"""Hint extraction from raw ``<img>`` attribute text.

Every extractor works on the attribute text as written in the page and
returns ``None`` (or an empty string) when its pattern is absent.
"""
from __future__ import annotations

import re
from typing import Optional

from .models import AttributeHints, Dimensions

ATTACHMENT_ID = re.compile(r"wp-image-(\d+)")
SIZE_SLUG = re.compile(r"size-([a-z0-9\-_]+)")
WIDTH_ATTR = re.compile(r"\swidth=[\"'](\d+)[\"']")
HEIGHT_ATTR = re.compile(r"\sheight=[\"'](\d+)[\"']")
SRCSET_ATTR = re.compile(r"\s(srcset)=(\"|')([^\"']*)(\2)", re.IGNORECASE)

# Lazy-loading plugins move ``sizes`` aside; their copy is the one to keep.
SIZES_ATTR_NAMES = ('data-lazy-sizes', 'data-sizes', 'sizes')


def extract_attachment_id(attributes: str) -> Optional[int]:
    match = ATTACHMENT_ID.search(attributes)
    return int(match.group(1)) if match else None


def extract_size_slug(attributes: str) -> Optional[str]:
    match = SIZE_SLUG.search(attributes)
    return match.group(1).lower() if match else None


def extract_dimensions(attributes: str) -> Dimensions:
    width = WIDTH_ATTR.search(attributes)
    height = HEIGHT_ATTR.search(attributes)
    return Dimensions(
        int(width.group(1)) if width else None,
        int(height.group(1)) if height else None,
    )


def extract_srcset(attributes: str) -> Optional[str]:
    match = SRCSET_ATTR.search(attributes)
    return match.group(3) if match else None


def extract_sizes_attribute(attributes: str) -> str:
    """Return `` name="value"`` for the sizes-like attribute to pass through."""
    for name in SIZES_ATTR_NAMES:
        pattern = rf"\s({re.escape(name)})=(\"|')([^\"']*)(\2)"
        match = re.search(pattern, attributes, re.IGNORECASE)
        if match:
            return f' {match.group(1)}="{match.group(3)}"'
    return ''


def extract_hints(attributes: str) -> AttributeHints:
    dimensions = extract_dimensions(attributes)
    return AttributeHints(
        attachment_id=extract_attachment_id(attributes),
        size_slug=extract_size_slug(attributes),
        width=dimensions.width,
        height=dimensions.height,
        srcset=extract_srcset(attributes),
        sizes_attr=extract_sizes_attribute(attributes),
    )
