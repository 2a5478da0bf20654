"""Decide whether an ``<img>`` came out of the CMS's own image pipeline.

Only images WordPress (or ACF) rendered are rewritten. Widgets and plugins
often ship their own lazy-loading or lightbox scripts that break once their
``<img>`` is wrapped in a ``<picture>``, so anything that does not carry a
platform signal is left alone.
"""
from __future__ import annotations

import re
from typing import Iterable

DEFAULT_SIZE_CLASSES = (
    'thumbnail',
    'medium',
    'large',
    'full',
    'miniature-article',
    'contenu-alterné',
    'carré',
    'témoignage',
)

EXCLUDED_SOURCES = (
    re.compile(r"sb-instagram-feed-images"),
    re.compile(r"instagram-feed"),
    re.compile(r"\.webp(\?|$)"),
    re.compile(r"/plugins/"),
)

ATTACHMENT_CLASS = re.compile(r"wp-image-\d+")
DATA_ATTRIBUTE = re.compile(r"data-[^=]*=\"[^\"]*\"")
DESCRIPTIVE_ALT = re.compile(r"alt=\"[^\"]{10,}\"")
UPLOADS_PATH = re.compile(r"/wp-content/uploads/")
FOCAL_POINT_STYLE = re.compile(r"style=\"[^\"]*object-position:")


def size_class_pattern(size_classes: Iterable[str]) -> re.Pattern:
    names = '|'.join(re.escape(name) for name in size_classes if name)
    if not names:
        # An empty allow-list recognises no size class at all.
        return re.compile(r"(?!)")
    return re.compile(rf"size-({names})")


DEFAULT_SIZE_CLASS_PATTERN = size_class_pattern(DEFAULT_SIZE_CLASSES)


def is_excluded(src: str) -> bool:
    return any(pattern.search(src) for pattern in EXCLUDED_SOURCES)


def is_platform_image(
    attributes: str,
    src: str,
    size_classes: re.Pattern = DEFAULT_SIZE_CLASS_PATTERN,
) -> bool:
    """Return True when the tag is safe to turn into a ``<picture>``.

    *attributes* is the tag's attribute text without ``src``; exclusions on
    *src* always win over inclusion signals.
    """
    if is_excluded(src):
        return False

    return bool(
        ATTACHMENT_CLASS.search(attributes)
        or size_classes.search(attributes)
        or DATA_ATTRIBUTE.search(attributes)
        or DESCRIPTIVE_ALT.search(attributes)
        or UPLOADS_PATH.search(src)
        or FOCAL_POINT_STYLE.search(attributes)
    )
