"""Work out which size variant an ``<img>`` shows and how large it really is.

Markup dimensions are display hints and are often stale: a theme may print
``width="1024"`` for an image whose largest rendition is 800px wide. The CMS
metadata and the ``-WIDTHxHEIGHT`` suffix WordPress puts on resized files are
the authoritative sources, so markup values are capped by them.
"""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import unquote

from .models import Dimensions, ResolvedVariant, SizeMetadata, SizeVariant

FULL_SIZE_SLUGS = frozenset({'full', 'original'})

FILENAME_DIMENSIONS = re.compile(r"-(\d+)x(\d+)(?=\.[^.]+$)")
SIZE_NAME_SEPARATORS = re.compile(r"[\s.]+")
SIZE_NAME_INVALID = re.compile(r"[^a-z0-9_\-]")
SIZE_NAME_DASHES = re.compile(r"-+")


def sanitize_size_name(name: str) -> str:
    """Normalise a registered size name the way size classes are written."""
    slug = SIZE_NAME_SEPARATORS.sub('-', name.strip().lower())
    slug = SIZE_NAME_INVALID.sub('', slug)
    return SIZE_NAME_DASHES.sub('-', slug).strip('-')


def is_full_size(size_slug: Optional[str]) -> bool:
    return size_slug in FULL_SIZE_SLUGS


def basename_from_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    path = url.split('?', 1)[0].split('#', 1)[0]
    return unquote(path.rstrip('/').rsplit('/', 1)[-1]) or None


def dimensions_from_filename(filename: Optional[str]) -> Dimensions:
    """Read ``photo-300x200.jpg`` style suffixes.

    Any ``-NxM`` right before the extension counts, so a product code such as
    ``widget-12x4.jpg`` is read as a 12x4 image too.
    """
    if not filename:
        return Dimensions()
    match = FILENAME_DIMENSIONS.search(filename)
    if not match:
        return Dimensions()
    return Dimensions(int(match.group(1)), int(match.group(2)))


def find_size(metadata: SizeMetadata, size_slug: str) -> Optional[SizeVariant]:
    for name, variant in metadata.sizes.items():
        if sanitize_size_name(name) == size_slug:
            return variant
    return None


def dimensions_from_metadata(size_slug: Optional[str], metadata: Optional[SizeMetadata]) -> Dimensions:
    """Dimensions of the named size, else of the full-size asset."""
    if metadata is None:
        return Dimensions()

    if size_slug:
        variant = find_size(metadata, size_slug)
        if variant is not None:
            return Dimensions(variant.width, variant.height)

    if metadata.width is not None and metadata.height is not None:
        return Dimensions(metadata.width, metadata.height)
    return Dimensions()


def merge_dimensions(primary: Dimensions, secondary: Dimensions) -> Dimensions:
    """Fill whatever *primary* lacks from *secondary*."""
    return Dimensions(
        primary.width if primary.width else secondary.width,
        primary.height if primary.height else secondary.height,
    )


def _cap(declared: Optional[int], resource: Optional[int]) -> Optional[int]:
    if declared and resource and declared > resource:
        return resource
    if not declared and resource:
        return resource
    return declared


def resolve_variant(
    attachment_id: Optional[int],
    size_slug: Optional[str],
    dimensions: Dimensions,
    src: str,
    metadata: Optional[SizeMetadata] = None,
) -> ResolvedVariant:
    """Refine the size slug and dimensions of an image.

    Looks, in order, at the metadata entry named by *size_slug*, the entry
    whose file matches the URL's basename, the full-size asset and finally
    the filename suffix. The result's dimensions never exceed the asset's.
    """
    resolved_slug = size_slug
    resource = Dimensions()
    basename = basename_from_url(src)

    if attachment_id and metadata is not None:
        if resolved_slug:
            variant = find_size(metadata, resolved_slug)
            if variant is not None:
                resource = Dimensions(variant.width, variant.height)

        if resource.width is None and basename:
            for name, variant in metadata.sizes.items():
                if variant.file and basename_from_url(variant.file) == basename:
                    resource = Dimensions(variant.width, variant.height)
                    resolved_slug = sanitize_size_name(name)
                    break

        if resource.width is None:
            resource.width = metadata.width
        if resource.height is None:
            resource.height = metadata.height

    if not resource.complete:
        from_filename = dimensions_from_filename(basename)
        if resource.width is None and from_filename.width:
            resource.width = from_filename.width
        if resource.height is None and from_filename.height:
            resource.height = from_filename.height

    return ResolvedVariant(
        size_slug=resolved_slug,
        dimensions=Dimensions(
            _cap(dimensions.width, resource.width),
            _cap(dimensions.height, resource.height),
        ),
    )
