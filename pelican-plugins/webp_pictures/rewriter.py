"""Turn CMS ``<img>`` tags into ``<picture>`` elements with a WebP source.

Given::

    <img class="wp-image-42 size-medium" width="300" height="200"
         src="https://cdn.example.com/wp-content/uploads/photo.jpg" alt="...">

the rewriter emits::

    <picture>
      <source srcset="https://cdn.example.com/wp-content/uploads/photo.jpg?format=webp&quality=80&width=300"
              type="image/webp">
      <img class="wp-image-42 size-medium" width="300" height="200"
           src="https://cdn.example.com/wp-content/uploads/photo.jpg?width=300" alt="...">
    </picture>

(on one line; wrapped here for reading). The CDN does the actual conversion
based on the query parameters.

Matching is done with regular expressions rather than an HTML parser so that
whatever markup the theme and its plugins produce, malformed or not, comes
back byte-for-byte except for the tags that were rewritten. Enhanced mode
also rewrites ``srcset`` candidate lists entry by entry.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .attributes import SRCSET_ATTR, extract_hints
from .cdn import build_cdn_url
from .classifier import is_platform_image
from .config import RewriterConfig
from .descriptors import build_srcset_with_params
from .metadata import MetadataLookup
from .models import SizeMetadata
from .variants import dimensions_from_metadata, is_full_size, merge_dimensions, resolve_variant

logger = logging.getLogger(__name__)

PICTURE_PATTERN = re.compile(r"<picture\b[^>]*>.*?</picture\s*>", re.IGNORECASE | re.DOTALL)
IMG_PATTERN = re.compile(
    r"<img([^>]*?)src=[\"'](https?://[^\"']*\.(?:jpg|jpeg|png)(?:\?[^\"']*)?)[\"']([^>]*?)>",
    re.IGNORECASE,
)


@dataclass
class RewriteStats:
    images: int = 0
    converted: int = 0
    skipped: int = 0
    failed: int = 0


class _ShieldedPictures:
    """Swap existing ``<picture>`` blocks for placeholders and back.

    Placeholders carry a token unique to this pass, so placeholder-like text
    already in the page is never mistaken for one.
    """

    def __init__(self):
        self.blocks: List[str] = []
        self.token = f'{id(self):x}'
        self.pattern = re.compile(rf"<!--PICTURE_PLACEHOLDER_{self.token}_(\d+)-->")

    def shield(self, html: str) -> str:
        def _repl(match: re.Match) -> str:
            self.blocks.append(match.group(0))
            return f'<!--PICTURE_PLACEHOLDER_{self.token}_{len(self.blocks) - 1}-->'

        return PICTURE_PATTERN.sub(_repl, html)

    def restore(self, html: str) -> str:
        if not self.blocks:
            return html

        def _repl(match: re.Match) -> str:
            index = int(match.group(1))
            if index < len(self.blocks):
                return self.blocks[index]
            return match.group(0)

        return self.pattern.sub(_repl, html)


class PictureRewriter:
    """Stateless HTML rewriter; build once and call ``rewrite`` per page."""

    def __init__(self, config: Optional[RewriterConfig] = None, metadata_lookup: Optional[MetadataLookup] = None):
        self.config = config or RewriterConfig()
        self.metadata_lookup = metadata_lookup

    def rewrite(self, html: str) -> str:
        return self.rewrite_with_stats(html)[0]

    def rewrite_with_stats(self, html: str) -> Tuple[str, RewriteStats]:
        stats = RewriteStats()
        if not self.config.enabled or not html:
            return html, stats

        pictures = _ShieldedPictures()
        shielded = pictures.shield(html)

        def _repl(match: re.Match) -> str:
            stats.images += 1
            try:
                replacement = self._rewrite_tag(match)
            except (ValueError, TypeError, KeyError, AttributeError) as exc:
                stats.failed += 1
                logger.warning("Leaving <img> with src %s unchanged: %s", match.group(2), exc)
                return match.group(0)
            if replacement is None:
                stats.skipped += 1
                return match.group(0)
            stats.converted += 1
            return replacement

        rewritten = pictures.restore(IMG_PATTERN.sub(_repl, shielded))
        logger.debug(
            "Converted %d of %d images (%d skipped, %d failed, %d existing <picture> kept)",
            stats.converted, stats.images, stats.skipped, stats.failed, len(pictures.blocks),
        )
        return rewritten, stats

    def _metadata(self, attachment_id: Optional[int]) -> Optional[SizeMetadata]:
        if not attachment_id or self.metadata_lookup is None:
            return None
        return self.metadata_lookup(attachment_id)

    def _rewrite_tag(self, match: re.Match) -> Optional[str]:
        leading, original_src, trailing = match.group(1), match.group(2), match.group(3)
        all_attributes = leading + trailing

        if not is_platform_image(all_attributes, original_src, self.config.size_class_pattern):
            return None

        hints = extract_hints(all_attributes)
        metadata = self._metadata(hints.attachment_id)
        dimensions = merge_dimensions(hints.dimensions, dimensions_from_metadata(hints.size_slug, metadata))
        variant = resolve_variant(hints.attachment_id, hints.size_slug, dimensions, original_src, metadata)

        target_width = None
        if not is_full_size(variant.size_slug) and variant.dimensions.width:
            target_width = int(variant.dimensions.width)

        webp_params = {'format': 'webp', 'quality': self.config.quality}
        fallback_params = {}
        if target_width:
            webp_params['width'] = target_width
            fallback_params['width'] = target_width

        webp_src = build_cdn_url(original_src, webp_params)
        fallback_src = build_cdn_url(original_src, fallback_params)

        webp_srcset = ''
        if self.config.enhanced and hints.srcset:
            webp_srcset = build_srcset_with_params(hints.srcset, webp_params, target_width)
            fallback_srcset = build_srcset_with_params(hints.srcset, fallback_params, target_width)
            if fallback_srcset:
                leading, trailing = _replace_srcset(leading, trailing, fallback_srcset)

        picture = (
            f'<picture>'
            f'<source srcset="{webp_srcset or webp_src}" type="image/webp"{hints.sizes_attr}>'
            f'<img{leading}src="{fallback_src}"{trailing}>'
            f'</picture>'
        )

        if self.config.debug:
            picture = self._debug_comment(original_src, webp_src, bool(webp_srcset)) + picture
        return picture

    def _debug_comment(self, original_src: str, webp_src: str, with_srcset: bool) -> str:
        if not self.config.enhanced:
            return f'<!-- WebP Conversion: {original_src} -> {webp_src} -->'
        suffix = ' (with srcset)' if with_srcset else ''
        return f'<!-- WebP Enhanced Conversion: {original_src} -> {webp_src}{suffix} -->'


def _replace_srcset(leading: str, trailing: str, srcset: str) -> Tuple[str, str]:
    """Put *srcset* in place of the tag's own, or append it when there is none."""
    new_attr = f' srcset="{srcset}"'
    leading, count = SRCSET_ATTR.subn(lambda m: new_attr, leading, count=1)
    if count:
        return leading, trailing
    trailing, count = SRCSET_ATTR.subn(lambda m: new_attr, trailing, count=1)
    if count:
        return leading, trailing
    return leading, trailing + new_attr


def rewrite(html: str, config: RewriterConfig, metadata_lookup: Optional[MetadataLookup] = None) -> str:
    """Rewrite one HTML document; see ``PictureRewriter``."""
    return PictureRewriter(config, metadata_lookup).rewrite(html)
