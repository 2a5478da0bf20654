"""
WebP Pictures Plugin for Pelican

This plugin post-processes every HTML page Pelican writes and converts
images rendered by WordPress (pages imported with ``pelican-import`` keep the
``wp-image-*``/``size-*`` classes and their CDN URLs) into <picture> elements
with a CDN-generated WebP source.

It converts:
  <img class="wp-image-42 size-medium" src="https://cdn.example.com/wp-content/uploads/photo.jpg" ...>

To:
  <picture>
    <source srcset="https://cdn.example.com/wp-content/uploads/photo.jpg?format=webp&quality=80&width=300" type="image/webp">
    <img class="wp-image-42 size-medium" src="https://cdn.example.com/wp-content/uploads/photo.jpg?width=300" ...>
  </picture>

Settings live in pelicanconf.py (see ``webp_pictures.config``). Attachment
sizes come from ``WEBP_PICTURES_METADATA`` (exported JSON) or
``WEBP_PICTURES_MEDIA_ENDPOINT`` (WordPress REST media endpoint).
"""
from __future__ import annotations

import logging
from pathlib import Path

from pelican import signals

from .config import RewriterConfig, describe, sanitize_quality
from .metadata import JsonMetadataLookup, MetadataError, RestMetadataLookup, lookup_from_settings
from .models import SizeMetadata, SizeVariant
from .rewriter import PictureRewriter, RewriteStats, rewrite

logger = logging.getLogger(__name__)

__all__ = [
    'JsonMetadataLookup',
    'MetadataError',
    'PictureRewriter',
    'RestMetadataLookup',
    'RewriteStats',
    'RewriterConfig',
    'SizeMetadata',
    'SizeVariant',
    'build_rewriter',
    'describe',
    'register',
    'rewrite',
    'sanitize_quality',
]

# One rewriter per build, created when Pelican initialises.
_active = {}


def build_rewriter(settings) -> PictureRewriter:
    """Build a rewriter from Pelican settings; a broken metadata export disables it."""
    try:
        lookup = lookup_from_settings(settings)
    except MetadataError as exc:
        logger.error("webp_pictures disabled: %s", exc)
        return PictureRewriter(RewriterConfig(enabled=False))
    return PictureRewriter(RewriterConfig.from_settings(settings), lookup)


def init_rewriter(pelican):
    rewriter = build_rewriter(pelican.settings)
    _active['rewriter'] = rewriter
    for label, value in describe(rewriter.config):
        logger.debug("webp_pictures %s: %s", label, value)


def rewrite_written_file(path, context=None):
    """Rewrite one page Pelican has just written to disk."""
    if not str(path).endswith('.html'):
        return
    rewriter = _active.get('rewriter')
    if rewriter is None:
        rewriter = _active['rewriter'] = build_rewriter(context or {})
    if not rewriter.config.enabled:
        return

    output = Path(path)
    try:
        html = output.read_text(encoding='utf-8')
    except OSError as exc:
        logger.warning("webp_pictures could not read %s: %s", output, exc)
        return

    rewritten, stats = rewriter.rewrite_with_stats(html)
    if rewritten == html:
        return
    try:
        output.write_text(rewritten, encoding='utf-8')
    except OSError as exc:
        logger.warning("webp_pictures could not write %s: %s", output, exc)
        return
    logger.debug("webp_pictures: %s (%d of %d images converted)", output, stats.converted, stats.images)


def register():
    """Register the plugin with Pelican."""
    signals.initialized.connect(init_rewriter)
    signals.content_written.connect(rewrite_written_file)
