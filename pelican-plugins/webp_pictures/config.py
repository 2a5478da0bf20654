"""Settings for the picture rewriter.

Pelican sites configure the plugin from ``pelicanconf.py``::

    WEBP_PICTURES_ENABLED = True
    WEBP_PICTURES_ENHANCED = True      # also rewrite srcset lists
    WEBP_PICTURES_DEBUG = False        # prepend an HTML comment per conversion
    WEBP_PICTURES_QUALITY = 80         # 1-100, sent to the CDN as ?quality=
    WEBP_PICTURES_SIZE_CLASSES = (...) # size-* classes that mark CMS images

The Flask app reads the same names from the environment.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from .classifier import DEFAULT_SIZE_CLASSES, size_class_pattern

DEFAULT_QUALITY = 80
SETTINGS_PREFIX = 'WEBP_PICTURES_'
TRUTHY = {'1', 'true', 'yes', 'on'}


def sanitize_quality(value: Any) -> int:
    """Coerce a user-supplied quality into 1..100, defaulting to 80."""
    try:
        quality = int(value)
    except (TypeError, ValueError):
        quality = 0
    if quality <= 0:
        quality = DEFAULT_QUALITY
    return max(1, min(100, quality))


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return bool(value)


@dataclass
class RewriterConfig:
    enabled: bool = True
    enhanced: bool = True
    debug: bool = False
    quality: int = DEFAULT_QUALITY
    size_classes: Tuple[str, ...] = DEFAULT_SIZE_CLASSES
    size_class_pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.size_classes = tuple(self.size_classes)
        self.size_class_pattern = size_class_pattern(self.size_classes)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> 'RewriterConfig':
        size_classes = settings.get(f'{SETTINGS_PREFIX}SIZE_CLASSES') or DEFAULT_SIZE_CLASSES
        return cls(
            enabled=_as_bool(settings.get(f'{SETTINGS_PREFIX}ENABLED'), True),
            enhanced=_as_bool(settings.get(f'{SETTINGS_PREFIX}ENHANCED'), True),
            debug=_as_bool(settings.get(f'{SETTINGS_PREFIX}DEBUG'), False),
            quality=sanitize_quality(settings.get(f'{SETTINGS_PREFIX}QUALITY', DEFAULT_QUALITY)),
            size_classes=tuple(size_classes),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'RewriterConfig':
        environ = os.environ if environ is None else environ
        settings = dict(environ)
        raw_classes = environ.get(f'{SETTINGS_PREFIX}SIZE_CLASSES')
        if raw_classes:
            settings[f'{SETTINGS_PREFIX}SIZE_CLASSES'] = [
                name.strip() for name in raw_classes.split(',') if name.strip()
            ]
        return cls.from_settings(settings)


def describe(config: RewriterConfig) -> List[Tuple[str, str]]:
    """Human-readable status rows for reports and the preview endpoint."""
    return [
        ('Current Status', 'Enabled' if config.enabled else 'Disabled'),
        ('Mode', 'Enhanced (handles srcset)' if config.enhanced else 'Basic'),
        ('Debug Mode', 'Enabled' if config.debug else 'Disabled'),
        ('Quality Setting', f'{config.quality}%'),
    ]
