"""Parsing and rewriting of ``srcset`` candidate lists."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from .cdn import build_cdn_url

WIDTH_DESCRIPTOR = re.compile(r"(\d+)w")
DENSITY_DESCRIPTOR = re.compile(r"(\d+(?:\.\d+)?)x")
WHITESPACE = re.compile(r"\s+")


@dataclass
class SrcsetEntry:
    url: str
    descriptor: str = ''

    def render(self) -> str:
        return f'{self.url} {self.descriptor}'.strip()


def parse_srcset(value: Optional[str]) -> List[SrcsetEntry]:
    """Split a ``srcset`` value into ordered (url, descriptor) entries."""
    entries: List[SrcsetEntry] = []
    for raw in (value or '').split(','):
        part = raw.strip()
        if not part:
            continue
        url, *rest = WHITESPACE.split(part)
        entries.append(SrcsetEntry(url, ' '.join(rest)))
    return entries


def width_from_descriptor(descriptor: str, base_width: Optional[int] = None) -> Optional[int]:
    """Return the pixel width a descriptor asks for, if it can be known.

    ``800w`` is taken literally. ``2x`` needs *base_width* and yields
    ``base_width * 2`` rounded half away from zero.
    """
    match = WIDTH_DESCRIPTOR.search(descriptor or '')
    if match:
        return int(match.group(1))

    match = DENSITY_DESCRIPTOR.search(descriptor or '')
    if match and base_width:
        return int(math.floor(base_width * float(match.group(1)) + 0.5))

    return None


def build_srcset_with_params(
    srcset: Optional[str],
    base_params: Mapping[str, Any],
    base_width: Optional[int] = None,
) -> str:
    """Rewrite every candidate URL in *srcset* with CDN parameters.

    Each entry gets its own ``width`` taken from its descriptor; entries whose
    width cannot be worked out are kept without one.
    """
    rewritten = []
    for entry in parse_srcset(srcset):
        params = dict(base_params)
        width = width_from_descriptor(entry.descriptor, base_width)
        if width:
            params['width'] = width
        else:
            params.pop('width', None)
        rewritten.append(SrcsetEntry(build_cdn_url(entry.url, params), entry.descriptor).render())
    return ', '.join(rewritten)
