"""Data models shared by the picture rewriter."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Dimensions:
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def complete(self) -> bool:
        return self.width is not None and self.height is not None


@dataclass
class AttributeHints:
    """Identifying hints pulled from an ``<img>`` tag's attribute text."""

    attachment_id: Optional[int] = None
    size_slug: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    srcset: Optional[str] = None
    sizes_attr: str = ''

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)


@dataclass
class SizeVariant:
    """One named rendition of an attachment, as recorded by the CMS."""

    width: Optional[int] = None
    height: Optional[int] = None
    file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SizeVariant':
        file = data.get('file')
        return cls(
            width=_int_or_none(data.get('width')),
            height=_int_or_none(data.get('height')),
            file=str(file) if file else None,
        )


@dataclass
class SizeMetadata:
    """Known dimensions of an attachment and of its size variants.

    Accepts the layout of WordPress attachment metadata, which is also what the
    REST API exposes as ``media_details``::

        {"width": 1200, "height": 800,
         "sizes": {"medium": {"width": 300, "height": 200, "file": "photo-300x200.jpg"}}}
    """

    width: Optional[int] = None
    height: Optional[int] = None
    sizes: Dict[str, SizeVariant] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SizeMetadata':
        raw_sizes = data.get('sizes') or {}
        sizes = {}
        if isinstance(raw_sizes, Mapping):
            sizes = {
                str(name): SizeVariant.from_dict(info)
                for name, info in raw_sizes.items()
                if isinstance(info, Mapping)
            }
        return cls(
            width=_int_or_none(data.get('width')),
            height=_int_or_none(data.get('height')),
            sizes=sizes,
        )


@dataclass
class ResolvedVariant:
    size_slug: Optional[str]
    dimensions: Dimensions
