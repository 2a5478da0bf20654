"""Attachment metadata lookups.

The rewriter only needs a callable ``lookup(attachment_id) -> SizeMetadata | None``.
Two ready-made sources are provided:

* ``JsonMetadataLookup`` reads an exported ``{"42": {...}, ...}`` file, e.g.
  produced with ``wp eval 'echo json_encode(...wp_get_attachment_metadata...)'``.
* ``RestMetadataLookup`` asks a live WordPress site through
  ``/wp-json/wp/v2/media/<id>`` and reads ``media_details``.

Both cache what they find; lookups never raise.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from .models import SizeMetadata

logger = logging.getLogger(__name__)

MetadataLookup = Callable[[int], Optional[SizeMetadata]]


class MetadataError(Exception):
    """Raised when a metadata export cannot be loaded."""


class JsonMetadataLookup:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._entries = self._load(self.path)

    @staticmethod
    def _load(path: Path) -> Dict[int, SizeMetadata]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise MetadataError(f"Failed to read attachment metadata from {path}: {exc}") from exc

        if not isinstance(raw, Mapping):
            raise MetadataError(f"{path} must contain an object keyed by attachment id")

        entries: Dict[int, SizeMetadata] = {}
        for key, value in raw.items():
            try:
                attachment_id = int(key)
            except (TypeError, ValueError):
                logger.warning("Ignoring metadata entry with non-numeric id %r in %s", key, path)
                continue
            if isinstance(value, Mapping):
                entries[attachment_id] = SizeMetadata.from_dict(value)
        return entries

    def __len__(self) -> int:
        return len(self._entries)

    def __call__(self, attachment_id: int) -> Optional[SizeMetadata]:
        return self._entries.get(attachment_id)


class RestMetadataLookup:
    """Fetch ``media_details`` from a WordPress REST media endpoint."""

    def __init__(
        self,
        endpoint: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self.endpoint = endpoint.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self._cache: Dict[int, Optional[SizeMetadata]] = {}

    def _fetch(self, attachment_id: int) -> Optional[SizeMetadata]:
        url = f"{self.endpoint}/{attachment_id}"
        try:
            resp = self.session.get(url, params={'_fields': 'media_details'}, timeout=self.timeout)
            resp.raise_for_status()
            payload: Any = resp.json()
        except requests.RequestException as exc:
            logger.warning("Failed to fetch attachment metadata %s: %s", url, exc)
            return None
        except ValueError as exc:
            logger.warning("Attachment metadata at %s is not JSON: %s", url, exc)
            return None

        details = payload.get('media_details') if isinstance(payload, Mapping) else None
        if not isinstance(details, Mapping):
            logger.debug("No media_details for attachment %s", attachment_id)
            return None
        return SizeMetadata.from_dict(details)

    def __call__(self, attachment_id: int) -> Optional[SizeMetadata]:
        if attachment_id not in self._cache:
            self._cache[attachment_id] = self._fetch(attachment_id)
        return self._cache[attachment_id]


def lookup_from_settings(settings: Mapping[str, Any]) -> Optional[MetadataLookup]:
    """Build the lookup configured by ``WEBP_PICTURES_METADATA`` / ``_MEDIA_ENDPOINT``."""
    path = settings.get('WEBP_PICTURES_METADATA')
    if path:
        return JsonMetadataLookup(Path(path))
    endpoint = settings.get('WEBP_PICTURES_MEDIA_ENDPOINT')
    if endpoint:
        return RestMetadataLookup(endpoint)
    return None
