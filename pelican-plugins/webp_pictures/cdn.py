"""Query-string rewriting for CDN image URLs.

The CDN converts images on the fly based on URL parameters, e.g.::

    https://cdn.example.com/uploads/photo.jpg?format=webp&quality=80&width=300

Parameters that already exist on the URL are replaced rather than duplicated;
everything else in the query string is left exactly as it was written.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote, unquote_plus, urlsplit, urlunsplit


def _filter_params(params: Optional[Mapping[str, Any]]) -> dict:
    return {
        key: value
        for key, value in (params or {}).items()
        if value is not None and value != ''
    }


def _query_key(part: str) -> str:
    return unquote_plus(part.split('=', 1)[0])


def build_cdn_url(url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Return *url* with *params* set in its query string.

    ``None`` and empty-string values are dropped. When nothing is left to set
    the URL is returned untouched, existing query string included.
    """
    filtered = _filter_params(params)
    if not filtered:
        return url

    parts = urlsplit(url)
    kept = [
        part for part in parts.query.split('&')
        if part and _query_key(part) not in filtered
    ]
    kept.extend(
        f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
        for key, value in filtered.items()
    )
    return urlunsplit(parts._replace(query='&'.join(kept)))
