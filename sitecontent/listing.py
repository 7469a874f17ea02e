from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import RECENT_LIMIT
from .models import ContentEntry
from .utils import as_date


def published_date(entry: ContentEntry) -> Optional[date]:
    return as_date(entry.metadata.published_at)


def sort_entries(entries: Iterable[ContentEntry]) -> List[ContentEntry]:
    """Newest first; entries without a usable date go last in input order."""
    dated, undated = [], []
    for entry in entries:
        d = published_date(entry)
        if d is None:
            undated.append(entry)
        else:
            dated.append((d, entry))
    # sorted() is stable, so equal dates keep their input order
    dated = sorted(dated, key=lambda pair: pair[0], reverse=True)
    return [entry for _, entry in dated] + undated


def matches(entry: ContentEntry, query: str) -> bool:
    needle = query.strip().casefold()
    if not needle:
        return True
    meta = entry.metadata
    haystack = [meta.title, meta.summary, *meta.tags]
    return any(
        needle in str(value).casefold()
        for value in haystack
        if value is not None
    )


def apply(
    entries: Iterable[ContentEntry],
    limit: Optional[int] = None,
    query: Optional[str] = None,
) -> List[ContentEntry]:
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    result = sort_entries(entries)
    if query:
        result = [e for e in result if matches(e, query)]
    if limit:
        result = result[:limit]
    return result


def recent(
    entries: Iterable[ContentEntry], limit: int = RECENT_LIMIT
) -> List[ContentEntry]:
    return apply(entries, limit=limit)


def neighbours(
    entries: Sequence[ContentEntry], slug: str
) -> Tuple[Optional[ContentEntry], Optional[ContentEntry]]:
    """
    Return (newer, older) around `slug` in listing order.

    Either side is None at the ends of the listing.
    """
    ordered = sort_entries(entries)
    for i, entry in enumerate(ordered):
        if entry.slug == slug:
            newer = ordered[i - 1] if i > 0 else None
            older = ordered[i + 1] if i < len(ordered) - 1 else None
            return newer, older
    raise KeyError(slug)
