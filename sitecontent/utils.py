from __future__ import annotations

import pathlib
import re
from datetime import date, datetime
from typing import Any, Optional

from .config import CONTENT_EXT


def slug_from_path(path: pathlib.Path) -> str:
    """Slug is the file's base name with the content extension stripped."""
    name = path.name
    if name.endswith(CONTENT_EXT):
        return name[: -len(CONTENT_EXT)]
    return path.stem


def is_safe_slug(slug: str) -> bool:
    if not slug or slug in {".", ".."}:
        return False
    return "/" not in slug and "\\" not in slug and "\x00" not in slug


def natural_key(s: str):
    return [int(t) if t.isdigit() else t for t in re.split(r'(\d+)', s.lower())]


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def _coerce_date_like(v):
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        s = v.strip().strip('"').strip("'")
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
        except ValueError:
            return v
    return v


def as_date(v: Any) -> Optional[date]:
    """Return `v` as a date, or None when it is missing or not date-like."""
    coerced = _coerce_date_like(v)
    return coerced if isinstance(coerced, date) else None
