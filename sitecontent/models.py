from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

# source key -> Metadata attribute
RECOGNIZED_KEYS = {
    "title": "title",
    "summary": "summary",
    "image": "image",
    "author": "author",
    "publishedAt": "published_at",
}


@dataclass(frozen=True)
class Metadata:
    """
    Parsed metadata of one entry.

    The common fields are attributes and default to None when the source
    file does not set them. Every other key (project `tags`, `link`, ...)
    lands in `extra` untouched.
    """

    title: Optional[str] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    author: Optional[str] = None
    published_at: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Metadata":
        known: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            if key in RECOGNIZED_KEYS:
                known[RECOGNIZED_KEYS[key]] = value
            else:
                extra[key] = value
        return cls(**known, extra=extra)

    def get(self, key: str, default: Any = None) -> Any:
        if key in RECOGNIZED_KEYS:
            value = getattr(self, RECOGNIZED_KEYS[key])
            return default if value is None else value
        return self.extra.get(key, default)

    @property
    def tags(self) -> List[str]:
        raw = self.extra.get("tags")
        if raw is None:
            return []
        if isinstance(raw, (list, tuple)):
            return [str(t) for t in raw if t is not None]
        return [str(raw)]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, attr in RECOGNIZED_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class ContentEntry:
    kind: str
    slug: str
    metadata: Metadata
    body: str
    path: Optional[pathlib.Path] = None

    @property
    def title(self) -> str:
        return self.metadata.title or self.slug


@dataclass(frozen=True)
class TocItem:
    level: int
    text: str
    id: str


@dataclass
class RenderedOutput:
    html: str
    toc: List[TocItem] = field(default_factory=list)
    components: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.html
