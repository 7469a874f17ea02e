from __future__ import annotations

import pathlib
from typing import Optional


class ContentError(Exception):
    """Base class for content pipeline errors."""


class ParseError(ContentError):
    """A content file could not be parsed."""

    def __init__(self, message: str, path: Optional[pathlib.Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class FrontmatterError(ParseError):
    """Malformed metadata block."""


class ContentDirectoryError(ContentError):
    """A content directory is missing or unreadable."""


class UnknownKindError(ContentError, ValueError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown content kind: {kind!r}")


class UnresolvedComponentError(ContentError):
    """A body references a component the registry does not provide."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unresolved component: <{name}>")
