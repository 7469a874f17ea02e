"""
Metadata block parsing.

A content file may start with a YAML block between two `---` lines:

    ---
    title: Learning React Hooks
    publishedAt: 2024-06-01
    tags: [react, hooks]
    ---

    Body text...

Scalars are typed by YAML (dates, booleans, numbers), lists may be written in
bracketed or dashed form. Everything after the closing marker is the body.
"""

from __future__ import annotations

import pathlib
from typing import Any, Dict, NamedTuple, Optional

import yaml

from .config import FRONTMATTER_MARKER
from .errors import FrontmatterError
from .utils import _norm_text


class ParsedDocument(NamedTuple):
    metadata: Dict[str, Any]
    content: str


def _is_marker(line: str) -> bool:
    return line.rstrip() == FRONTMATTER_MARKER


def parse_frontmatter(
    text: str, path: Optional[pathlib.Path] = None
) -> ParsedDocument:
    text = _norm_text(text)
    lines = text.splitlines(keepends=True)
    if not lines or not _is_marker(lines[0]):
        return ParsedDocument({}, text.strip())

    for i in range(1, len(lines)):
        if _is_marker(lines[i]):
            fm_text = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            break
    else:
        raise FrontmatterError("unterminated metadata block", path)

    try:
        fm = yaml.safe_load(fm_text)
    except (yaml.YAMLError, ValueError) as exc:
        # out-of-range timestamps surface as plain ValueError
        raise FrontmatterError(f"invalid metadata block: {exc}", path) from exc

    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        raise FrontmatterError(
            "metadata block must contain `key: value` lines", path
        )
    bad_keys = [k for k in fm if not isinstance(k, str)]
    if bad_keys:
        raise FrontmatterError(f"non-string metadata keys: {bad_keys!r}", path)

    return ParsedDocument(fm, body.strip())


def dump_frontmatter(data: Dict[str, Any]) -> str:
    """Serialise `data` into a metadata block that parses back to `data`."""
    if not data:
        return f"{FRONTMATTER_MARKER}\n{FRONTMATTER_MARKER}\n\n"
    # dates stay date objects so they dump as plain YYYY-MM-DD scalars
    dumped = yaml.safe_dump(
        dict(data), sort_keys=False, allow_unicode=True
    ).rstrip()
    return f"{FRONTMATTER_MARKER}\n{dumped}\n{FRONTMATTER_MARKER}\n\n"
