#!/usr/bin/env python3
from __future__ import annotations

import os
import pathlib
import re

# ---------- Paths

CONTENT_DIR_ENV = "SITE_CONTENT_DIR"


def default_content_root() -> pathlib.Path:
    """`$SITE_CONTENT_DIR`, else `content/` under the working directory."""
    return pathlib.Path(
        os.environ.get(CONTENT_DIR_ENV) or pathlib.Path.cwd() / "content"
    )


# ---------- Config

KINDS = ("posts", "projects")
CONTENT_EXT = ".mdx"
RECENT_LIMIT = 4
MAX_TOC_DEPTH = 3
MAX_READ_WORKERS = 8

FRONTMATTER_MARKER = "---"

MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "toc", "codehilite")
MARKDOWN_EXTENSION_CONFIGS = {
    "codehilite": {"guess_lang": False, "css_class": "highlight"},
    "toc": {"toc_depth": f"1-{MAX_TOC_DEPTH}"},
}

# Some shared regexes

FENCE = re.compile(r"(^(?P<fence>```|~~~).*?$)(.*?)(^(?P=fence)[ \t]*$)",
                   re.MULTILINE | re.DOTALL)
INLINE_CODE = re.compile(r"(`+)(?!`).+?(?<!`)\1(?!`)", re.DOTALL)
COMPONENT_TAG = re.compile(
    r"<(?P<name>[A-Z][A-Za-z0-9_.]*)(?P<attrs>(?:\s+[^<>]*?)?)\s*"
    r"(?:/>|>(?P<children>.*?)</(?P=name)\s*>)",
    re.DOTALL,
)
COMPONENT_ATTR = re.compile(
    r'(?P<key>[A-Za-z_][\w-]*)'
    r'(?:\s*=\s*(?:"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\'|\{(?P<expr>[^{}]*)\}))?'
)
PLACEHOLDER = "@@C{nonce}x{index}@@"
INDENTED_CODE_LINE = re.compile(r"^(?: {4}|\t)")
LIST_ITEM = re.compile(r"^ {0,3}(?:[-*+]|\d+[.)])\s")
