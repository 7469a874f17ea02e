"""
Render Pipeline: markdown body -> HTML with embedded components.

Component references are capitalised tags in the body, e.g. `<Counter />` or
`<Note kind="tip">Remember this</Note>`. Each name is looked up in the
registry passed to `render`; a unit is any callable taking the tag's props
as keyword arguments (plus `children` for paired tags) and returning HTML.

Fenced code blocks are highlighted with Pygments through codehilite.
Component-looking text inside code (fenced blocks, indented blocks outside
lists, inline spans) is never touched.
"""

from __future__ import annotations

import logging
import re
import secrets
from typing import Any, Callable, Dict, List, Mapping, Tuple

import markdown
import yaml

from .config import (
    COMPONENT_ATTR,
    COMPONENT_TAG,
    FENCE,
    INDENTED_CODE_LINE,
    INLINE_CODE,
    LIST_ITEM,
    MARKDOWN_EXTENSION_CONFIGS,
    MARKDOWN_EXTENSIONS,
    MAX_TOC_DEPTH,
    PLACEHOLDER,
)
from .errors import UnresolvedComponentError
from .models import RenderedOutput, TocItem
from .utils import _norm_text

logger = logging.getLogger(__name__)

Component = Callable[..., Any]
Registry = Mapping[str, Component]


def map_noncode(md: str, fn):
    parts, last = [], 0
    for m in FENCE.finditer(md):
        parts.append(fn(md[last : m.start()]))
        parts.append(md[m.start() : m.end()])
        last = m.end()
    parts.append(fn(md[last:]))
    return "".join(parts)


def _indented_code_spans(s: str) -> List[Tuple[int, int]]:
    """Character spans of indented code blocks that are not list content."""
    spans: List[Tuple[int, int]] = []
    pos, block_start = 0, None
    prev_blank, in_list = True, False
    for line in s.splitlines(keepends=True):
        blank = not line.strip()
        indented = bool(INDENTED_CODE_LINE.match(line))
        if block_start is not None and not (blank or indented):
            spans.append((block_start, pos))
            block_start = None
        if block_start is None:
            if indented and not blank and prev_blank and not in_list:
                block_start = pos
            elif not blank and not indented:
                in_list = bool(LIST_ITEM.match(line))
        prev_blank = blank
        pos += len(line)
    if block_start is not None:
        spans.append((block_start, pos))
    return spans


def _code_spans(s: str) -> List[Tuple[int, int]]:
    inline = [m.span() for m in INLINE_CODE.finditer(s)]
    return _indented_code_spans(s) + inline


def _coerce_expr(expr: str) -> Any:
    expr = expr.strip()
    if not expr:
        return None
    try:
        return yaml.safe_load(expr)
    except yaml.YAMLError:
        return expr


def parse_props(attrs: str) -> Dict[str, Any]:
    props: Dict[str, Any] = {}
    for m in COMPONENT_ATTR.finditer(attrs or ""):
        key = m.group("key")
        if m.group("dq") is not None:
            props[key] = m.group("dq")
        elif m.group("sq") is not None:
            props[key] = m.group("sq")
        elif m.group("expr") is not None:
            props[key] = _coerce_expr(m.group("expr"))
        else:
            props[key] = True
    return props


def _markdown() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=list(MARKDOWN_EXTENSIONS),
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        output_format="html",
    )


def _flatten_toc(tokens, out: List[TocItem]) -> List[TocItem]:
    for tok in tokens:
        if tok["level"] <= MAX_TOC_DEPTH:
            out.append(TocItem(level=tok["level"], text=tok["name"], id=tok["id"]))
        _flatten_toc(tok.get("children") or [], out)
    return out


class _Renderer:
    def __init__(self, registry: Registry) -> None:
        self.registry = registry
        self.rendered: List[str] = []
        self.used: List[str] = []
        # tokens must not collide with text the author wrote
        self.nonce = secrets.token_hex(8)
        token = re.escape(PLACEHOLDER.format(nonce=self.nonce, index="INDEX"))
        token = token.replace("INDEX", r"(\d+)")
        self.placeholder_re = re.compile(rf"<p>\s*{token}\s*</p>|{token}")

    def _resolve(self, name: str) -> Component:
        try:
            return self.registry[name]
        except KeyError:
            raise UnresolvedComponentError(name) from None

    def _children_html(self, children: str) -> str:
        text = self.substitute(children.strip())
        html = self.restore(_markdown().convert(text))
        # single-paragraph children render inline
        if (
            html.startswith("<p>")
            and html.endswith("</p>")
            and html.count("<p>") == 1
        ):
            html = html[3:-4]
        return html

    def _repl(self, m) -> str:
        name = m.group("name")
        unit = self._resolve(name)
        props = parse_props(m.group("attrs"))
        children = m.group("children")
        if children is not None:
            props["children"] = self._children_html(children)
        self.used.append(name)
        out = unit(**props)
        self.rendered.append("" if out is None else str(out))
        return PLACEHOLDER.format(nonce=self.nonce, index=len(self.rendered) - 1)

    def _substitute_segment(self, s: str) -> str:
        spans = _code_spans(s)
        parts, pos = [], 0
        search_from = 0
        while True:
            m = COMPONENT_TAG.search(s, search_from)
            if m is None:
                break
            if any(start <= m.start() < end for start, end in spans):
                search_from = m.start() + 1
                continue
            parts.append(s[pos : m.start()])
            parts.append(self._repl(m))
            pos = search_from = m.end()
        parts.append(s[pos:])
        return "".join(parts)

    def substitute(self, text: str) -> str:
        return map_noncode(text, self._substitute_segment)

    def restore(self, html: str) -> str:
        def repl(m):
            return self.rendered[int(m.group(1) or m.group(2))]

        return self.placeholder_re.sub(repl, html)


def render(body: str, registry: Registry) -> RenderedOutput:
    """
    Render `body` to HTML, substituting components from `registry`.

    Raises UnresolvedComponentError naming the first component the registry
    does not provide; nothing is returned for a partially resolved body.
    """
    renderer = _Renderer(registry)
    text = renderer.substitute(_norm_text(body))

    md = _markdown()
    html = renderer.restore(md.convert(text))
    toc = _flatten_toc(getattr(md, "toc_tokens", []), [])

    logger.debug(
        "rendered %d chars, %d components", len(html), len(renderer.used)
    )
    return RenderedOutput(html=html, toc=toc, components=tuple(renderer.used))
