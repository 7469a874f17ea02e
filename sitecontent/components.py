"""
Default component registry.

The site embeds a couple of interactive widgets in posts. Server side they
render to a mount point carrying their props, which the page's scripts pick
up; the pipeline only needs the HTML.
"""

from __future__ import annotations

import html
import json
from typing import Any, Dict, Mapping, Optional

from .render import Registry


def _mount(name: str, props: Dict[str, Any], inner: str = "") -> str:
    data = html.escape(json.dumps(props, sort_keys=True, default=str), quote=True)
    return (
        f'<div class="component" data-component="{name}" '
        f'data-props="{data}">{inner}</div>'
    )


def counter(start: int = 0, step: int = 1, **props) -> str:
    inner = (
        f'<button type="button" data-step="{int(step)}">'
        f'Count: <span class="count">{int(start)}</span></button>'
    )
    return _mount("Counter", {"start": start, "step": step, **props}, inner)


def todo_app(title: str = "To do", **props) -> str:
    inner = (
        f"<h3>{html.escape(str(title))}</h3>"
        '<form class="new-todo"><input name="item" type="text" />'
        '<button type="submit">Add</button></form>'
        '<ul class="todo-list"></ul>'
    )
    return _mount("ToDoApp", {"title": title, **props}, inner)


DEFAULT_COMPONENTS: Dict[str, Any] = {
    "Counter": counter,
    "ToDoApp": todo_app,
}


def default_registry() -> Dict[str, Any]:
    return dict(DEFAULT_COMPONENTS)


def with_defaults(overrides: Optional[Mapping[str, Any]] = None) -> Registry:
    """Default registry with `overrides` merged on top."""
    registry = default_registry()
    registry.update(overrides or {})
    return registry
