"""Canonical JSON rendering for constraints documents.

A constraints document is only accepted when it is byte-for-byte the
canonical rendering of itself: two-space indentation, ``": "`` between
keys and values, one array element or object member per line, keys in
their original order, non-ASCII characters written as-is.  Empty arrays
and objects are written with one inner space, ``[ ]`` and ``{ }``, as
Jackson's default pretty printer writes them.
"""

from __future__ import annotations

import json
from typing import Any

INDENT = 2


def _scalar(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _render(value: Any, level: int) -> str:
    if isinstance(value, dict):
        if not value:
            return "{ }"
        inner = " " * (INDENT * (level + 1))
        members = [
            f"{inner}{_scalar(str(key))}: {_render(item, level + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(members) + "\n" + " " * (INDENT * level) + "}"
    if isinstance(value, list):
        if not value:
            return "[ ]"
        inner = " " * (INDENT * (level + 1))
        elements = [f"{inner}{_render(item, level + 1)}" for item in value]
        return "[\n" + ",\n".join(elements) + "\n" + " " * (INDENT * level) + "]"
    return _scalar(value)


def render_canonical(tree: Any) -> str:
    """Render a parsed JSON tree in canonical form, without a final newline.

    >>> print(render_canonical({"a": [], "b": [1]}))
    {
      "a": [ ],
      "b": [
        1
      ]
    }
    """
    return _render(tree, 0)


def canonical_lines(tree: Any) -> list[str]:
    """The canonical rendering split into lines, without terminators."""
    return render_canonical(tree).split("\n")


def canonical_file_text(tree: Any) -> str:
    """The canonical rendering as file content, ending with one newline."""
    return render_canonical(tree) + "\n"
