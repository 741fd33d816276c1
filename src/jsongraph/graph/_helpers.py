"""Value classification and edge construction used by the builder."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from jsongraph.graph.model import ColorTag, GraphEdge

ELLIPSIS = "..."


class ValueClass(Enum):
    """The four display classes of a JSON value."""

    NULL = "null"
    STRING = "string"
    NUMERIC = "numeric"  # numbers and booleans
    OBJECT = "object"  # objects and arrays


_COLORS: dict[ValueClass, ColorTag] = {
    ValueClass.NULL: ColorTag.NULL,
    ValueClass.STRING: ColorTag.STRING,
    ValueClass.NUMERIC: ColorTag.NUMERIC,
    ValueClass.OBJECT: ColorTag.OBJECT,
}


def classify_value(value: Any) -> ValueClass:
    """Classify a parsed JSON value.

    Raises:
        TypeError: If *value* is not something ``json.loads`` can produce

    Examples:
        >>> classify_value(None)
        <ValueClass.NULL: 'null'>
        >>> classify_value(True)
        <ValueClass.NUMERIC: 'numeric'>
        >>> classify_value([1, 2])
        <ValueClass.OBJECT: 'object'>
    """
    if value is None:
        return ValueClass.NULL
    if isinstance(value, str):
        return ValueClass.STRING
    if isinstance(value, (bool, int, float)):
        return ValueClass.NUMERIC
    if isinstance(value, (dict, list)):
        return ValueClass.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def color_for(value: Any) -> ColorTag:
    return _COLORS[classify_value(value)]


def render_literal(value: Any) -> str:
    """JSON-literal text of a scalar (strings keep their quotes)."""
    return json.dumps(value, ensure_ascii=False)


def truncate(text: str, max_chars: int) -> str:
    """Cut *text* to *max_chars* and append an ellipsis if it was longer."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS


def describe_value(value: Any) -> tuple[str, ColorTag]:
    """Display text and color for a value referenced from an object row.

    Containers are summarized by size rather than rendered.

    Examples:
        >>> describe_value({"a": 1, "b": 2})[0]
        '{2 keys}'
        >>> describe_value([])[0]
        '[0 items]'
        >>> describe_value("hi")[0]
        '"hi"'
    """
    kind = classify_value(value)
    if kind is ValueClass.NULL:
        text = "null"
    elif isinstance(value, list):
        text = f"[{len(value)} items]"
    elif isinstance(value, dict):
        text = f"{{{len(value)} keys}}"
    else:
        text = render_literal(value)
    return text, _COLORS[kind]


def extend_label(label: str | None, index: int) -> str:
    """Append an array index to an edge label.

    Examples:
        >>> extend_label("hobbies", 2)
        'hobbies[2]'
        >>> extend_label("a[1]", 0)
        'a[1][0]'
        >>> extend_label(None, 3)
        '[3]'
    """
    suffix = f"[{index}]"
    return f"{label}{suffix}" if label else suffix


def make_edge(source: str, target: str, source_handle_index: int, label: str | None) -> GraphEdge:
    """Create the edge from *source* handle ``source_handle_index`` to *target*."""
    return GraphEdge(
        id=f"e-{source}-{target}",
        source=source,
        target=target,
        source_handle_index=source_handle_index,
        label=label,
    )
