"""Readable JSON rendering of sidecar trees.

One field per line with tab indentation; numeric arrays stay on a single
line (unlike ``json.dumps(..., indent=...)``).
"""

import json
import math
from pathlib import Path
from typing import Union

from mef2bids.types.tree import Node, Scalar, Sequence, Text, Tree
from mef2bids.utils.logging import message

INDENT = "\t"

__all__ = ["render_tree", "render_value", "write_json_sidecar"]


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _number(value) -> str:
    if not math.isfinite(value):
        return '""'
    return format(value, "g")


def render_value(node: Node, indent: str = "") -> str:
    """Render one field value.

    - a sequence of two or more numbers is written as a compact array
    - a single-element sequence is written as that number
    - a non-empty tree is written as a nested object, one level deeper
    - numbers use the shortest general format (``%g``); NaN and infinities
      are written as ``""``
    - empty values (empty text, sequence or tree) are written as ``""``
    """
    if isinstance(node, Sequence):
        if len(node.values) > 1:
            values = [value if math.isfinite(value) else "" for value in node.values]
            return json.dumps(values, separators=(",", ":"))
        if len(node.values) == 1:
            return _number(node.values[0])
        return '""'
    if isinstance(node, Tree):
        if len(node) == 0:
            return '""'
        return render_tree(node, indent)
    if isinstance(node, Scalar):
        return _number(node.value)
    if isinstance(node, Text):
        return _quote(node.value)
    raise TypeError(f"Unsupported tree node: {type(node).__name__}")


def render_tree(tree: Tree, indent: str = "") -> str:
    """Render ``tree`` as an object whose closing brace sits at ``indent``.

    Fields are written in insertion order, each on its own line and indented
    one tab deeper than the enclosing brace.
    """
    if len(tree) == 0:
        return "{}"

    inner = indent + INDENT
    fields = [
        f"{_quote(name)}: {render_value(node, inner)}" for name, node in tree.fields
    ]
    return "{\n" + inner + (",\n" + inner).join(fields) + "\n" + indent + "}"


def write_json_sidecar(tree: Tree, path: Union[str, Path]) -> Path:
    """Write ``tree`` to ``path`` (UTF-8, trailing newline)."""
    path = Path(path)
    path.write_text(render_tree(tree) + "\n", encoding="utf-8")
    message("debug", f"Wrote {len(tree)} field(s) to {path}")
    return path
