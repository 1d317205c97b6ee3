# tree.py
"""Nested key/value tree used for the JSON sidecars.

A tree is built from four node kinds and nothing else:

- :class:`Scalar`   a single number
- :class:`Text`     a string
- :class:`Sequence` an ordered run of numbers
- :class:`Tree`     ordered named fields, each holding one of these nodes

Field order is kept exactly as constructed; it is the order the fields are
written in.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Number
from typing import Any, Iterator, Tuple, Union

import numpy as np


@dataclass(frozen=True)
class Scalar:
    value: Union[int, float]


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Sequence:
    values: Tuple[Union[int, float], ...] = ()


@dataclass(frozen=True)
class Tree:
    fields: Tuple[Tuple[str, "Node"], ...] = ()

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Tuple[str, "Node"]]:
        return iter(self.fields)

    def __contains__(self, name: str) -> bool:
        return any(key == name for key, _ in self.fields)

    def __getitem__(self, name: str) -> "Node":
        for key, node in self.fields:
            if key == name:
                return node
        raise KeyError(name)

    def names(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.fields)

    def replace(self, name: str, value: Any) -> "Tree":
        """Return a copy with field ``name`` set to ``value``, keeping its position."""
        if name not in self:
            raise KeyError(name)
        node = to_node(value)
        return Tree(
            tuple((key, node if key == name else old) for key, old in self.fields)
        )


Node = Union[Scalar, Text, Sequence, Tree]


def _python_number(value):
    if isinstance(value, np.generic):
        return value.item()
    return value


def _is_number(value) -> bool:
    return isinstance(value, (Number, np.number)) and not isinstance(
        value, (bool, np.bool_)
    )


def to_node(value: Any) -> Node:
    """Classify a plain Python value into one of the tree node kinds.

    Mappings become :class:`Tree`, numbers :class:`Scalar`, strings
    :class:`Text`, lists/tuples/arrays of numbers :class:`Sequence`.
    ``None`` becomes empty text; anything else (booleans, lists of strings,
    arbitrary objects) becomes the text of its string conversion.
    """
    if isinstance(value, (Scalar, Text, Sequence, Tree)):
        return value
    if isinstance(value, Mapping):
        return to_tree(value)
    if value is None:
        return Text("")
    if isinstance(value, (bool, np.bool_)):
        return Text(str(bool(value)).lower())
    if _is_number(value):
        return Scalar(_python_number(value))
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, (list, tuple, np.ndarray)):
        array = value if isinstance(value, np.ndarray) else np.asarray(value, dtype=object)
        if array.ndim == 0:
            return to_node(array.item())
        items = array.ravel().tolist()
        if all(_is_number(item) for item in items):
            return Sequence(tuple(_python_number(item) for item in items))
    return Text(str(value))


def to_tree(mapping: Mapping) -> Tree:
    """Build a :class:`Tree` from a (nested) mapping, preserving key order."""
    return Tree(tuple((str(key), to_node(value)) for key, value in mapping.items()))
