"""
Trie node for DeepMap.

Each node is one level of the trie: a dict from sub-key to child node plus
a value slot. The slot holds either the stored value or the private _UNSET
sentinel, so None and other falsy values can be stored like anything else.
"""

from __future__ import annotations

import typing as _typing


# Sentinel for an empty value slot
class _UnsetType:
    """Sentinel type marking a value slot as empty."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<UNSET>"

    def __bool__(self) -> bool:
        return False


_UNSET: _typing.Final = _UnsetType()


class Node:
    """
    One level of the trie.

    Children are kept in a plain dict, so sub-key lookup follows dict
    semantics (hash + equality) and children iterate in insertion order.
    """

    __slots__ = ("children", "value")

    def __init__(self) -> None:
        self.children: dict[_typing.Hashable, Node] = {}
        self.value: _typing.Any = _UNSET

    @property
    def has_value(self) -> bool:
        """True if a value is stored at this node."""
        return self.value is not _UNSET

    @property
    def is_empty(self) -> bool:
        """True if the node holds no value and has no children."""
        return self.value is _UNSET and not self.children

    def clear_value(self) -> bool:
        """
        Empty the value slot.

        Returns:
            True if a value was present.
        """
        if self.value is _UNSET:
            return False
        self.value = _UNSET
        return True

    def __repr__(self) -> str:
        value = repr(self.value) if self.has_value else "-"
        return f"Node(value={value}, children={len(self.children)})"
