"""
Structural audit of a DeepMap trie.

Walks the node tree and reports every place where the trie disagrees with
its invariants:

- empty: a non-root node with no value and no children (missed prune)
- shared: a node reachable through more than one parent link
- size: the size counter differs from the number of value-holding nodes

Example:
    >>> m = DeepMap([((1, 2), "x")])
    >>> audit(m._root, m.size)
    []
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import deepmap._node as _node
import deepmap._types as _types

ViolationKind = _typing.Literal["empty", "shared", "size"]


@_dataclasses.dataclass(frozen=True, slots=True)
class Violation:
    """One broken invariant."""

    kind: ViolationKind
    path: _types.Path
    detail: str

    def __str__(self) -> str:
        return f"{self.kind} at {self.path!r}: {self.detail}"


def audit(root: _node.Node, size: int) -> list[Violation]:
    """
    Check a trie against its structural invariants.

    Args:
        root: Root node of the trie.
        size: The size counter the owning container reports.

    Returns:
        List of violations, empty if the trie is sound.
    """
    violations: list[Violation] = []
    seen: set[int] = set()
    values = 0

    stack: list[tuple[_types.Path, _node.Node]] = [((), root)]
    while stack:
        path, node = stack.pop()

        if id(node) in seen:
            violations.append(Violation("shared", path, "node has more than one parent"))
            continue
        seen.add(id(node))

        if node.has_value:
            values += 1
        elif path and not node.children:
            violations.append(Violation("empty", path, "unpruned empty node"))

        for sub_key, child in node.children.items():
            stack.append((path + (sub_key,), child))

    if values != size:
        violations.append(
            Violation("size", (), f"counter is {size} but {values} nodes hold values")
        )

    return violations


def count_nodes(root: _node.Node) -> int:
    """Count live nodes, the root included."""
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.children.values())
    return count
