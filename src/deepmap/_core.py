"""
DeepMap: a mapping whose keys are sequences of sub-keys.

Values are stored in a trie with one dict per level, so a key such as
(url, protocol) never has to be folded into a single hashable token.

Layout:
- Root node: addressed by the empty key-sequence ()
- Each sub-key descends one level; missing levels are created by set()
- Value slots are separate from children, so any hashable is a valid sub-key
- delete() prunes levels left empty, so live nodes track live entries

Sub-keys compare the way dict keys do: 1, 1.0 and True are the same sub-key,
objects without __eq__ compare by identity, and unhashable sub-keys raise
TypeError.

Thread safety: NOT thread-safe. Iterating while mutating the same DeepMap
is unspecified (dict may raise RuntimeError or the traversal may skip or
repeat entries). Use external synchronization if instances are shared.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import deepmap._audit as _audit
import deepmap._node as _node
import deepmap._types as _types
import deepmap.config as config
import deepmap.errors as errors

_logger = _logging.getLogger(__name__)

_STRING_TYPES = (str, bytes, bytearray)


class DeepMap(_typing.Generic[_types.V]):
    """
    A dict-like container keyed by sequences of hashable sub-keys.

    Example:
        >>> pool = DeepMap()
        >>> def get_socket(url, protocol=None):
        ...     return pool.upsert([url, protocol], lambda: open_socket(url, protocol))
        >>> get_socket("wss://echo.example/") is get_socket("wss://echo.example/")
        True

    Iteration yields (key, value) pairs, depth first: a key is always yielded
    before any longer key it prefixes, and siblings come in the order their
    sub-key was first inserted. Yielded keys are fresh tuples.

    Args:
        entries: Optional iterable of (key, value) pairs, inserted in order.
        strict_keys: Reject str/bytes key-sequences. None = use settings.
        verify: Audit the trie after every mutation. None = use settings.
    """

    def __init__(
        self,
        entries: _typing.Iterable[tuple[_types.Key, _types.V]] | None = None,
        *,
        strict_keys: bool | None = None,
        verify: bool | None = None,
    ) -> None:
        if strict_keys is None or verify is None:
            settings = config.get_settings()
            if strict_keys is None:
                strict_keys = settings.strict_keys
            if verify is None:
                verify = settings.verify

        self._root = _node.Node()
        self._size = 0
        self._strict_keys = strict_keys
        self._verify = verify

        if entries is not None:
            self.update(entries)

    @property
    def size(self) -> int:
        """The number of entries in the DeepMap."""
        return self._size

    # =========================================================================
    # Core operations
    # =========================================================================

    def set(self, key: _types.Key, value: _types.V) -> DeepMap[_types.V]:
        """
        Store a value under a key-sequence, replacing any previous value.

        Returns:
            self, for chaining.
        """
        path = self._materialize(key)

        node = self._root
        depth = 0
        for sub_key in path:
            child = node.children.get(sub_key)
            if child is None:
                break
            node = child
            depth += 1

        if depth < len(path):
            # Build the missing branch detached so an unhashable sub-key
            # leaves the trie untouched.
            terminal = _node.Node()
            branch = terminal
            for sub_key in reversed(path[depth + 1 :]):
                parent = _node.Node()
                parent.children[sub_key] = branch
                branch = parent
            node.children[path[depth]] = branch
            node = terminal

        if not node.has_value:
            self._size += 1
        node.value = value

        self._after_mutation()
        return self

    def get(
        self,
        key: _types.Key,
        default: _typing.Any = None,
    ) -> _typing.Any:
        """
        Return the value stored under key, or default if there is none.

        Never creates nodes.
        """
        node = self._find(key)
        if node is None or not node.has_value:
            return default
        return node.value

    def has(self, key: _types.Key) -> bool:
        """Return True if a value is stored under key, even a falsy one."""
        node = self._find(key)
        return node is not None and node.has_value

    def upsert(
        self,
        key: _types.Key,
        factory: _typing.Callable[[], _types.V],
    ) -> _types.V:
        """
        Return the value under key, creating it with factory() on a miss.

        factory is called exactly once on a miss and never on a hit. If it
        raises, the exception propagates and the DeepMap is unchanged.
        """
        path = self._materialize(key)

        node = self._descend(path)
        if node is not None and node.has_value:
            return _typing.cast(_types.V, node.value)

        value = factory()
        self.set(path, value)
        return value

    def delete(self, key: _types.Key) -> bool:
        """
        Remove the value stored under key.

        Returns:
            True if a value existed and was removed, False otherwise.
        """
        self._check_key(key)
        return self._remove(key) is not _node._UNSET

    def pop(
        self,
        key: _types.Key,
        default: _typing.Any = _node._UNSET,
    ) -> _typing.Any:
        """
        Remove the value under key and return it.

        Raises:
            KeyError: If key holds no value and no default was given.
        """
        path = self._materialize(key)
        value = self._remove(path)
        if value is _node._UNSET:
            if default is _node._UNSET:
                raise KeyError(path)
            return default
        return value

    def clear(self) -> None:
        """Remove all entries."""
        _logger.debug("Clearing DeepMap with %d entries", self._size)
        self._root = _node.Node()
        self._size = 0
        self._after_mutation()

    def update(self, entries: _typing.Iterable[tuple[_types.Key, _types.V]]) -> None:
        """
        Set every (key, value) pair from entries, in order.

        A DeepMap is itself an iterable of pairs, so one DeepMap can update
        another.
        """
        for key, value in entries:
            self.set(key, value)

    # =========================================================================
    # Iteration
    # =========================================================================

    def entries(self) -> _typing.Iterator[tuple[_types.Path, _types.V]]:
        """
        Return a fresh iterator of (key, value) pairs.

        Depth first, pre-order: a node's own value comes before its
        children, and children come in sub-key insertion order.
        """
        root = self._root
        if root.has_value:
            yield (), root.value

        # (path so far, remaining children of the node at that path)
        stack: list[tuple[_types.Path, _typing.Iterator[tuple[_typing.Hashable, _node.Node]]]] = [
            ((), iter(root.children.items()))
        ]
        while stack:
            prefix, children = stack[-1]
            for sub_key, child in children:
                path = prefix + (sub_key,)
                if child.has_value:
                    yield path, child.value
                stack.append((path, iter(child.children.items())))
                break
            else:
                stack.pop()

    def keys(self) -> _typing.Iterator[_types.Path]:
        """Return a fresh iterator of keys, in entries() order."""
        for key, _ in self.entries():
            yield key

    def values(self) -> _typing.Iterator[_types.V]:
        """Return a fresh iterator of values, in entries() order."""
        for _, value in self.entries():
            yield value

    def for_each(
        self,
        callback: _typing.Callable[[_types.V, _types.Path, DeepMap[_types.V]], object],
    ) -> None:
        """
        Call callback(value, key, self) once per entry, in entries() order.

        The callback must not mutate this DeepMap; doing so leaves the rest
        of the traversal unspecified.
        """
        for key, value in self.entries():
            callback(value, key, self)

    # =========================================================================
    # Inspection
    # =========================================================================

    def node_count(self) -> int:
        """Return the number of live trie nodes, the root included."""
        return _audit.count_nodes(self._root)

    def verify(self) -> None:
        """
        Check the trie against its structural invariants.

        Raises:
            IntegrityError: Listing every violation found.
        """
        violations = _audit.audit(self._root, self._size)
        if violations:
            raise errors.IntegrityError(violations)

    def copy(self) -> DeepMap[_types.V]:
        """
        Return a shallow copy.

        The copy has its own nodes; stored values are shared by reference.
        """
        return DeepMap(self.entries(), strict_keys=self._strict_keys, verify=self._verify)

    # =========================================================================
    # Python protocols
    # =========================================================================

    def __getitem__(self, key: _types.Key) -> _types.V:
        """
        Return the value under key.

        Raises:
            KeyError: If key holds no value.
        """
        path = self._materialize(key)
        node = self._descend(path)
        if node is None or not node.has_value:
            raise KeyError(path)
        return _typing.cast(_types.V, node.value)

    def __setitem__(self, key: _types.Key, value: _types.V) -> None:
        self.set(key, value)

    def __delitem__(self, key: _types.Key) -> None:
        """
        Remove the value under key.

        Raises:
            KeyError: If key holds no value.
        """
        path = self._materialize(key)
        if self._remove(path) is _node._UNSET:
            raise KeyError(path)

    def __contains__(self, key: object) -> bool:
        """
        Return True if a value is stored under key.

        key must be an iterable of sub-keys, so `5 in m` raises TypeError
        the same way `m.has(5)` does.
        """
        return self.has(_typing.cast(_types.Key, key))

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> _typing.Iterator[tuple[_types.Path, _types.V]]:
        """Iterate over (key, value) pairs, same as entries()."""
        return self.entries()

    def __eq__(self, other: object) -> bool:
        """Equal to another DeepMap holding the same (key, value) pairs, in any order."""
        if not isinstance(other, DeepMap):
            return NotImplemented
        if self._size != other._size:
            return False
        for key, value in self.entries():
            node = other._descend(key)
            if node is None or not node.has_value:
                return False
            if node.value is not value and node.value != value:
                return False
        return True

    def __hash__(self) -> int:
        """Not hashable."""
        raise TypeError(f"unhashable type: '{type(self).__name__}'")

    def __repr__(self) -> str:
        items = ", ".join(f"{key!r}: {value!r}" for key, value in self.entries())
        return f"DeepMap({{{items}}})"

    # =========================================================================
    # Internals
    # =========================================================================

    def _check_key(self, key: object) -> None:
        """Reject str/bytes key-sequences when strict mode is on."""
        if self._strict_keys and isinstance(key, _STRING_TYPES):
            raise errors.StrictKeyError(key)

    def _materialize(self, key: _types.Key) -> _types.Path:
        """
        Consume a key-sequence into a tuple.

        Raises:
            StrictKeyError: If strict mode is on and key is str/bytes.
        """
        self._check_key(key)
        return key if type(key) is tuple else tuple(key)

    def _find(self, key: _types.Key) -> _node.Node | None:
        """Check key, then descend to its terminal node."""
        self._check_key(key)
        return self._descend(key)

    def _descend(self, key: _types.Key) -> _node.Node | None:
        """Return the terminal node for key, or None if the path is missing."""
        node = self._root
        for sub_key in key:
            child = node.children.get(sub_key)
            if child is None:
                return None
            node = child
        return node

    def _remove(self, key: _types.Key) -> _typing.Any:
        """
        Empty the value slot for key and prune branches left empty.

        The descent records each (parent, sub_key) link, and pruning walks
        that record backwards, so key is iterated only once.

        Returns:
            The removed value, or _UNSET if there was none.
        """
        node = self._root
        trail: list[tuple[_node.Node, _typing.Hashable]] = []
        for sub_key in key:
            child = node.children.get(sub_key)
            if child is None:
                return _node._UNSET
            trail.append((node, sub_key))
            node = child

        value = node.value
        if not node.clear_value():
            return _node._UNSET
        self._size -= 1

        pruned = 0
        while trail and node.is_empty:
            parent, sub_key = trail.pop()
            del parent.children[sub_key]
            node = parent
            pruned += 1

        if pruned:
            _logger.debug("Pruned %d empty node(s) after delete", pruned)

        self._after_mutation()
        return value

    def _after_mutation(self) -> None:
        """Run the integrity audit if verification is enabled."""
        if self._verify:
            self.verify()
