"""
Type aliases for DeepMap.

- Key: Any iterable of hashable sub-keys, as accepted by the public API
- Path: Tuple of sub-keys, as yielded by iteration
- V: Value type of a DeepMap
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

# Accepted on input: lists, tuples, generators, ...
# Example: ["wss://echo.websocket.org/", None]
Key: _typing.TypeAlias = _abc.Iterable[_typing.Hashable]

# Materialized key, always a fresh tuple
Path: _typing.TypeAlias = tuple[_typing.Hashable, ...]

V = _typing.TypeVar("V")
