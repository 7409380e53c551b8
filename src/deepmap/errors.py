"""
Exceptions raised by DeepMap.

Lookups and deletions of absent keys are not errors; the container only
raises for misuse that configuration asks it to catch, and for failed
integrity audits.
"""

from __future__ import annotations

import typing as _typing

if _typing.TYPE_CHECKING:
    import deepmap._audit as _audit


class DeepMapError(Exception):
    """Base class for DeepMap errors."""

    pass


class StrictKeyError(DeepMapError, TypeError):
    """Raised in strict mode when a str/bytes object is passed as a key-sequence."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(
            f"{type(key).__name__} is not accepted as a key-sequence in strict mode "
            f"(got {key!r}); wrap it in a tuple, e.g. ({key!r},)"
        )


class IntegrityError(DeepMapError):
    """Raised when the trie fails a structural audit."""

    def __init__(self, violations: list[_audit.Violation]) -> None:
        self.violations = violations
        lines = "\n".join(f"  - {v}" for v in violations)
        super().__init__(f"DeepMap integrity check failed:\n{lines}")
