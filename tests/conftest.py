"""
Shared pytest fixtures for DeepMap tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import typing as _typing

import pytest as _pytest

import deepmap
import deepmap.config as config

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "DEEPMAP_STRICT_KEYS",
    "DEEPMAP_VERIFY",
    "DEEPMAP_ENV_FILE",
]


@_pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: _pytest.MonkeyPatch) -> _typing.Iterator[None]:
    """Run every test against default settings, whatever the shell exports."""
    for key in ENV_KEYS_TO_CLEAR:
        monkeypatch.delenv(key, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()


@_pytest.fixture
def empty_map() -> deepmap.DeepMap[_typing.Any]:
    """Empty DeepMap with auditing on, so every mutation is checked."""
    return deepmap.DeepMap(verify=True)


@_pytest.fixture
def url_map() -> deepmap.DeepMap[str]:
    """DeepMap shaped like a connection pool keyed by (url, protocol)."""
    return deepmap.DeepMap(
        [
            (("wss://a.example/", None), "a-plain"),
            (("wss://a.example/", "chat"), "a-chat"),
            (("wss://b.example/", None), "b-plain"),
        ],
        verify=True,
    )
