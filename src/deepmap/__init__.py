"""
DeepMap - a mapping keyed by sequences of sub-keys.

Store and retrieve values by a path such as (url, protocol) without
folding the parts into a single hashable key.

Example:
    >>> import deepmap
    >>> m = deepmap.DeepMap()
    >>> m.set(["wss://echo.example/", None], "socket")
    DeepMap({('wss://echo.example/', None): 'socket'})
    >>> m.get(["wss://echo.example/", None])
    'socket'
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("deepmap")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from deepmap._core import DeepMap  # noqa: E402
from deepmap.config import Settings, get_settings, reset_settings  # noqa: E402
from deepmap.errors import DeepMapError, IntegrityError, StrictKeyError  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "DeepMap",
    "DeepMapError",
    "IntegrityError",
    "Settings",
    "StrictKeyError",
    "get_settings",
    "reset_settings",
]
