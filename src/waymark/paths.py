"""Route path grammar and trailing-slash normalization."""

from __future__ import annotations

import re

_PATH_RE = re.compile(r"(\w+/)*\w+/?", re.ASCII)


def is_valid_path(path: str) -> bool:
    """Return ``True`` if *path* is one or more word segments joined by ``/``.

    A single trailing slash is allowed; leading slashes, empty segments and
    any separator other than ``/`` are not::

        is_valid_path("users/profile")   -> True
        is_valid_path("users/profile/")  -> True
        is_valid_path("/users")          -> False
        is_valid_path("user-profile")    -> False
    """
    return _PATH_RE.fullmatch(path) is not None


def normalize_path(path: str) -> str:
    """Append a trailing ``/`` unless *path* already ends with one."""
    if path.endswith("/"):
        return path
    return f"{path}/"
