"""Action signature validation for strict mode."""

from __future__ import annotations

import inspect
from typing import Any

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def validate_action_signature(action: Any, path: str, method: str) -> None:
    """Check that *action* can be called as ``action(request, response)``.

    Raises :class:`TypeError` with an actionable message when it cannot.
    """
    name = getattr(action, "__name__", repr(action))

    # --- Rule 1: Action must be callable ---
    if not callable(action):
        raise TypeError(
            f"\n\nStrict-mode violation in action {name!r} "
            f"[{method} {path}]\n"
            f"  Problem: Action is not callable.\n"
            f"  Fix:     Register a function or an object defining __call__.\n"
        )

    try:
        sig = inspect.signature(action)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures are taken on trust.
        return

    params = list(sig.parameters.values())
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return

    positional = [p for p in params if p.kind in _POSITIONAL]

    # --- Rule 2: Must accept request and response positionally ---
    if len(positional) < 2:
        raise TypeError(
            f"\n\nStrict-mode violation in action {name!r} "
            f"[{method} {path}]\n"
            f"  Current: ({', '.join(p.name for p in params)})\n"
            f"  Problem: Action must accept two positional arguments.\n"
            f"  Fix:     Use def {name}(request, response): ...\n"
        )

    # --- Rule 3: Anything past the first two must have a default ---
    required = [
        p for p in params[2:] if p.default is inspect.Parameter.empty and p.kind is not inspect.Parameter.VAR_KEYWORD
    ]
    if required:
        raise TypeError(
            f"\n\nStrict-mode violation in action {name!r} "
            f"[{method} {path}]\n"
            f"  Current: ({', '.join(p.name for p in params)})\n"
            f"  Problem: Extra parameter '{required[0].name}' has no default.\n"
            f"  Fix:     Give '{required[0].name}' a default value or remove it.\n"
        )
