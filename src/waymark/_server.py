"""Granian launcher for a loaded Waymark app."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from waymark.app import Waymark
    from waymark.config import AppConfig


def granian_options(
    target: str,
    config: AppConfig,
    *,
    dev: bool = False,
    reload: bool | None = None,
) -> dict[str, Any]:
    """Map *config* onto Granian's constructor arguments.

    Dev mode turns on reload (unless *reload* says otherwise), debug logs
    and access logs.
    """
    return {
        "target": target,
        "address": config.host,
        "port": config.port,
        "interface": "asgi",
        "workers": config.workers,
        "reload": dev if reload is None else reload,
        "log_level": "debug" if dev else config.log_level,
        "log_access": dev,
    }


def serve(target: str, app: Waymark, *, dev: bool = False, reload: bool | None = None, **overrides: Any) -> None:
    """Serve *app*, importable as *target*, with Granian.

    *overrides* (host, port, workers, log_level) replace the matching
    :class:`~waymark.config.AppConfig` fields for this run; ``None`` values
    keep the app's own settings.
    """
    from granian import Granian

    config = app.config.with_overrides(**overrides)
    options = granian_options(target, config, dev=dev, reload=reload)
    print(_banner(options, app, config, dev=dev), flush=True)
    Granian(**options).serve()


# ------------------------------------------------------------------
# Startup banner
# ------------------------------------------------------------------

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_BOLD = "\033[1m"
_RESET = "\033[0m"


def _banner(options: dict[str, Any], app: Waymark, config: AppConfig, *, dev: bool) -> str:
    color = sys.stdout.isatty()

    def c(code: str, text: str) -> str:
        return f"{code}{text}{_RESET}" if color else text

    counts = app.route_counts()
    routes = ", ".join(f"{verb.value} {n}" for verb, n in counts.items() if n) or "none"
    flags = [name for name in ("debug", "strict") if getattr(config, name)]
    rows = [
        ("app", options["target"]),
        ("server", f"Granian on http://{options['address']}:{options['port']}"),
        ("workers", str(options["workers"])),
        ("reload", "enabled" if options["reload"] else "disabled"),
        ("routes", f"{sum(counts.values())} ({routes})"),
        ("flags", ", ".join(flags) or "none"),
    ]
    mode = "development" if dev else "production"
    lines = [f"{c(_BOLD + _CYAN, 'Waymark')}   Starting {mode} server", ""]
    lines += [f"{c(_GREEN, label.ljust(10))} {value}" for label, value in rows]
    return "\n".join([*lines, ""])
