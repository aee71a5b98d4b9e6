"""Waymark command-line interface powered by Typer."""

import importlib
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from waymark.app import Waymark

app = typer.Typer(name="waymark", add_completion=False, no_args_is_help=True)

Target = Annotated[str, typer.Argument(help="Python file or module:var naming a Waymark app.")]
Host = Annotated[str | None, typer.Option(help="Bind address. Defaults to the app's config.")]
Port = Annotated[int | None, typer.Option(help="Bind port. Defaults to the app's config.")]


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _load(path: str) -> tuple[str, "Waymark"]:
    """Import the app named by *path* and return it with its ``module:var`` target.

    *path* is either ``module:var`` (imported relative to the working
    directory) or a ``.py`` file, whose first public Waymark instance wins.
    """
    from waymark.app import Waymark

    if ":" in path:
        module_name, _, var_name = path.partition(":")
        search_dir = Path.cwd()
    else:
        file = Path(path)
        if not file.is_file():
            raise _fail(f"file {path!r} not found.")
        module_name, var_name, search_dir = file.stem, "", file.resolve().parent

    if str(search_dir) not in sys.path:
        sys.path.insert(0, str(search_dir))
    try:
        module = importlib.import_module(module_name)
    except Exception as exc:
        raise _fail(f"cannot import {module_name!r}: {exc}") from exc

    if not var_name:
        found = [name for name, value in vars(module).items() if isinstance(value, Waymark)]
        var_name = next((name for name in found if not name.startswith("_")), "")
    instance = getattr(module, var_name, None) if var_name else None
    if not isinstance(instance, Waymark):
        raise _fail(f"no Waymark app found in {path!r}. Provide an explicit target, e.g. main:app")
    return f"{module_name}:{var_name}", instance


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


@app.command()
def dev(
    path: Target = "main.py",
    host: Host = None,
    port: Port = None,
    reload: Annotated[bool | None, typer.Option("--reload/--no-reload", help="Auto-reload on code changes.")] = None,
) -> None:
    """Start a development server with auto-reload and debug logging."""
    from waymark._server import serve

    target, instance = _load(path)
    serve(target, instance, dev=True, reload=reload, host=host, port=port)


@app.command()
def run(
    path: Target = "main.py",
    host: Host = None,
    port: Port = None,
    workers: Annotated[int | None, typer.Option(help="Worker processes. Defaults to the app's config.")] = None,
) -> None:
    """Start a production server."""
    from waymark._server import serve

    target, instance = _load(path)
    serve(target, instance, host=host, port=port, workers=workers)


@app.command()
def routes(path: Target = "main.py") -> None:
    """List the routes of every router mounted on the app."""
    _, instance = _load(path)

    rows: list[tuple[str, str, str, str]] = []
    for router in instance.routers:
        for entry in router.entries():
            action_name = getattr(entry.action, "__name__", repr(entry.action))
            controller_name = str(getattr(entry.controller, "name", None) or repr(entry.controller))
            rows.append((entry.verb.value, entry.path, controller_name, action_name))

    if not rows:
        typer.echo("No routes registered.")
        return

    # Column widths, never narrower than the headers
    headers = ("METHOD", "PATH", "CONTROLLER")
    widths = [max(len(header), *(len(r[i]) for r in rows)) for i, header in enumerate(headers)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    typer.echo(fmt.format("METHOD", "PATH", "CONTROLLER", "ACTION"))
    sep_len = sum(widths) + 6 + max(len(r[3]) for r in rows)
    typer.echo("-" * min(sep_len, 80))
    for row in rows:
        typer.echo(fmt.format(*row))
