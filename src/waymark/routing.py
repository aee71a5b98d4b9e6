"""Per-verb route tables built through a chainable router."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from waymark.errors import InvalidRoute
from waymark.paths import is_valid_path, normalize_path
from waymark.validation import validate_action_signature

if TYPE_CHECKING:
    from collections.abc import Iterator

    from waymark._types import Action

logger = logging.getLogger("waymark.routing")


class Verb(str, Enum):
    """HTTP methods a router keeps a table for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: Verb | str) -> Verb:
        """Return the verb for *value*, case-insensitively.

        Raises :class:`InvalidRoute` for a method the router has no table for.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            msg = f"Unsupported HTTP method: {value!r}"
            raise InvalidRoute(msg, verb=str(value)) from None


class Controller:
    """Base class for a named group of actions.

    Routers only use controllers as identity tokens, so any non-``None``
    object works; subclass this to get a readable name in listings.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name or type(self).__name__

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A registered route: final path, owning controller and action."""

    path: str
    controller: Any
    action: Action
    verb: Verb


class RouteTable:
    """Ordered, append-only collection of :class:`RouteEntry`.

    Duplicates are kept; :meth:`find` returns the first one registered.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[RouteEntry] = []

    def add(self, entry: RouteEntry) -> None:
        self._entries.append(entry)

    def find(self, path: str) -> RouteEntry | None:
        """Return the first entry whose path equals ``normalize_path(path)``.

        One leading slash is ignored on both sides, so ``"/widgets"`` finds a
        route registered as ``"widgets/"`` outside any base path, while
        ``"//widgets"`` finds nothing.
        """
        target = normalize_path(path.removeprefix("/"))
        for entry in self._entries:
            if entry.path.removeprefix("/") == target:
                return entry
        return None

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RouteEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"RouteTable({[e.path for e in self._entries]!r})"


class Router:
    """Chainable builder for per-verb route tables.

    Parameters
    ----------
    base_path:
        Initial base path, applied exactly as :meth:`on` would.
    controller:
        Initial default controller for registrations that omit one.
    strict:
        When ``True``, actions are checked at registration time to accept
        ``(request, response)``.

    Example::

        router = Router()
        router.on("api").use(widgets)
        router.get("widgets", list_widgets).post("widgets", create_widget)
    """

    __slots__ = ("_tables", "base_path", "controller", "strict")

    def __init__(
        self,
        base_path: str | None = None,
        controller: Any = None,
        *,
        strict: bool = False,
    ) -> None:
        self.base_path: str | None = None
        self.controller: Any = controller
        self.strict = strict
        self._tables: dict[Verb, RouteTable] = {verb: RouteTable() for verb in Verb}
        if base_path is not None:
            self.on(base_path)

    # ------------------------------------------------------------------
    # Verb registration
    # ------------------------------------------------------------------

    def get(self, path: str, action: Action, controller: Any = None) -> Router:
        return self.route(Verb.GET, path, action, controller)

    def post(self, path: str, action: Action, controller: Any = None) -> Router:
        return self.route(Verb.POST, path, action, controller)

    def put(self, path: str, action: Action, controller: Any = None) -> Router:
        return self.route(Verb.PUT, path, action, controller)

    def patch(self, path: str, action: Action, controller: Any = None) -> Router:
        return self.route(Verb.PATCH, path, action, controller)

    def delete(self, path: str, action: Action, controller: Any = None) -> Router:
        return self.route(Verb.DELETE, path, action, controller)

    def options(self, path: str, action: Action, controller: Any = None) -> Router:
        return self.route(Verb.OPTIONS, path, action, controller)

    def route(self, verb: Verb | str, path: str, action: Action, controller: Any = None) -> Router:
        """Register *action* for *verb* at *path* and return the router.

        An explicit *controller* also becomes the default for every later
        registration on this router.
        """
        verb = Verb.parse(verb)
        if not is_valid_path(path):
            msg = f"The path {path!r} is an invalid route path"
            raise InvalidRoute(msg, path=path, verb=verb.value)
        formatted = normalize_path(path)

        if controller is None and self.controller is None:
            msg = f"Null controller for route '{verb.value} {formatted}' is not allowed"
            raise InvalidRoute(msg, path=formatted, verb=verb.value)
        if self.strict:
            validate_action_signature(action, formatted, verb.value)
        if controller is not None:
            self.controller = controller

        if self.base_path is not None:
            formatted = self.prepend_base_path(formatted)
        self._enqueue(verb, RouteEntry(formatted, self.controller, action, verb))
        return self

    def _enqueue(self, verb: Verb, entry: RouteEntry) -> None:
        table = self._tables.get(verb)
        if table is None:
            logger.error("Unrecognized HTTP method %r; dropping route %s", verb, entry.path)
            return
        table.add(entry)
        logger.debug(
            "%s %s -> %r (%s)",
            verb.value,
            entry.path,
            entry.controller,
            getattr(entry.action, "__name__", repr(entry.action)),
        )

    # ------------------------------------------------------------------
    # Scoping
    # ------------------------------------------------------------------

    def on(self, path: str) -> Router:
        """Set the base path prepended to routes registered from now on."""
        if path == "/" or not is_valid_path(path):
            msg = f"The path {path!r} is an invalid route path"
            raise InvalidRoute(msg, path=path)
        self.base_path = f"/{normalize_path(path)}"
        return self

    def use(self, controller: Any) -> Router:
        """Make *controller* the default for routes under the current base path."""
        if self.base_path is None:
            msg = "Controller mount attempted without a set base path"
            raise InvalidRoute(msg)
        if controller is None:
            msg = f"Cannot mount a null controller on base path {self.base_path!r}"
            raise InvalidRoute(msg, path=self.base_path)
        self.controller = controller
        return self

    def prepend_base_path(self, path: str) -> str:
        return f"{self.base_path}{path}"

    # ------------------------------------------------------------------
    # Table access
    # ------------------------------------------------------------------

    @property
    def tables(self) -> dict[Verb, RouteTable]:
        return dict(self._tables)

    def table(self, verb: Verb | str) -> RouteTable:
        return self._tables[Verb.parse(verb)]

    @property
    def get_routes(self) -> RouteTable:
        return self._tables[Verb.GET]

    @property
    def post_routes(self) -> RouteTable:
        return self._tables[Verb.POST]

    @property
    def put_routes(self) -> RouteTable:
        return self._tables[Verb.PUT]

    @property
    def patch_routes(self) -> RouteTable:
        return self._tables[Verb.PATCH]

    @property
    def delete_routes(self) -> RouteTable:
        return self._tables[Verb.DELETE]

    @property
    def options_routes(self) -> RouteTable:
        return self._tables[Verb.OPTIONS]

    def entries(self) -> Iterator[RouteEntry]:
        """Yield every entry, table by table in :class:`Verb` order."""
        for table in self._tables.values():
            yield from table

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    def __repr__(self) -> str:
        return f"Router(base_path={self.base_path!r}, routes={len(self)})"
