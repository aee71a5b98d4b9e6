"""The request side handed to actions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl

if TYPE_CHECKING:
    from waymark._types import Receive, Scope
    from waymark.routing import RouteEntry, Verb


class Request:
    """What an action sees of the incoming HTTP request.

    Carries the matched :class:`~waymark.routing.RouteEntry`, so actions can
    reach their controller without a global lookup.
    """

    __slots__ = ("_receive", "_scope", "content", "entry")

    def __init__(self, scope: Scope, receive: Receive, entry: RouteEntry) -> None:
        self._scope = scope
        self._receive = receive
        self.entry = entry
        # Filled by read(); sync actions get it pre-read by the app.
        self.content: bytes = b""

    @property
    def verb(self) -> Verb:
        return self.entry.verb

    @property
    def controller(self) -> Any:
        return self.entry.controller

    @property
    def path(self) -> str:
        return self._scope["path"]

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the last value sent for header *name* (case-insensitive)."""
        wanted = name.lower().encode("latin-1")
        value = default
        for key, raw in self._scope.get("headers", []):
            if key.lower() == wanted:
                value = raw.decode("latin-1")
        return value

    @property
    def query(self) -> dict[str, str]:
        """Query parameters, keeping the first value of repeated keys."""
        params: dict[str, str] = {}
        for key, value in parse_qsl(self._scope.get("query_string", b"").decode("latin-1")):
            params.setdefault(key, value)
        return params

    async def read(self) -> bytes:
        """Drain the ASGI body once; later calls return :attr:`content`."""
        if self._receive is None:
            return self.content
        parts = []
        more = True
        while more:
            message = await self._receive()
            parts.append(message.get("body", b""))
            more = message.get("more_body", False)
        self._receive = None
        self.content = b"".join(parts)
        return self.content

    async def json(self) -> Any:
        return json.loads(await self.read())
