"""Waymark ASGI application dispatching into mounted routers."""

import asyncio
import inspect
import logging
import traceback
from typing import Any

from waymark._types import Receive, Scope, Send
from waymark.config import AppConfig
from waymark.errors import InvalidRoute
from waymark.request import Request
from waymark.response import Response, json_response
from waymark.routing import RouteEntry, Router, Verb
from waymark.validation import validate_action_signature

logger = logging.getLogger("waymark.app")


class Waymark:
    """ASGI 3.0 web application serving the routes of mounted routers.

    Parameters
    ----------
    config:
        Server and dispatch settings; defaults to :class:`AppConfig()`.
        With ``config.strict`` every action is signature-checked on mount
        and again at startup, with ``config.debug`` 500 responses include
        the full traceback.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.routers: list[Router] = []

    # ------------------------------------------------------------------
    # Router mounting
    # ------------------------------------------------------------------

    def mount(self, router: Router) -> "Waymark":
        """Serve *router*'s tables; earlier mounts win on duplicate paths."""
        if self.config.strict:
            self._check_actions(router)
        self.routers.append(router)
        logger.debug("Mounted %r", router)
        return self

    def resolve(self, method: str, path: str) -> RouteEntry | None:
        """Return the first entry registered for *method* at *path*.

        Raises :class:`InvalidRoute` when *method* has no route table.
        """
        verb = Verb.parse(method)
        for router in self.routers:
            entry = router.table(verb).find(path)
            if entry is not None:
                return entry
        return None

    def route_counts(self) -> dict[Verb, int]:
        """Number of routes per verb across every mounted router."""
        return {verb: sum(len(router.table(verb)) for router in self.routers) for verb in Verb}

    def _check_actions(self, router: Router) -> None:
        for entry in router.entries():
            validate_action_signature(entry.action, entry.path, entry.verb.value)

    def startup(self) -> None:
        """Run once before serving.

        Routers stay mutable after mounting, so strict mode re-checks every
        action here.
        """
        if self.config.strict:
            for router in self.routers:
                self._check_actions(router)
        counts = self.route_counts()
        if not any(counts.values()):
            logger.warning("Starting with no routes registered")
        logger.info(
            "Serving %d routes (%s)",
            sum(counts.values()),
            ", ".join(f"{verb.value} {n}" for verb, n in counts.items() if n),
        )

    # ------------------------------------------------------------------
    # ASGI interface
    # ------------------------------------------------------------------

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
        elif scope["type"] == "http":
            await self._handle(scope, receive, send)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self.startup()
                except Exception as exc:
                    logger.error("Startup failed", exc_info=True)
                    await send({"type": "lifespan.startup.failed", "message": str(exc).strip()})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def _handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            entry = self.resolve(scope["method"], scope["path"])
        except InvalidRoute:
            await json_response({"detail": "Method Not Allowed"}, status=405).send(send)
            return
        if entry is None:
            await json_response({"detail": "Not Found"}, status=404).send(send)
            return

        request = Request(scope, receive, entry)
        response = Response()
        try:
            await self._invoke(entry, request, response)
            messages = response.messages()
        except Exception:
            logger.error("Action failed for %s %s", scope["method"], scope["path"], exc_info=True)
            body: dict[str, Any] = {"detail": "Internal Server Error"}
            if self.config.debug:
                body["traceback"] = traceback.format_exc()
            await json_response(body, status=500).send(send)
            return

        for message in messages:
            await send(message)

    async def _invoke(self, entry: RouteEntry, request: Request, response: Response) -> None:
        action = entry.action
        if inspect.iscoroutinefunction(action) or inspect.iscoroutinefunction(getattr(action, "__call__", None)):
            await action(request, response)
            return
        # Sync actions cannot await the body, so read it up front.
        await request.read()
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: action(request, response))
