"""Mutable response handed to actions alongside the request."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from waymark._types import Send


class Response:
    """An HTTP response an action writes into.

    Actions receive one per request and set ``status``, headers and body
    in place; the application sends it once the action returns::

        def show(request, response):
            response.status = 201
            response.json({"ok": True})
    """

    __slots__ = ("body", "headers", "status")

    def __init__(
        self,
        body: bytes | str = b"",
        *,
        status: int = 200,
        content_type: str = "text/plain; charset=utf-8",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status = status
        self.headers: dict[str, str] = {"content-type": content_type}
        if headers:
            self.headers.update({k.lower(): v for k, v in headers.items()})
        self.body = b""
        self.write(body)

    def set_header(self, name: str, value: str) -> Response:
        self.headers[name.lower()] = value
        return self

    def write(self, data: bytes | str) -> Response:
        """Append *data* to the body (``str`` is UTF-8 encoded)."""
        self.body += data.encode("utf-8") if isinstance(data, str) else data
        return self

    def text(self, content: str) -> Response:
        """Replace the body with plain text."""
        self.headers["content-type"] = "text/plain; charset=utf-8"
        self.body = content.encode("utf-8")
        return self

    def json(self, content: Any) -> Response:
        """Replace the body with *content* serialized as JSON.

        Pydantic models are dumped in JSON mode first.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")
        self.headers["content-type"] = "application/json"
        self.body = json.dumps(content, separators=(",", ":")).encode("utf-8")
        return self

    def messages(self) -> list[dict[str, Any]]:
        """Encode the response as its ASGI start and body messages.

        Header values must be latin-1; anything else raises
        :class:`UnicodeEncodeError` here, before a byte is sent.
        """
        headers = [(k.encode("latin-1"), v.encode("latin-1")) for k, v in self.headers.items()]
        headers.append((b"content-length", str(len(self.body)).encode("latin-1")))
        return [
            {"type": "http.response.start", "status": self.status, "headers": headers},
            {"type": "http.response.body", "body": self.body},
        ]

    async def send(self, send: Send) -> None:
        for message in self.messages():
            await send(message)


def json_response(content: Any, status: int = 200) -> Response:
    return Response(status=status).json(content)
