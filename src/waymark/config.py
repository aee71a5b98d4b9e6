"""Application configuration.

AppConfig is a frozen pydantic model: validated once at construction,
immutable afterwards.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class AppConfig(BaseModel):
    """Server and dispatch settings for a :class:`~waymark.app.Waymark` app.

    Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1)
    log_level: Literal["critical", "error", "warning", "info", "debug"] = "info"

    # Dispatch
    debug: bool = False  # include tracebacks in 500 responses
    strict: bool = False  # check action signatures when routers are mounted

    def with_overrides(self, **values: Any) -> AppConfig:
        """Return a validated copy with every non-``None`` value in *values* applied."""
        updates = {k: v for k, v in values.items() if v is not None}
        return AppConfig.model_validate({**self.model_dump(), **updates})
