"""Chainable per-verb route tables with a small ASGI dispatcher."""

__version__ = "0.1.0"

from waymark.app import Waymark
from waymark.config import AppConfig
from waymark.errors import InvalidRoute, WaymarkError
from waymark.paths import is_valid_path, normalize_path
from waymark.request import Request
from waymark.response import Response
from waymark.routing import Controller, RouteEntry, Router, RouteTable, Verb

__all__ = [
    "AppConfig",
    "Controller",
    "InvalidRoute",
    "Request",
    "Response",
    "RouteEntry",
    "RouteTable",
    "Router",
    "Verb",
    "Waymark",
    "WaymarkError",
    "is_valid_path",
    "normalize_path",
]
