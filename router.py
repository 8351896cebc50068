"""Ordered routing table for method/URL handlers."""

from __future__ import annotations

import socket
from collections.abc import Callable
from dataclasses import dataclass

from request import HTTPRequest


@dataclass(slots=True)
class RouteOutcome:
    status_code: int
    bytes_sent: int


Handler = Callable[[socket.socket, HTTPRequest], RouteOutcome]


@dataclass(slots=True, frozen=True)
class Route:
    method: str
    path: str
    handler: Handler
    prefix: bool = False

    def matches(self, method: str, url: str) -> bool:
        if method != self.method:
            return False
        if self.prefix:
            return url.startswith(self.path)
        return url == self.path


class Router:
    """First-match router; routes are tried in the order they were added."""

    def __init__(self) -> None:
        self._routes: list[Route] = []

    def add_route(self, method: str, path: str, handler: Handler, *, prefix: bool = False) -> None:
        if not method.strip():
            raise ValueError("method cannot be empty")
        if not path.startswith("/"):
            raise ValueError("path must start with '/'")
        self._routes.append(Route(method=method, path=path, handler=handler, prefix=prefix))

    def resolve(self, method: str, url: str) -> Handler | None:
        for route in self._routes:
            if route.matches(method, url):
                return route.handler
        return None
