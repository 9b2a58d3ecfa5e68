"""Request, response and per-request information types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar
from urllib.parse import urlsplit

from pathrouter.params import RouteParams

T = TypeVar("T")


class Method(str, enum.Enum):
    """HTTP request methods."""

    OPTIONS = "OPTIONS"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    TRACE = "TRACE"
    CONNECT = "CONNECT"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: Method | str) -> Method:
        if isinstance(value, Method):
            return value
        return cls(value.upper())


def _lookup(data_maps: list[dict[type, Any]] | None, kind: type[T]) -> T | None:
    for data_map in data_maps or ():
        if kind in data_map:
            return data_map[kind]
    return None


class RequestContext:
    """Per-request store of values keyed by their type."""

    def __init__(self) -> None:
        self._values: dict[type, Any] = {}

    def set(self, value: Any) -> None:
        """Store ``value``, replacing any earlier value of the same type."""
        self._values[type(value)] = value

    def get(self, kind: type[T]) -> T | None:
        """Return the stored value of type ``kind``, or None."""
        return self._values.get(kind)


@dataclass
class RequestMeta:
    """Route parameters and remote address attached to a request."""

    route_params: Optional[RouteParams] = None
    remote_addr: Optional[tuple[str, int]] = None

    @classmethod
    def with_route_params(cls, route_params: RouteParams) -> RequestMeta:
        return cls(route_params=route_params)

    @classmethod
    def with_remote_addr(cls, remote_addr: tuple[str, int]) -> RequestMeta:
        return cls(remote_addr=remote_addr)

    def extend(self, other: RequestMeta) -> None:
        """Merge ``other`` into this meta; its values win."""
        if other.remote_addr is not None:
            self.remote_addr = other.remote_addr
        if other.route_params is not None:
            if self.route_params is None:
                self.route_params = other.route_params
            else:
                self.route_params.extend(other.route_params)


@dataclass
class Request:
    """An incoming HTTP request together with the router's per-request state."""

    method: Method | str
    uri: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"
    meta: RequestMeta = field(default_factory=RequestMeta)
    context: RequestContext = field(default_factory=RequestContext)
    shared_data: list[dict[type, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.method = Method.parse(self.method)
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def path(self) -> str:
        """The path part of the URI."""
        return urlsplit(self.uri).path

    @property
    def params(self) -> RouteParams:
        """The route parameters captured for this request."""
        return self.meta.route_params if self.meta.route_params is not None else RouteParams()

    @property
    def remote_addr(self) -> tuple[str, int] | None:
        return self.meta.remote_addr

    def param(self, name: str) -> str | None:
        """Return the route parameter ``name``, or None."""
        return self.params.get(name)

    def update_meta(self, meta: RequestMeta) -> None:
        """Merge ``meta`` into the request's meta."""
        self.meta.extend(meta)

    def data(self, kind: type[T]) -> T | None:
        """Return shared router data of type ``kind``, searching nearest scope first."""
        return _lookup(self.shared_data, kind)

    def set_context(self, value: Any) -> None:
        self.context.set(value)

    def get_context(self, kind: type[T]) -> T | None:
        return self.context.get(kind)


@dataclass
class Response:
    """An HTTP response."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass
class RequestInfo:
    """A snapshot of request details for post middlewares and error handlers."""

    headers: dict[str, str]
    method: Method
    uri: str
    version: str
    context_store: RequestContext
    shared_data_maps: Optional[list[dict[type, Any]]] = None

    @classmethod
    def from_request(cls, request: Request, context: RequestContext) -> RequestInfo:
        return cls(
            headers=dict(request.headers),
            method=Method.parse(request.method),
            uri=request.uri,
            version=request.version,
            context_store=context,
        )

    def context(self, kind: type[T]) -> T | None:
        """Return the request-context value of type ``kind``, or None."""
        return self.context_store.get(kind)

    def data(self, kind: type[T]) -> T | None:
        """Return shared router data of type ``kind``, or None."""
        return _lookup(self.shared_data_maps, kind)