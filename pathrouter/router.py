"""The router: routes, middlewares, shared data and error handling."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from re import Pattern
from typing import Any, NamedTuple, Optional, Protocol, Union

from pathrouter.regex_generator import generate_exact_match_regex
from pathrouter.request import Method, Request, RequestInfo, Response
from pathrouter.route import Route

ALL_METHODS: tuple[Method, ...] = tuple(Method)
X_POWERED_BY_HEADER = "x-powered-by"
X_POWERED_BY_VALUE = "pathrouter"
CATCH_ALL_PATH = "/*"


class RouterError(Exception):
    """Raised when the router cannot handle a request or is misconfigured."""


class _PreMiddleware(Protocol):
    regex: Pattern[str]
    scope_depth: int

    async def process(self, request: Request) -> Request: ...


class _PostMiddleware(Protocol):
    regex: Pattern[str]
    scope_depth: int
    requires_info: bool

    async def process(self, response: Response, req_info: RequestInfo | None) -> Response: ...


class _XPoweredByMiddleware:
    """Post middleware that stamps every response with the x-powered-by header."""

    path = CATCH_ALL_PATH
    scope_depth = 1
    requires_info = False

    def __init__(self) -> None:
        self.regex, _ = generate_exact_match_regex(self.path)

    async def process(self, response: Response, req_info: RequestInfo | None) -> Response:
        response.headers[X_POWERED_BY_HEADER] = X_POWERED_BY_VALUE
        return response

    def __repr__(self) -> str:
        return f"PostMiddleware(path={self.path!r})"


@dataclass
class _ScopedDataMap:
    """Shared data made available to requests whose path matches ``path``."""

    path: str
    data_map: dict[type, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        try:
            self.regex, _ = generate_exact_match_regex(self.path)
        except ValueError as exc:
            raise RouterError(f"Could not create a regex for the data map path: {exc}") from exc


class _RouteMatches(NamedTuple):
    pre_middlewares: list[int]
    routes: list[int]
    post_middlewares: list[int]
    data_maps: list[int]


ErrHandlerFn = Union[
    Callable[[BaseException], Awaitable[Response]],
    Callable[[BaseException, RequestInfo], Awaitable[Response]],
]


@dataclass
class ErrHandler:
    """An async function turning an error into a response, optionally given request info."""

    handler: ErrHandlerFn
    with_info: bool = False

    async def execute(self, error: BaseException, req_info: RequestInfo | None) -> Response:
        """Run the handler for ``error``."""
        if not self.with_info:
            return await self.handler(error)  # type: ignore[call-arg]
        if req_info is None:
            raise RuntimeError("No RequestInfo is provided")
        return await self.handler(error, req_info)  # type: ignore[call-arg]


async def _default_options(request: Request) -> Response:
    return Response(status=HTTPStatus.NO_CONTENT)


async def _default_not_found(request: Request) -> Response:
    return Response(
        status=HTTPStatus.NOT_FOUND,
        headers={"content-type": "text/plain"},
        body=HTTPStatus.NOT_FOUND.phrase,
    )


async def _default_err_handler(error: BaseException) -> Response:
    return Response(
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        headers={"content-type": "text/plain"},
        body=f"{HTTPStatus.INTERNAL_SERVER_ERROR.phrase}: {error}",
    )


def _in_scope(scope_depth: int, route_scope_depth: int | None) -> bool:
    # Middlewares from a deeper scope than the matched route are skipped.
    return route_scope_depth is None or scope_depth <= route_scope_depth


class Router:
    """A mountable collection of routes, middlewares and shared data."""

    def __init__(
        self,
        pre_middlewares: Iterable[_PreMiddleware] = (),
        routes: Iterable[Route] = (),
        post_middlewares: Iterable[_PostMiddleware] = (),
        scoped_data_maps: Iterable[tuple[str, dict[type, Any]]] = (),
        err_handler: ErrHandler | None = None,
    ) -> None:
        self.pre_middlewares: list[_PreMiddleware] = list(pre_middlewares)
        self.routes: list[Route] = list(routes)
        self.post_middlewares: list[_PostMiddleware] = list(post_middlewares)
        self.scoped_data_maps: list[_ScopedDataMap] = [
            _ScopedDataMap(path, data_map) for path, data_map in scoped_data_maps
        ]
        self.err_handler: Optional[ErrHandler] = err_handler
        self.should_gen_req_info: Optional[bool] = None
        self._prepared = False

    def __repr__(self) -> str:
        return (
            f"Router(pre_middlewares={self.pre_middlewares!r}, routes={self.routes!r}, "
            f"post_middlewares={self.post_middlewares!r}, "
            f"scoped_data_maps={[m.path for m in self.scoped_data_maps]!r}, "
            f"err_handler={self.err_handler is not None}, "
            f"should_gen_req_info={self.should_gen_req_info!r})"
        )

    def prepare(self) -> None:
        """Install the default middleware, routes and error handler, readying the router."""
        self.post_middlewares.insert(0, _XPoweredByMiddleware())
        self._add_global_options_route()
        self._add_default_404_route()
        if self.err_handler is None:
            self.err_handler = ErrHandler(_default_err_handler)
        self.should_gen_req_info = (
            self.err_handler.with_info
            or any(mw.requires_info for mw in self.post_middlewares)
        )
        self._prepared = True

    def _add_global_options_route(self) -> None:
        found = any(
            route.path == CATCH_ALL_PATH and route.methods == [Method.OPTIONS]
            for route in self.routes
        )
        if not found:
            self.routes.append(Route(CATCH_ALL_PATH, [Method.OPTIONS], _default_options))

    def _add_default_404_route(self) -> None:
        found = any(
            route.path == CATCH_ALL_PATH and route.methods == list(ALL_METHODS)
            for route in self.routes
        )
        if not found:
            self.routes.append(Route(CATCH_ALL_PATH, ALL_METHODS, _default_not_found))

    def match_routes(self, target_path: str) -> _RouteMatches:
        """Return the indices of the middlewares, routes and data maps matching ``target_path``."""
        if not self._prepared:
            raise RuntimeError("The router is not prepared; call prepare() first")

        def matching(items: Iterable[Any]) -> list[int]:
            return [idx for idx, item in enumerate(items) if item.regex.search(target_path)]

        return _RouteMatches(
            pre_middlewares=matching(self.pre_middlewares),
            routes=matching(self.routes),
            post_middlewares=matching(self.post_middlewares),
            data_maps=matching(self.scoped_data_maps),
        )

    async def _handle_error(self, error: BaseException, req_info: RequestInfo | None) -> Response:
        if self.err_handler is None:
            raise error
        return await self.err_handler.execute(error, req_info)

    async def _run_pre_middlewares(
        self,
        request: Request,
        indices: list[int],
        route_scope_depth: int | None,
        req_info: RequestInfo | None,
    ) -> Request | Response:
        for idx in indices:
            middleware = self.pre_middlewares[idx]
            if not _in_scope(middleware.scope_depth, route_scope_depth):
                continue
            try:
                request = await middleware.process(request)
            except Exception as error:
                return await self._handle_error(error, req_info)
        return request

    async def _run_route(
        self,
        target_path: str,
        request: Request,
        indices: list[int],
        req_info: RequestInfo | None,
    ) -> Response | None:
        for idx in indices:
            route = self.routes[idx]
            if route.matches_method(request.method):
                try:
                    return await route.process(target_path, request)
                except Exception as error:
                    return await self._handle_error(error, req_info)
        return None

    async def process(
        self,
        target_path: str,
        request: Request,
        req_info: RequestInfo | None = None,
    ) -> Response:
        """Run the matching middlewares and route for ``request`` and return the response."""
        matches = self.match_routes(target_path)

        route_scope_depth = next(
            (
                route.scope_depth
                for route in (self.routes[idx] for idx in matches.routes)
                if route.matches_method(request.method) and route.path != CATCH_ALL_PATH
            ),
            None,
        )

        shared_data = [self.scoped_data_maps[idx].data_map for idx in matches.data_maps]
        if req_info is not None and shared_data:
            req_info.shared_data_maps = list(shared_data)
        request.shared_data = shared_data

        outcome = await self._run_pre_middlewares(
            request, matches.pre_middlewares, route_scope_depth, req_info
        )
        if isinstance(outcome, Response):
            response: Response | None = outcome
        else:
            response = await self._run_route(target_path, outcome, matches.routes, req_info)

        if response is None:
            raise RouterError(
                "No handlers added to handle non-existent routes. "
                "Tips: Please add an '.any' route at the bottom to handle any routes."
            )

        for idx in matches.post_middlewares:
            middleware = self.post_middlewares[idx]
            if not _in_scope(middleware.scope_depth, route_scope_depth):
                continue
            try:
                response = await middleware.process(response, req_info)
            except Exception as error:
                return await self._handle_error(error, req_info)

        return response