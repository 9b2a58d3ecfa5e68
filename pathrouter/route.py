"""A single route: a path pattern, its methods and its handler."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

from pathrouter.params import RouteParams
from pathrouter.regex_generator import generate_exact_match_regex
from pathrouter.request import Method, Request, RequestMeta, Response

Handler = Callable[[Request], Awaitable[Response]]


class Route:
    """A path pattern bound to HTTP methods and an async handler."""

    def __init__(
        self,
        path: str,
        methods: Iterable[Method | str],
        handler: Handler | None,
        scope_depth: int = 1,
    ) -> None:
        try:
            regex, params = generate_exact_match_regex(path)
        except ValueError as exc:
            raise ValueError(
                f"Could not create an exact match regex for the route path: {exc}"
            ) from exc
        self.path = path
        self.regex = regex
        self.route_params = params
        self.handler = handler
        self.methods = [Method.parse(method) for method in methods]
        self.scope_depth = scope_depth

    def __repr__(self) -> str:
        methods = [method.value for method in self.methods]
        return (
            f"Route(path={self.path!r}, regex={self.regex.pattern!r}, "
            f"route_params={self.route_params!r}, methods={methods!r})"
        )

    def matches_method(self, method: Method | str) -> bool:
        """Tell whether the route accepts ``method``."""
        return Method.parse(method) in self.methods

    def generate_req_meta(self, target_path: str) -> RequestMeta:
        """Capture the route parameters from ``target_path``."""
        params = RouteParams()
        if self.route_params:
            match = self.regex.match(target_path)
            if match is not None:
                for name, value in zip(self.route_params, match.groups()):
                    if value is not None:
                        params.set(name, value)
        return RequestMeta.with_route_params(params)

    async def process(self, target_path: str, request: Request) -> Response:
        """Attach the route parameters to ``request`` and run the handler."""
        request.update_meta(self.generate_req_meta(target_path))
        if self.handler is None:
            raise RuntimeError("A router can not be used after mounting into another router")
        return await self.handler(request)