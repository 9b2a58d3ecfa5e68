# pathrouter

An asynchronous HTTP request router. A `Router` holds routes,
pre-middlewares, post-middlewares, shared data and an error handler, and
turns a `Request` into a `Response` by running whichever of them match the
request path.

No third-party dependencies; Python 3.10 or later.

```
pip install pathrouter
```

## Modules

- `pathrouter.regex_generator` – turns path patterns into regular
  expressions: `generate_common_regex_str(path)`,
  `generate_exact_match_regex(path)` and `generate_prefix_match_regex(path)`.
- `pathrouter.params` – `RouteParams`, the captured route parameters.
- `pathrouter.request` – `Method`, `Request`, `Response`, `RequestContext`,
  `RequestMeta` and `RequestInfo`.
- `pathrouter.route` – `Route`, a path pattern bound to methods and a handler.
- `pathrouter.router` – `Router`, `ErrHandler` and `RouterError`.

## Path patterns

In a pattern, `:name` matches one path segment (no `/`) and `*` matches
anything, slashes included. Every other character is matched literally.

```python
from pathrouter.regex_generator import generate_common_regex_str

generate_common_regex_str("/users/:username/data")
# ('/users/([^/]+)/data', ['username'])
generate_common_regex_str("/users/*")
# ('/users/(.*)', ['*'])
```

`generate_exact_match_regex` compiles a pattern that must match the whole
path; `generate_prefix_match_regex` one that need only match its start. Both
return the compiled pattern and the list of parameter names, and raise
`ValueError` if the expression cannot be compiled.

## Routing a request

Handlers are coroutine functions taking a `Request` and returning a
`Response`. Raising an exception reports a failure to the error handler.

```python
import asyncio

from pathrouter.request import Method, Request, Response
from pathrouter.route import Route
from pathrouter.router import Router


async def home(request):
    return Response(body="home")


async def show_user(request):
    return Response(body=f"user {request.param('name')}")


router = Router(
    routes=[
        Route("/", [Method.GET], home),
        Route("/users/:name/", [Method.GET, Method.HEAD], show_user),
    ]
)
router.prepare()


async def main():
    response = await router.process("/users/alice/", Request("GET", "/users/alice/"))
    print(response.status, response.text)  # 200 user alice


asyncio.run(main())
```

Patterns are matched against the `target_path` passed to `process` exactly
as given, so a pattern such as `/users/:name/` and the target path must agree
on a trailing slash.

`process` runs, in order:

1. every matching pre-middleware, each receiving the request returned by the
   one before;
2. the first matching route whose methods include the request method;
3. every matching post-middleware, each receiving the response returned by
   the one before.

Route parameters are captured into the request before its handler runs and
are read with `request.param(name)` or `request.params`; a glob is stored
under the name `*`.

Each route and middleware has a `scope_depth` (1 by default). When a route
other than the catch-all `/*` matches the path and method, middlewares whose
`scope_depth` is greater than that route's are skipped.

### What `prepare()` adds

`prepare()` must be called once before the router handles requests;
`match_routes` and `process` raise `RuntimeError` otherwise. It:

- puts a post-middleware first that sets the `x-powered-by: pathrouter`
  response header;
- adds a `/*` route answering `OPTIONS` with `204 No Content`, unless one
  already exists;
- adds a `/*` route for every method answering `404` with the plain-text body
  `Not Found`, unless one already exists;
- installs an error handler answering `500` with the plain-text body
  `Internal Server Error: <error>`, unless one is set;
- sets `should_gen_req_info` to true when the error handler or any
  post-middleware wants a `RequestInfo`.

## Middlewares

A router accepts any objects of the following shapes:

- a pre-middleware has `regex` (a compiled pattern, for example from
  `generate_exact_match_regex`), `scope_depth` and
  `async process(request) -> Request`;
- a post-middleware has `regex`, `scope_depth`, `requires_info` and
  `async process(response, req_info) -> Response`.

An exception raised by a pre-middleware skips the route: the error handler's
response goes on to the post-middlewares. An exception raised by a
post-middleware ends processing with the error handler's response.

## Shared data and request context

`Router(scoped_data_maps=[(path, {type: value, ...}), ...])` attaches data
to requests whose path matches `path`; handlers read it with
`request.data(SomeType)`, which searches the matching maps in order.

`request.set_context(value)` stores a value keyed by its type and
`request.get_context(SomeType)` reads it back; the context lives for one
request. `RequestInfo.from_request(request, request.context)` takes a
snapshot of the method, URI, headers and version that shares that context,
so post-middlewares and error handlers can call `req_info.context(SomeType)`
and `req_info.data(SomeType)`. When `router.should_gen_req_info` is true,
pass such a `RequestInfo` as the third argument of `process`.

## Error handling

```python
from pathrouter.router import ErrHandler


async def on_error(error, req_info):
    return Response(status=500, body=f"{req_info.method.value} failed: {error}")


router = Router(routes=[...], err_handler=ErrHandler(on_error, with_info=True))
```

With `with_info=False` (the default) the handler is called with the error
alone.

## What the package does not do

- There is no fluent builder with per-method shortcuts, and no way to mount
  one router under a path prefix of another: routes are passed to `Router`
  as `Route` objects, and their `scope_depth` is set by hand.
- It does not read requests from a connection. The caller produces the
  `Request`, decodes and normalises the path it passes as `target_path`, and
  writes out the returned `Response`; there is no network server or
  per-connection service.