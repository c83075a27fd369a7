"""
Method + path router with a catch-all "Route Not Found" response.

Routes are registered at startup and looked up on every request:

    router = Router(deps=deps)
    router.register("GET", "/", welcome)
    router.register("GET", "/users/:id", get_user)
    response = await router.dispatch("GET", "/users/42")

Registering the same method and path twice replaces the earlier handler.
Handlers receive a `RequestContext` and their return value is passed back
untouched; anything they raise propagates to the ASGI host.
"""
import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Pattern, Tuple, Union

from fastapi import Request
from fastapi.responses import JSONResponse

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

NOT_FOUND_BODY = {"status": "Failed", "message": "Route Not Found"}

# ":id" (express style) or "{id}"
_PARAM_SEGMENT = re.compile(r"^(?::(?P<colon>\w+)|\{(?P<brace>\w+)\})$")


@dataclass
class RequestContext:
    """What a handler gets: the request, path parameters and injected dependencies"""

    request: Optional[Request] = None
    params: Dict[str, str] = field(default_factory=dict)
    deps: Any = None


Handler = Callable[[RequestContext], Union[Awaitable[Any], Any]]


def normalize_path(path: str) -> str:
    """Collapse trailing slashes; the root stays "/" """
    return "/" + path.strip("/")


def compile_pattern(path: str) -> Optional[Pattern[str]]:
    """Regex for a path with parameter segments, None for a static path"""
    parts = []
    has_params = False
    for segment in path.strip("/").split("/"):
        m = _PARAM_SEGMENT.match(segment)
        if m:
            name = m.group("colon") or m.group("brace")
            parts.append(f"(?P<{name}>[^/]+)")
            has_params = True
        else:
            parts.append(re.escape(segment))
    if not has_params:
        return None
    return re.compile("^/" + "/".join(parts) + "$")


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    handler: Handler
    regex: Optional[Pattern[str]] = None

    def match(self, path: str) -> Optional[Dict[str, str]]:
        if self.regex is None:
            return {} if path == self.path else None
        m = self.regex.match(path)
        return m.groupdict() if m else None


def not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content=dict(NOT_FOUND_BODY))


class Router:
    def __init__(self, deps: Any = None):
        self.deps = deps
        self._routes: Dict[Tuple[str, str], Route] = {}

    @property
    def routes(self) -> List[Route]:
        return list(self._routes.values())

    def register(self, method: str, path: str, handler: Handler) -> Route:
        """Add a route; an existing entry for the same method and path is replaced"""
        method = method.upper()
        path = normalize_path(path)
        route = Route(method=method, path=path, handler=handler, regex=compile_pattern(path))
        self._routes[(method, path)] = route
        return route

    def route(self, method: str, path: str) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.register(method, path, handler)
            return handler
        return decorator

    def get(self, path: str):
        return self.route("GET", path)

    def post(self, path: str):
        return self.route("POST", path)

    def put(self, path: str):
        return self.route("PUT", path)

    def patch(self, path: str):
        return self.route("PATCH", path)

    def delete(self, path: str):
        return self.route("DELETE", path)

    def include(self, prefix: str, other: "Router") -> None:
        """Mount every route of `other` under `prefix`"""
        prefix = normalize_path(prefix)
        for route in other.routes:
            if route.path == "/":
                path = prefix
            elif prefix == "/":
                path = route.path
            else:
                path = prefix + route.path
            self.register(route.method, path, route.handler)

    def match(self, method: str, path: str) -> Tuple[Optional[Route], Dict[str, str]]:
        method = method.upper()
        path = normalize_path(path)

        route = self._routes.get((method, path))
        if route is not None and route.regex is None:
            return route, {}

        for route in self._routes.values():
            if route.method != method or route.regex is None:
                continue
            params = route.match(path)
            if params is not None:
                return route, params
        return None, {}

    async def dispatch(self, method: str, path: str, request: Optional[Request] = None) -> Any:
        route, params = self.match(method, path)
        if route is None:
            return not_found()

        ctx = RequestContext(request=request, params=params, deps=self.deps)
        result = route.handler(ctx)
        if inspect.isawaitable(result):
            result = await result
        return result
