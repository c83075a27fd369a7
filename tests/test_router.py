# =============================================================================
# tests/test_router.py - Router Tests
# =============================================================================
# Registration, matching and dispatch without any HTTP transport.
# =============================================================================

import json

import pytest

from starter.router import (
    NOT_FOUND_BODY,
    RequestContext,
    Router,
    compile_pattern,
    normalize_path,
)


def body_of(response):
    return json.loads(response.body)


async def first(ctx):
    return "first"


async def second(ctx):
    return "second"


class TestNormalizePath:

    def test_root(self):
        assert normalize_path("/") == "/"
        assert normalize_path("") == "/"

    def test_trailing_slash_removed(self):
        assert normalize_path("/users/") == "/users"

    def test_leading_slash_added(self):
        assert normalize_path("users/1") == "/users/1"


class TestCompilePattern:

    def test_static_path_has_no_pattern(self):
        assert compile_pattern("/users") is None
        assert compile_pattern("/") is None

    def test_colon_parameter(self):
        regex = compile_pattern("/users/:id")
        assert regex.match("/users/42").groupdict() == {"id": "42"}

    def test_brace_parameter(self):
        regex = compile_pattern("/users/{id}")
        assert regex.match("/users/abc").groupdict() == {"id": "abc"}

    def test_parameter_is_one_segment(self):
        regex = compile_pattern("/users/:id")
        assert regex.match("/users/1/posts") is None
        assert regex.match("/users/") is None


class TestDispatch:

    @pytest.mark.asyncio
    async def test_returns_handler_output_unchanged(self):
        sentinel = object()

        async def handler(ctx):
            return sentinel

        router = Router()
        router.register("GET", "/thing", handler)

        assert await router.dispatch("GET", "/thing") is sentinel

    @pytest.mark.asyncio
    async def test_unregistered_path_is_404(self):
        router = Router()
        router.register("GET", "/", first)

        response = await router.dispatch("GET", "/nope")

        assert response.status_code == 404
        assert body_of(response) == {"status": "Failed", "message": "Route Not Found"}

    @pytest.mark.asyncio
    async def test_unregistered_method_is_404(self):
        router = Router()
        router.register("GET", "/", first)

        response = await router.dispatch("DELETE", "/")

        assert response.status_code == 404
        assert body_of(response) == NOT_FOUND_BODY

    @pytest.mark.asyncio
    async def test_empty_router_is_404(self):
        response = await Router().dispatch("GET", "/")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate_registration_last_write_wins(self):
        router = Router()
        router.register("GET", "/", first)
        router.register("GET", "/", second)

        assert await router.dispatch("GET", "/") == "second"
        assert len(router.routes) == 1

    @pytest.mark.asyncio
    async def test_method_is_case_insensitive(self):
        router = Router()
        router.register("get", "/", first)

        assert await router.dispatch("GET", "/") == "first"

    @pytest.mark.asyncio
    async def test_trailing_slash_matches(self):
        router = Router()
        router.register("GET", "/users", first)

        assert await router.dispatch("GET", "/users/") == "first"

    @pytest.mark.asyncio
    async def test_path_parameter_passed_to_handler(self):
        seen = {}

        async def handler(ctx: RequestContext):
            seen.update(ctx.params)
            return "ok"

        router = Router()
        router.register("GET", "/users/:id", handler)

        assert await router.dispatch("GET", "/users/42") == "ok"
        assert seen == {"id": "42"}

    @pytest.mark.asyncio
    async def test_static_route_preferred_over_parameter(self):
        router = Router()
        router.register("GET", "/users/:id", first)
        router.register("GET", "/users/me", second)

        assert await router.dispatch("GET", "/users/me") == "second"
        assert await router.dispatch("GET", "/users/7") == "first"

    @pytest.mark.asyncio
    async def test_deps_are_injected(self):
        deps = object()

        async def handler(ctx):
            return ctx.deps

        router = Router(deps=deps)
        router.register("GET", "/", handler)

        assert await router.dispatch("GET", "/") is deps

    @pytest.mark.asyncio
    async def test_sync_handler(self):
        router = Router()
        router.register("GET", "/", lambda ctx: "plain")

        assert await router.dispatch("GET", "/") == "plain"

    @pytest.mark.asyncio
    async def test_handler_exception_propagates(self):
        async def boom(ctx):
            raise RuntimeError("boom")

        router = Router()
        router.register("GET", "/", boom)

        with pytest.raises(RuntimeError, match="boom"):
            await router.dispatch("GET", "/")


class TestInclude:

    @pytest.mark.asyncio
    async def test_sub_router_mounted_under_prefix(self):
        sub = Router()
        sub.register("GET", "/", first)
        sub.register("GET", "/:id", second)

        router = Router()
        router.include("/api/v1/users", sub)

        assert await router.dispatch("GET", "/api/v1/users") == "first"
        assert await router.dispatch("GET", "/api/v1/users/3") == "second"
        assert (await router.dispatch("GET", "/")).status_code == 404

    def test_routes_in_registration_order(self):
        router = Router()
        router.register("GET", "/a", first)
        router.register("POST", "/b", second)

        assert [(r.method, r.path) for r in router.routes] == [("GET", "/a"), ("POST", "/b")]

    def test_decorator_registers_and_returns_handler(self):
        router = Router()

        @router.post("/items")
        async def create(ctx):
            return "created"

        assert create.__name__ == "create"
        assert router.match("POST", "/items")[0].handler is create
