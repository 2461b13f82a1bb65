"""Tests for switchyard.app — registration, freeze, lifespan, and ASGI entry."""

from typing import Any

import pytest

from switchyard.app import App
from switchyard.config import AppConfig
from switchyard.errors import ConfigurationError, HTTPError, NotFound
from switchyard.testing import TestClient


def _noop(request, response, next) -> None:
    next()


class TestAppRegistration:
    def test_method_shortcuts(self) -> None:
        app = App()
        app.get("/a", _noop)
        app.post("/a", _noop)
        app.put("/a", _noop)
        app.patch("/a", _noop)
        app.delete("/a", _noop)
        app.head("/a", _noop)
        app.options("/a", _noop)
        methods = [p.method for p in app.router.routes]
        assert methods == ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

    def test_add_route_normalizes_method(self) -> None:
        app = App()
        app.add_route("get", "/", _noop)
        assert app.router.routes[0].source == "//GET"

    def test_unknown_method_rejected(self) -> None:
        app = App()
        with pytest.raises(ConfigurationError, match="Unsupported HTTP method"):
            app.add_route("BREW", "/coffee", _noop)

    def test_non_callable_handler_rejected(self) -> None:
        app = App()
        with pytest.raises(ConfigurationError, match="not callable"):
            app.get("/", "not a handler")  # type: ignore[arg-type]

    def test_decorator_form(self) -> None:
        app = App()

        @app.get("/items/:id")
        def show(request, response, next):
            next()

        pattern = app.router.routes[0]
        assert app.router.handlers(pattern) == (show,)

    def test_repeat_registration_appends(self) -> None:
        app = App()

        def a(request, response, next):
            next()

        def b(request, response, next):
            next()

        app.get("/x", a)
        app.get("/x", b)
        router = app.router
        assert len(router) == 1
        assert router.handlers(router.routes[0]) == (a, b)


class TestAppFreeze:
    def test_freeze_compiles_router(self) -> None:
        app = App()
        app.get("/", _noop)
        app._ensure_frozen()
        assert app._frozen is True
        assert app.router.compiled

    def test_cannot_add_routes_after_freeze(self) -> None:
        app = App()
        app._ensure_frozen()
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.get("/", _noop)

    def test_double_freeze_is_safe(self) -> None:
        app = App()
        app._ensure_frozen()
        app._ensure_frozen()
        assert app._frozen is True


class TestAppConfig:
    def test_default_config(self) -> None:
        app = App()
        assert app.config.host == "127.0.0.1"
        assert app.config.port == 8000
        assert app.config.not_found_body == "Not Found"

    def test_custom_config(self) -> None:
        cfg = AppConfig(host="0.0.0.0", port=3000, debug=True)
        app = App(config=cfg)
        assert app.config.port == 3000
        assert app.config.debug is True


class TestLifespan:
    async def test_startup_freezes_and_shutdown_completes(self) -> None:
        app = App()
        app.get("/", _noop)
        inbox = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return inbox.pop(0)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert app._frozen is True


class TestAppE2E:
    async def test_params_and_query(self) -> None:
        app = App()
        seen: dict[str, Any] = {}

        def h(request, response, next):
            seen["params"] = request.params
            seen["query"] = request.query
            response.json({"id": request.params["id"]})

        app.get("/items/:id", h)

        async with TestClient(app) as client:
            response = await client.get("/items/7?x=1")

        assert seen == {"params": {"id": "7"}, "query": {"x": "1"}}
        assert response.status == 200
        assert response.json() == {"id": "7"}
        assert response.content_type == "application/json"

    async def test_root(self) -> None:
        app = App()
        app.get("/", lambda request, response, next: response.send("home"))

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "home"

    async def test_not_found(self) -> None:
        app = App()
        app.get("/items", _noop)

        async with TestClient(app) as client:
            response = await client.get("/missing")
            assert response.status == 404
            assert response.text == "Not Found"

            response = await client.delete("/items")
            assert response.status == 404

    async def test_malformed_path_is_400(self) -> None:
        app = App()
        app.get("/users/:id", _noop)

        async with TestClient(app) as client:
            response = await client.get("/users/%E0%A4%A")
            assert response.status == 400

    async def test_malformed_query_is_400(self) -> None:
        app = App()
        app.get("/search", _noop)

        async with TestClient(app) as client:
            response = await client.get("/search?q=%zz")
            assert response.status == 400

    async def test_handler_http_error(self) -> None:
        app = App()

        def conflict(request, response, next):
            raise HTTPError(status=409, detail="Already exists", headers=(("X-Reason", "dup"),))

        app.post("/items", conflict)

        async with TestClient(app) as client:
            response = await client.post("/items")
            assert response.status == 409
            assert response.text == "Already exists"
            assert response.header("x-reason") == "dup"

    async def test_handler_fault_is_500(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()

        async def boom(request, response, next):
            response.write("partial")
            raise RuntimeError("kaboom")

        app.get("/boom", boom)

        async with TestClient(app) as client:
            response = await client.get("/boom")

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "500 GET /boom" in caplog.text

    async def test_handler_fault_debug_shows_traceback(self) -> None:
        app = App(AppConfig(debug=True))

        def boom(request, response, next):
            raise RuntimeError("kaboom")

        app.get("/boom", boom)

        async with TestClient(app) as client:
            response = await client.get("/boom")

        assert response.status == 500
        assert "RuntimeError: kaboom" in response.text

    async def test_pipeline_with_body(self) -> None:
        app = App()

        async def load(request, response, next):
            request.state["payload"] = await request.json()
            next()

        def create(request, response, next):
            response.json({"created": request.state["payload"]["name"]}, status=201)

        app.post("/items", load, create)

        async with TestClient(app) as client:
            response = await client.post("/items", json={"name": "widget"})
            assert response.status == 201
            assert response.json() == {"created": "widget"}

    async def test_short_circuit_over_asgi(self) -> None:
        app = App()
        reached = False

        def guard(request, response, next):
            if request.headers.get("authorization") != "Bearer ok":
                response.send("Unauthorized", status=401)
                return
            next()

        def secret(request, response, next):
            nonlocal reached
            reached = True
            response.send("secret")

        app.get("/secret", guard, secret)

        async with TestClient(app) as client:
            denied = await client.get("/secret")
            assert denied.status == 401
            assert reached is False

            allowed = await client.get("/secret", headers={"Authorization": "Bearer ok"})
            assert allowed.status == 200
            assert allowed.text == "secret"

    async def test_unfinished_response_is_sent_as_is(self) -> None:
        app = App()
        app.get("/", lambda request, response, next: response.write("half"))

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "half"

    async def test_head_route_sends_headers_only(self) -> None:
        app = App()
        app.head("/items/:id", lambda request, response, next: response.send("x" * 12))

        async with TestClient(app) as client:
            response = await client.request("HEAD", "/items/7")
            assert response.status == 200
            assert response.header("content-length") == "12"
            assert response.body == b""

    async def test_handler_raises_not_found(self) -> None:
        app = App()

        def load_item(request, response, next):
            raise NotFound(f"No item {request.params['id']}")

        app.get("/items/:id", load_item)

        async with TestClient(app) as client:
            response = await client.get("/items/7")
            assert response.status == 404
            assert response.text == "No item 7"


class TestListen:
    def test_listen_delegates_to_runner(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple] = []

        def fake_run_server(app, host, port, *, on_ready=None, log_level="info"):
            calls.append((app, host, port, on_ready, log_level))

        monkeypatch.setattr("switchyard.server.runner.run_server", fake_run_server)

        app = App(AppConfig(port=9000, log_level="warning"))
        ready = lambda: None  # noqa: E731
        app.listen(3000, ready)

        assert calls == [(app, "127.0.0.1", 3000, ready, "warning")]
        assert app._frozen is True

    def test_listen_port_zero_asks_for_free_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple] = []

        def fake_run_server(app, host, port, *, on_ready=None, log_level="info"):
            calls.append((host, port))

        monkeypatch.setattr("switchyard.server.runner.run_server", fake_run_server)

        App(AppConfig(port=9000)).listen(0, host="")
        assert calls == [("", 0)]

    def test_listen_uses_config_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple] = []

        def fake_run_server(app, host, port, *, on_ready=None, log_level="info"):
            calls.append((host, port))

        monkeypatch.setattr("switchyard.server.runner.run_server", fake_run_server)

        App(AppConfig(host="0.0.0.0", port=9000)).listen()
        assert calls == [("0.0.0.0", 9000)]
