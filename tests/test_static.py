"""Tests for the static file fallback."""

import pytest

from wren.app import App
from wren.routing import get
from wren.server.static import StaticResolver
from wren.testing import TestClient


@pytest.fixture
def public_dir(tmp_path):
    """Create a temporary public directory for testing."""
    public = tmp_path / "public"
    public.mkdir()

    (public / "style.css").write_text("body { color: red; }")
    (public / "app.js").write_text("console.log('hello');")
    (public / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (public / "blob.wrenunknown").write_bytes(b"\x00\x01\x02\x03")
    (public / "index.html").write_text("<h1>Home</h1>")

    docs = public / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    (public / "empty").mkdir()
    (tmp_path / "secret.txt").write_text("top secret")

    return public


class TestStaticFallback:
    async def test_serves_file(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/style.css")
            assert response.status == 200
            assert response.header("content-type") == "text/css; charset=utf-8"
            assert response.header("content-length") == str(len("body { color: red; }"))
            assert response.text == "body { color: red; }"

    async def test_serves_binary_file(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/image.png")
            assert response.status == 200
            assert response.header("content-type") == "image/png"
            assert response.body == b"\x89PNG\r\n\x1a\n"

    async def test_unknown_extension_is_octet_stream(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/blob.wrenunknown")
            assert response.header("content-type") == "application/octet-stream"

    async def test_directory_serves_index(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            via_directory = await client.get("/docs")
            via_file = await client.get("/docs/index.html")
            assert via_directory.status == 200
            assert via_directory.body == via_file.body == b"<h1>Docs</h1>"
            assert via_directory.headers == via_file.headers

    async def test_root_serves_index(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "<h1>Home</h1>"

    async def test_directory_without_index_is_404(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/empty")
            assert response.status == 404

    async def test_missing_file_is_404(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/nope.css")
            assert response.status == 404
            assert response.text == "Not Found"

    async def test_path_traversal_is_404(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/../secret.txt")
            assert response.status == 404
            assert "top secret" not in response.text

    async def test_any_method_falls_back(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.post("/style.css")
            assert response.status == 200

    async def test_head_has_length_but_no_body(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.head("/style.css")
            assert response.status == 200
            assert response.header("content-length") == str(len("body { color: red; }"))
            assert response.body == b""

    async def test_route_wins_over_file(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        app.handle(get("/style.css", lambda ctx: "from handler"))
        async with TestClient(app) as client:
            response = await client.get("/style.css")
            assert response.text == "from handler"

    async def test_disabled(self, public_dir) -> None:
        app = App(public_dir=public_dir, static_enabled=False)
        async with TestClient(app) as client:
            response = await client.get("/style.css")
            assert response.status == 404

    async def test_nul_byte_is_404(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/a\x00b")
            assert response.status == 404
            assert response.text == "Not Found"

    async def test_encoded_nul_byte_is_404(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/style%00.css")
            assert response.status == 404

    async def test_percent_encoded_file_name(self, public_dir) -> None:
        (public_dir / "my notes.txt").write_text("notes")
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/my%20notes.txt")
            assert response.status == 200
            assert response.text == "notes"

    async def test_encoded_traversal_is_404(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        async with TestClient(app) as client:
            response = await client.get("/%2e%2e/secret.txt")
            assert response.status == 404

    async def test_handler_returning_none_falls_back_to_file(self, public_dir) -> None:
        app = App(public_dir=public_dir)
        app.handle(get("/style.css", lambda ctx: None))
        async with TestClient(app) as client:
            response = await client.get("/style.css")
            assert response.status == 200
            assert response.text == "body { color: red; }"

    async def test_missing_public_dir(self, tmp_path) -> None:
        app = App(public_dir=tmp_path / "does-not-exist")
        async with TestClient(app) as client:
            response = await client.get("/style.css")
            assert response.status == 404


class TestStaticResolver:
    async def test_resolve_returns_none_on_miss(self, public_dir) -> None:
        resolver = StaticResolver(public_dir)
        assert await resolver.resolve("/nope.txt") is None

    async def test_unrepresentable_path_is_a_miss(self, public_dir) -> None:
        resolver = StaticResolver(public_dir)
        assert await resolver.resolve("/a\x00b") is None
        assert await resolver.resolve("/%00") is None

    async def test_resolve_is_lazy(self, public_dir) -> None:
        resolver = StaticResolver(public_dir, chunk_size=3)
        response = await resolver.resolve("/app.js")
        assert response is not None
        assert response.body.size == len("console.log('hello');")
        assert response.body.chunk_size == 3
        await response.body.aclose()

    async def test_symlink_out_of_root_is_a_miss(self, public_dir, tmp_path) -> None:
        (public_dir / "leak.txt").symlink_to(tmp_path / "secret.txt")
        resolver = StaticResolver(public_dir)
        assert await resolver.resolve("/leak.txt") is None
