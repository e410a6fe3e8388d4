"""Tests for the hello example."""

from wren.testing import TestClient


class TestHelloApp:
    """Verify every route in the hello example works through the ASGI pipeline."""

    async def test_hi(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/hi")
            assert response.status == 200
            assert response.text == "hello"

    async def test_echo_query(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/echo?a=1")
            assert response.json() == {"a": "1"}

    async def test_echo_json(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/echo", json={"a": 1})
            assert response.json() == {"a": 1}

    async def test_status(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/status")
            assert "application/json" in response.header("content-type")
            assert response.json() == {"status": "ok"}

    async def test_custom_response_status_and_header(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/custom")
            assert response.status == 201
            assert response.text == "Created"
            assert ("x-custom", "wren") in response.headers

    async def test_greet(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/greet?name=alice")
            assert response.text == "<h1>Hello, alice!</h1>"

    async def test_greet_without_name_is_404(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/greet")
            assert response.status == 404

    async def test_static_index(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert "Hello from public/" in response.text

    async def test_static_directory(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/docs")
            assert "<h1>Docs</h1>" in response.text
