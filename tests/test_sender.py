"""Tests for wren.server.sender response emission rules."""

import anyio

from wren.http.response import FileBody, Response, normalize
from wren.server.sender import send_response


def _collector() -> tuple[list[dict], object]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    return messages, send


class TestSendResponseNoBodyStatuses:
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        messages, send = _collector()

        # A body attached to a 204 is still not sent.
        response = Response(status=204, body="unexpected-body")
        await send_response(response, send)

        assert messages[0]["type"] == "http.response.start"
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"

        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b""

    async def test_304_drops_body_and_sets_zero_content_length(self) -> None:
        messages, send = _collector()

        response = normalize((304, "unexpected-body"))
        await send_response(response, send)

        headers = messages[0]["headers"]
        assert [v for k, v in headers if k == b"content-length"] == [b"0"]
        assert messages[1]["body"] == b""


class TestSendResponse:
    async def test_single_body_message(self) -> None:
        messages, send = _collector()
        await send_response(normalize("hello"), send)

        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"
        assert headers[b"content-length"] == b"5"
        assert len(messages) == 2
        assert messages[1]["body"] == b"hello"

    async def test_header_names_lowercased(self) -> None:
        messages, send = _collector()
        await send_response(normalize((200, {"X-Custom": "v"}, "x")), send)
        assert (b"x-custom", b"v") in messages[0]["headers"]

    async def test_head_keeps_length_without_body(self) -> None:
        messages, send = _collector()
        await send_response(normalize("hello"), send, include_body=False)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"5"
        assert messages[1]["body"] == b""


class TestFileBodyStreaming:
    async def test_streams_in_chunks_and_closes(self, tmp_path) -> None:
        path = tmp_path / "data.txt"
        path.write_bytes(b"abcdefghij")
        file = await anyio.open_file(path, "rb")
        body = FileBody(file, path=str(path), size=10, chunk_size=4)

        messages, send = _collector()
        await send_response(normalize(Response(body=body)), send)

        chunks = [m["body"] for m in messages[1:]]
        assert chunks == [b"abcd", b"efgh", b"ij", b""]
        assert all(m["more_body"] for m in messages[1:-1])
        assert messages[-1]["more_body"] is False
        assert dict(messages[0]["headers"])[b"content-length"] == b"10"
        assert file.wrapped.closed

    async def test_head_closes_without_reading(self, tmp_path) -> None:
        path = tmp_path / "data.txt"
        path.write_bytes(b"abcdefghij")
        file = await anyio.open_file(path, "rb")
        body = FileBody(file, path=str(path), size=10)

        messages, send = _collector()
        await send_response(normalize(Response(body=body)), send, include_body=False)

        assert [m["body"] for m in messages[1:]] == [b""]
        assert file.wrapped.closed

    async def test_closes_when_send_fails(self, tmp_path) -> None:
        path = tmp_path / "data.txt"
        path.write_bytes(b"abcdefghij")
        file = await anyio.open_file(path, "rb")
        body = FileBody(file, path=str(path), size=10, chunk_size=4)

        async def send(message: dict) -> None:
            if message["type"] == "http.response.body":
                raise anyio.BrokenResourceError

        try:
            await send_response(normalize(Response(body=body)), send)
        except anyio.BrokenResourceError:
            pass
        assert file.wrapped.closed
