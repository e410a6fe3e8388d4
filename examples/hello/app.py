"""Hello World — the smallest wren app.

Demonstrates route descriptors, the decorator form, every handler return
shape, JSON and form echoing, and the static fallback from ``public/``.

Run:
    python app.py
    wren run app:app --port 3000
"""

from pathlib import Path

from wren import App, Context, NotFound, Response, get, post

app = App(public_dir=Path(__file__).parent / "public", port=3000)


def hi(ctx: Context):
    return 200, "hello"


def echo(ctx: Context):
    return ctx.params


app.handle(
    get("/hi", hi),
    get("/echo", echo),
    post("/echo", echo),
)


@app.route("/status")
def status(ctx: Context):
    return {"status": "ok"}


@app.route("/custom")
def custom(ctx: Context):
    return Response(status=201, body="Created").with_header("X-Custom", "wren")


@app.route("/greet")
async def greet(ctx: Context):
    name = ctx.params.get("name")
    if not name:
        raise NotFound("greet needs a name")
    return 200, {"Content-Type": "text/html; charset=utf-8"}, f"<h1>Hello, {name}!</h1>"


if __name__ == "__main__":
    app.run()
