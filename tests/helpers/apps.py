"""Tiny applications served and driven by the tests."""

HELLO = "Hello world!"


def hello_app(environ, start_response):
    """WSGI app: greeting on /, redirect on /redirect, 404 elsewhere."""
    path = environ.get("PATH_INFO", "/")
    if path == "/":
        body = f"<html><body><h1>{HELLO}</h1></body></html>".encode("utf-8")
        start_response("200 OK", [("Content-Type", "text/html"), ("Content-Length", str(len(body)))])
        return [body]
    if path == "/redirect":
        start_response("302 Found", [("Location", "/"), ("Content-Length", "0")])
        return [b""]
    body = b"Not found"
    start_response("404 Not Found", [("Content-Type", "text/plain"), ("Content-Length", str(len(body)))])
    return [body]


async def hello_asgi(scope, receive, send):
    """ASGI app answering every HTTP request with the greeting."""
    if scope["type"] == "lifespan":
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
    body = HELLO.encode("utf-8")
    await send({
        "type": "http.response.start",
        "status": 200,
        "headers": [(b"content-type", b"text/plain"), (b"content-length", str(len(body)).encode())],
    })
    await send({"type": "http.response.body", "body": body})
