"""Adapters for the built-in server backends.

Each adapter turns the generic ``(app, port, host, **options)`` call into the
backend's own invocation and returns a running ServerHandle. Caller options
are passed to the backend unchanged.
"""

from __future__ import annotations

import logging
from socketserver import ThreadingMixIn
from typing import Any, Optional
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

import uvicorn

from robotsession.errors import ServerStartError

from .handle import ServerHandle

logger = logging.getLogger(__name__)

DEFAULT_BIND_HOST = "127.0.0.1"


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """wsgiref server handling each request on its own thread."""

    daemon_threads = True


class QuietRequestHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:  # silence access log
        return


def run_wsgiref(app: Any, port: int, host: Optional[str] = None, **options: Any) -> ServerHandle:
    """Serve a WSGI app with the standard library's wsgiref server.

    Options are keyword arguments of ``wsgiref.simple_server.make_server``
    (``server_class``, ``handler_class``).
    """
    host = host or DEFAULT_BIND_HOST
    options.setdefault("server_class", ThreadingWSGIServer)
    options.setdefault("handler_class", QuietRequestHandler)
    try:
        server = make_server(host, port, app, **options)
    except OSError as e:
        raise ServerStartError(f"Server 'wsgiref' could not bind {host}:{port}: {e}") from e

    def shutdown() -> None:
        server.shutdown()
        server.server_close()

    handle = ServerHandle(name="wsgiref", host=host, port=port, app=app)
    return handle.start(server.serve_forever, shutdown)


def run_uvicorn(app: Any, port: int, host: Optional[str] = None, **options: Any) -> ServerHandle:
    """Serve an ASGI (or ``interface="wsgi"``) app with uvicorn.

    Options are keyword arguments of ``uvicorn.Config``, e.g. ``log_level``.
    """
    host = host or DEFAULT_BIND_HOST
    options.setdefault("log_level", "warning")
    config = uvicorn.Config(app, host=host, port=port, **options)
    server = uvicorn.Server(config)

    def shutdown() -> None:
        server.should_exit = True

    handle = ServerHandle(name="uvicorn", host=host, port=port, app=app)
    return handle.start(server.run, shutdown)
