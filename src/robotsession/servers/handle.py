"""Handles for servers running on background threads."""

from __future__ import annotations

import logging
import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from robotsession.errors import ServerStartError

logger = logging.getLogger(__name__)

STARTUP_TIMEOUT = 10.0
STARTUP_POLL_INTERVAL = 0.05


def find_available_port(host: str = "127.0.0.1") -> int:
    """Ask the OS for a free TCP port on ``host``."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


def _connect_host(host: str) -> str:
    # Wildcard binds are reached through loopback.
    return "127.0.0.1" if host in ("", "0.0.0.0") else host


@dataclass
class ServerHandle:
    """Reference to a server running on a daemon thread.

    Attributes:
        name: Registry name of the backend that launched the server
        host: Interface the server is bound to
        port: Port the server listens on
        app: The application being served
        error: Exception raised by the serve loop, if it crashed
    """

    name: str
    host: str
    port: int
    app: Any = field(default=None, repr=False)
    error: Optional[BaseException] = field(default=None, repr=False)
    _thread: Optional[threading.Thread] = field(default=None, repr=False)
    _shutdown: Optional[Callable[[], None]] = field(default=None, repr=False)
    _stopped: bool = field(default=False, repr=False)

    @property
    def url(self) -> str:
        return f"http://{_connect_host(self.host)}:{self.port}"

    @property
    def is_running(self) -> bool:
        return (
            not self._stopped
            and self._thread is not None
            and self._thread.is_alive()
        )

    def start(
        self,
        serve: Callable[[], None],
        shutdown: Callable[[], None],
        timeout: float = STARTUP_TIMEOUT,
    ) -> "ServerHandle":
        """Run ``serve`` on a daemon thread and wait until the port answers."""
        self._shutdown = shutdown
        self._thread = threading.Thread(
            target=self._run,
            args=(serve,),
            name=f"robotsession-{self.name}-{self.port}",
            daemon=True,
        )
        self._thread.start()
        self._wait_until_responsive(timeout)
        logger.info(f"Server {self.name!r} listening on {self.url}")
        return self

    def _run(self, serve: Callable[[], None]) -> None:
        try:
            serve()
        except BaseException as e:
            self.error = e
            logger.error(f"Server {self.name!r} on port {self.port} crashed: {e}")

    def _wait_until_responsive(self, timeout: float) -> None:
        deadline = time.monotonic() + timeout
        address = (_connect_host(self.host), self.port)
        while time.monotonic() < deadline:
            if self.error is not None:
                raise ServerStartError(
                    f"Server {self.name!r} failed to start on port {self.port}: {self.error}"
                ) from self.error
            try:
                with socket.create_connection(address, timeout=STARTUP_POLL_INTERVAL):
                    return
            except OSError:
                time.sleep(STARTUP_POLL_INTERVAL)
        raise ServerStartError(
            f"Server {self.name!r} did not respond on {self.url} within {timeout}s"
        )

    def stop(self, timeout: float = 5.0) -> None:
        """Ask the backend to shut down and join its thread."""
        if self._stopped:
            return
        self._stopped = True
        if self._shutdown is None:
            logger.warning(f"Server {self.name!r} on port {self.port} was never started")
            return
        self._shutdown()
        if self._thread is not None:
            self._thread.join(timeout)
        logger.info(f"Server {self.name!r} on port {self.port} stopped")

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the serve loop exits."""
        if self._thread is not None:
            self._thread.join(timeout)
