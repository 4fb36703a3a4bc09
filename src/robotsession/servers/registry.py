"""Named server factories and the running-server cache."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from robotsession.errors import ServerNotFoundError

from .backends import DEFAULT_BIND_HOST, run_uvicorn, run_wsgiref
from .handle import find_available_port

logger = logging.getLogger(__name__)

ServerFactory = Callable[..., Any]
DefaultRunner = Callable[[Any, int], Any]

ServerSignature = Tuple[str, Optional[int], Optional[str]]


class ServerRegistry:
    """Mapping from server name to ``factory(app, port, host, **options)``.

    Built-in entries:
        default: delegates to ``default_runner(app, port)``
        wsgiref: standard library wsgiref server
        uvicorn: uvicorn ASGI server

    Registration has the same overwrite semantics as the driver registry.
    ``start`` keeps the handles it launched so that a later call with the same
    ``(name, port, host)`` signature can reuse a running server.

    Concurrency:
        ``register`` is unsynchronised and meant for the setup phase.
        ``start`` holds a lock across lookup and launch so two concurrent
        callers never launch duplicate servers for one signature.
    """

    def __init__(self, default_runner: Optional[DefaultRunner] = None):
        self.default_runner = default_runner
        self._factories: Dict[str, ServerFactory] = {}
        self._running: Dict[ServerSignature, Any] = {}
        self._launched: List[Any] = []
        self._lock = threading.Lock()
        self._register_builtins()

    def _register_builtins(self) -> None:
        self._factories["default"] = self._run_default
        self._factories["wsgiref"] = run_wsgiref
        self._factories["uvicorn"] = run_uvicorn

    def _run_default(self, app: Any, port: int, host: Optional[str] = None, **options: Any) -> Any:
        if self.default_runner is None:
            return run_wsgiref(app, port, host)
        return self.default_runner(app, port)

    def register(self, name: str, factory: ServerFactory) -> None:
        """Insert or replace a server factory.

        Handles already launched under ``name`` keep running and stay valid
        for whoever holds them, but they leave the reuse cache so the next
        ``start`` goes through the new factory.
        """
        with self._lock:
            stale = [key for key in self._running if key[0] == name]
            for key in stale:
                del self._running[key]
        if name in self._factories:
            logger.debug(f"Replacing server factory {name!r}")
        else:
            logger.debug(f"Registering server factory {name!r}")
        self._factories[name] = factory

    def get(self, name: str) -> ServerFactory:
        try:
            return self._factories[name]
        except KeyError:
            raise ServerNotFoundError(name, self._factories) from None

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def start(
        self,
        name: str,
        app: Any,
        port: Optional[int] = None,
        host: Optional[str] = None,
        *,
        options: Optional[Mapping[str, Any]] = None,
        reuse: bool = False,
    ) -> Any:
        """Launch (or reuse) a server for ``app`` and return its handle.

        This is the low-level entry point: options and reuse are taken as
        given. ``Framework.start_server`` fills them from the configuration.

        Args:
            name: Registered server name
            app: Application to serve
            port: Port to listen on; a free one is chosen when None
            host: Interface to bind; passed to the factory as given
            options: Extra keyword arguments for the factory
            reuse: Return the running handle with the same signature if any

        Raises:
            ServerNotFoundError: If ``name`` is not registered
        """
        signature: ServerSignature = (name, port, host)
        with self._lock:
            factory = self.get(name)
            if reuse:
                existing = self._running.get(signature)
                if existing is not None and getattr(existing, "is_running", True):
                    logger.debug(f"Reusing server {name!r} for {signature}")
                    return existing

            launch_port = port
            if launch_port is None:
                launch_port = find_available_port(host or DEFAULT_BIND_HOST)

            handle = factory(app, launch_port, host, **dict(options or {}))
            self._running[signature] = handle
            self._launched.append(handle)
            logger.info(f"Started server {name!r} on port {launch_port}")
            return handle

    def running(self) -> List[Any]:
        """Handles launched by this registry that are still running."""
        return [h for h in self._launched if getattr(h, "is_running", False)]

    def stop_all(self) -> None:
        """Stop every handle this registry launched."""
        with self._lock:
            launched, self._launched = self._launched, []
            self._running.clear()
        for handle in launched:
            stop = getattr(handle, "stop", None)
            if callable(stop):
                stop()

    def reset(self) -> None:
        """Stop launched servers and restore the built-in factories."""
        self.stop_all()
        self._factories = {}
        self._register_builtins()
