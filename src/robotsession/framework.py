"""Framework object owning configuration, registries and sessions.

Usage:
    from robotsession import get_framework

    framework = get_framework()
    framework.register_driver("schmoo", lambda app: WSGIDriver(app))
    framework.config.app_host = "http://localhost:3000"
    session = framework.new_session("schmoo", app)

The module-level helpers in ``robotsession`` delegate to ``get_framework()``.
Tests that need isolation call ``reset_framework()`` between cases.
"""

from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping, Optional, Union

from robotsession.config.loader import load_settings, settings_from_env
from robotsession.config.settings import ConfigStore
from robotsession.drivers.base import Driver, DriverFactory
from robotsession.drivers.registry import DriverRegistry
from robotsession.drivers.selenium_driver import SeleniumDriver
from robotsession.drivers.wsgi import WSGIDriver
from robotsession.servers.registry import ServerFactory, ServerRegistry
from robotsession.session import Session
from robotsession.session_pool import SessionPool

logger = logging.getLogger(__name__)

# Singleton framework instance
_framework: Optional["Framework"] = None


class Framework:
    """Owns one ConfigStore, DriverRegistry, ServerRegistry and SessionPool.

    Attributes:
        config: Process-wide settings
        drivers: Named driver factories
        servers: Named server factories and running servers
        sessions: Pooled sessions for the current driver
    """

    def __init__(self) -> None:
        self.config = ConfigStore()
        self.drivers = DriverRegistry(
            builtins={
                "wsgi": self._build_wsgi_driver,
                "selenium": self._build_selenium_driver,
                "selenium_chrome": self._build_selenium_chrome_driver,
            }
        )
        # Late-bound so the default runner can be replaced on the instance.
        self.servers = ServerRegistry(
            default_runner=lambda app, port: self.run_default_server(app, port)
        )
        self.sessions = SessionPool(self)

    # ------------------------------------------------------------------
    # built-in drivers
    # ------------------------------------------------------------------

    def _build_wsgi_driver(self, app: Any) -> WSGIDriver:
        return WSGIDriver(app, config=self.config)

    def _build_selenium_driver(self, app: Any) -> SeleniumDriver:
        return SeleniumDriver(app, framework=self)

    def _build_selenium_chrome_driver(self, app: Any) -> SeleniumDriver:
        return SeleniumDriver(app, framework=self, browser="chrome")

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------

    def register_driver(
        self, name: str, factory: Optional[DriverFactory] = None
    ) -> Optional[Callable[[DriverFactory], DriverFactory]]:
        """Register a driver factory, or return a decorator when none is given."""
        if factory is None:
            def decorator(func: DriverFactory) -> DriverFactory:
                self.drivers.register(name, func)
                return func
            return decorator
        self.drivers.register(name, factory)
        return None

    def register_server(
        self, name: str, factory: Optional[ServerFactory] = None
    ) -> Optional[Callable[[ServerFactory], ServerFactory]]:
        """Register a server factory, or return a decorator when none is given."""
        if factory is None:
            def decorator(func: ServerFactory) -> ServerFactory:
                self.servers.register(name, func)
                return func
            return decorator
        self.servers.register(name, factory)
        return None

    def configure(self, block: Callable[..., Any]) -> Callable[..., Any]:
        """Run ``block(config)`` with a configuration proxy."""
        from robotsession.config.configure import configure

        return configure(block, framework=self)

    # ------------------------------------------------------------------
    # settings sources
    # ------------------------------------------------------------------

    def load_settings(self, path: Union[str, Path]) -> None:
        self.config.apply(load_settings(path))

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.config.apply(settings_from_env(environ))

    @contextmanager
    def using_wait_time(self, seconds: Any) -> Iterator[None]:
        previous = self.config.wait_time
        self.config.wait_time = seconds
        try:
            yield
        finally:
            self.config.wait_time = previous

    # ------------------------------------------------------------------
    # servers
    # ------------------------------------------------------------------

    @property
    def server(self) -> ServerFactory:
        """Factory of the configured server with its options bound in."""
        factory = self.servers.get(self.config.server_name)
        options = self.config.server_options
        if options:
            return functools.partial(factory, **options)
        return factory

    def run_default_server(self, app: Any, port: int) -> Any:
        """Fallback runner behind the ``default`` server entry."""
        return self.servers.get("wsgiref")(app, port, self.config.server_host)

    def start_server(
        self,
        app: Any,
        port: Optional[int] = None,
        host: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Any:
        """Start server ``name`` (the configured one by default) for ``app``.

        The configured options bag is merged into the factory call and
        ``reuse_server`` decides whether a running server with the same
        ``(name, port, host)`` is returned instead of launching another.
        """
        return self.servers.start(
            name or self.config.server_name,
            app,
            port if port is not None else self.config.server_port,
            host or self.config.server_host,
            options=self.config.server_options,
            reuse=self.config.reuse_server,
        )

    # ------------------------------------------------------------------
    # sessions
    # ------------------------------------------------------------------

    def new_session(self, driver_name: Optional[str] = None, app: Any = None) -> Session:
        return Session(driver_name or self.config.default_driver, app, framework=self)

    def resolve_driver(self, name: str, app: Any) -> Driver:
        return self.drivers.resolve(name, app)

    def current_session(self) -> Session:
        return self.sessions.current_session()

    def reset_sessions(self) -> None:
        self.sessions.reset_sessions()

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def shutdown(self) -> None:
        """Quit pooled sessions and stop every launched server."""
        self.sessions.clear()
        self.servers.stop_all()

    def reset(self) -> None:
        """Shut down and restore defaults for settings and registries."""
        self.shutdown()
        self.config.reset()
        self.drivers.reset()
        self.servers.reset()
        self.sessions = SessionPool(self)


def get_framework() -> Framework:
    """Get the process-wide default framework."""
    global _framework
    if _framework is None:
        _framework = Framework()
    return _framework


def reset_framework() -> None:
    """Shut down and drop the default framework (for testing).

    A fresh instance is created on the next get_framework() call.
    """
    global _framework
    if _framework is not None:
        _framework.shutdown()
    _framework = None
