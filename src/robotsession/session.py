"""Sessions bind a driver name to an application."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Optional

from robotsession.drivers.base import Driver

if TYPE_CHECKING:
    from robotsession.framework import Framework

logger = logging.getLogger(__name__)


class Session:
    """The unit through which tests talk to a driver.

    Construction stores its inputs and does no I/O. The driver is resolved
    through the framework's driver registry on first access and cached for the
    lifetime of the session. A failed resolution leaves the cache empty, so the
    next access tries again (e.g. after the missing driver was registered).

    Usage:
        session = Session("wsgi", app)
        session.visit("/")
        assert "Hello world!" in session.body
    """

    def __init__(self, driver_name: str, app: Any, framework: Optional["Framework"] = None):
        self._driver_name = driver_name
        self.app = app
        self._framework = framework
        self._driver: Optional[Driver] = None
        self._lock = threading.Lock()

    @property
    def driver_name(self) -> str:
        return self._driver_name

    @property
    def framework(self) -> "Framework":
        if self._framework is None:
            from robotsession.framework import get_framework

            self._framework = get_framework()
        return self._framework

    @property
    def is_resolved(self) -> bool:
        return self._driver is not None

    @property
    def driver(self) -> Driver:
        if self._driver is None:
            with self._lock:
                if self._driver is None:
                    self._driver = self.framework.drivers.resolve(self._driver_name, self.app)
        return self._driver

    def visit(self, path: str) -> None:
        self.driver.visit(path)

    @property
    def body(self) -> str:
        return self.driver.body

    html = body

    @property
    def current_url(self) -> Optional[str]:
        return self.driver.current_url

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.driver, "status_code", None)

    def reset(self) -> None:
        """Reset per-visit driver state; does nothing before the driver exists."""
        if self._driver is not None:
            self._driver.reset()

    def quit(self) -> None:
        """Close the driver and forget it. The next access builds a new one."""
        with self._lock:
            driver, self._driver = self._driver, None
        if driver is not None:
            driver.quit()

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "unresolved"
        return f"<Session driver={self._driver_name!r} {state}>"
