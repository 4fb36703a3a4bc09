"""Named, pooled sessions for the current driver and application."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple

from .session import Session

if TYPE_CHECKING:
    from robotsession.framework import Framework

logger = logging.getLogger(__name__)

DEFAULT_SESSION_NAME = "default"


class SessionPool:
    """Keeps one Session per ``(driver, session name, app)`` combination."""

    def __init__(self, framework: "Framework"):
        self._framework = framework
        self._sessions: Dict[Tuple[str, str, int], Session] = {}
        self._current_driver: Optional[str] = None
        self.session_name: str = DEFAULT_SESSION_NAME
        self.app: Any = None

    @property
    def current_driver(self) -> str:
        return self._current_driver or self._framework.config.default_driver

    @current_driver.setter
    def current_driver(self, name: Optional[str]) -> None:
        self._current_driver = name

    def use_default_driver(self) -> None:
        self._current_driver = None

    def current_session(self) -> Session:
        """Return the pooled session for the current driver, name and app."""
        key = (self.current_driver, self.session_name, id(self.app))
        session = self._sessions.get(key)
        # ids are only unique among live objects; confirm the app itself matches.
        if session is not None and session.app is not self.app:
            session.quit()
            session = None
        if session is None:
            session = Session(self.current_driver, self.app, framework=self._framework)
            self._sessions[key] = session
            logger.debug(f"Created session {self.session_name!r} for driver {self.current_driver!r}")
        return session

    @contextmanager
    def using_session(self, name: str) -> Iterator[Session]:
        previous = self.session_name
        self.session_name = name
        try:
            yield self.current_session()
        finally:
            self.session_name = previous

    @contextmanager
    def using_driver(self, name: str) -> Iterator[Session]:
        previous = self._current_driver
        self._current_driver = name
        try:
            yield self.current_session()
        finally:
            self._current_driver = previous

    def sessions(self) -> List[Session]:
        return list(self._sessions.values())

    def reset_sessions(self) -> None:
        for session in self._sessions.values():
            session.reset()

    def clear(self) -> None:
        """Quit every pooled session and forget them."""
        sessions, self._sessions = self._sessions, {}
        for session in sessions.values():
            session.quit()
