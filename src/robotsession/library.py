"""SessionLibrary - Robot Framework keywords for robotsession.

Exposes the configuration, driver selection and session navigation of a
robotsession framework as Robot Framework keywords.
"""

import logging
from typing import Any, Optional

from robot.api import logger as rf_logger
from robot.api.deco import keyword, library

from robotsession import __version__
from robotsession.framework import Framework, get_framework
from robotsession.session import Session
from robotsession.utils.loading import import_app

logger = logging.getLogger(__name__)


@library(scope="GLOBAL", version=__version__, doc_format="ROBOT")
class SessionLibrary:
    """Drive a web application through robotsession drivers.

    = Configuration =

    | *** Settings ***
    | Library    robotsession.library.SessionLibrary
    | ...    app=myproject.wsgi:application
    | ...    driver=wsgi
    | ...    wait_time=5

    Or with a YAML settings file:
    | Library    robotsession.library.SessionLibrary    config=${CURDIR}/session.yaml

    = Examples =

    | *** Test Cases ***
    | Home Page Greets
    |     Visit    /
    |     Page Should Contain    Hello world!
    """

    def __init__(
        self,
        app: Optional[str] = None,
        driver: Optional[str] = None,
        wait_time: Optional[float] = None,
        app_host: Optional[str] = None,
        config: Optional[str] = None,
        framework: Optional[Framework] = None,
    ):
        """Initialize SessionLibrary.

        Args:
            app: Application reference as ``module:attribute``
            driver: Driver used for sessions (defaults to the configured default)
            wait_time: Seconds to wait for asynchronous page content
            app_host: Absolute URL of an already running application
            config: Path to a YAML settings file, applied before the other args
            framework: Framework to use instead of the process default
        """
        self.framework = framework or get_framework()
        if config:
            self.framework.load_settings(config)
        if wait_time is not None:
            self.framework.config.wait_time = float(wait_time)
        if app_host:
            self.framework.config.app_host = app_host
        if driver:
            self.framework.sessions.current_driver = driver
        if app:
            self.framework.sessions.app = import_app(app) if isinstance(app, str) else app

        rf_logger.info(
            f"SessionLibrary initialized with driver: {self.framework.sessions.current_driver}"
        )

    @property
    def session(self) -> Session:
        return self.framework.current_session()

    @keyword("Set Wait Time")
    def set_wait_time(self, seconds: float) -> None:
        """Set the time in seconds drivers wait for asynchronous content."""
        self.framework.config.wait_time = float(seconds)

    @keyword("Set App Host")
    def set_app_host(self, url: Optional[str] = None) -> None:
        """Point sessions at an already running application.

        Leave ``url`` empty to serve the application locally again.
        """
        self.framework.config.app_host = url or None

    @keyword("Use Server")
    def use_server(self, name: str, **options: Any) -> None:
        """Select the server backend used to serve the application.

        | Use Server    uvicorn    log_level=error
        """
        self.framework.config.set_server(name, **options)

    @keyword("Use Driver")
    def use_driver(self, name: Optional[str] = None) -> None:
        """Switch the current driver. Without a name, use the default driver."""
        if name:
            self.framework.sessions.current_driver = name
        else:
            self.framework.sessions.use_default_driver()
        logger.debug(f"Current driver is now {self.framework.sessions.current_driver!r}")

    @keyword("Visit")
    def visit(self, path: str) -> None:
        """Navigate the current session to ``path``."""
        self.session.visit(path)
        rf_logger.info(f"Visited {self.session.current_url}")

    @keyword("Get Page Body")
    def get_page_body(self) -> str:
        """Return the content of the current page."""
        return self.session.body

    @keyword("Page Should Contain")
    def page_should_contain(self, text: str) -> None:
        """Fail unless the current page contains ``text``."""
        if text not in self.session.body:
            raise AssertionError(f"Page should have contained text '{text}' but did not.")

    @keyword("Reset Sessions")
    def reset_sessions(self) -> None:
        """Reset every pooled session (cookies, current page)."""
        self.framework.reset_sessions()
