"""Selenium WebDriver driver.

Drives a real browser against the application. Unless ``app_host`` points at
an already running site, the application is served locally through the
framework's configured server backend before the first navigation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urljoin

from robotsession.config.settings import is_absolute_url

if TYPE_CHECKING:
    from robotsession.framework import Framework

logger = logging.getLogger(__name__)

# Check for selenium availability
try:
    from selenium import webdriver

    SELENIUM_AVAILABLE = True
except ImportError:
    webdriver = None  # type: ignore
    SELENIUM_AVAILABLE = False
    logger.debug("selenium not available")


BROWSER_CLASSES = {
    "firefox": "Firefox",
    "chrome": "Chrome",
    "edge": "Edge",
    "safari": "Safari",
}


class SeleniumDriver:
    """Driver backed by a Selenium WebDriver browser."""

    needs_server = True

    def __init__(
        self,
        app: Any,
        framework: "Framework",
        browser: str = "firefox",
        options: Any = None,
    ):
        if browser not in BROWSER_CLASSES:
            raise ValueError(
                f"Unsupported browser {browser!r}, expected one of {sorted(BROWSER_CLASSES)}"
            )
        self.app = app
        self.framework = framework
        self.browser_name = browser
        self.browser_options = options
        self.server = None
        self._browser = None

    @property
    def browser(self):
        if self._browser is None:
            if not SELENIUM_AVAILABLE:
                raise RuntimeError(
                    "selenium is not available. "
                    "Install with: pip install rf-session[selenium]"
                )
            browser_cls = getattr(webdriver, BROWSER_CLASSES[self.browser_name])
            if self.browser_options is not None:
                self._browser = browser_cls(options=self.browser_options)
            else:
                self._browser = browser_cls()
            self._browser.implicitly_wait(self.framework.config.wait_time)
            logger.info(f"Started {self.browser_name} browser")
        return self._browser

    def _base_url(self) -> str:
        config = self.framework.config
        if config.app_host:
            return config.app_host
        if config.run_server and self.app is not None:
            if self.server is None or not getattr(self.server, "is_running", True):
                self.server = self.framework.start_server(self.app)
            return self.server.url
        return config.default_host or ""

    def visit(self, path: str) -> None:
        url = path if is_absolute_url(path) else urljoin(self._base_url(), path)
        logger.debug(f"Navigating to {url}")
        self.browser.get(url)

    @property
    def body(self) -> str:
        return self.browser.page_source

    html = body

    @property
    def current_url(self) -> Optional[str]:
        if self._browser is None:
            return None
        return self._browser.current_url

    def reset(self) -> None:
        if self._browser is not None:
            self._browser.delete_all_cookies()
            self._browser.get("about:blank")

    def quit(self) -> None:
        if self._browser is not None:
            self._browser.quit()
            self._browser = None
