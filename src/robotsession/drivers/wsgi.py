"""In-process driver for WSGI applications.

Requests are handed straight to the application through httpx's WSGI
transport, so no server or browser is involved. JavaScript is not executed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

if TYPE_CHECKING:
    from robotsession.config.settings import ConfigStore

logger = logging.getLogger(__name__)

FALLBACK_BASE_URL = "http://www.example.com"


class WSGIDriver:
    """Driver that calls a WSGI app in the current process."""

    needs_server = False

    def __init__(
        self,
        app: Any,
        config: Optional["ConfigStore"] = None,
        base_url: Optional[str] = None,
    ):
        if app is None:
            raise ValueError("WSGIDriver requires an application")
        self.app = app
        self._config = config
        self._base_url = base_url
        self._client: Optional[httpx.Client] = None
        self._response: Optional[httpx.Response] = None

    @property
    def base_url(self) -> str:
        """Explicit base URL, else the configured app_host or default_host."""
        if self._base_url:
            return self._base_url
        if self._config is not None:
            return self._config.app_host or self._config.default_host or FALLBACK_BASE_URL
        return FALLBACK_BASE_URL

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                transport=httpx.WSGITransport(app=self.app),
                base_url=self.base_url,
                follow_redirects=True,
            )
        return self._client

    def visit(self, path: str) -> None:
        self._response = self.client.get(path)
        logger.debug(f"GET {self._response.url} -> {self._response.status_code}")

    @property
    def response(self) -> Optional[httpx.Response]:
        return self._response

    @property
    def body(self) -> str:
        return self._response.text if self._response is not None else ""

    html = body

    @property
    def current_url(self) -> Optional[str]:
        return str(self._response.url) if self._response is not None else None

    @property
    def status_code(self) -> Optional[int]:
        return self._response.status_code if self._response is not None else None

    @property
    def response_headers(self) -> Dict[str, str]:
        return dict(self._response.headers) if self._response is not None else {}

    def reset(self) -> None:
        self._response = None
        if self._client is not None:
            self._client.cookies.clear()

    def quit(self) -> None:
        self._response = None
        if self._client is not None:
            self._client.close()
            self._client = None
