"""Process-wide configuration for drivers, sessions and local servers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import urlparse

from robotsession.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_WAIT_TIME = 2
DEFAULT_HOST = "http://www.example.com"
DEFAULT_SERVER = "default"
DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_DRIVER = "wsgi"

ServerSetting = Union[str, Tuple[str, Mapping[Any, Any]]]


def is_absolute_url(value: str) -> bool:
    """Check that a URL carries both a scheme and a host."""
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


class ConfigStore:
    """Mutable settings record with per-field validation.

    Every setter is synchronous and independent of the others; there are no
    cross-field invariants. The URL fields are the only ones that can reject a
    value, and they do so at assignment time.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Restore every field to its default."""
        self._wait_time: Any = DEFAULT_WAIT_TIME
        self._app_host: Optional[str] = None
        self._default_host: Optional[str] = DEFAULT_HOST
        self._server_name: str = DEFAULT_SERVER
        self._server_options: Dict[Any, Any] = {}
        self._reuse_server: bool = True
        self.server_host: str = DEFAULT_SERVER_HOST
        self.server_port: Optional[int] = None
        self.run_server: bool = True
        self.default_driver: str = DEFAULT_DRIVER

    # ------------------------------------------------------------------
    # wait time
    # ------------------------------------------------------------------

    @property
    def wait_time(self) -> Any:
        return self._wait_time

    @wait_time.setter
    def wait_time(self, seconds: Any) -> None:
        self._wait_time = seconds

    def set_wait_time(self, seconds: Any) -> None:
        self.wait_time = seconds

    def get_wait_time(self) -> Any:
        return self.wait_time

    # ------------------------------------------------------------------
    # hosts
    # ------------------------------------------------------------------

    @property
    def app_host(self) -> Optional[str]:
        return self._app_host

    @app_host.setter
    def app_host(self, url: Optional[str]) -> None:
        self._app_host = self._validate_url("app_host", url)

    def set_app_host(self, url: Optional[str]) -> None:
        self.app_host = url

    @property
    def default_host(self) -> Optional[str]:
        return self._default_host

    @default_host.setter
    def default_host(self, url: Optional[str]) -> None:
        self._default_host = self._validate_url("default_host", url)

    def set_default_host(self, url: Optional[str]) -> None:
        self.default_host = url

    @staticmethod
    def _validate_url(option: str, url: Optional[str]) -> Optional[str]:
        if url is None:
            return None
        if not isinstance(url, str) or not is_absolute_url(url):
            raise ConfigurationError(
                option,
                f"{option} should be set to a url (ex: 'http://www.example.com'). "
                f"Attempted to set {url!r}.",
            )
        return url

    # ------------------------------------------------------------------
    # server selection
    # ------------------------------------------------------------------

    @property
    def server_name(self) -> str:
        return self._server_name

    @property
    def server_options(self) -> Dict[Any, Any]:
        """Copy of the options bag passed to the selected server factory."""
        return dict(self._server_options)

    @property
    def server(self) -> Tuple[str, Dict[Any, Any]]:
        return self._server_name, self.server_options

    @server.setter
    def server(self, value: ServerSetting) -> None:
        if isinstance(value, tuple):
            name, options = value
            self.set_server(name, options)
        else:
            self.set_server(value)

    def set_server(
        self, name: str, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any
    ) -> None:
        """Select a server backend by name.

        ``options`` is a free-form mapping handed to the server factory; keyword
        arguments are merged on top of it. Keys are not validated.

        The name is not checked against the server registry here; an unknown
        name only fails when a server is started.
        """
        self._server_name = name
        options = dict(options or {}, **kwargs)
        self._server_options = options
        logger.debug(f"Server set to {name!r} with options {options}")

    @property
    def reuse_server(self) -> bool:
        return self._reuse_server

    @reuse_server.setter
    def reuse_server(self, flag: bool) -> None:
        self._reuse_server = bool(flag)

    def set_reuse_server(self, flag: bool) -> None:
        self.reuse_server = flag

    # ------------------------------------------------------------------
    # bulk access
    # ------------------------------------------------------------------

    def apply(self, values: Mapping[str, Any]) -> None:
        """Apply a mapping of option names to values through the setters."""
        for key, value in values.items():
            if key not in SETTABLE_OPTIONS:
                raise ConfigurationError(key, f"Unknown configuration key: {key}")
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wait_time": self.wait_time,
            "app_host": self.app_host,
            "default_host": self.default_host,
            "server": self.server_name,
            "server_options": self.server_options,
            "reuse_server": self.reuse_server,
            "server_host": self.server_host,
            "server_port": self.server_port,
            "run_server": self.run_server,
            "default_driver": self.default_driver,
        }


SETTABLE_OPTIONS = frozenset({
    "wait_time",
    "app_host",
    "default_host",
    "server",
    "reuse_server",
    "server_host",
    "server_port",
    "run_server",
    "default_driver",
})
