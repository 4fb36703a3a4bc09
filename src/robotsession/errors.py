"""Exception types raised by robotsession.

Validation errors are raised at the point of assignment, lookup errors when a
name is resolved. Nothing here is retried by the library itself.
"""

from typing import Iterable, Optional


class RobotSessionError(Exception):
    """Base class for all robotsession errors."""


class ConfigurationError(RobotSessionError, ValueError):
    """A configuration value was rejected by its setter."""

    def __init__(self, option: str, message: str):
        super().__init__(message)
        self.option = option


class RegistryLookupError(RobotSessionError, LookupError):
    """A name was not found in a registry."""

    kind = "entry"

    def __init__(self, name: str, available: Optional[Iterable[str]] = None):
        self.name = name
        self.available = sorted(available or [])
        super().__init__(
            f"no {self.kind} called {name!r} was found, "
            f"available {self.kind}s: {', '.join(self.available) or 'none'}"
        )


class DriverNotFoundError(RegistryLookupError):
    """No driver factory is registered under the requested name."""

    kind = "driver"


class ServerNotFoundError(RegistryLookupError):
    """No server factory is registered under the requested name."""

    kind = "server"


class ServerStartError(RobotSessionError, RuntimeError):
    """A server backend failed before it started accepting connections."""
