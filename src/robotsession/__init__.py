"""robotsession - driver and server registries for browser test sessions."""

from typing import Any, Callable, Optional

from robotsession.errors import (
    ConfigurationError,
    DriverNotFoundError,
    RobotSessionError,
    ServerNotFoundError,
    ServerStartError,
)
from robotsession.framework import Framework, get_framework, reset_framework
from robotsession.session import Session

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DriverNotFoundError",
    "Framework",
    "RobotSessionError",
    "ServerNotFoundError",
    "ServerStartError",
    "Session",
    "configure",
    "get_framework",
    "register_driver",
    "register_server",
    "reset_framework",
]


def register_driver(name: str, factory: Optional[Callable[[Any], Any]] = None):
    """Register a driver factory on the default framework."""
    return get_framework().register_driver(name, factory)


def register_server(name: str, factory: Optional[Callable[..., Any]] = None):
    """Register a server factory on the default framework."""
    return get_framework().register_server(name, factory)


def configure(block: Callable[..., Any]) -> Callable[..., Any]:
    """Run a configuration block against the default framework."""
    return get_framework().configure(block)
