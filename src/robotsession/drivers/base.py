"""Driver protocol.

A driver loads and inspects the rendered output of one application under some
automation backend. The session layer only relies on the members below and
never looks at a driver's internals.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class Driver(Protocol):
    """Minimum surface a driver must provide."""

    def visit(self, path: str) -> None:
        """Navigate to a path (or absolute URL)."""
        ...

    @property
    def body(self) -> str:
        """Content of the current page."""
        ...

    @property
    def current_url(self) -> Optional[str]:
        """URL of the current page, or None before the first visit."""
        ...

    def reset(self) -> None:
        """Forget per-visit state (cookies, current page)."""
        ...

    def quit(self) -> None:
        """Release any resource held by the driver."""
        ...


DriverFactory = Callable[[Any], Driver]
