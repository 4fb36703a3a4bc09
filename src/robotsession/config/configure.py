"""Legacy ``configure`` block support.

``configure`` hands a block a ConfigProxy. The proxy exposes the configuration
options as plain attributes. Framework methods such as ``register_driver`` can
still be called through it for backward compatibility, but each such call
emits a DeprecationWarning and is forwarded to the framework unchanged.

Example:
    @robotsession.configure
    def _(config):
        config.wait_time = 5
        config.app_host = "http://localhost:3000"
"""

from __future__ import annotations

import functools
import logging
import warnings
from typing import TYPE_CHECKING, Any, Callable, Optional

from .settings import SETTABLE_OPTIONS

if TYPE_CHECKING:
    from robotsession.framework import Framework

logger = logging.getLogger(__name__)

CONFIG_OPTIONS = SETTABLE_OPTIONS

# Framework methods that may still be reached through the proxy.
FORWARDABLE_METHODS = frozenset({
    "register_driver",
    "register_server",
    "start_server",
    "run_default_server",
    "new_session",
    "current_session",
    "reset_sessions",
    "using_wait_time",
    "load_settings",
    "apply_env",
})

DEPRECATION_MESSAGE = (
    "Calling {name} from robotsession.configure is deprecated - please call it on "
    "robotsession directly ( robotsession.{name}(...) )"
)


class ConfigProxy:
    """Restricted view of a framework handed to ``configure`` blocks."""

    __slots__ = ("_framework",)

    def __init__(self, framework: "Framework"):
        object.__setattr__(self, "_framework", framework)

    def __getattr__(self, name: str) -> Any:
        if name in CONFIG_OPTIONS:
            return getattr(self._framework.config, name)
        if name in FORWARDABLE_METHODS:
            return functools.partial(self.forward, name)
        raise AttributeError(f"{name!r} is not a configuration option")

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in CONFIG_OPTIONS:
            raise AttributeError(f"{name!r} is not a configuration option")
        setattr(self._framework.config, name, value)

    def forward(self, method_name: str, *args: Any, **kwargs: Any) -> Any:
        """Call a framework method after warning that this form is deprecated."""
        if method_name not in FORWARDABLE_METHODS:
            raise AttributeError(f"{method_name!r} cannot be called from configure")
        method = getattr(self._framework, method_name)
        warnings.warn(
            DEPRECATION_MESSAGE.format(name=method_name),
            DeprecationWarning,
            stacklevel=2,
        )
        return method(*args, **kwargs)


def configure(
    block: Callable[[ConfigProxy], Any], framework: Optional["Framework"] = None
) -> Callable[[ConfigProxy], Any]:
    """Run ``block`` with a ConfigProxy and return the block.

    Settings applied before an exception inside the block stay applied; the
    exception propagates unchanged.
    """
    if framework is None:
        from robotsession.framework import get_framework

        framework = get_framework()
    block(ConfigProxy(framework))
    return block
