"""Named driver factories."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from robotsession.errors import DriverNotFoundError

from .base import Driver, DriverFactory

logger = logging.getLogger(__name__)


class DriverRegistry:
    """Mapping from driver name to ``factory(app) -> Driver``.

    Registering an existing name replaces the previous factory. Entries are
    never removed except by ``reset``. Lookups are exact string matches and
    fail at resolve time, not at registration or session construction time.
    """

    def __init__(self, builtins: Optional[Dict[str, DriverFactory]] = None):
        self._builtins: Dict[str, DriverFactory] = dict(builtins or {})
        self._factories: Dict[str, DriverFactory] = dict(self._builtins)

    def register(self, name: str, factory: DriverFactory) -> None:
        if name in self._factories:
            logger.debug(f"Replacing driver factory {name!r}")
        else:
            logger.debug(f"Registering driver factory {name!r}")
        self._factories[name] = factory

    def get(self, name: str) -> DriverFactory:
        try:
            return self._factories[name]
        except KeyError:
            raise DriverNotFoundError(name, self._factories) from None

    def resolve(self, name: str, app: Any) -> Driver:
        """Build a new driver for ``app`` from the factory registered as ``name``.

        The factory runs on every call, so two sessions sharing a driver name
        each get their own instance.
        """
        factory = self.get(name)
        driver = factory(app)
        logger.info(f"Created {type(driver).__name__} for driver {name!r}")
        return driver

    def names(self) -> List[str]:
        return sorted(self._factories)

    def reset(self) -> None:
        """Drop user registrations and restore the built-in drivers."""
        self._factories = dict(self._builtins)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)
