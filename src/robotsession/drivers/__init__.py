"""Driver protocol, registry and built-in drivers."""

from .base import Driver, DriverFactory
from .registry import DriverRegistry
from .selenium_driver import SeleniumDriver
from .wsgi import WSGIDriver

__all__ = [
    "Driver",
    "DriverFactory",
    "DriverRegistry",
    "SeleniumDriver",
    "WSGIDriver",
]
