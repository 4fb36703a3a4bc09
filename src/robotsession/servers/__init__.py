"""Server registry, built-in backends and server handles."""

from .backends import run_uvicorn, run_wsgiref
from .handle import ServerHandle, find_available_port
from .registry import ServerFactory, ServerRegistry

__all__ = [
    "ServerFactory",
    "ServerHandle",
    "ServerRegistry",
    "find_available_port",
    "run_uvicorn",
    "run_wsgiref",
]
