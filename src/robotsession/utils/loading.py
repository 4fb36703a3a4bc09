"""Import applications from ``module:attribute`` references."""

import importlib
from typing import Any


def import_app(target: str) -> Any:
    """Import the object named by ``package.module:attribute``.

    The attribute part may be dotted (``module:holder.app``). Factories are
    not called; reference the application object itself.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Expected 'module:attribute', got {target!r}")

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from None
    return obj
