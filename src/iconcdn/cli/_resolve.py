"""App import resolution — resolves ``"module:attribute"`` strings to IconCDN instances."""

import importlib

from iconcdn.app import IconCDN


def resolve_app(import_string: str) -> IconCDN:
    """Resolve an import string to an IconCDN instance.

    Accepts ``"module:attribute"``; the attribute defaults to ``app``.
    A callable that is not already an app is treated as a factory and
    called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an IconCDN or a factory for one.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, IconCDN):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, IconCDN):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not an iconcdn.IconCDN instance"
        raise TypeError(msg)

    return obj
