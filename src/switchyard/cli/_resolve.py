"""Find the App a CLI target names.

Routes are registered when the app's module is imported, so the target
has to name the App object itself. ``run`` and ``routes`` then see the
same route table the module built.
"""

import importlib

from switchyard.app import App


def resolve_app(target: str) -> App:
    """Import ``"package.module:attribute"`` and return that App.

    A bare module path looks up ``app``.

    Raises:
        ValueError: If *target* has no module part.
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the module defines no such attribute.
        TypeError: If the attribute is not an App.
    """
    module_name, _, attr = target.partition(":")
    if not module_name:
        msg = f"{target!r} has no module part; use 'package.module:app'"
        raise ValueError(msg)
    attr = attr or "app"

    module = importlib.import_module(module_name)
    obj = getattr(module, attr, None)
    if obj is None:
        msg = f"{target!r}: module {module_name!r} has no {attr!r} to take routes from"
        raise AttributeError(msg)

    if not isinstance(obj, App):
        msg = (
            f"{target!r} is a {type(obj).__name__}, not a switchyard.App; "
            "point it at the App the routes are registered on"
        )
        raise TypeError(msg)

    return obj
