import ast
import os
import types
import builtins
import logging

from reading_mode import HOOK_NAMES

logger = logging.getLogger(__name__)

_ESCAPE_HATCH_NAMES = {
    "__import__",
    "eval",
    "exec",
    "compile",
    "open",
    "input",
    "globals",
    "locals",
    "vars",
    "importlib",
}
_SAFE_BUILTINS = {
    name: getattr(builtins, name)
    for name in [
        "len",
        "range",
        "min",
        "max",
        "sum",
        "sorted",
        "list",
        "dict",
        "set",
        "tuple",
        "enumerate",
        "zip",
        "abs",
        "all",
        "any",
        "bool",
        "int",
        "str",
        "print",
    ]
}


def _validate_extensions_ast(parsed):
    for n in ast.walk(parsed):
        if isinstance(n, (ast.Import, ast.ImportFrom)):
            raise ValueError("imports are not allowed in extensions.py")
        if isinstance(n, ast.Name) and isinstance(n.ctx, ast.Load):
            if n.id in _ESCAPE_HATCH_NAMES:
                raise ValueError(f"disallowed name in extensions.py: {n.id}")


def load_extension_hooks(path, view=None):
    """Read hook functions from extensions.py.

    Returns (hooks, warnings): hooks maps a name from HOOK_NAMES to the
    function defined under that name. `view` is visible to the hooks as a
    global so they can adjust the presentation.
    """
    hooks = {}
    warnings = []
    if not os.path.exists(path):
        return hooks, warnings
    try:
        with open(path, "r", encoding="utf-8") as f:
            src = f.read()
        parsed = ast.parse(src, filename=path)
        _validate_extensions_ast(parsed)

        g = {"__builtins__": _SAFE_BUILTINS, "view": view}
        exec(compile(parsed, path, "exec"), g, g)
        for name in HOOK_NAMES:
            val = g.get(name)
            if isinstance(val, types.FunctionType):
                hooks[name] = val
    except Exception as e:
        logger.exception("Failed to load %s", path)
        warnings.append(f"failed to load extensions.py: {e}")
    return hooks, warnings


def register_hooks(controller, hooks):
    for name in HOOK_NAMES:
        fn = hooks.get(name)
        if fn is not None:
            controller.add_hook(name, fn)
