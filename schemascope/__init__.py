"""schemascope - schema tree, fuzzy object search, SQL completion and DDL rendering."""

import logging
from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Settings",
    "analyze",
    "build_tree",
    "get_completions",
    "load_settings",
    "search",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

if TYPE_CHECKING:
    from .config import Settings, load_settings
    from .domains.explorer.search import search
    from .domains.explorer.tree import build_tree
    from .sql_completion import analyze, get_completions


def __getattr__(name: str) -> Any:
    """Lazy import of the public entry points."""
    if name in ("Settings", "load_settings"):
        from . import config

        return getattr(config, name)
    if name == "build_tree":
        from .domains.explorer.tree import build_tree

        return build_tree
    if name == "search":
        from .domains.explorer.search import search

        return search
    if name in ("analyze", "get_completions"):
        from . import sql_completion

        return getattr(sql_completion, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
