"""Configuration for schemascope.

Settings come from defaults, then ``SCHEMASCOPE_*`` environment variables,
then an explicit mapping of overrides (typically the host application's
settings file, which this package does not read or write itself).
Library functions never call ``load_settings`` themselves; the host loads
settings once and passes the values in.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .errors import SettingsError

ENV_PREFIX = "SCHEMASCOPE_"

DEFAULT_SEARCH_LIMIT = 50
DEFAULT_COMPLETION_LIMIT = 100
DEFAULT_SCHEMA = "public"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Tunable behaviour of search, completion and tree building."""

    search_limit: int = DEFAULT_SEARCH_LIMIT
    completion_limit: int = DEFAULT_COMPLETION_LIMIT
    default_schema: str = DEFAULT_SCHEMA
    include_keywords: bool = True
    include_functions: bool = True


def _coerce(key: str, value: Any, expected: type) -> Any:
    if expected is bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise SettingsError(key, value, "a boolean")
    if expected is int:
        if isinstance(value, bool):
            raise SettingsError(key, value, "a positive integer")
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise SettingsError(key, value, "a positive integer") from None
        if number <= 0:
            raise SettingsError(key, value, "a positive integer")
        return number
    return str(value)


_FIELD_TYPES: dict[str, type] = {
    "search_limit": int,
    "completion_limit": int,
    "default_schema": str,
    "include_keywords": bool,
    "include_functions": bool,
}


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build settings from environment variables and explicit overrides.

    Args:
        overrides: Values that win over the environment. Unknown keys are ignored.
        environ: Environment to read; defaults to ``os.environ``.

    Returns:
        A frozen Settings instance.

    Raises:
        SettingsError: If a value cannot be converted to the field's type.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    for f in fields(Settings):
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in env:
            values[f.name] = _coerce(env_key, env[env_key], _FIELD_TYPES[f.name])

    for key, value in (overrides or {}).items():
        if key in _FIELD_TYPES:
            values[key] = _coerce(key, value, _FIELD_TYPES[key])

    return replace(Settings(), **values)

