"""Exceptions raised by schemascope.

Tree building, search and completion never raise; these cover the few
caller mistakes that have no sensible degraded result.
"""

from __future__ import annotations


class SchemascopeError(Exception):
    """Base class for schemascope exceptions."""


class UnsupportedOperationError(SchemascopeError, ValueError):
    """Raised when an operation has no SQL form for the given object kind."""

    def __init__(self, operation: str, kind: str):
        self.operation = operation
        self.kind = kind
        super().__init__(f"Operation {operation!r} is not supported for {kind} objects")


class SettingsError(SchemascopeError, ValueError):
    """Raised when a configuration value cannot be parsed."""

    def __init__(self, key: str, value: object, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid value for {key}: {value!r} (expected {expected})")
