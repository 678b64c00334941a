"""Deterministic explorer node ids.

An id is the root id followed by one segment per ancestor: folders
contribute their folder tag, objects contribute ``<kind>:<name>``. Names are
escaped so a ``:`` inside a name can't collide with the separator.
"""

from __future__ import annotations

SEPARATOR = ":"


def escape_segment(name: str) -> str:
    return name.replace("\\", "\\\\").replace(SEPARATOR, "\\" + SEPARATOR)


def folder_id(parent_id: str, folder_tag: str) -> str:
    return f"{parent_id}{SEPARATOR}{folder_tag}"


def object_id(parent_id: str, kind_tag: str, name: str) -> str:
    return f"{parent_id}{SEPARATOR}{kind_tag}{SEPARATOR}{escape_segment(name)}"


def split_id(node_id: str) -> list[str]:
    """Split an id into its unescaped segments."""
    parts: list[str] = []
    current: list[str] = []
    chars = iter(node_id)
    for char in chars:
        if char == "\\":
            current.append(next(chars, ""))
        elif char == SEPARATOR:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts
