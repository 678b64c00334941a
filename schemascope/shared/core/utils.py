"""Utility functions for schemascope."""

from __future__ import annotations

from rich.text import Text

KIB = 1024
MIB = KIB * 1024
GIB = MIB * 1024


def match_positions(pattern: str, text: str) -> tuple[bool, list[int]]:
    """Check if pattern fuzzy matches text and return matched indices.

    Args:
        pattern: The search pattern (e.g., "usrtbl" to match "users_table")
        text: The text to search in

    Returns:
        Tuple of (matches, indices) where indices are positions in text that matched.
    """
    if not pattern:
        return True, []

    pattern = pattern.lower()
    text_lower = text.lower()

    pattern_idx = 0
    indices = []

    for i, char in enumerate(text_lower):
        if pattern_idx < len(pattern) and char == pattern[pattern_idx]:
            indices.append(i)
            pattern_idx += 1

    return pattern_idx == len(pattern), indices


def highlight_matches(text: str, indices: list[int], style: str = "bold yellow") -> str:
    """Escape text for Rich markup and highlight the matched characters.

    Args:
        text: The original text
        indices: List of character indices to highlight
        style: Rich style string for highlighting (default: "bold yellow")

    Returns:
        Text with Rich markup highlighting the matched characters.
    """
    rendered = Text(text)
    for i in sorted(set(indices)):
        if 0 <= i < len(text):
            rendered.stylize(style, i, i + 1)
    return rendered.markup


def format_bytes(size: int) -> str:
    """Format a byte count with binary units, e.g. ``512 B`` or ``1.5 MB``."""
    if size < KIB:
        return f"{size} B"
    if size < MIB:
        return f"{size / KIB:.1f} KB"
    if size < GIB:
        return f"{size / MIB:.1f} MB"
    return f"{size / GIB:.1f} GB"


def format_count(count: int) -> str:
    """Format a row count compactly, e.g. ``999``, ``1.2K``, ``3.4M``."""
    if count < 1_000:
        return str(count)
    if count < 1_000_000:
        return f"{count / 1_000:.1f}K"
    if count < 1_000_000_000:
        return f"{count / 1_000_000:.1f}M"
    return f"{count / 1_000_000_000:.1f}B"
