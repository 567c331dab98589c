#!/usr/bin/env python3
"""
Auxiliary utility functions for the Kosmos project

Size formatting and parsing plus path display helpers shared by the
command-line front ends.
"""

import pathlib
from typing import Optional

SIZE_MULTIPLIERS = {"K": 1024, "M": 1024**2, "G": 1024**3}


def format_bytes(size_bytes: int) -> str:
    """Format byte size into human-readable string

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Formatted string like "1.2 GiB", "345 MiB", "12 KiB", or "789 B"
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GiB"
    if size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MiB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KiB"
    return f"{size_bytes} B"


def parse_size(value: str) -> int:
    """Parse a size like '512', '10K' or '1.5M' into bytes.

    Raises ValueError for anything else, including negative sizes.
    """
    text = value.strip().upper()
    if text.endswith("B"):
        text = text[:-1]
    multiplier = 1
    if text and text[-1] in SIZE_MULTIPLIERS:
        multiplier = SIZE_MULTIPLIERS[text[-1]]
        text = text[:-1]
    size = int(float(text) * multiplier) if multiplier > 1 else int(text)
    if size < 0:
        raise ValueError(f"size must not be negative: {value}")
    return size


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    if path == home_path or path.startswith(home_path.rstrip("/") + "/"):
        return "~" + path[len(home_path.rstrip("/")) :]
    return path
