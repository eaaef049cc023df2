"""File naming, encoding and size formatting helpers."""

import base64
import os
import time
from pathlib import Path

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def generate_file_name(original_name: str, timestamp_ms: int | None = None) -> str:
    """
    Derive a collision-resistant name: ``<stem>-<epoch millis><ext>``.

    Args:
        original_name: File name or path; only the basename is used
        timestamp_ms: Unix epoch milliseconds (defaults to now)

    Returns:
        The generated file name, keeping the original extension
    """
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    stem, ext = os.path.splitext(os.path.basename(original_name))
    return f"{stem}-{timestamp_ms}{ext}"


def encode_file(path: str | Path) -> str:
    """Read a local file and return its bytes as base64 text."""
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


def format_size(num_bytes: int) -> str:
    """
    Format a byte count with base-1024 units.

    >>> format_size(0)
    '0 B'
    >>> format_size(1536)
    '1.5 KB'
    """
    if num_bytes < 0:
        raise ValueError(f"Size must be non-negative: {num_bytes}")
    if num_bytes == 0:
        return "0 B"

    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1

    # rounding can reach 1024, e.g. 1048575 B -> "1024.00 KB"
    if exponent < len(SIZE_UNITS) - 1 and round(num_bytes / 1024**exponent, 2) >= 1024:
        exponent += 1

    value = f"{num_bytes / 1024**exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"
