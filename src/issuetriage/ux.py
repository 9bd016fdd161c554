"""Terminal output helpers for the CLI - no external dependencies."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from typing import TextIO


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"


STATE_COLORS: dict[str, str] = {
    "closed": Colors.DIM,
    "locked": Colors.DIM,
    "waiting": Colors.YELLOW,
    "deciding": Colors.MAGENTA,
    "pending": Colors.BLUE,
    "open": Colors.GREEN,
}


def _supports_color(stream: TextIO | None = None) -> bool:
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    return os.environ.get("TERM") != "dumb"


def colorize(text: str, color: str, bold: bool = False, stream: TextIO | None = None) -> str:
    """Apply color to text if terminal supports it."""
    if not _supports_color(stream):
        return text
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{text}{Colors.RESET}"


def print_success(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    print(colorize("✓", Colors.GREEN, bold=True, stream=stream) + " " + message, file=stream)


def print_error(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stderr
    print(colorize("✗", Colors.RED, bold=True, stream=stream) + " " + message, file=stream)


def print_header(message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    print(colorize(message, Colors.CYAN, bold=True, stream=stream), file=stream)


def print_counts(
    title: str,
    counts: Mapping[str, int],
    colors: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Print a titled block of ``name  count`` lines, widest name first-aligned."""
    stream = stream or sys.stdout
    width = max((len(k) for k in counts), default=0)
    print(colorize(f"\n{title}", Colors.CYAN, bold=True, stream=stream), file=stream)
    print(colorize("─" * 40, Colors.DIM, stream=stream), file=stream)
    for key, value in counts.items():
        color = (colors or {}).get(key)
        name = colorize(key.ljust(width), color, stream=stream) if color else key.ljust(width)
        print(f"  {name}  {value}", file=stream)


__all__ = [
    "Colors",
    "STATE_COLORS",
    "colorize",
    "print_counts",
    "print_error",
    "print_header",
    "print_success",
]
