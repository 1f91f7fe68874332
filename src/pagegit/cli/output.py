"""Colorful CLI output helpers."""

import os
import sys
from typing import TextIO

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color(stream: TextIO) -> bool:
    """Check if a stream is a terminal that accepts color (honors NO_COLOR)."""
    if os.environ.get("NO_COLOR"):
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def _colorize(text: str, color: str, stream: TextIO) -> str:
    """Apply color to text if the stream supports it."""
    if _supports_color(stream):
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    print(f"{_colorize(CHECK, GREEN, sys.stdout)} {message}")


def info(message: str) -> None:
    """Print progress notice with yellow bullet."""
    print(f"{_colorize(BULLET, YELLOW, sys.stdout)} {message}", flush=True)


def header(message: str) -> None:
    """Print header message in blue."""
    print(_colorize(message, BLUE, sys.stdout))


def error(message: str) -> None:
    """Print error message with red cross to stderr."""
    print(f"{_colorize(CROSS, RED, sys.stderr)} {message}", file=sys.stderr)
