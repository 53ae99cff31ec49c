"""
Display formatting for availability results.

A single display routine renders the label; an optional formatter decides
how the label looks (plain text or ANSI colors for terminals).
"""

import os
from typing import Callable, TextIO

from .checker import Availability, CheckResult

# (label, availability) -> rendered text
Formatter = Callable[[str, Availability], str]

ANSI_RESET = "\033[0m"
ANSI_COLORS = {
    Availability.AVAILABLE: "\033[32m",  # green
    Availability.UNAVAILABLE: "\033[31m",  # red
    Availability.UNKNOWN: "\033[90m",  # bright black
}

SYMBOLS = {
    Availability.AVAILABLE: "+",
    Availability.UNAVAILABLE: "-",
    Availability.UNKNOWN: "?",
}


def plain(label: str, availability: Availability) -> str:
    return label


def ansi_color(label: str, availability: Availability) -> str:
    return f"{ANSI_COLORS[availability]}{label}{ANSI_RESET}"


def format_availability(availability: Availability, formatter: Formatter | None = None) -> str:
    """Render an Availability as its label, passed through `formatter` if given."""
    formatter = formatter or plain
    return formatter(availability.label, availability)


def color_formatter_for(stream: TextIO, mode: str = "auto") -> Formatter:
    """
    Pick a formatter for an output stream.

    "always" and "never" force the choice. "auto" colors only when the stream
    is a terminal and NO_COLOR is not set.
    """
    if mode == "always":
        return ansi_color
    if mode == "never":
        return plain

    if os.environ.get("NO_COLOR"):
        return plain
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return ansi_color
    return plain


def format_result(result: CheckResult, formatter: Formatter | None = None) -> str:
    """Render a CheckResult as a single CLI line, e.g. "[+] serde: Available"."""
    symbol = SYMBOLS[result.availability]
    line = f"[{symbol}] {result.name}: {format_availability(result.availability, formatter)}"
    if result.error_message:
        line += f" ({result.error_message})"
    return line
