"""Locale-free number parsing and rendering shared by the scalar codecs."""

import re
from typing import Optional

NUMBER_PATTERN = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_NUMBER_RE = re.compile(rf"^{NUMBER_PATTERN}$")

# Significant digits used when rendering percentages and intensity values
SIGNIFICANT_DIGITS = 12


def parse_number(text: str) -> Optional[float]:
    """Parse a plain decimal literal; rejects nan, inf, padding and separators."""
    if not _NUMBER_RE.match(text):
        return None
    return float(text)


def format_significant(value: float) -> str:
    """Render with 12 significant digits, without trailing zeros."""
    return format(value, f".{SIGNIFICANT_DIGITS}g")


def format_fixed(value: float, max_fraction_digits: int = 2) -> str:
    """Render with at most ``max_fraction_digits`` decimals, trailing zeros dropped."""
    rendered = f"{value:.{max_fraction_digits}f}"
    if "." in rendered:
        rendered = rendered.rstrip("0").rstrip(".")
    if rendered == "-0":
        rendered = "0"
    return rendered
