"""Value Parser - splits raw scalars into number and unit."""

import re

from ..config import VALUE_UNITS
from ..models import ParsedValue

VALUE_PATTERN = re.compile(
    r"^(-?(?:\d+\.?\d*|\.\d+))(" + "|".join(re.escape(u) for u in VALUE_UNITS) + r")?$"
)
LEADING_NUMBER = re.compile(r"^\s*(-?(?:\d+\.?\d*|\.\d+))")


def format_number(value: float | int) -> str:
    """Render a number without a trailing ``.0`` (``16.0`` -> ``"16"``)."""
    value = round(float(value), 6)
    if value.is_integer():
        return str(int(value))
    return str(value)


def parse_value(value: str | int | float) -> ParsedValue:
    """Parse ``"16px"`` into ``ParsedValue("16px", 16.0, "px")``.

    Numbers pass through with no unit. Anything that does not match the
    numeric grammar (hex colors, keywords, expressions) keeps only ``raw``.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return ParsedValue(raw=format_number(value), number=float(value))

    raw = str(value)
    match = VALUE_PATTERN.match(raw.strip())
    if not match:
        return ParsedValue(raw=raw)
    return ParsedValue(raw=raw, number=float(match.group(1)), unit=match.group(2))


def leading_number(value: str | int | float) -> float | None:
    """Numeric prefix of ``value`` (``"2px"`` -> 2.0), None when there is none."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = LEADING_NUMBER.match(str(value))
    return float(match.group(1)) if match else None
