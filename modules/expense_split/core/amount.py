from __future__ import annotations

import math
import re
from typing import Any, Tuple


_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_FULL_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_CURRENCY_MARKS = re.compile(r"(?:R\$|US\$|\$|€|\s)")


def _leading_float(text: str) -> float | None:
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    try:
        value = float(match.group(1))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_amount(value: Any) -> float:
    """Parse a single-separator decimal string into a float.

    Only the first comma is turned into a dot, so thousands-separated input
    such as ``"1,234.56"`` stops at the second separator and yields ``1.234``.
    Anything that does not start with a number parses to ``0.0``.
    """
    if value is None:
        return 0.0
    raw = str(value)
    if not raw:
        return 0.0
    parsed = _leading_float(raw.replace(",", ".", 1))
    return parsed if parsed is not None else 0.0


def parse_amount_strict(
    value: Any, *, label: str = "Amount"
) -> Tuple[float | None, str | None]:
    if value is None:
        return None, f"{label} is required."
    raw = str(value).strip()
    if not raw:
        return None, f"{label} is required."

    compact = raw.replace(" ", "").replace(",", ".", 1)
    if not _FULL_NUMBER.match(compact):
        return None, f"{label} must be a number."
    number = float(compact)
    if not math.isfinite(number):
        return None, f"{label} must be a finite number."
    return number, None


def parse_currency(value: Any) -> float:
    if value is None:
        return 0.0
    return parse_amount(_CURRENCY_MARKS.sub("", str(value)))


def round_half_up(value: float, decimals: int = 2) -> float:
    scale = 10 ** decimals
    return math.floor(value * scale + 0.5) / scale
