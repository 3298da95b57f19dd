from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from modules.expense_split.core.amount import parse_amount


@dataclass(frozen=True)
class LocaleRule:
    decimal_separator: str
    thousands_separator: str
    symbol: str


SUPPORTED_CURRENCIES: Tuple[str, ...] = ("BRL", "USD", "EUR")

LOCALE_RULES: Dict[str, LocaleRule] = {
    "BRL": LocaleRule(decimal_separator=",", thousands_separator=".", symbol="R$"),
    "USD": LocaleRule(decimal_separator=".", thousands_separator=",", symbol="US$"),
    "EUR": LocaleRule(decimal_separator=".", thousands_separator=",", symbol="€"),
}

_DIGITS = "0123456789"
_RESIDUAL = re.compile(r"[^0-9.\-]")


def normalize_currency(currency: Any) -> str:
    return str(currency or "").strip().upper()


def is_supported_currency(currency: Any) -> bool:
    return normalize_currency(currency) in LOCALE_RULES


def resolve_locale(currency: Any) -> LocaleRule:
    code = normalize_currency(currency)
    rule = LOCALE_RULES.get(code)
    if rule is not None:
        return rule
    return LocaleRule(decimal_separator=".", thousands_separator=",", symbol=code)


def _group_thousands(value: str, sep: str) -> str:
    if not sep:
        return value
    parts = []
    while value:
        parts.append(value[-3:])
        value = value[:-3]
    return sep.join(reversed(parts))


def _finite(value: float) -> float:
    # nan and inf follow the silent-zero policy of the parsers.
    return value if math.isfinite(value) else 0.0


def _format_number(value: float, rule: LocaleRule) -> str:
    normalized = f"{abs(_finite(value)):.2f}"
    integer_part, fraction = normalized.split(".", 1)
    grouped = _group_thousands(integer_part, rule.thousands_separator)
    return f"{grouped}{rule.decimal_separator}{fraction}"


def sanitize_input(raw: Any, currency: Any) -> str:
    """Reduce keystroke input to a valid partial number for the currency.

    Keeps digits and the first decimal separator, with at most two digits
    after it. Every other character is dropped.
    """
    decimal_sep = resolve_locale(currency).decimal_separator
    kept = []
    seen_decimal = False
    fraction_digits = 0
    for char in str(raw or ""):
        if char in _DIGITS:
            if seen_decimal:
                if fraction_digits >= 2:
                    continue
                fraction_digits += 1
            kept.append(char)
        elif char == decimal_sep and not seen_decimal:
            seen_decimal = True
            kept.append(char)
    return "".join(kept)


def parse_display_value(display: Any, currency: Any) -> float:
    rule = resolve_locale(currency)
    text = str(display or "")
    text = text.replace(rule.thousands_separator, "")
    text = text.replace(rule.decimal_separator, ".")
    return parse_amount(_RESIDUAL.sub("", text))


def format_value(value: float, currency: Any) -> str:
    value = _finite(value)
    # Untouched fields render empty instead of "0,00".
    if value == 0:
        return ""
    number = _format_number(value, resolve_locale(currency))
    return f"-{number}" if value < 0 else number


def format_money(value: float, currency: Any) -> str:
    value = _finite(value)
    rule = resolve_locale(currency)
    number = _format_number(value, rule)
    sign = "-" if value < 0 and number.strip("0,.") else ""
    if not rule.symbol:
        return f"{sign}{number}"
    return f"{sign}{rule.symbol} {number}"


def format_percentage(value: float, currency: Any = "BRL", decimals: int = 1) -> str:
    decimal_sep = resolve_locale(currency).decimal_separator
    return f"{_finite(value):.{decimals}f}".replace(".", decimal_sep) + "%"


def format_amount_input(value: float, currency: Any = "BRL") -> str:
    """Two-decimal prefill for an edit form: no grouping, zero kept as 0,00."""
    number = f"{_finite(value):.2f}"
    return number.replace(".", resolve_locale(currency).decimal_separator)


def format_cents_input(raw: Any, currency: Any = "BRL") -> Tuple[str, int]:
    digits = "".join(char for char in str(raw or "") if char in _DIGITS)
    if not digits:
        return "", 0

    rule = resolve_locale(currency)
    units, cents = divmod(int(digits), 100)
    grouped = _group_thousands(str(units), rule.thousands_separator)
    display = f"{grouped}{rule.decimal_separator}{cents:02d}"
    return display, len(display)


class CurrencyField:
    """Display/raw pair behind one amount input.

    While typing the display holds the sanitized keystrokes; on blur it is
    replaced by the fully formatted raw value.
    """

    def __init__(self, currency: Any = "BRL", value: float = 0.0) -> None:
        self.currency = normalize_currency(currency)
        self.raw_value = _finite(float(value))
        self.display_value = format_value(self.raw_value, self.currency)

    def on_change(self, raw: Any) -> str:
        self.display_value = sanitize_input(raw, self.currency)
        self.raw_value = parse_display_value(self.display_value, self.currency)
        return self.display_value

    def on_blur(self) -> str:
        self.display_value = format_value(self.raw_value, self.currency)
        return self.display_value

    def set_value(self, value: float) -> None:
        self.raw_value = _finite(float(value))
        self.display_value = format_value(self.raw_value, self.currency)

    def set_currency(self, currency: Any) -> None:
        self.currency = normalize_currency(currency)
        self.display_value = format_value(self.raw_value, self.currency)
