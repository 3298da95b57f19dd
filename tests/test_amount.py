import pytest

from modules.expense_split.core.amount import (
    parse_amount,
    parse_amount_strict,
    parse_currency,
    round_half_up,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123.45", 123.45),
        ("123,45", 123.45),
        ("100", 100.0),
        ("", 0.0),
        ("abc", 0.0),
        ("  7,5", 7.5),
        ("12abc", 12.0),
        ("-3,25", -3.25),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_parse_amount_only_replaces_first_separator():
    # Thousands-separated input is not supported and stops at the second separator.
    assert parse_amount("1,234.56") == 1.234


def test_parse_amount_rejects_non_finite_values():
    assert parse_amount("inf") == 0.0
    assert parse_amount("nan") == 0.0
    assert parse_amount("1e999") == 0.0
    assert parse_amount(None) == 0.0


def test_parse_amount_strict_reports_errors():
    assert parse_amount_strict("12,50") == (12.5, None)
    assert parse_amount_strict("") == (None, "Amount is required.")
    assert parse_amount_strict(None, label="Value") == (None, "Value is required.")
    assert parse_amount_strict("12abc") == (None, "Amount must be a number.")
    assert parse_amount_strict("1e999") == (None, "Amount must be a finite number.")


def test_parse_currency_strips_symbols():
    assert parse_currency("R$ 123,45") == 123.45
    assert parse_currency("US$ 10.5") == 10.5
    assert parse_currency("€ 7") == 7.0
    assert parse_currency("") == 0.0


def test_round_half_up_matches_cent_rounding():
    assert round_half_up(0.125) == 0.13
    assert round_half_up(-0.004) == 0.0
    assert round_half_up(33.333) == 33.33
