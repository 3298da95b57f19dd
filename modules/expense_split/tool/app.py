from __future__ import annotations

from typing import Dict, List

from fastapi import FastAPI, Form
from pydantic import BaseModel, Field

from modules.expense_split.core.amount import parse_amount_strict
from modules.expense_split.core.calculate import SPLIT_TYPES, SplitRequest, calculate_splits
from modules.expense_split.core.format import (
    SUPPORTED_CURRENCIES,
    format_money,
    format_value,
    is_supported_currency,
    normalize_currency,
    parse_display_value,
    sanitize_input,
)
from tripsplit import settings
from tripsplit.errors import ValidationNormalizeMiddleware, error_response

app = FastAPI(title="Expense Split")
app.add_middleware(ValidationNormalizeMiddleware)

UNSUPPORTED_CURRENCY = "Unsupported currency."


class SplitPayload(BaseModel):
    amount: str
    currency: str = "BRL"
    exchange_rate: str | None = None
    split_type: str = "equal"
    participant_ids: List[str] = Field(default_factory=list)
    custom_amounts: Dict[str, str] = Field(default_factory=dict)
    custom_percentages: Dict[str, str] = Field(default_factory=dict)
    base_currency: str | None = None


@app.get("/")
def index():
    return {
        "module": "expense_split",
        "currencies": list(SUPPORTED_CURRENCIES),
        "split_types": list(SPLIT_TYPES),
    }


@app.post("/split")
def split(payload: SplitPayload):
    base_currency = payload.base_currency or settings.base_currency()
    if not is_supported_currency(payload.currency) or not is_supported_currency(base_currency):
        return error_response(UNSUPPORTED_CURRENCY)

    request = SplitRequest(
        amount=payload.amount,
        currency=normalize_currency(payload.currency),
        split_type=payload.split_type,
        participant_ids=payload.participant_ids,
        exchange_rate=payload.exchange_rate,
        custom_amounts=payload.custom_amounts,
        custom_percentages=payload.custom_percentages,
    )
    result, error = calculate_splits(
        request, base_currency, tolerance=settings.split_tolerance()
    )
    if error or result is None:
        return error_response(error or "Split could not be calculated.")
    return result.to_dict()


@app.post("/format")
def format_amount(
    value: str | None = Form(None),
    currency: str = Form("BRL"),
):
    if not is_supported_currency(currency):
        return error_response(UNSUPPORTED_CURRENCY)

    number, error = parse_amount_strict(value, label="Value")
    if error or number is None:
        return error_response(error or "Invalid number format.")
    return {
        "formatted": format_value(number, currency),
        "money": format_money(number, currency),
    }


@app.post("/sanitize")
def sanitize(
    raw: str = Form(""),
    currency: str = Form("BRL"),
):
    if not is_supported_currency(currency):
        return error_response(UNSUPPORTED_CURRENCY)

    display = sanitize_input(raw, currency)
    return {"display": display, "value": parse_display_value(display, currency)}
