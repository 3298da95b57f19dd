from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

import structlog

from modules.expense_split.core.amount import parse_amount, round_half_up
from modules.expense_split.core.format import (
    format_money,
    format_percentage,
    normalize_currency,
)
from modules.expense_split.core.split import (
    Allocation,
    calculate_amount_splits,
    calculate_equal_splits,
    calculate_percentage_splits,
)
from modules.expense_split.core.validate import (
    DEFAULT_TOLERANCE,
    validate_percentages_total,
    validate_splits_total,
)

logger = structlog.get_logger(__name__)

SPLIT_TYPES = ("equal", "by_amount", "by_percentage")


@dataclass
class SplitRequest:
    amount: str
    currency: str
    split_type: str
    participant_ids: List[str]
    exchange_rate: str | None = None
    custom_amounts: Dict[str, str] = field(default_factory=dict)
    custom_percentages: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SplitRequest":
        return cls(
            amount=str(data.get("amount") or ""),
            currency=normalize_currency(data.get("currency")),
            split_type=str(data.get("split_type") or "equal"),
            participant_ids=[str(item) for item in data.get("participant_ids") or []],
            exchange_rate=data.get("exchange_rate"),
            custom_amounts=dict(data.get("custom_amounts") or {}),
            custom_percentages=dict(data.get("custom_percentages") or {}),
        )


@dataclass(frozen=True)
class SplitResult:
    splits: List[Allocation]
    amount: float
    exchange_rate: float

    @property
    def base_amount(self) -> float:
        return round_half_up(self.amount * self.exchange_rate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "splits": [allocation.to_dict() for allocation in self.splits],
            "amount": self.amount,
            "exchange_rate": self.exchange_rate,
            "base_amount": self.base_amount,
        }


def _reject(reason: str, **context: Any) -> Tuple[None, str]:
    logger.debug("split_rejected", reason=reason, **context)
    return None, reason


def calculate_splits(
    data: SplitRequest | Mapping[str, Any],
    base_currency: str,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Tuple[SplitResult | None, str | None]:
    """Turn expense form input into per-participant splits.

    Returns ``(result, None)`` on success or ``(None, reason)`` with a
    user-facing reason. Nothing is raised for bad input: unparseable
    numbers read as zero and fall into the non-positive checks.
    """
    request = data if isinstance(data, SplitRequest) else SplitRequest.from_mapping(data)
    currency = normalize_currency(request.currency)
    base = normalize_currency(base_currency)

    amount = parse_amount(request.amount)
    if amount <= 0:
        return _reject("Amount must be greater than zero.", amount=request.amount)

    raw_rate = request.exchange_rate
    exchange_rate = 1.0 if raw_rate is None or raw_rate == "" else parse_amount(raw_rate)
    # Same-currency expenses never use the rate, so a zero rate passes through.
    if currency != base and exchange_rate <= 0:
        return _reject(
            "Exchange rate must be greater than zero.",
            currency=currency,
            base_currency=base,
        )

    participant_ids = list(request.participant_ids)
    if not participant_ids:
        return _reject("Select at least one participant.")

    split_type = request.split_type
    if split_type == "equal":
        splits = calculate_equal_splits(amount, participant_ids)
    elif split_type == "by_amount":
        splits = calculate_amount_splits(amount, request.custom_amounts, participant_ids)
        validation = validate_splits_total(splits, amount, tolerance)
        if not validation.valid:
            return _reject(
                "Split amounts differ from the total by "
                f"{format_money(validation.difference, currency)}.",
                difference=validation.difference,
            )
    elif split_type == "by_percentage":
        splits = calculate_percentage_splits(
            amount, request.custom_percentages, participant_ids
        )
        validation = validate_percentages_total(
            request.custom_percentages, participant_ids, tolerance
        )
        if not validation.valid:
            return _reject(
                "Split percentages differ from 100% by "
                f"{format_percentage(validation.difference, currency, decimals=2)}.",
                difference=validation.difference,
            )
    else:
        return _reject("Unsupported split type.", split_type=split_type)

    return SplitResult(splits=splits, amount=amount, exchange_rate=exchange_rate), None
