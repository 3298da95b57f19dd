from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Sequence

from modules.expense_split.core.amount import parse_amount, round_half_up


@dataclass(frozen=True)
class Allocation:
    participant_id: str
    amount: float
    percentage: float | None = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_equal_splits(total: float, participant_ids: Sequence[str]) -> List[Allocation]:
    """Split ``total`` evenly, truncated to cents.

    The first participant absorbs the rounding remainder, so the amounts
    always add back up to ``total``.
    """
    count = len(participant_ids)
    if count == 0:
        return []

    base = math.floor((total / count) * 100) / 100
    remainder = round_half_up(total - base * count)
    percentage = round_half_up(100 / count)

    allocations: List[Allocation] = []
    for index, participant_id in enumerate(participant_ids):
        amount = base + remainder if index == 0 else base
        allocations.append(Allocation(participant_id, amount, percentage))
    return allocations


def calculate_amount_splits(
    total: float,
    custom_amounts: Mapping[str, str],
    participant_ids: Sequence[str],
) -> List[Allocation]:
    allocations: List[Allocation] = []
    for participant_id in participant_ids:
        amount = parse_amount(custom_amounts.get(participant_id, "0"))
        percentage = round_half_up(amount / total * 100) if total > 0 else 0.0
        allocations.append(Allocation(participant_id, amount, percentage))
    return allocations


def calculate_percentage_splits(
    total: float,
    custom_percentages: Mapping[str, str],
    participant_ids: Sequence[str],
) -> List[Allocation]:
    allocations: List[Allocation] = []
    for participant_id in participant_ids:
        percentage = parse_amount(custom_percentages.get(participant_id, "0"))
        amount = round_half_up(total * percentage / 100)
        allocations.append(Allocation(participant_id, amount, percentage))
    return allocations
