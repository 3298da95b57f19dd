from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from modules.expense_split.core.amount import parse_amount, round_half_up
from modules.expense_split.core.split import Allocation

DEFAULT_TOLERANCE = 0.01


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    difference: float


def validate_splits_total(
    allocations: Iterable[Allocation],
    total: float,
    tolerance: float = DEFAULT_TOLERANCE,
) -> ValidationResult:
    allocated = sum(allocation.amount for allocation in allocations)
    difference = round_half_up(total - allocated)
    return ValidationResult(valid=abs(difference) <= tolerance, difference=difference)


def validate_percentages_total(
    percentages: Mapping[str, str],
    participant_ids: Sequence[str],
    tolerance: float = DEFAULT_TOLERANCE,
) -> ValidationResult:
    # Entries for ids outside participant_ids are ignored.
    allocated = sum(
        parse_amount(percentages.get(participant_id, "0"))
        for participant_id in participant_ids
    )
    difference = round_half_up(100 - allocated)
    return ValidationResult(valid=abs(difference) <= tolerance, difference=difference)
