from modules.expense_split.core.split import Allocation, calculate_amount_splits
from modules.expense_split.core.validate import (
    ValidationResult,
    validate_percentages_total,
    validate_splits_total,
)


def _splits(*amounts):
    return [Allocation(f"p{i}", amount, None) for i, amount in enumerate(amounts)]


class TestValidateSplitsTotal:
    def test_exact_total(self):
        splits = calculate_amount_splits(100, {"a": "60", "b": "40"}, ["a", "b"])

        assert validate_splits_total(splits, 100) == ValidationResult(True, 0)

    def test_shortfall_is_positive(self):
        result = validate_splits_total(_splits(50, 40), 100)

        assert result.valid is False
        assert result.difference == 10

    def test_excess_is_negative(self):
        result = validate_splits_total(_splits(60, 50), 100)

        assert result.valid is False
        assert result.difference == -10

    def test_float_noise_within_tolerance(self):
        assert validate_splits_total(_splits(33.34, 33.33, 33.33), 100).valid

    def test_one_cent_is_tolerated(self):
        result = validate_splits_total(_splits(50, 49.99), 100)

        assert result.valid is True
        assert result.difference == 0.01

    def test_custom_tolerance(self):
        splits = _splits(50, 49)

        assert validate_splits_total(splits, 100, 0.01).valid is False
        assert validate_splits_total(splits, 100, 1).valid is True

    def test_does_not_mutate_input(self):
        splits = _splits(50, 50)
        validate_splits_total(splits, 100)

        assert splits == _splits(50, 50)


class TestValidatePercentagesTotal:
    def test_sums_to_hundred(self):
        result = validate_percentages_total({"a": "60", "b": "40"}, ["a", "b"])

        assert result == ValidationResult(True, 0)

    def test_shortfall(self):
        result = validate_percentages_total({"a": "60", "b": "30"}, ["a", "b"])

        assert result.valid is False
        assert result.difference == 10

    def test_excess(self):
        result = validate_percentages_total({"a": "70", "b": "40"}, ["a", "b"])

        assert result.difference == -10

    def test_ignores_ids_outside_participants(self):
        result = validate_percentages_total(
            {"a": "50", "b": "50", "ghost": "25"}, ["a", "b"]
        )

        assert result.valid is True

    def test_missing_ids_count_as_zero(self):
        result = validate_percentages_total({"a": "50"}, ["a", "b"])

        assert result.difference == 50

    def test_float_noise_within_tolerance(self):
        result = validate_percentages_total(
            {"a": "33.34", "b": "33,33", "c": "33.33"}, ["a", "b", "c"]
        )

        assert result.valid is True

    def test_custom_tolerance(self):
        percentages = {"a": "50", "b": "49"}

        assert validate_percentages_total(percentages, ["a", "b"], 0.01).valid is False
        assert validate_percentages_total(percentages, ["a", "b"], 1).valid is True
