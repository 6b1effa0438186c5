"""Tests for spendcap.domain.report pure functions."""

from datetime import date
from decimal import Decimal
from typing import Callable

from spendcap.domain.models import Expense
from spendcap.domain.report import (
    calculate_percentage,
    create_overview,
    group_by_category,
    histogram_bar_length,
    monthly_total,
    summarize,
)


class TestSummarize:
    """Tests for summarize."""

    def test_two_categories_split_evenly(self, expense_factory: Callable[..., Expense]) -> None:
        """Should total per category and give each half of the spend."""
        expenses = [
            expense_factory("30", "Food"),
            expense_factory("20", "Food"),
            expense_factory("50", "Transportation"),
        ]

        summary = summarize(expenses)

        assert summary.per_category == {"Food": Decimal("50"), "Transportation": Decimal("50")}
        assert summary.total_amount == Decimal("100")
        assert summary.category_count == 2
        assert [row.percentage for row in summary.categories] == [Decimal("50.0000"), Decimal("50.0000")]

    def test_transaction_counts(self, expense_factory: Callable[..., Expense]) -> None:
        """Should count transactions per category."""
        summary = summarize([expense_factory("30", "Food"), expense_factory("20", "Food")])
        assert summary.categories[0].transaction_count == 2

    def test_rows_ordered_by_total(self, expense_factory: Callable[..., Expense]) -> None:
        """Should list the largest category first."""
        summary = summarize(
            [expense_factory("5", "Food"), expense_factory("70", "Shopping"), expense_factory("25", "Other")]
        )
        assert [row.category for row in summary.categories] == ["Shopping", "Other", "Food"]
        assert summary.top_category is not None
        assert summary.top_category.category == "Shopping"

    def test_tie_goes_to_first_name(self, expense_factory: Callable[..., Expense]) -> None:
        """Should pick the alphabetically first category on a tie."""
        summary = summarize([expense_factory("50", "Transportation"), expense_factory("50", "Food")])
        assert summary.top_category is not None
        assert summary.top_category.category == "Food"

    def test_empty_input(self) -> None:
        """Should return an empty summary without a top category."""
        summary = summarize([])

        assert summary.categories == []
        assert summary.total_amount == Decimal("0")
        assert summary.category_count == 0
        assert summary.top_category is None

    def test_percentages_rounded(self, expense_factory: Callable[..., Expense]) -> None:
        """Should round shares to four places before scaling."""
        summary = summarize(
            [expense_factory("1", "Food"), expense_factory("1", "Other"), expense_factory("1", "Shopping")]
        )
        assert {row.percentage for row in summary.categories} == {Decimal("33.3300")}


class TestCalculatePercentage:
    """Tests for calculate_percentage."""

    def test_half_up_rounding(self) -> None:
        """Should round half up at the fourth decimal place."""
        assert calculate_percentage(Decimal("2"), Decimal("3")) == Decimal("66.67")


class TestGroupByCategory:
    """Tests for group_by_category."""

    def test_totals_and_counts(self, expense_factory: Callable[..., Expense]) -> None:
        """Should return total and count per category."""
        groups = group_by_category(
            [expense_factory("1.50", "Food"), expense_factory("2.25", "Food"), expense_factory("9", "Other")]
        )
        assert groups == {"Food": (Decimal("3.75"), 2), "Other": (Decimal("9"), 1)}


class TestMonthlyTotal:
    """Tests for monthly_total."""

    def test_month_boundaries(self, expense_factory: Callable[..., Expense]) -> None:
        """Should include the first and last day of the month only."""
        expenses = [
            expense_factory("1", on=date(2026, 2, 1)),
            expense_factory("2", on=date(2026, 2, 28)),
            expense_factory("4", on=date(2026, 1, 31)),
            expense_factory("8", on=date(2026, 3, 1)),
        ]
        assert monthly_total(expenses, 2026, 2) == Decimal("3")

    def test_empty_month(self) -> None:
        """Should return zero when nothing was spent."""
        assert monthly_total([], 2026, 2) == Decimal("0")


class TestCreateOverview:
    """Tests for create_overview."""

    def test_headline_numbers(self, expense_factory: Callable[..., Expense], today: date) -> None:
        """Should report totals, counts and this month's spend."""
        expenses = [
            expense_factory("10", "Food", today),
            expense_factory("15", "Shopping", today),
            expense_factory("100", "Food", date(2026, 1, 5)),
        ]

        overview = create_overview(expenses, today)

        assert overview.total_spending == Decimal("125")
        assert overview.total_expenses == 3
        assert overview.total_categories == 2
        assert overview.current_month_spending == Decimal("25")


class TestHistogramBarLength:
    """Tests for histogram_bar_length."""

    def test_scaled_to_width(self) -> None:
        """Should scale the bar relative to the maximum."""
        assert histogram_bar_length(Decimal("50"), Decimal("100"), 30) == 15

    def test_zero_max(self) -> None:
        """Should return zero when the maximum is not positive."""
        assert histogram_bar_length(Decimal("5"), Decimal("0"), 30) == 0
