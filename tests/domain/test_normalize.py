"""Tests for spendcap.domain.normalize pure functions."""

import pytest

from spendcap.domain.normalize import (
    CANONICAL_CATEGORIES,
    CATEGORY_SYNONYMS,
    clean_description,
    normalize_category,
    title_case,
)


class TestNormalizeCategory:
    """Tests for normalize_category."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("food", "Food"),
            ("Dining", "Food"),
            ("RESTAURANT", "Food"),
            ("groceries", "Food"),
            ("gas", "Transportation"),
            ("Uber", "Transportation"),
            ("taxi", "Transportation"),
            ("movies", "Entertainment"),
            ("fun", "Entertainment"),
            ("retail", "Shopping"),
            ("clothes", "Shopping"),
            ("pharmacy", "Healthcare"),
            ("Doctor", "Healthcare"),
        ],
    )
    def test_synonyms_map_to_canonical(self, raw: str, expected: str) -> None:
        """Should map each known synonym to its canonical category."""
        assert normalize_category(raw) == expected

    def test_every_synonym_in_table(self) -> None:
        """Should map every synonym in the table, whatever its casing."""
        for synonym, canonical in CATEGORY_SYNONYMS.items():
            assert normalize_category(synonym.upper()) == canonical

    def test_surrounding_whitespace_ignored(self) -> None:
        """Should trim before matching."""
        assert normalize_category("  groceries \t") == "Food"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_input_is_other(self, raw: str | None) -> None:
        """Should return Other for missing or blank input."""
        assert normalize_category(raw) == "Other"

    def test_unknown_category_passes_through_title_cased(self) -> None:
        """Should capitalize only the first letter of unknown categories."""
        assert normalize_category("  home IMPROVEMENT ") == "Home improvement"

    def test_canonical_name_is_stable(self) -> None:
        """Should leave canonical names unchanged."""
        for canonical in CANONICAL_CATEGORIES:
            assert normalize_category(canonical) == canonical


class TestTitleCase:
    """Tests for title_case."""

    def test_single_character(self) -> None:
        """Should uppercase a single character."""
        assert title_case("x") == "X"

    def test_empty_string(self) -> None:
        """Should return an empty string unchanged."""
        assert title_case("") == ""


class TestCleanDescription:
    """Tests for clean_description."""

    def test_trims_and_collapses_whitespace(self) -> None:
        """Should trim and collapse inner whitespace runs."""
        assert clean_description(" a   b ") == "a b"

    def test_none_is_empty(self) -> None:
        """Should return an empty string for None."""
        assert clean_description(None) == ""

    def test_tabs_and_newlines_collapsed(self) -> None:
        """Should treat any whitespace run as one space."""
        assert clean_description("coffee\t\n with  milk") == "coffee with milk"

    def test_long_description_truncated(self) -> None:
        """Should cut descriptions to 255 characters."""
        assert clean_description("x" * 300) == "x" * 255

    def test_bound_taken_before_collapse(self) -> None:
        """Should compute the bound from the trimmed text, not the collapsed one."""
        raw = "a" * 250 + " " * 20 + "b" * 10
        cleaned = clean_description(raw)

        # 280 trimmed characters cap the bound at 255; the collapsed text is 261 long
        assert cleaned == "a" * 250 + " " + "b" * 4
        assert len(cleaned) == 255
