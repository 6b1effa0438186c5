"""Pure functions for category and description normalization.

This module contains the functional core for text normalization:
- No I/O operations
- No side effects
- Deterministic, table-driven mapping
"""

import re
from types import MappingProxyType

from spendcap.domain.models import CategoryName, Description

DEFAULT_CATEGORY = CategoryName("Other")

MAX_DESCRIPTION_LENGTH = 255

_WHITESPACE = re.compile(r"\s+")

_CANONICAL_GROUPS: dict[str, tuple[str, ...]] = {
    "Food": ("food", "dining", "restaurant", "groceries"),
    "Transportation": ("transport", "transportation", "gas", "fuel", "uber", "taxi"),
    "Entertainment": ("fun", "entertainment", "movies", "games"),
    "Shopping": ("clothes", "shopping", "retail"),
    "Healthcare": ("medical", "health", "doctor", "pharmacy"),
}

# Lowercase synonym -> canonical category
CATEGORY_SYNONYMS = MappingProxyType(
    {synonym: CategoryName(canonical) for canonical, synonyms in _CANONICAL_GROUPS.items() for synonym in synonyms}
)

CANONICAL_CATEGORIES = frozenset(CategoryName(name) for name in _CANONICAL_GROUPS)


def title_case(text: str) -> str:
    """Uppercase the first character and lowercase the rest.

    Only the first character of the whole string is capitalized, so
    "home improvement" becomes "Home improvement".
    """
    return text[:1].upper() + text[1:].lower()


def normalize_category(raw: str | None) -> CategoryName:
    """Map raw category text to its canonical form.

    Args:
        raw: Category as supplied by the caller.

    Returns:
        A canonical category for known synonyms, "Other" for empty input,
        otherwise the trimmed, title-cased input.
    """
    if raw is None:
        return DEFAULT_CATEGORY

    trimmed = raw.strip()
    if not trimmed:
        return DEFAULT_CATEGORY

    normalized = title_case(trimmed)
    return CATEGORY_SYNONYMS.get(normalized.lower(), CategoryName(normalized))


def clean_description(raw: str | None) -> Description:
    """Trim a description, collapse whitespace runs and cap its length.

    The length bound is taken from the trimmed text before whitespace is
    collapsed, then applied to the collapsed text.

    Args:
        raw: Description as supplied by the caller.

    Returns:
        Cleaned description, or an empty string for None.
    """
    if raw is None:
        return Description("")

    trimmed = raw.strip()
    collapsed = _WHITESPACE.sub(" ", trimmed)
    bound = min(len(trimmed), MAX_DESCRIPTION_LENGTH)
    return Description(collapsed[:bound])
