"""Pure validation rules for expense input.

Each rule raises ValidationError with a human-readable message on the first
violation; nothing is accumulated. Rules run in a fixed order so the same bad
input always produces the same message.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from spendcap.dates import shift_years
from spendcap.domain.errors import ValidationError
from spendcap.domain.models import ExpenseId, ExpenseUpdate, FilterSpec
from spendcap.domain.normalize import MAX_DESCRIPTION_LENGTH

MAX_AMOUNT = Decimal("10000.00")
MAX_CATEGORY_LENGTH = 50
MAX_HISTORY_YEARS = 2
TEST_EXPENSE_CEILING = Decimal("1000")
MAX_PAGE_SIZE = 100
SORT_DIRECTIONS = ("asc", "desc")

_CENTS = Decimal("0.01")


def to_decimal(raw: Any, field: str) -> Decimal:
    """Convert raw input to a finite Decimal without rounding it."""
    if isinstance(raw, Decimal):
        value = raw
    else:
        try:
            value = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"{field} must be a numeric value") from exc
    if not value.is_finite():
        raise ValidationError(f"{field} must be a numeric value")
    return value


def to_date(raw: Any, field: str) -> date:
    """Accept a date, a datetime or an ISO 8601 date string."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw.strip())
        except ValueError as exc:
            raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)") from exc
    raise ValidationError(f"{field} must be a date")


def validate_amount(raw: Any) -> Decimal:
    """Check presence, range (0, 10000.00] and at most two decimal places.

    Returns:
        The amount quantized to two decimal places.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Amount is required")

    amount = to_decimal(raw, "Amount")
    if amount <= 0:
        raise ValidationError("Amount must be positive")
    if amount > MAX_AMOUNT:
        raise ValidationError("Amount cannot exceed $10,000")

    exponent = amount.as_tuple().exponent
    if isinstance(exponent, int) and exponent < -2:
        raise ValidationError("Amount cannot have more than 2 decimal places")

    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def validate_description(raw: Any) -> str:
    """Check the description is present, non-blank and within length.

    The length is measured on the text as supplied, before any cleaning, so an
    overlong description is rejected rather than truncated.
    """
    if raw is None or not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Description is required")
    if len(raw) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")
    return raw


def validate_category(raw: Any) -> str:
    if raw is None or not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Category is required")
    if len(raw.strip()) > MAX_CATEGORY_LENGTH:
        raise ValidationError(f"Category cannot exceed {MAX_CATEGORY_LENGTH} characters")
    return raw


def validate_date(raw: Any, today: date, enforce_history: bool = True) -> date:
    """Check the expense date is not in the future.

    Args:
        raw: Date value as supplied.
        today: Current date.
        enforce_history: Also reject dates more than two years before today.

    Returns:
        The parsed date.
    """
    if raw is None:
        raise ValidationError("Date is required")

    expense_date = to_date(raw, "Date")
    if expense_date > today:
        raise ValidationError("Date cannot be in the future")
    if enforce_history and expense_date < shift_years(today, -MAX_HISTORY_YEARS):
        raise ValidationError(f"Date cannot be more than {MAX_HISTORY_YEARS} years in the past")
    return expense_date


def check_test_expense(description: str, amount: Decimal) -> None:
    if "test" in description.lower() and amount > TEST_EXPENSE_CEILING:
        raise ValidationError("Test expenses cannot exceed $1000")


def validate_expense(
    amount: Any,
    description: Any,
    category: Any,
    expense_date: Any,
    today: date,
) -> tuple[Decimal, str, str, date]:
    """Validate all fields of a new expense.

    Args:
        amount: Raw amount.
        description: Raw description.
        category: Raw category.
        expense_date: Raw expense date.
        today: Current date.

    Returns:
        Tuple of (amount, description, category, date). Text fields are
        returned as supplied; normalization happens separately.

    Raises:
        ValidationError: On the first violated rule.
    """
    valid_amount = validate_amount(amount)
    valid_description = validate_description(description)
    valid_category = validate_category(category)
    valid_date = validate_date(expense_date, today)
    check_test_expense(valid_description, valid_amount)
    return valid_amount, valid_description, valid_category, valid_date


def validate_update(update: ExpenseUpdate, today: date) -> dict[str, Any]:
    """Validate only the fields present in a partial update.

    The two year history bound applies at creation only; an update may keep
    or move an old expense as long as the date is not in the future.

    Returns:
        Dictionary of validated field values keyed by field name.
    """
    if update.is_empty():
        raise ValidationError("No fields provided for update")

    for name in ("amount", "description", "category", "date"):
        if update.provides(name) and update.get(name) is None:
            raise ValidationError(f"{name.capitalize()} cannot be cleared")

    validated: dict[str, Any] = {}
    if update.provides("amount"):
        validated["amount"] = validate_amount(update.get("amount"))
    if update.provides("description"):
        validated["description"] = validate_description(update.get("description"))
    if update.provides("category"):
        validated["category"] = validate_category(update.get("category"))
    if update.provides("date"):
        validated["date"] = validate_date(update.get("date"), today, enforce_history=False)
    return validated


def validate_expense_id(raw: Any) -> ExpenseId:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
        raise ValidationError(f"Invalid expense ID: {raw}")
    return ExpenseId(raw)


def validate_filter(spec: FilterSpec) -> None:
    """Check amount and date bounds and the sort direction of a filter."""
    if spec.min_amount is not None and spec.min_amount < 0:
        raise ValidationError("Minimum amount must be positive or zero")
    if spec.max_amount is not None and spec.max_amount <= 0:
        raise ValidationError("Maximum amount must be positive")
    if spec.min_amount is not None and spec.max_amount is not None and spec.max_amount < spec.min_amount:
        raise ValidationError("Maximum amount must be greater than minimum amount")
    if spec.start_date is not None and spec.end_date is not None and spec.end_date < spec.start_date:
        raise ValidationError("End date must be after start date")
    if (spec.sort_direction or "").lower() not in SORT_DIRECTIONS:
        raise ValidationError("Sort direction must be 'asc' or 'desc'")


def validate_page(page: int, size: int) -> None:
    if page < 0:
        raise ValidationError("Page number must be non-negative")
    if size < 1:
        raise ValidationError("Page size must be at least 1")
    if size > MAX_PAGE_SIZE:
        raise ValidationError(f"Page size cannot exceed {MAX_PAGE_SIZE}")


def validate_limit(limit: int) -> None:
    if limit < 0:
        raise ValidationError("Limit must be non-negative")


def validate_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}")
