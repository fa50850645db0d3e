"""Field-level validation rules for product drafts.

Every rule runs on each call (full revalidation); a draft is submittable
only when no rule reports a violation.
"""
from dataclasses import dataclass
from datetime import date

from config import CATEGORIES, DISCOUNT_MAX, DISCOUNT_MIN
from src.models.product import ProductDraft, ProductRecord
from src.services.utils import parse_date, parse_number

REQUIRED_FIELD = "RequiredField"
INVALID_RANGE = "InvalidRange"
INVALID_DATE = "InvalidDate"
DUPLICATE_ID = "DuplicateId"


@dataclass(frozen=True)
class Violation:
    kind: str
    message: str


class ValidationError(Exception):
    """Raised when a product fails one or more field rules."""

    def __init__(self, violations: dict[str, Violation]):
        self.violations = violations
        fields = ", ".join(sorted(violations))
        super().__init__(f"Invalid product fields: {fields}")


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_draft(draft: ProductDraft, today: date | None = None) -> dict[str, Violation]:
    """Return ``{field: Violation}`` for every failing rule (empty if valid)."""
    today = today or date.today()
    errors: dict[str, Violation] = {}

    if not (draft.name or "").strip():
        errors["name"] = Violation(REQUIRED_FIELD, "Name is required")

    if draft.category not in CATEGORIES:
        errors["category"] = Violation(REQUIRED_FIELD, "Category is required")

    cost = parse_number(draft.cost_price)
    if cost is None or cost <= 0:
        errors["cost_price"] = Violation(INVALID_RANGE, "Cost price must be positive")

    sell = parse_number(draft.sell_price)
    if sell is None or sell <= 0:
        errors["sell_price"] = Violation(INVALID_RANGE, "Sell price must be positive")

    if not _blank(draft.discount):
        discount = parse_number(draft.discount)
        if discount is None or discount < DISCOUNT_MIN or discount > DISCOUNT_MAX:
            errors["discount"] = Violation(
                INVALID_RANGE, f"Discount must be between {DISCOUNT_MIN}-{DISCOUNT_MAX}%"
            )

    try:
        expiry = parse_date(draft.expiry_date)
    except (TypeError, ValueError):
        errors["expiry_date"] = Violation(INVALID_DATE, "Expiry date is not a valid date")
    else:
        if expiry is not None and expiry < today:
            errors["expiry_date"] = Violation(INVALID_DATE, "Expiry date cannot be in the past")

    return errors


def validate_record(record: ProductRecord, today: date | None = None) -> dict[str, Violation]:
    """Run the draft rules against an already-typed record."""
    return validate_draft(ProductDraft.from_record(record), today=today)


def draft_to_record(draft: ProductDraft, product_id: str = "", today: date | None = None) -> ProductRecord:
    """Convert a draft into a typed record, raising ValidationError if invalid."""
    errors = validate_draft(draft, today=today)
    if errors:
        raise ValidationError(errors)
    return ProductRecord(
        id=product_id,
        name=draft.name.strip(),
        category=draft.category,
        description=(draft.description or "").strip(),
        expiry_date=parse_date(draft.expiry_date),
        cost_price=parse_number(draft.cost_price),
        sell_price=parse_number(draft.sell_price),
        discount=0 if _blank(draft.discount) else parse_number(draft.discount),
    )
