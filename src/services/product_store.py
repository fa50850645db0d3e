"""Product store: the canonical product list plus list view state.

The store is the only component that talks to the persistence adapter.
Every change to ``items`` writes the full list back exactly once.
"""
import logging
from dataclasses import replace
from datetime import date

from src.models.product import ProductRecord
from src.models.view_state import (
    SORT_ASC, SORT_DESC, STATUS_ERROR, STATUS_IDLE, STATUSES, SortSpec, ViewState,
)
from src.services.product_query import QueryResult, run_query
from src.services.storage import PersistenceWriteError
from src.services.utils import parse_number
from src.services.validation import DUPLICATE_ID, ValidationError, Violation, validate_record

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Could not save products. Please try again."


def _numeric_id(product_id) -> int | None:
    """Integer value of a stored id; None for ids like "legacy" or "1e400"."""
    try:
        return int(product_id)
    except (TypeError, ValueError):
        pass
    number = parse_number(product_id)
    return int(number) if number is not None else None


class NotFoundError(Exception):
    """Raised when a product id is not in the store."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id!r} not found")


class ProductStore:
    """Owns the product collection and the list view state."""

    def __init__(self, storage, page_size: int | None = None):
        self.storage = storage
        self.items: list[ProductRecord] = []
        self.view = ViewState()
        if page_size is not None:
            self.view.page_size = page_size

    # ------------------------------------------------------------------
    # Loading / persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Replace items with the persisted list ([] if absent or corrupt)."""
        self.items = self.storage.read_all()
        logger.info("Product store loaded with %d item(s)", len(self.items))

    def save(self) -> bool:
        """Write the current list again; used to retry after a failed save."""
        if self._persist():
            self.set_status(STATUS_IDLE)
            return True
        return False

    def _persist(self) -> bool:
        try:
            self.storage.write_all(list(self.items))
        except PersistenceWriteError:
            logger.error("Persisting %d product(s) failed", len(self.items))
            self.set_error(SAVE_FAILED_MESSAGE)
            return False
        if self.view.status == STATUS_ERROR:
            logger.info("Save succeeded; clearing previous save error")
            self.set_status(STATUS_IDLE)
        return True

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, product_id: str) -> ProductRecord | None:
        for record in self.items:
            if record.id == product_id:
                return record
        return None

    def next_id(self) -> str:
        """Return max numeric id + 1 (``"1"`` for an empty store)."""
        numeric = [n for n in (_numeric_id(r.id) for r in self.items) if n is not None]
        return str(max(numeric, default=0) + 1)

    # ------------------------------------------------------------------
    # Mutations (each persists once)
    # ------------------------------------------------------------------

    def add(self, record: ProductRecord, today: date | None = None) -> ProductRecord:
        """Validate, assign a fresh id, append and persist. Returns the stored record."""
        errors = validate_record(record, today=today)
        if errors:
            raise ValidationError(errors)
        new_record = replace(record, id=self.next_id())
        if self.get(new_record.id) is not None:
            raise ValidationError({"id": Violation(DUPLICATE_ID, f"Duplicate id {new_record.id}")})
        self.items.append(new_record)
        logger.info("Added product %s (%s)", new_record.id, new_record.name)
        self._persist()
        return new_record

    def update(self, record: ProductRecord, today: date | None = None) -> ProductRecord:
        """Replace the record with the same id in place and persist."""
        for index, existing in enumerate(self.items):
            if existing.id == record.id:
                break
        else:
            raise NotFoundError(record.id)
        errors = validate_record(record, today=today)
        if errors:
            raise ValidationError(errors)
        self.items[index] = record
        logger.info("Updated product %s", record.id)
        self._persist()
        return record

    def remove(self, product_id: str) -> None:
        self.items = [r for r in self.items if r.id != product_id]
        logger.info("Removed product %s", product_id)
        self._persist()

    def bulk_remove(self, product_ids) -> int:
        """Remove every id in *product_ids*; an empty set is a no-op.

        Returns the number of records removed.
        """
        ids = set(product_ids)
        if not ids:
            return 0
        before = len(self.items)
        self.items = [r for r in self.items if r.id not in ids]
        removed = before - len(self.items)
        logger.info("Bulk removed %d product(s)", removed)
        self._persist()
        return removed

    # ------------------------------------------------------------------
    # View state (no persistence)
    # ------------------------------------------------------------------

    def set_search(self, search: str | None) -> None:
        self.view.search = search or ""

    def set_category(self, category: str | None) -> None:
        self.view.category = category or None

    def set_sort(self, field: str | None, order: str = SORT_ASC) -> None:
        if order not in (SORT_ASC, SORT_DESC):
            raise ValueError(f"Unknown sort order: {order!r}")
        self.view.sort = SortSpec(field=field or None, order=order)

    def set_page(self, page: int) -> None:
        self.view.page = max(1, int(page))

    def set_status(self, status: str) -> None:
        if status not in STATUSES:
            raise ValueError(f"Unknown status: {status!r}")
        if status == STATUS_ERROR:
            self.view.error = self.view.error or SAVE_FAILED_MESSAGE
        else:
            self.view.error = None
        self.view.status = status

    def set_error(self, message: str) -> None:
        self.view.error = message or SAVE_FAILED_MESSAGE
        self.view.status = STATUS_ERROR

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(self) -> QueryResult:
        """Run the list pipeline and correct the stored page if it overflowed."""
        result = run_query(self.items, self.view)
        if result.page != self.view.page:
            logger.debug("Clamping page %d -> %d", self.view.page, result.page)
            self.view.page = result.page
        return result
