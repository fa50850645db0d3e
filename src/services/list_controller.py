"""List view controller: row selection, sorting clicks and deletes."""
import logging
from contextlib import contextmanager

from src.models.view_state import SORT_ASC, SORT_DESC, STATUS_ERROR, STATUS_IDLE, STATUS_LOADING
from src.services.product_query import QueryResult
from src.services.product_store import ProductStore

logger = logging.getLogger(__name__)


class EmptySelectionError(Exception):
    """Raised when a bulk delete is requested with nothing selected."""

    def __init__(self, message: str = "No items selected"):
        super().__init__(message)


class ProductListController:
    def __init__(self, store: ProductStore):
        self.store = store
        self.selected: set[str] = set()

    def query(self) -> QueryResult:
        return self.store.query()

    @property
    def is_busy(self) -> bool:
        """True while a delete is in flight; bulk delete is disabled meanwhile."""
        return self.store.view.status == STATUS_LOADING

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_row(self, product_id: str, checked: bool) -> None:
        if checked:
            self.selected.add(product_id)
        else:
            self.selected.discard(product_id)

    def toggle_page(self, page_ids: list[str], checked: bool) -> None:
        """Select every row on the page, or clear the selection."""
        if checked:
            self.selected = set(page_ids)
        else:
            self.selected.clear()

    def all_selected(self, page_ids: list[str]) -> bool:
        return bool(page_ids) and self.selected.issuperset(page_ids)

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------

    def toggle_sort(self, field: str) -> None:
        """Ascending on a new column; flip to descending on the current ascending one."""
        current = self.store.view.sort
        order = SORT_DESC if current.field == field and current.order == SORT_ASC else SORT_ASC
        self.store.set_sort(field, order)

    # ------------------------------------------------------------------
    # Deletes
    # ------------------------------------------------------------------

    @contextmanager
    def _loading(self):
        self.store.set_status(STATUS_LOADING)
        try:
            yield
        finally:
            if self.store.view.status != STATUS_ERROR:
                self.store.set_status(STATUS_IDLE)

    def delete(self, product_id: str) -> None:
        with self._loading():
            self.store.remove(product_id)
        self.selected.discard(product_id)

    def bulk_delete(self) -> int:
        """Delete all selected products and clear the selection."""
        if not self.selected:
            raise EmptySelectionError()
        ids = set(self.selected)
        with self._loading():
            removed = self.store.bulk_remove(ids)
        self.selected.clear()
        logger.info("Bulk delete removed %d of %d selected", removed, len(ids))
        return removed
