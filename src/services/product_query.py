"""List query pipeline: filter -> sort -> paginate -> aggregate.

All functions are pure; the whole record set is rescanned on every call.
"""
import math
from dataclasses import dataclass, field

from src.models.product import ProductRecord
from src.models.view_state import SortSpec, ViewState

# Sortable field name -> key extractor. None means "no value" (sorted last).
SORT_KEYS = {
    "name": lambda r: r.name,
    "category": lambda r: r.category,
    "expiryDate": lambda r: r.expiry_date,
    "costPrice": lambda r: r.cost_price,
    "sellPrice": lambda r: r.sell_price,
    "discount": lambda r: r.discount,
    "finalPrice": lambda r: r.final_price,
}


@dataclass
class Totals:
    cost: float = 0.0
    sell: float = 0.0
    final: float = 0.0


@dataclass
class QueryResult:
    items: list[ProductRecord] = field(default_factory=list)
    total_items: int = 0
    total_pages: int = 0
    page: int = 1
    totals: Totals = field(default_factory=Totals)

    @property
    def page_ids(self) -> list[str]:
        return [r.id for r in self.items]


def filter_by_search(records: list[ProductRecord], search: str | None) -> list[ProductRecord]:
    """Case-insensitive substring match against name or description."""
    term = (search or "").lower()
    if not term:
        return list(records)
    return [
        r for r in records
        if term in (r.name or "").lower() or term in (r.description or "").lower()
    ]


def filter_by_category(records: list[ProductRecord], category: str | None) -> list[ProductRecord]:
    if not category:
        return list(records)
    return [r for r in records if r.category == category]


def sort_records(records: list[ProductRecord], sort: SortSpec | None) -> list[ProductRecord]:
    """Stable sort by the SortSpec field; unset or unknown field keeps order."""
    key = SORT_KEYS.get(sort.field) if sort and sort.field else None
    if key is None:
        return list(records)
    present = [r for r in records if key(r) is not None]
    missing = [r for r in records if key(r) is None]
    return sorted(present, key=key, reverse=sort.descending) + missing


def count_pages(total_items: int, page_size: int) -> int:
    return math.ceil(total_items / page_size) if page_size > 0 else 0


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a 1-based page number into [1, max(1, total_pages)]."""
    return max(1, min(page, max(1, total_pages)))


def paginate(records: list[ProductRecord], page: int, page_size: int) -> list[ProductRecord]:
    start = (page - 1) * page_size
    return records[start:start + page_size]


def aggregate_totals(records: list[ProductRecord]) -> Totals:
    """Sum cost, sell and final price over the given records."""
    totals = Totals()
    for r in records:
        totals.cost += r.cost_price or 0
        totals.sell += r.sell_price or 0
        totals.final += r.final_price or 0
    return totals


def run_query(records: list[ProductRecord], view: ViewState) -> QueryResult:
    """Run the full pipeline for the given view state.

    The returned ``page`` is the clamped page actually shown; callers owning
    the view state should store it back.
    """
    filtered = filter_by_search(records, view.search)
    filtered = filter_by_category(filtered, view.category)
    ordered = sort_records(filtered, view.sort)

    total_items = len(ordered)
    total_pages = count_pages(total_items, view.page_size)
    page = clamp_page(view.page, total_pages)

    return QueryResult(
        items=paginate(ordered, page, view.page_size),
        total_items=total_items,
        total_pages=total_pages,
        page=page,
        totals=aggregate_totals(filtered),
    )
