"""Translate list view state to and from a flat query-string mapping."""
import logging
from urllib.parse import urlencode

from config import CATEGORIES, SORTABLE_FIELDS
from src.models.view_state import SORT_ASC, SORT_DESC, ViewState

logger = logging.getLogger(__name__)

PARAM_KEYS = ("search", "category", "sortField", "sortOrder", "page")


def view_state_to_params(view: ViewState) -> dict[str, str]:
    """Return the shareable params for *view*; empty values are left out."""
    params: dict[str, str] = {}
    if view.search:
        params["search"] = view.search
    if view.category:
        params["category"] = view.category
    if view.sort.field:
        params["sortField"] = view.sort.field
        params["sortOrder"] = view.sort.order
    params["page"] = str(view.page)
    return params


def to_query_string(view: ViewState) -> str:
    return urlencode(view_state_to_params(view))


def apply_params(store, params: dict) -> None:
    """Seed the store's view state from any present keys; bad values are ignored."""
    search = params.get("search")
    if search:
        store.set_search(search)

    category = params.get("category")
    if category:
        if category in CATEGORIES:
            store.set_category(category)
        else:
            logger.debug("Ignoring unknown category param %r", category)

    sort_field = params.get("sortField")
    if sort_field:
        if sort_field in SORTABLE_FIELDS:
            order = params.get("sortOrder") or SORT_ASC
            if order not in (SORT_ASC, SORT_DESC):
                order = SORT_ASC
            store.set_sort(sort_field, order)
        else:
            logger.debug("Ignoring unknown sortField param %r", sort_field)

    page = params.get("page")
    if page:
        try:
            store.set_page(int(page))
        except (TypeError, ValueError):
            logger.debug("Ignoring non-numeric page param %r", page)
