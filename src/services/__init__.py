"""Services package."""
from src.services.storage import SqlBlobStorage, PersistenceReadError, PersistenceWriteError
from src.services.pricing import compute_final_price
from src.services.validation import ValidationError, Violation, validate_draft, draft_to_record
from src.services.product_query import QueryResult, Totals, run_query
from src.services.product_store import ProductStore, NotFoundError
from src.services.query_params import apply_params, view_state_to_params, to_query_string
from src.services.navigation import Destination, go_to_list, go_to_edit, go_to_create
from src.services.form_controller import ProductFormController
from src.services.list_controller import ProductListController, EmptySelectionError

__all__ = [
    "SqlBlobStorage",
    "PersistenceReadError",
    "PersistenceWriteError",
    "compute_final_price",
    "ValidationError",
    "Violation",
    "validate_draft",
    "draft_to_record",
    "QueryResult",
    "Totals",
    "run_query",
    "ProductStore",
    "NotFoundError",
    "apply_params",
    "view_state_to_params",
    "to_query_string",
    "Destination",
    "go_to_list",
    "go_to_edit",
    "go_to_create",
    "ProductFormController",
    "ProductListController",
    "EmptySelectionError",
]
