"""Models package."""
from src.models.database import Base, engine, SessionLocal, init_db
from src.models.kv_entry import KeyValueEntry
from src.models.product import ProductDraft, ProductRecord, final_price_for
from src.models.view_state import SortSpec, ViewState

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "init_db",
    "KeyValueEntry",
    "ProductDraft",
    "ProductRecord",
    "final_price_for",
    "SortSpec",
    "ViewState",
]
