"""Product Inventory - Main entry point."""
import logging

from nicegui import app, ui

from config import APP_TITLE, APP_PORT, APP_HOST, LOG_LEVEL
from src.models import init_db
from src.services import ProductStore, SqlBlobStorage
from src.ui.pages.product_form import product_form_page
from src.ui.pages.product_list import product_list_page

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize database tables on startup
init_db()

# One store for the lifetime of the app, loaded once from storage
store = ProductStore(SqlBlobStorage())
store.load()


@ui.page("/")
def create_view():
    product_form_page(store)


@ui.page("/edit/{product_id}")
def edit_view(product_id: str):
    product_form_page(store, product_id=product_id)


@ui.page("/list")
def list_view(
    search: str | None = None,
    category: str | None = None,
    sortField: str | None = None,
    sortOrder: str | None = None,
    page: str | None = None,
):
    params = {
        "search": search,
        "category": category,
        "sortField": sortField,
        "sortOrder": sortOrder,
        "page": page,
    }
    product_list_page(store, {k: v for k, v in params.items() if v is not None})


@app.get("/_health")
async def health_check():
    return {"status": "ok", "app": "product-inventory", "products": len(store.items)}


ui.run(
    title=APP_TITLE,
    host=APP_HOST,
    port=APP_PORT,
    reload=False,
    dark=False,
)
