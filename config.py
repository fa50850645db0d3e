"""Application configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Paths
BASE_DIR = Path(__file__).parent
DATA_DIR = Path(os.getenv("INVENTORY_DATA_DIR", str(BASE_DIR / "data")))
DB_PATH = DATA_DIR / "inventory.db"

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DB_PATH}")

# Key under which the serialized product list is stored
STORAGE_KEY = "products"

# Fixed set of product categories offered by the form and the list filter
CATEGORIES: list[str] = [
    "Dairy",
    "Bakery",
    "Beverages",
    "Produce",
    "Meat & Seafood",
    "Frozen",
    "Snacks",
    "Household",
    "Personal Care",
]

# List view
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

# Sortable list columns -> header labels (keys double as query-string values)
SORTABLE_FIELDS: dict[str, str] = {
    "name": "Name",
    "category": "Category",
    "expiryDate": "Expiry Date",
    "costPrice": "Cost Price",
    "sellPrice": "Sell Price",
    "discount": "Discount",
    "finalPrice": "Final Price",
}

# Discount bounds (percent)
DISCOUNT_MIN = 0
DISCOUNT_MAX = 90

# Cosmetic feedback delays (seconds)
SUBMIT_FEEDBACK_DELAY = 1.0
REDIRECT_DELAY = 1.2
DELETE_FEEDBACK_DELAY = 0.8
BULK_DELETE_FEEDBACK_DELAY = 1.0

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# App settings
APP_TITLE = "Product Inventory"
APP_PORT = int(os.getenv("APP_PORT", "8080"))
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
