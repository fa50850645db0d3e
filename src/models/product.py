"""Product record and draft models."""
from dataclasses import dataclass
from datetime import date
from typing import Any


def final_price_for(sell_price: float, discount: float) -> float:
    """Return the discounted price: sell_price minus discount percent of itself."""
    return sell_price - sell_price * discount / 100


@dataclass
class ProductRecord:
    """A stored product. ``id`` is assigned by the store on create."""

    name: str
    category: str
    cost_price: float
    sell_price: float
    discount: float = 0
    description: str = ""
    expiry_date: date | None = None
    id: str = ""

    @property
    def final_price(self) -> float:
        return final_price_for(self.sell_price, self.discount)

    def to_dict(self) -> dict:
        """Serialize using the persisted (camelCase) field names."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "expiryDate": self.expiry_date.isoformat() if self.expiry_date else "",
            "costPrice": self.cost_price,
            "sellPrice": self.sell_price,
            "discount": self.discount,
            "finalPrice": self.final_price,
        }

    def __repr__(self) -> str:
        return f"<ProductRecord id={self.id!r} name={self.name!r}>"


@dataclass
class ProductDraft:
    """In-progress form values, possibly invalid (raw input values)."""

    name: str = ""
    category: str = ""
    description: str = ""
    expiry_date: Any = ""
    cost_price: Any = None
    sell_price: Any = None
    discount: Any = None
    final_price: float | None = None

    @classmethod
    def from_record(cls, record: ProductRecord) -> "ProductDraft":
        return cls(
            name=record.name,
            category=record.category,
            description=record.description,
            expiry_date=record.expiry_date.isoformat() if record.expiry_date else "",
            cost_price=record.cost_price,
            sell_price=record.sell_price,
            discount=record.discount,
            final_price=record.final_price,
        )
