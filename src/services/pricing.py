"""Final price derivation for form drafts."""
from typing import Optional

from src.models.product import final_price_for
from src.services.utils import parse_number


def compute_final_price(sell_price, discount) -> Optional[float]:
    """Return sell_price minus discount percent, or None without a sell price.

    Accepts raw form values. A missing discount counts as 0; an unparsable
    discount leaves the final price undetermined.
    """
    sell = parse_number(sell_price)
    if sell is None:
        return None
    if discount is None or (isinstance(discount, str) and not discount.strip()):
        return final_price_for(sell, 0)
    pct = parse_number(discount)
    if pct is None:
        return None
    return final_price_for(sell, pct)
