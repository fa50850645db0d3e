"""Product form controller: one draft, live validation, create/edit submit.

States::

    create --bind(id)--> edit
    create | edit --submit (valid)--> submitting --> done
    any --reset--> create

A submit with violations leaves the state unchanged and keeps the errors.
"""
import logging
from datetime import date

from src.models.product import ProductDraft, ProductRecord
from src.services.navigation import Destination, go_to_list
from src.services.pricing import compute_final_price
from src.services.product_store import NotFoundError, ProductStore
from src.services.validation import ValidationError, Violation, draft_to_record, validate_draft

logger = logging.getLogger(__name__)

STATE_CREATE = "create"
STATE_EDIT = "edit"
STATE_SUBMITTING = "submitting"
STATE_DONE = "done"

EDITABLE_FIELDS = (
    "name", "category", "description", "expiry_date",
    "cost_price", "sell_price", "discount",
)
_PRICE_INPUTS = ("sell_price", "discount")


class ProductFormController:
    def __init__(self, store: ProductStore, today=date.today):
        self.store = store
        self._today = today
        self.state = STATE_CREATE
        self.product_id: str | None = None
        self.draft = ProductDraft()
        self.errors: dict[str, Violation] = {}
        self.touched: set[str] = set()
        self.saved: ProductRecord | None = None
        self.revalidate()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_edit(self) -> bool:
        return self.product_id is not None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def is_submitting(self) -> bool:
        return self.state == STATE_SUBMITTING

    @property
    def is_locked(self) -> bool:
        return self.state in (STATE_SUBMITTING, STATE_DONE)

    @property
    def visible_errors(self) -> dict[str, Violation]:
        """Errors for fields the user has touched (all of them after a submit)."""
        return {k: v for k, v in self.errors.items() if k in self.touched}

    def bind(self, product_id: str) -> Destination | None:
        """Enter edit mode for *product_id*; returns a list redirect if it is gone."""
        record = self.store.get(product_id)
        if record is None:
            logger.warning("Edit target %s not found; redirecting to list", product_id)
            return go_to_list()
        self.product_id = record.id
        self.draft = ProductDraft.from_record(record)
        self.state = STATE_EDIT
        self.touched = set()
        self.revalidate()
        return None

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_field(self, name: str, value) -> None:
        """Update one draft field and revalidate the whole draft."""
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"{name!r} is not an editable product field")
        if self.is_locked:
            return
        setattr(self.draft, name, value)
        self.touched.add(name)
        if name in _PRICE_INPUTS:
            self.draft.final_price = compute_final_price(self.draft.sell_price, self.draft.discount)
        self.revalidate()

    def revalidate(self) -> None:
        self.errors = validate_draft(self.draft, today=self._today())

    def reset(self) -> None:
        """Clear the draft and return to a blank create form."""
        self.state = STATE_CREATE
        self.product_id = None
        self.draft = ProductDraft()
        self.touched = set()
        self.saved = None
        self.revalidate()

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    def submit(self) -> Destination | None:
        """Validate and dispatch create/update to the store.

        Returns the destination to navigate to on success (or when the edit
        target vanished), else None with ``errors`` populated.
        """
        if self.is_locked:
            logger.debug("Ignoring submit while %s", self.state)
            return None

        self.touched.update(EDITABLE_FIELDS)
        self.revalidate()
        if self.errors:
            return None

        origin = self.state
        self.state = STATE_SUBMITTING
        today = self._today()
        try:
            record = draft_to_record(self.draft, product_id=self.product_id or "", today=today)
            if origin == STATE_EDIT:
                self.saved = self.store.update(record, today=today)
            else:
                self.saved = self.store.add(record, today=today)
        except ValidationError as exc:
            self.errors = exc.violations
            self.state = origin
            return None
        except NotFoundError:
            logger.warning("Product %s vanished before update", self.product_id)
            self.state = origin
            return go_to_list()

        self.state = STATE_DONE
        return go_to_list()
