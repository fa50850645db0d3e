"""Product form page -- create a new product or edit an existing one."""
import asyncio
import logging

from nicegui import ui

from config import CATEGORIES, REDIRECT_DELAY, SUBMIT_FEEDBACK_DELAY
from src.services import ProductFormController, ProductStore
from src.services.form_controller import STATE_DONE
from src.ui.components.helpers import INPUT_PROPS, field_error, format_money, page_header
from src.ui.layout import build_layout

logger = logging.getLogger(__name__)


def product_form_page(store: ProductStore, product_id: str | None = None):
    """Render the create/edit form.

    Args:
        store: The process-wide product store.
        product_id: Id of the product to edit (from the URL); None for create.
    """
    controller = ProductFormController(store)
    if product_id is not None:
        redirect = controller.bind(product_id)
        if redirect is not None:
            ui.navigate.to(redirect.path)
            return

    content = build_layout()
    # Suppresses on_change handlers while inputs are filled programmatically
    _filling = {"active": False}

    with content:
        header = ui.column().classes("gap-1")

        def _render_header():
            header.clear()
            with header:
                if controller.is_edit:
                    page_header("Edit Product", subtitle=f"Product #{controller.product_id}", icon="edit")
                else:
                    page_header("Add New Product", subtitle="Fields marked * are required.", icon="add_circle")

        _render_header()

        with ui.card().classes("w-full max-w-2xl p-6"):
            draft = controller.draft
            inputs = {}

            inputs["name"] = ui.input(
                label="Product Name *", placeholder="Enter product name", value=draft.name,
            ).props(INPUT_PROPS).classes("w-full")

            inputs["category"] = ui.select(
                options=CATEGORIES, label="Category *", value=draft.category or None,
            ).props(INPUT_PROPS).classes("w-full")

            inputs["description"] = ui.textarea(
                label="Description", placeholder="Short description", value=draft.description,
            ).props(INPUT_PROPS).classes("w-full")

            with ui.row().classes("w-full gap-4 no-wrap"):
                inputs["expiry_date"] = ui.input(
                    label="Expiry Date", value=draft.expiry_date or "",
                ).props(f"{INPUT_PROPS} type=date stack-label").classes("flex-1")
                inputs["cost_price"] = ui.number(
                    label="Cost Price *", value=draft.cost_price, min=0, format="%.2f",
                ).props(INPUT_PROPS).classes("flex-1")

            with ui.row().classes("w-full gap-4 no-wrap"):
                inputs["sell_price"] = ui.number(
                    label="Sell Price *", value=draft.sell_price, min=0, format="%.2f",
                ).props(INPUT_PROPS).classes("flex-1")
                inputs["discount"] = ui.number(
                    label="Discount (%)", value=draft.discount, min=0, max=90,
                ).props(INPUT_PROPS).classes("flex-1")

            final_price_label = ui.label("").classes("text-subtitle1 font-bold mt-2")

            with ui.row().classes("w-full justify-between mt-4"):
                reset_btn = ui.button("Reset", icon="restart_alt").props("outline color=secondary")
                submit_btn = ui.button(
                    "Update" if controller.is_edit else "Save", icon="save",
                ).props("color=primary")

        def _refresh_feedback():
            visible = controller.visible_errors
            for name, widget in inputs.items():
                violation = visible.get(name)
                field_error(widget, violation.message if violation else None)
            final_price_label.text = (
                f"Final Price: {format_money(controller.draft.final_price)}"
            )
            submit_btn.set_enabled(controller.is_valid and not controller.is_locked)
            reset_btn.set_enabled(not controller.is_locked)

        def _on_change(name, value):
            if _filling["active"]:
                return
            controller.set_field(name, value)
            _refresh_feedback()

        for field_name, widget in inputs.items():
            widget.on_value_change(lambda e, n=field_name: _on_change(n, e.value))

        def _reset():
            controller.reset()
            _filling["active"] = True
            try:
                for widget in inputs.values():
                    widget.value = None if isinstance(widget, (ui.number, ui.select)) else ""
            finally:
                _filling["active"] = False
            submit_btn.text = "Save"
            _render_header()
            _refresh_feedback()

        async def _submit():
            submit_btn.props("loading")
            destination = controller.submit()
            _refresh_feedback()
            if destination is None:
                submit_btn.props(remove="loading")
                ui.notify("Please fix the highlighted fields.", type="warning")
                return
            if controller.state != STATE_DONE:
                ui.notify("This product no longer exists.", type="negative")
                ui.navigate.to(destination.path)
                return

            await asyncio.sleep(SUBMIT_FEEDBACK_DELAY)
            submit_btn.props(remove="loading")
            if store.view.error:
                ui.notify(store.view.error, type="negative")
            else:
                verb = "updated" if controller.is_edit else "saved"
                ui.notify(f"Product {verb} successfully!", type="positive")
            await asyncio.sleep(REDIRECT_DELAY)
            ui.navigate.to(destination.path)

        reset_btn.on_click(_reset)
        submit_btn.on_click(_submit)
        _refresh_feedback()
