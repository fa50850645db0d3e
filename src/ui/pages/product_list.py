"""Product list page -- search, filter, sort, paginate and delete products."""
import asyncio
import json
import logging

from nicegui import ui

from config import (
    BULK_DELETE_FEEDBACK_DELAY, CATEGORIES, DELETE_FEEDBACK_DELAY, SORTABLE_FIELDS,
)
from src.models.view_state import STATUS_ERROR, STATUS_IDLE, STATUS_LOADING
from src.services import (
    EmptySelectionError, ProductListController, ProductStore,
    apply_params, go_to_create, go_to_edit, to_query_string,
)
from src.ui.components.helpers import (
    HOVER_BG, format_money, format_percent, page_header, sort_indicator,
)
from src.ui.components.stats_card import stats_card
from src.ui.layout import build_layout

logger = logging.getLogger(__name__)

_ALL_CATEGORIES = ""


def product_list_page(store: ProductStore, params: dict | None = None):
    """Render the product list.

    Args:
        store: The process-wide product store.
        params: Query-string values (search, category, sortField, sortOrder,
            page) used to seed the view state.
    """
    apply_params(store, params or {})
    controller = ProductListController(store)
    content = build_layout()

    with content:
        page_header("Products", subtitle="Browse and manage your inventory.", icon="inventory_2")

        # --- Filter bar ---
        with ui.row().classes("w-full items-end gap-3"):
            search_input = ui.input(
                label="Search products",
                placeholder="Search name/description...",
                value=store.view.search,
            ).props("clearable outlined dense").classes("flex-1")
            search_input.props('prepend-inner-icon="search"')

            category_select = ui.select(
                options={_ALL_CATEGORIES: "All Categories", **{c: c for c in CATEGORIES}},
                value=store.view.category or _ALL_CATEGORIES,
                label="Category",
            ).props("outlined dense").classes("w-48")

            bulk_btn = ui.button("Bulk Delete", icon="delete_sweep").props("color=negative outline")
            ui.button(
                "Add Product", icon="add",
                on_click=lambda: ui.navigate.to(go_to_create().path),
            ).props("color=positive")

        results = ui.column().classes("w-full gap-3")

        def _sync_url():
            url = f"/list?{to_query_string(store.view)}"
            ui.run_javascript(f"history.replaceState(null, '', {json.dumps(url)})")

        def refresh():
            results.clear()
            result = controller.query()
            bulk_btn.set_text("Deleting..." if controller.is_busy else "Bulk Delete")
            bulk_btn.set_enabled(not controller.is_busy)
            _sync_url()
            with results:
                _render_results(result)

        def _render_results(result):
            view = store.view

            if view.status == STATUS_ERROR:
                with ui.card().classes("w-full p-8"):
                    with ui.column().classes("items-center w-full gap-2"):
                        ui.icon("warning", size="xl").classes("text-negative")
                        ui.label(view.error or "Oops! Something went wrong.").classes(
                            "text-h6 text-secondary"
                        )
                        ui.button("Retry", icon="refresh", on_click=_retry).props("color=primary")
                return

            if view.status == STATUS_LOADING:
                with ui.column().classes("items-center w-full gap-2 p-8"):
                    ui.spinner(size="lg")
                    ui.label("Updating products...").classes("text-body2 text-secondary")
                return

            if not store.items:
                with ui.card().classes("w-full p-8"):
                    with ui.column().classes("items-center w-full gap-2"):
                        ui.icon("inventory_2", size="xl").classes("text-accent")
                        ui.label("No products found yet.").classes("text-h6 text-secondary")
                        ui.button(
                            "Add Product", icon="add",
                            on_click=lambda: ui.navigate.to(go_to_create().path),
                        ).props("color=primary")
                return

            page_ids = result.page_ids

            # --- Header row ---
            with ui.row().classes("w-full items-center gap-2 px-3 no-wrap"):
                ui.checkbox(
                    value=controller.all_selected(page_ids),
                    on_change=lambda e: _on_select_page(page_ids, e.value),
                ).set_enabled(bool(page_ids))
                for field, label in SORTABLE_FIELDS.items():
                    arrow = sort_indicator(field, view.sort)
                    ui.button(
                        f"{label} {arrow}".strip(),
                        on_click=lambda _, f=field: _on_sort(f),
                    ).props("flat dense no-caps color=secondary").classes("flex-1")
                ui.label("Actions").classes("text-caption text-secondary w-28 text-center")

            if not result.items:
                ui.label("No products match your filters.").classes("text-body2 text-secondary")

            for record in result.items:
                _render_row(record)

            # --- Totals over the whole filtered set ---
            with ui.row().classes("w-full gap-4"):
                stats_card("Total Cost", format_money(result.totals.cost), icon="payments")
                stats_card("Total Sell", format_money(result.totals.sell), icon="sell", color="accent")
                stats_card("Total Final", format_money(result.totals.final), icon="price_check", color="positive")

            # --- Pagination ---
            with ui.row().classes("w-full items-center gap-3"):
                ui.label(
                    f"Page {result.page} of {max(1, result.total_pages)} - {result.total_items} items"
                ).classes("text-body2 text-secondary flex-1")
                if controller.selected:
                    ui.label(f"{len(controller.selected)} selected").classes("text-body2 text-primary")
                prev_btn = ui.button(icon="chevron_left", on_click=lambda: _go_to(result.page - 1))
                prev_btn.props("flat dense round")
                prev_btn.set_enabled(result.page > 1)
                next_btn = ui.button(icon="chevron_right", on_click=lambda: _go_to(result.page + 1))
                next_btn.props("flat dense round")
                next_btn.set_enabled(result.page < result.total_pages)

        def _render_row(p):
            with ui.card().classes(f"w-full p-2 {HOVER_BG}"):
                with ui.row().classes("w-full items-center gap-2 no-wrap"):
                    ui.checkbox(
                        value=p.id in controller.selected,
                        on_change=lambda e, pid=p.id: _on_select_row(pid, e.value),
                    )
                    ui.label(p.name).classes("flex-1 text-body2 font-bold")
                    ui.badge(p.category, color="blue-2").props("outline").classes("flex-1")
                    ui.label(p.expiry_date.isoformat() if p.expiry_date else "-").classes("flex-1 text-body2")
                    ui.label(format_money(p.cost_price)).classes("flex-1 text-body2")
                    ui.label(format_money(p.sell_price)).classes("flex-1 text-body2")
                    ui.label(format_percent(p.discount)).classes("flex-1 text-body2")
                    ui.label(format_money(p.final_price)).classes("flex-1 text-body2 text-positive")
                    with ui.row().classes("w-28 justify-center gap-1 no-wrap"):
                        ui.button(
                            icon="edit", on_click=lambda _, pid=p.id: ui.navigate.to(go_to_edit(pid).path),
                        ).props("flat round dense color=primary size=sm").tooltip("Edit")
                        ui.button(
                            icon="delete", on_click=lambda _, pid=p.id, name=p.name: _confirm_delete(pid, name),
                        ).props("flat round dense color=negative size=sm").tooltip("Delete")

        # --- Handlers ---

        def _on_search(_=None):
            store.set_search((search_input.value or "").strip())
            refresh()

        def _on_category(_=None):
            store.set_category(category_select.value or None)
            refresh()

        def _on_sort(field):
            controller.toggle_sort(field)
            refresh()

        def _go_to(page):
            store.set_page(page)
            refresh()

        def _on_select_page(page_ids, checked):
            controller.toggle_page(page_ids, checked)
            refresh()

        def _on_select_row(pid, checked):
            controller.toggle_row(pid, checked)
            refresh()

        def _retry():
            if store.save():
                ui.notify("Products saved.", type="positive")
            else:
                ui.notify(store.view.error, type="negative")
            refresh()

        def _confirm_delete(pid, name):
            async def _do_delete():
                dialog.close()
                store.set_status(STATUS_LOADING)
                refresh()
                await asyncio.sleep(DELETE_FEEDBACK_DELAY)
                controller.delete(pid)
                refresh()
                if store.view.error is None:
                    ui.notify(f'Deleted "{name}"', type="positive")

            with ui.dialog() as dialog, ui.card():
                ui.label(f'Delete "{name}"?').classes("text-subtitle1 font-bold")
                ui.label("This product will be permanently removed.").classes(
                    "text-body2 text-secondary"
                )
                with ui.row().classes("justify-end gap-2 mt-4"):
                    ui.button("Cancel", on_click=dialog.close).props("flat")
                    ui.button("Delete", on_click=_do_delete).props("color=negative")
            dialog.open()

        def _bulk_delete():
            if not controller.selected:
                ui.notify(str(EmptySelectionError()), type="warning")
                return

            async def _do_bulk_delete():
                dialog.close()
                store.set_status(STATUS_LOADING)
                refresh()
                await asyncio.sleep(BULK_DELETE_FEEDBACK_DELAY)
                try:
                    removed = controller.bulk_delete()
                except EmptySelectionError as exc:
                    store.set_status(STATUS_IDLE)
                    ui.notify(str(exc), type="warning")
                    refresh()
                    return
                refresh()
                if store.view.error is None:
                    ui.notify(f"Deleted {removed} product(s).", type="positive")

            with ui.dialog() as dialog, ui.card():
                ui.label(f"Delete {len(controller.selected)} products?").classes(
                    "text-subtitle1 font-bold"
                )
                ui.label("The selected products will be permanently removed.").classes(
                    "text-body2 text-secondary"
                )
                with ui.row().classes("justify-end gap-2 mt-4"):
                    ui.button("Cancel", on_click=dialog.close).props("flat")
                    ui.button("Delete All", on_click=_do_bulk_delete).props("color=negative")
            dialog.open()

        _search_timer = {"ref": None}

        def _debounced_search(_=None):
            if _search_timer["ref"] is not None:
                _search_timer["ref"].cancel()
            _search_timer["ref"] = ui.timer(0.3, _on_search, once=True)

        search_input.on_value_change(_debounced_search)
        category_select.on_value_change(_on_category)
        bulk_btn.on_click(_bulk_delete)

        refresh()
