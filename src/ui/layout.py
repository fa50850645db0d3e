"""Shared layout: header, sidebar navigation, and content area."""
from urllib.parse import quote

from nicegui import ui

from config import APP_TITLE
from src.ui.components.helpers import HOVER_BG


def build_layout(title: str = APP_TITLE):
    """Create the shared page layout with sidebar navigation."""
    ui.page_title(title)
    ui.colors(
        primary="#4A4443",
        secondary="#5f6368",
        accent="#A08968",
        positive="#34a853",
        negative="#ea4335",
    )

    with ui.header().classes("items-center justify-between px-4 bg-primary"):
        with ui.row().classes("items-center gap-3"):
            ui.icon("inventory_2").classes("text-white text-2xl")
            ui.label(APP_TITLE).classes("text-subtitle1 text-white")

        # Global search jumps to the list view with the term pre-filled
        _search = ui.input(placeholder="Search products...").classes("w-64").props(
            "dark dense standout='bg-white/10' input-class='text-white'"
        )
        _search.props('prepend-inner-icon="search"')

        def _do_global_search(e=None):
            q = _search.value
            if q and q.strip():
                ui.navigate.to(f"/list?search={quote(q.strip())}&page=1")

        _search.on("keydown.enter", _do_global_search)

    with ui.left_drawer(value=True).classes("bg-grey-1") as drawer:
        drawer.props("width=220 bordered")
        ui.element("div").classes("h-3")
        _nav_link("Add Product", "add_circle", "/")
        _nav_link("Product List", "list", "/list")

    content = ui.column().classes("w-full p-6 max-w-7xl mx-auto gap-4")
    return content


def _nav_link(label: str, icon: str, path: str):
    """Render a main sidebar nav item."""
    with ui.link(target=path).classes("no-underline w-full"):
        with ui.row().classes(
            "items-center gap-3 px-4 py-2 rounded-lg w-full "
            f"{HOVER_BG} cursor-pointer"
        ):
            ui.icon(icon).classes("text-secondary")
            ui.label(label).classes("text-body1 text-secondary")
