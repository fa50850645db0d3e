"""Shared UI helper functions and design tokens for product display."""

from nicegui import ui


# ─── Design Tokens ────────────────────────────────────────────────────────────

# Inputs & layout
INPUT_PROPS = "outlined dense"
HOVER_BG = "hover:bg-[#F5F0EB]"


def page_header(title: str, subtitle: str | None = None, icon: str | None = None):
    """Render a consistent page title with optional icon + subtitle."""
    with ui.row().classes("items-center gap-3"):
        if icon:
            ui.icon(icon, size="sm").classes("text-accent")
        ui.label(title).classes("text-h5 font-bold")
    if subtitle:
        ui.label(subtitle).classes("text-body2 text-secondary")


def field_error(label, message: str | None) -> None:
    """Show or clear an inline validation message on an input."""
    if message:
        label.props(f'error error-message="{message}"')
    else:
        label.props(remove="error error-message")


def format_money(value, na_text: str = "-") -> str:
    """Format a price for table cells and totals."""
    if value is None or value == "":
        return na_text
    return f"${float(value):,.2f}"


def format_percent(value, na_text: str = "-") -> str:
    if value is None or value == "":
        return na_text
    return f"{float(value):g}%"


def sort_indicator(field: str, sort) -> str:
    """Arrow shown next to the active sort column header."""
    if sort.field != field:
        return ""
    return "↑" if sort.order == "asc" else "↓"
