"""Reusable UI components."""
from src.ui.components.stats_card import stats_card

__all__ = ["stats_card"]
