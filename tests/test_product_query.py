"""Tests for the filter -> sort -> paginate -> aggregate pipeline."""

from datetime import date

import pytest

from src.models import ProductRecord, SortSpec, ViewState
from src.services.product_query import (
    aggregate_totals, clamp_page, count_pages, filter_by_category,
    filter_by_search, paginate, run_query, sort_records,
)


def rec(pid, name="Item", category="Dairy", description="", cost=10, sell=20, discount=0, expiry=None):
    return ProductRecord(
        id=pid, name=name, category=category, description=description,
        cost_price=cost, sell_price=sell, discount=discount, expiry_date=expiry,
    )


@pytest.fixture
def catalog():
    return [
        rec("1", "Milk", "Dairy", "Fresh whole milk", cost=10, sell=20, discount=10),
        rec("2", "Bread", "Bakery", "Sourdough loaf", cost=3, sell=5),
        rec("3", "Cheese", "Dairy", "Aged cheddar, goes with bread", cost=8, sell=12, discount=50),
        rec("4", "Soap", "Household", "", cost=2, sell=4),
    ]


class TestFilters:

    def test_search_matches_name_case_insensitive(self):
        items = [rec("1", "Milk"), rec("2", "Bread")]
        assert [r.name for r in filter_by_search(items, "milk")] == ["Milk"]

    def test_search_matches_description(self, catalog):
        names = [r.name for r in filter_by_search(catalog, "BREAD")]
        assert names == ["Bread", "Cheese"]

    def test_empty_search_passes_all(self, catalog):
        assert filter_by_search(catalog, "") == catalog
        assert filter_by_search(catalog, None) == catalog

    def test_category_exact_match(self, catalog):
        assert [r.id for r in filter_by_category(catalog, "Dairy")] == ["1", "3"]
        assert filter_by_category(catalog, "dairy") == []

    def test_unset_category_passes_all(self, catalog):
        assert filter_by_category(catalog, None) == catalog
        assert filter_by_category(catalog, "") == catalog

    @pytest.mark.parametrize("search", ["", "a", "milk", "bread", "zzz"])
    @pytest.mark.parametrize("category", [None, "Dairy", "Bakery", "Frozen"])
    def test_result_is_exactly_the_matching_set(self, catalog, search, category):
        view = ViewState(search=search, category=category, page_size=100)
        result_ids = {r.id for r in run_query(catalog, view).items}

        def matches(r):
            text_ok = not search or search in r.name.lower() or search in r.description.lower()
            cat_ok = not category or r.category == category
            return text_ok and cat_ok

        assert result_ids == {r.id for r in catalog if matches(r)}


class TestSort:

    def test_cost_price_ascending_then_toggled(self):
        items = [rec("a", cost=30), rec("b", cost=10), rec("c", cost=20)]
        asc = sort_records(items, SortSpec("costPrice", "asc"))
        assert [r.cost_price for r in asc] == [10, 20, 30]
        desc = sort_records(items, SortSpec("costPrice", "desc"))
        assert [r.cost_price for r in desc] == [30, 20, 10]

    def test_unset_field_keeps_insertion_order(self, catalog):
        assert sort_records(catalog, SortSpec()) == catalog

    def test_unknown_field_keeps_order(self, catalog):
        assert sort_records(catalog, SortSpec("colour")) == catalog

    def test_sort_is_stable_both_directions(self):
        items = [rec("1", cost=5), rec("2", cost=1), rec("3", cost=5), rec("4", cost=1)]
        asc = sort_records(items, SortSpec("costPrice", "asc"))
        assert [r.id for r in asc] == ["2", "4", "1", "3"]
        desc = sort_records(items, SortSpec("costPrice", "desc"))
        assert [r.id for r in desc] == ["1", "3", "2", "4"]

    def test_expiry_date_sorts_as_dates_missing_last(self):
        items = [
            rec("1", expiry=date(2026, 12, 1)),
            rec("2"),
            rec("3", expiry=date(2026, 2, 1)),
        ]
        asc = sort_records(items, SortSpec("expiryDate", "asc"))
        assert [r.id for r in asc] == ["3", "1", "2"]
        desc = sort_records(items, SortSpec("expiryDate", "desc"))
        assert [r.id for r in desc] == ["1", "3", "2"]

    def test_names_sort_lexicographically(self, catalog):
        ordered = sort_records(catalog, SortSpec("name", "asc"))
        assert [r.name for r in ordered] == ["Bread", "Cheese", "Milk", "Soap"]

    def test_final_price_sorts_on_derived_value(self, catalog):
        ordered = sort_records(catalog, SortSpec("finalPrice", "asc"))
        assert [r.id for r in ordered] == ["4", "2", "3", "1"]


class TestPaging:

    def test_count_pages(self):
        assert count_pages(0, 10) == 0
        assert count_pages(10, 10) == 1
        assert count_pages(11, 10) == 2

    @pytest.mark.parametrize(
        "page, total, expected",
        [(1, 0, 1), (3, 0, 1), (5, 2, 2), (2, 2, 2), (0, 3, 1), (-4, 3, 1)],
    )
    def test_clamp_page(self, page, total, expected):
        assert clamp_page(page, total) == expected

    def test_paginate_slices(self):
        items = [rec(str(i)) for i in range(1, 26)]
        assert [r.id for r in paginate(items, 3, 10)] == [str(i) for i in range(21, 26)]

    def test_run_query_clamps_overflowing_page(self):
        items = [rec(str(i)) for i in range(1, 13)]
        result = run_query(items, ViewState(page=5, page_size=10))
        assert result.page == 2
        assert result.total_pages == 2
        assert [r.id for r in result.items] == ["11", "12"]


class TestTotals:

    def test_totals_cover_filtered_not_paged_set(self, catalog):
        view = ViewState(category="Dairy", page_size=1)
        result = run_query(catalog, view)
        assert len(result.items) == 1
        assert result.total_items == 2
        assert result.totals.cost == pytest.approx(18)
        assert result.totals.sell == pytest.approx(32)
        assert result.totals.final == pytest.approx(18 + 6)

    def test_empty_totals(self):
        totals = aggregate_totals([])
        assert (totals.cost, totals.sell, totals.final) == (0, 0, 0)
