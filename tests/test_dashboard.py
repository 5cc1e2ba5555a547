"""
Tests for dashboard figures and table queries.
"""

from datetime import datetime, timedelta

from pizza_pantry.models import (
    InventoryFilters,
    InventoryItem,
    SortDirection,
    SortField,
    StatusFilter,
)
from pizza_pantry.services import dashboard, inventory_query, inventory_transfer

BASE_TIME = datetime(2024, 3, 1, 12, 0)


def sample_items():
    return [
        InventoryItem(id="1", name="mozzarella", category="Cheese", quantity=15, reorder_threshold=10,
                      location="Walk-in cooler", updated_at=BASE_TIME + timedelta(hours=2)),
        InventoryItem(id="2", name="Basil", category="Produce", quantity=0.5, reorder_threshold=1,
                      location="Walk-in cooler", updated_at=BASE_TIME),
        InventoryItem(id="3", name="Flour", category="Dough", quantity=50, reorder_threshold=20,
                      location="Dry storage", updated_at=BASE_TIME + timedelta(hours=1)),
        InventoryItem(id="4", name="Mushrooms", category="Produce", quantity=0, reorder_threshold=3,
                      updated_at=BASE_TIME + timedelta(hours=3)),
        InventoryItem(id="5", name="Pepperoni", category="Toppings", quantity=6, reorder_threshold=8,
                      location="Walk-in cooler", updated_at=BASE_TIME + timedelta(hours=4)),
    ]


def ids(items):
    return [item.id for item in items]


def test_compute_stats():
    stats = dashboard.compute_stats(sample_items())

    assert stats == {
        "total_items": 5,
        "low_stock_items": 3,
        "in_stock_items": 2,
        "total_quantity": 71.5,
        "categories": 4,
    }


def test_compute_stats_empty():
    stats = dashboard.compute_stats([])

    assert stats["total_items"] == 0
    assert stats["total_quantity"] == 0


def test_category_distribution_in_first_seen_order():
    assert dashboard.category_distribution(sample_items()) == [
        {"name": "Cheese", "value": 15},
        {"name": "Produce", "value": 0.5},
        {"name": "Dough", "value": 50},
        {"name": "Toppings", "value": 6},
    ]


def test_stock_status_breakdown():
    assert dashboard.stock_status_breakdown(sample_items()) == [
        {"name": "In Stock", "value": 2},
        {"name": "Low Stock", "value": 3},
    ]


def test_low_stock_alerts_most_urgent_first():
    alerts = dashboard.low_stock_alerts(sample_items())

    # Ratios: mushrooms 0, basil 0.5, pepperoni 0.75
    assert ids(alerts) == ["4", "2", "5"]
    assert ids(dashboard.low_stock_alerts(sample_items(), limit=1)) == ["4"]


def test_filter_default_sorts_by_name_case_insensitive():
    result = inventory_query.filter_items(sample_items(), InventoryFilters())

    assert [i.name for i in result] == ["Basil", "Flour", "mozzarella", "Mushrooms", "Pepperoni"]


def test_filter_search_matches_name_category_and_location():
    items = sample_items()

    assert ids(inventory_query.filter_items(items, InventoryFilters(search="PRODUCE"))) == ["2", "4"]
    assert ids(inventory_query.filter_items(items, InventoryFilters(search="dry"))) == ["3"]
    assert ids(inventory_query.filter_items(items, InventoryFilters(search="pep"))) == ["5"]


def test_filter_by_category_location_and_status():
    items = sample_items()

    assert ids(inventory_query.filter_items(items, InventoryFilters(category="Produce"))) == ["2", "4"]
    assert ids(inventory_query.filter_items(items, InventoryFilters(location="Walk-in cooler"))) == ["2", "1", "5"]
    assert ids(inventory_query.filter_items(
        items, InventoryFilters(status=StatusFilter.OUT_OF_STOCK))) == ["4"]
    assert ids(inventory_query.filter_items(
        items, InventoryFilters(status=StatusFilter.LOW_STOCK))) == ["2", "5"]
    assert ids(inventory_query.filter_items(
        items, InventoryFilters(status=StatusFilter.IN_STOCK))) == ["3", "1"]


def test_sort_by_quantity_and_updated_at():
    items = sample_items()

    by_quantity = InventoryFilters(sort_by=SortField.QUANTITY, sort_direction=SortDirection.DESC)
    assert ids(inventory_query.filter_items(items, by_quantity)) == ["3", "1", "5", "2", "4"]

    by_updated = InventoryFilters(sort_by=SortField.UPDATED_AT)
    assert ids(inventory_query.filter_items(items, by_updated)) == ["2", "3", "1", "4", "5"]


def test_sort_by_updated_at_mixes_imported_utc_timestamps():
    imported = inventory_transfer.import_json(
        '[{"_id": "9", "name": "Oregano", "category": "Spices", "quantity": 3,'
        ' "unit": "g", "reorderThreshold": 1,'
        ' "createdAt": "2020-01-01T00:00:00.000Z", "updatedAt": "2020-01-01T00:00:00.000Z"}]'
    )
    items = sample_items() + imported
    by_updated = InventoryFilters(sort_by=SortField.UPDATED_AT)

    assert ids(inventory_query.filter_items(items, by_updated)) == ["9", "2", "3", "1", "4", "5"]


def test_filter_does_not_mutate_input():
    items = sample_items()
    before = ids(items)

    inventory_query.filter_items(items, InventoryFilters(sort_by=SortField.QUANTITY))

    assert ids(items) == before


def test_toggle_sort():
    filters = InventoryFilters()

    flipped = inventory_query.toggle_sort(filters, SortField.NAME)
    assert flipped.sort_direction == SortDirection.DESC

    back = inventory_query.toggle_sort(flipped, SortField.NAME)
    assert back.sort_direction == SortDirection.ASC

    other = inventory_query.toggle_sort(flipped, SortField.QUANTITY)
    assert other.sort_by == SortField.QUANTITY
    assert other.sort_direction == SortDirection.ASC
