"""
Search, filter and sort for the inventory table.
"""

from typing import List, Sequence

from ..models import (
    InventoryFilters,
    InventoryItem,
    SortDirection,
    SortField,
    StatusFilter,
)


def _sort_key(item: InventoryItem, field: SortField):
    if field == SortField.QUANTITY:
        return item.quantity
    if field == SortField.UPDATED_AT:
        return item.updated_at
    return str(getattr(item, field.value) or "").lower()


def filter_items(items: Sequence[InventoryItem], filters: InventoryFilters) -> List[InventoryItem]:
    """
    Apply search, filters and sort.

    Args:
        items: Inventory items
        filters: Table settings

    Returns:
        New list of matching items in the requested order
    """
    results = list(items)

    if filters.search:
        needle = filters.search.lower()
        results = [
            item for item in results
            if needle in item.name.lower()
            or needle in item.category.lower()
            or needle in (item.location or "").lower()
        ]

    if filters.category:
        results = [item for item in results if item.category == filters.category]

    if filters.location:
        results = [item for item in results if item.location == filters.location]

    if filters.status != StatusFilter.ALL:
        results = [item for item in results if item.stock_status().value == filters.status.value]

    results.sort(
        key=lambda item: _sort_key(item, filters.sort_by),
        reverse=filters.sort_direction == SortDirection.DESC,
    )
    return results


def toggle_sort(filters: InventoryFilters, field: SortField) -> InventoryFilters:
    """
    Clicking a column header: the same column flips direction, a new one starts ascending.
    """
    if filters.sort_by == field and filters.sort_direction == SortDirection.ASC:
        direction = SortDirection.DESC
    else:
        direction = SortDirection.ASC
    return filters.model_copy(update={"sort_by": field, "sort_direction": direction})
