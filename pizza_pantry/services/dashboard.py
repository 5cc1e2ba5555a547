"""
Dashboard figures: summary cards, chart series and low-stock alerts.
"""

from typing import Dict, List, Sequence

from ..models import InventoryItem


def compute_stats(items: Sequence[InventoryItem]) -> Dict[str, float]:
    """
    Summary numbers for the stats cards.

    Returns:
        Dictionary with total_items, low_stock_items, in_stock_items,
        total_quantity and categories
    """
    low_stock = sum(1 for item in items if item.is_low_stock())
    return {
        "total_items": len(items),
        "low_stock_items": low_stock,
        "in_stock_items": len(items) - low_stock,
        "total_quantity": sum(item.quantity for item in items),
        "categories": len({item.category for item in items}),
    }


def category_distribution(items: Sequence[InventoryItem]) -> List[Dict[str, object]]:
    """Total quantity per category, in order of first appearance."""
    totals: Dict[str, float] = {}
    for item in items:
        totals[item.category] = totals.get(item.category, 0) + item.quantity
    return [{"name": name, "value": value} for name, value in totals.items()]


def stock_status_breakdown(items: Sequence[InventoryItem]) -> List[Dict[str, object]]:
    """Item counts for the stock status pie chart."""
    low = sum(1 for item in items if item.is_low_stock())
    return [
        {"name": "In Stock", "value": len(items) - low},
        {"name": "Low Stock", "value": low},
    ]


def low_stock_alerts(items: Sequence[InventoryItem], limit: int = 5) -> List[InventoryItem]:
    """
    Most urgent low-stock items.

    Args:
        items: Inventory items
        limit: Maximum number of alerts

    Returns:
        Low-stock items ordered by quantity/threshold ratio, lowest first
    """
    # Low stock implies a positive threshold, so the ratio is defined
    low = [item for item in items if item.is_low_stock()]
    low.sort(key=lambda item: item.stock_ratio())
    return low[:limit]
