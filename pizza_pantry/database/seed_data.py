"""
Demo inventory for a fresh pizza kitchen.

Used to seed an empty store so the dashboard has something to show.
"""

from typing import Dict, List

from ..models import InventoryItem

PIZZA_KITCHEN_ITEMS: List[Dict] = [
    # Dough
    {
        "name": "00 Flour",
        "category": "Dough",
        "quantity": 50,
        "unit": "kg",
        "reorder_threshold": 20,
        "cost_price": 1.2,
        "location": "Dry storage",
    },
    {
        "name": "Active Dry Yeast",
        "category": "Dough",
        "quantity": 2,
        "unit": "kg",
        "reorder_threshold": 1,
        "cost_price": 9.5,
        "location": "Dry storage",
    },
    {
        "name": "Extra Virgin Olive Oil",
        "category": "Dough",
        "quantity": 4,
        "unit": "L",
        "reorder_threshold": 5,
        "cost_price": 11.0,
        "location": "Dry storage",
    },
    # Sauce
    {
        "name": "San Marzano Tomatoes",
        "category": "Sauce",
        "quantity": 24,
        "unit": "can",
        "reorder_threshold": 12,
        "cost_price": 3.4,
        "location": "Dry storage",
    },
    {
        "name": "Fresh Basil",
        "category": "Produce",
        "quantity": 0.5,
        "unit": "kg",
        "reorder_threshold": 1,
        "cost_price": 18.0,
        "location": "Walk-in cooler",
        "notes": "Order from the farmers market on Fridays",
    },
    # Cheese
    {
        "name": "Mozzarella",
        "category": "Cheese",
        "quantity": 15,
        "unit": "kg",
        "reorder_threshold": 10,
        "cost_price": 7.8,
        "location": "Walk-in cooler",
    },
    {
        "name": "Parmigiano Reggiano",
        "category": "Cheese",
        "quantity": 3,
        "unit": "kg",
        "reorder_threshold": 2,
        "cost_price": 22.0,
        "location": "Walk-in cooler",
    },
    # Toppings
    {
        "name": "Pepperoni",
        "category": "Toppings",
        "quantity": 6,
        "unit": "kg",
        "reorder_threshold": 8,
        "cost_price": 12.5,
        "location": "Walk-in cooler",
    },
    {
        "name": "Mushrooms",
        "category": "Produce",
        "quantity": 0,
        "unit": "kg",
        "reorder_threshold": 3,
        "cost_price": 6.0,
        "location": "Walk-in cooler",
    },
    {
        "name": "Pizza Boxes (12in)",
        "category": "Packaging",
        "quantity": 300,
        "unit": "pcs",
        "reorder_threshold": 100,
        "cost_price": 0.35,
        "location": "Back room",
    },
]


def demo_inventory() -> List[InventoryItem]:
    """Build fresh InventoryItems (new ids and timestamps) from the demo data."""
    return [InventoryItem(**data) for data in PIZZA_KITCHEN_ITEMS]
