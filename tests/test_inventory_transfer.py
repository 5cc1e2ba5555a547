"""
Tests for CSV/JSON import and export.
"""

import json
from datetime import date, datetime

import pytest

from pizza_pantry.models import InventoryItem
from pizza_pantry.services.inventory_transfer import (
    InventoryImportError,
    export_csv,
    export_filename,
    export_json,
    import_auto,
    import_csv,
    import_json,
)

STAMP = datetime(2024, 5, 1, 8, 0)


def items():
    return [
        InventoryItem(id="1", name="Mozzarella", category="Cheese", quantity=15, unit="kg",
                      reorder_threshold=10, location="Walk-in cooler",
                      created_at=STAMP, updated_at=STAMP),
        InventoryItem(id="2", name="Basil, fresh", category="Produce", quantity=0.5, unit="kg",
                      reorder_threshold=1, created_at=STAMP, updated_at=STAMP),
    ]


def test_export_csv():
    lines = export_csv(items()).split("\n")

    assert lines[0] == "Name,Category,Quantity,Unit,Reorder Threshold,Location,Status"
    assert lines[1] == "Mozzarella,Cheese,15,kg,10,Walk-in cooler,In Stock"
    assert lines[2] == '"Basil, fresh",Produce,0.5,kg,1,,Low Stock'


def test_export_json_round_trips_through_import():
    text = export_json(items())

    assert json.loads(text)[0]["name"] == "Mozzarella"
    assert "\n  " in text
    assert import_json(text) == items()


def test_import_json_defaults_missing_timestamps():
    imported = import_json('[{"name": "Oregano", "quantity": 3, "minStock": 1}]')

    assert imported[0].name == "Oregano"
    assert imported[0].reorder_threshold == 1
    assert isinstance(imported[0].created_at, datetime)


@pytest.mark.parametrize("text", [
    "{broken",
    '{"name": "Oregano"}',
    '[{"quantity": 3}]',
    "[1, 2]",
])
def test_import_json_rejects_bad_input(text):
    with pytest.raises(InventoryImportError, match="Failed to parse JSON"):
        import_json(text)


def test_import_csv_matches_headers_case_insensitively():
    text = (
        "name,QUANTITY,Category,unit,Reorder Threshold,location\n"
        "Pepperoni,6,Toppings,kg,8,Walk-in cooler\n"
        "\n"
        "Olives,2,Toppings,jar,1,\n"
    )

    imported = import_csv(text)

    assert [i.name for i in imported] == ["Pepperoni", "Olives"]
    assert imported[0].quantity == 6
    assert imported[0].reorder_threshold == 8
    assert imported[0].location == "Walk-in cooler"
    assert imported[1].location is None
    assert imported[0].id != imported[1].id


def test_import_csv_skips_bad_rows():
    text = (
        "Name,Category,Quantity\n"
        "Flour,Dough,20\n"
        "too,many,columns,here\n"
        ",Dough,3\n"
        "Yeast,Dough,not-a-number\n"
    )

    imported = import_csv(text)

    assert [i.name for i in imported] == ["Flour", "Yeast"]
    assert imported[1].quantity == 0


def test_import_csv_needs_header_and_data():
    with pytest.raises(InventoryImportError):
        import_csv("Name,Category\n")


def test_import_auto_detects_format():
    assert import_auto('  [{"name": "Salt"}]')[0].name == "Salt"
    assert import_auto("Name\nSugar\n")[0].name == "Sugar"


def test_export_filename():
    assert export_filename("csv", date(2024, 5, 1)) == "inventory-export-2024-05-01.csv"
