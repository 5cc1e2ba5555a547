"""
CSV and JSON import/export of inventory items.
"""

import csv
import io
import json
import uuid
from datetime import date, datetime
from typing import List, Optional, Sequence

from pydantic import ValidationError

from ..models import InventoryItem

CSV_HEADERS = ["Name", "Category", "Quantity", "Unit", "Reorder Threshold", "Location", "Status"]


class InventoryImportError(ValueError):
    """Raised when imported data cannot be turned into inventory items."""


def export_csv(items: Sequence[InventoryItem]) -> str:
    """
    Export items as CSV.

    Returns:
        CSV text with a header row and one row per item
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for item in items:
        writer.writerow([
            item.name,
            item.category,
            f"{item.quantity:g}",
            item.unit,
            f"{item.reorder_threshold:g}",
            item.location or "",
            "Low Stock" if item.is_low_stock() else "In Stock",
        ])
    return buffer.getvalue().rstrip("\n")


def export_json(items: Sequence[InventoryItem]) -> str:
    """Export items as an indented JSON array."""
    return json.dumps([item.model_dump(mode="json") for item in items], indent=2)


def import_json(text: str) -> List[InventoryItem]:
    """
    Parse a JSON array of items.

    Missing timestamps default to now.

    Raises:
        InventoryImportError: If the text is not a valid item array
    """
    try:
        parsed = json.loads(text)
        if not isinstance(parsed, list):
            raise ValueError("Invalid JSON format")
        now = datetime.now()
        items = []
        for raw in parsed:
            if not isinstance(raw, dict):
                raise ValueError("Invalid JSON format")
            raw = {**raw}
            raw["created_at"] = raw.get("created_at") or raw.pop("createdAt", None) or now
            raw["updated_at"] = raw.get("updated_at") or raw.pop("updatedAt", None) or now
            items.append(InventoryItem.model_validate(raw))
        return items
    except (ValueError, ValidationError) as e:
        raise InventoryImportError(f"Failed to parse JSON: {e}") from e


def _parse_number(value: Optional[str]) -> float:
    try:
        return float(value) if value else 0.0
    except ValueError:
        return 0.0


def import_csv(text: str) -> List[InventoryItem]:
    """
    Parse CSV with a header row.

    Headers are matched case-insensitively; rows with the wrong number of
    columns, or without a name, are skipped. Every row gets a fresh ID.

    Raises:
        InventoryImportError: If there is no header plus data row
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise InventoryImportError("CSV must have at least a header row and one data row")

    rows = list(csv.reader(lines))
    headers = [h.strip().lower() for h in rows[0]]

    def column(values: List[str], name: str) -> Optional[str]:
        if name not in headers:
            return None
        return values[headers.index(name)] or None

    now = datetime.now()
    items = []
    for row in rows[1:]:
        values = [v.strip() for v in row]
        if len(values) != len(headers):
            continue
        name = column(values, "name")
        if not name:
            continue
        try:
            items.append(InventoryItem(
                id=str(uuid.uuid4()),
                name=name,
                category=column(values, "category") or "",
                quantity=max(0.0, _parse_number(column(values, "quantity"))),
                unit=column(values, "unit") or "",
                reorder_threshold=max(0.0, _parse_number(column(values, "reorder threshold"))),
                location=column(values, "location"),
                created_at=now,
                updated_at=now,
            ))
        except ValidationError as e:
            raise InventoryImportError(f"Invalid row for '{name}': {e}") from e
    return items


def import_auto(text: str) -> List[InventoryItem]:
    """Import JSON when the text looks like an array, CSV otherwise."""
    if text.strip().startswith("["):
        return import_json(text)
    return import_csv(text)


def export_filename(fmt: str, today: Optional[date] = None) -> str:
    """Default download name, e.g. ``inventory-export-2024-05-01.csv``."""
    today = today or date.today()
    return f"inventory-export-{today.isoformat()}.{fmt}"
