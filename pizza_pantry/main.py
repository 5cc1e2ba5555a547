#!/usr/bin/env python3
"""
Main entry point for Pizza Pantry.

Wires the storage, audit trail, auth and inventory services together and
exposes them through a small command line interface.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .config import ConfigManager, get_config_manager
from .database import KeyValueStore, StorageError, create_storage
from .models import (
    AuditAction,
    InventoryFilters,
    InventoryItem,
    InventoryItemData,
    QuantityAdjustmentData,
    SortDirection,
    SortField,
    StatusFilter,
)
from .services import AuditRecorder, AuthService, InventoryImportError, InventoryStore
from .services import dashboard, inventory_query, inventory_transfer
from .utils import get_logger


class PizzaPantryApplication:
    """Main application controller."""

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        storage: Optional[KeyValueStore] = None
    ) -> None:
        """
        Initialize the application.

        Args:
            config: Configuration (defaults to the global manager)
            storage: Blob storage (defaults to the configured SQLite file)
        """
        self.logger = get_logger("app")
        self.config = config or get_config_manager()
        self.storage = storage
        self.audit: Optional[AuditRecorder] = None
        self.auth: Optional[AuthService] = None
        self.inventory: Optional[InventoryStore] = None

    def initialize(self) -> "PizzaPantryApplication":
        """
        Build the services and load the inventory.

        Returns:
            self, for chaining
        """
        if self.storage is None:
            self.storage = create_storage(self.config)

        self.audit = AuditRecorder.from_config(self.storage, self.config)
        self.auth = AuthService(
            self.storage,
            session_key=self.config.get("auth.session_key", "current-user"),
        )
        self.inventory = InventoryStore.from_config(
            self.storage, self.audit, self.auth, self.config
        )
        self.inventory.load()

        self.logger.debug("Application initialized")
        return self


def _print_items(items: List[InventoryItem]) -> None:
    if not items:
        print("No items found.")
        return
    for item in items:
        flag = " [LOW]" if item.is_low_stock() else ""
        print(
            f"{item.id}  {item.name:<28} {item.category:<12} "
            f"{item.quantity:g} {item.unit} (reorder at {item.reorder_threshold:g}){flag}"
        )


def _item_payload(args: argparse.Namespace, base: Optional[InventoryItem] = None) -> InventoryItemData:
    """Merge command line options over an existing item (edit) or nothing (add)."""
    fields = {}
    if base is not None:
        fields = base.model_dump(include=set(InventoryItemData.model_fields))
    for name in InventoryItemData.model_fields:
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    return InventoryItemData.model_validate(fields)


def _add_item_options(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--name", required=required)
    parser.add_argument("--category", required=required)
    parser.add_argument("--quantity", type=float, required=required)
    parser.add_argument("--unit", required=required)
    parser.add_argument("--reorder-threshold", dest="reorder_threshold", type=float, required=required)
    parser.add_argument("--cost-price", dest="cost_price", type=float)
    parser.add_argument("--location")
    parser.add_argument("--notes")
    parser.add_argument("--image")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(prog="pizza-pantry", description="Pizza Pantry inventory")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Sign in with a demo account")
    login.add_argument("email")
    login.add_argument("password")
    sub.add_parser("logout", help="Sign out")
    sub.add_parser("whoami", help="Show the signed-in user")

    listing = sub.add_parser("list", help="List inventory items")
    listing.add_argument("--search", default="")
    listing.add_argument("--category", default="")
    listing.add_argument("--location", default="")
    listing.add_argument("--status", choices=[s.value for s in StatusFilter], default="all")
    listing.add_argument("--sort", choices=[f.value for f in SortField], default="name")
    listing.add_argument("--desc", action="store_true")

    add = sub.add_parser("add", help="Add an item")
    _add_item_options(add, required=True)

    edit = sub.add_parser("edit", help="Edit an item")
    edit.add_argument("item_id")
    _add_item_options(edit, required=False)

    adjust = sub.add_parser("adjust", help="Adjust an item's quantity")
    adjust.add_argument("item_id")
    adjust.add_argument("adjustment", type=float)
    adjust.add_argument("--reason", required=True)

    delete = sub.add_parser("delete", help="Delete one or more items")
    delete.add_argument("item_ids", nargs="+")

    sub.add_parser("stats", help="Show dashboard figures")

    audit = sub.add_parser("audit", help="Show the audit trail")
    audit.add_argument("--item", dest="item_id")
    audit.add_argument("--search", default="")
    audit.add_argument("--action", choices=[a.value for a in AuditAction])
    audit.add_argument("--limit", type=int, default=50)
    audit.add_argument("--clear", action="store_true")

    export = sub.add_parser("export", help="Export inventory")
    export.add_argument("format", choices=["csv", "json"])
    export.add_argument("--output")

    importer = sub.add_parser("import", help="Import inventory from a CSV or JSON file")
    importer.add_argument("path")

    return parser


def run_command(app: PizzaPantryApplication, args: argparse.Namespace) -> int:
    """
    Execute one parsed command.

    Returns:
        Process exit code
    """
    inventory = app.inventory

    if args.command == "login":
        user = app.auth.sign_in(args.email, args.password)
        if user is None:
            print("Invalid email or password.", file=sys.stderr)
            return 1
        print(f"Signed in as {user.name}")

    elif args.command == "logout":
        app.auth.sign_out()
        print("Signed out")

    elif args.command == "whoami":
        user = app.auth.get_current_user()
        print(f"{user.name} <{user.email}>" if user else "Not signed in")

    elif args.command == "list":
        filters = InventoryFilters(
            search=args.search,
            category=args.category,
            location=args.location,
            status=StatusFilter(args.status),
            sort_by=SortField(args.sort),
            sort_direction=SortDirection.DESC if args.desc else SortDirection.ASC,
        )
        _print_items(inventory_query.filter_items(inventory.items, filters))

    elif args.command == "add":
        item = inventory.add_item(_item_payload(args))
        print(f"Added {item.name} ({item.id})")

    elif args.command == "edit":
        existing = inventory.get_item(args.item_id)
        if existing is None:
            print(f"Item not found: {args.item_id}", file=sys.stderr)
            return 1
        item = inventory.edit_item(args.item_id, _item_payload(args, base=existing))
        print(f"Updated {item.name}")

    elif args.command == "adjust":
        request = QuantityAdjustmentData(
            item_id=args.item_id, adjustment=args.adjustment, reason=args.reason
        )
        item = inventory.apply_adjustment(request)
        if item is None:
            print(f"Item not found: {args.item_id}", file=sys.stderr)
            return 1
        print(f"{item.name}: now {item.quantity:g} {item.unit}")

    elif args.command == "delete":
        removed = inventory.bulk_delete(args.item_ids)
        print(f"Deleted {removed} item(s)")
        if removed < len(args.item_ids):
            return 1

    elif args.command == "stats":
        items = inventory.items
        stats = dashboard.compute_stats(items)
        print(f"Total items:    {stats['total_items']} ({stats['categories']} categories)")
        print(f"Low stock:      {stats['low_stock_items']}")
        print(f"In stock:       {stats['in_stock_items']}")
        print(f"Total quantity: {stats['total_quantity']:.0f}")
        print("\nBy category:")
        for row in dashboard.category_distribution(items):
            print(f"  {row['name']:<14} {row['value']:g}")
        limit = app.config.get("dashboard.low_stock_alert_limit", 5)
        alerts = dashboard.low_stock_alerts(items, limit=limit)
        print("\nLow stock alerts:")
        if not alerts:
            print("  All items are well stocked")
        for item in alerts:
            print(f"  {item.name}: {item.quantity:g} / {item.reorder_threshold:g} {item.unit}")

    elif args.command == "audit":
        if args.clear:
            app.audit.clear()
            print("Audit log cleared")
            return 0
        if args.item_id:
            entries = app.audit.get_for_item(args.item_id)
        else:
            action = AuditAction(args.action) if args.action else None
            entries = app.audit.search(args.search, action)
        if not entries:
            print("No audit entries.")
        for entry in entries[:args.limit]:
            print(entry.to_readable_string())

    elif args.command == "export":
        items = inventory.items
        content = (
            inventory_transfer.export_csv(items)
            if args.format == "csv"
            else inventory_transfer.export_json(items)
        )
        if args.output:
            Path(args.output).write_text(content + "\n", encoding="utf-8")
            print(f"Exported {len(items)} item(s) to {args.output}")
        else:
            print(content)

    elif args.command == "import":
        text = Path(args.path).read_text(encoding="utf-8")
        imported = inventory.import_items(inventory_transfer.import_auto(text))
        print(f"Imported {len(imported)} item(s)")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point."""
    args = build_parser().parse_args(argv)
    logger = get_logger("cli")

    try:
        app = PizzaPantryApplication().initialize()
        return run_command(app, args)
    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2
    except (InventoryImportError, OSError) as e:
        print(f"Import/export failed: {e}", file=sys.stderr)
        return 1
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        print(f"Storage failure: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
