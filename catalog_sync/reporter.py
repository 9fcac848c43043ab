from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from catalog_sync.domain.models import Product
from catalog_sync.sync.coordinator import SyncResult
from catalog_sync.sync.state import Snapshot

_DETAIL_ROWS = [
    ("Product ID", "product_id"),
    ("Name", "product_name"),
    ("Supplier ID", "supplier_id"),
    ("Category ID", "category_id"),
    ("Quantity per unit", "quantity_per_unit"),
    ("Unit price", "unit_price"),
    ("Units in stock", "units_in_stock"),
    ("Units on order", "units_on_order"),
    ("Reorder level", "reorder_level"),
    ("Discontinued", "discontinued"),
]


def print_product_list(snapshot: Snapshot, console: Optional[Console] = None) -> None:
    """
    Render the list view: one row per product, in sync order.
    """
    console = console or Console()

    if not snapshot.items:
        console.print("[yellow]No products to display.[/yellow]")
        return

    table = Table(
        title="Products",
        box=box.ROUNDED,
        caption=f"{len(snapshot.items)} products, {len(snapshot.index)} distinct IDs",
    )
    table.add_column("ID", style="cyan", no_wrap=True, justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Unit Price", justify="right", style="green")
    table.add_column("In Stock", justify="right", style="magenta")
    table.add_column("Discontinued", justify="center", style="red")

    for product in snapshot.items:
        table.add_row(
            product.product_id,
            product.product_name,
            product.unit_price,
            product.units_in_stock,
            "yes" if product.discontinued == "true" else "",
        )

    console.print(table)


def print_product_detail(product: Product, console: Optional[Console] = None) -> None:
    """
    Render the detail view for a single product.
    """
    console = console or Console()

    table = Table(title=product.product_name, box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    for label, attr in _DETAIL_ROWS:
        table.add_row(label, getattr(product, attr))

    console.print(table)


def print_sync_error(result: SyncResult, console: Optional[Console] = None) -> None:
    """
    Render the error indicator for a failed sync.
    """
    console = console or Console(stderr=True)
    kind = result.error_kind or "unknown"
    console.print(f"[bold red]Sync failed[/bold red] ({kind}): {result.error}")
    cause = result.error.cause if result.error is not None else None
    if cause is not None:
        console.print(f"[dim]Caused by {type(cause).__name__}: {cause}[/dim]")
