from __future__ import annotations

import sys

import typer

from catalog_sync.config import get_settings
from catalog_sync.infrastructure.odata_store import StoreProvider
from catalog_sync.reporter import print_product_detail, print_product_list, print_sync_error
from catalog_sync.sync.coordinator import SyncCoordinator, SyncResult
from catalog_sync.sync.state import SyncState
from catalog_sync.utils.logging import configure_logging

app = typer.Typer(help="Catalog Sync CLI.")


def _run_sync(state: SyncState) -> SyncResult:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    provider = StoreProvider()
    provider.open(settings)
    try:
        return SyncCoordinator(provider, state, settings).sync(failure_policy="tolerant")
    finally:
        provider.close()


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"service={settings.service_url} | collection={settings.collection} "
        f"orderby={settings.sort_field} timeout={settings.timeout_seconds}s "
        f"retries={settings.connect_retries} policy={settings.failure_policy}"
    )


@app.command("list")
def list_products() -> None:
    """
    Synchronize the collection and show every product.
    """
    state = SyncState()
    result = _run_sync(state)
    if not result.ok:
        print_sync_error(result)
        raise typer.Exit(code=1)
    print_product_list(state.snapshot)


@app.command()
def show(product_id: str = typer.Argument(..., help="ProductID to display.")) -> None:
    """
    Synchronize the collection and show one product's details.
    """
    state = SyncState()
    result = _run_sync(state)
    if not result.ok:
        print_sync_error(result)
        raise typer.Exit(code=1)

    product = state.get(product_id)
    if product is None:
        typer.echo(f"No product with ID '{product_id}'.", err=True)
        raise typer.Exit(code=1)
    print_product_detail(product)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
