"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from pos.application.add_product import AddProductHandler
from pos.application.dto import ProductDTO
from pos.application.list_products import ListProductsHandler
from pos.application.lookup_product import (
    GetProductByIdHandler,
    GetProductByScanCodeHandler,
)
from pos.application.update_product import UpdateProductHandler
from pos.domain.exceptions import DomainException
from pos.domain.model.product import ProductPatch
from pos.domain.model.value_objects import Money
from pos.infrastructure.cli.context import command_failed, get_container


def _display_product(p: ProductDTO) -> None:
    click.echo(f"Product #{p.id}  {p.name}")
    click.echo(f"Scan code: {p.scan_code}")
    click.echo(f"Price:     ${p.price:.2f}")
    click.echo(f"Updated:   {p.updated_at:%Y-%m-%d %H:%M UTC}")


@click.command("add")
@click.option("--scan-code", required=True, help="Unique scan (QR/bar) code.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 19.99).")
def product_add(scan_code: str, name: str, price: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(get_container().unit_of_work())

    try:
        product = handler.handle(scan_code=scan_code, name=name, price=price)
    except DomainException as exc:
        raise command_failed(exc) from exc

    click.echo(
        f"Product #{product.id} '{product.name}' ({product.scan_code}) "
        f"added at ${product.price:.2f}"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(get_container().unit_of_work()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Scan code':<16} {'Name':<20} {'Price':>10}")
    click.echo("-" * 55)
    for p in products:
        click.echo(f"{p.id:<6} {p.scan_code:<16} {p.name:<20} {'$' + format(p.price, '.2f'):>10}")


@click.command("show")
@click.option("--id", "product_id", type=int, default=None, help="Product ID.")
@click.option("--scan-code", default=None, help="Scan code (exact, case-sensitive).")
def product_show(product_id: int | None, scan_code: str | None) -> None:
    """Look a product up by ID or scan code."""
    if (product_id is None) == (scan_code is None):
        raise click.UsageError("Give exactly one of --id or --scan-code.")

    uow = get_container().unit_of_work()
    if product_id is not None:
        product = GetProductByIdHandler(uow).handle(product_id)
    else:
        product = GetProductByScanCodeHandler(uow).handle(scan_code)

    if product is None:
        click.echo("No matching product.")
        return
    _display_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--scan-code", default=None, help="New scan code.")
def product_update(
    product_id: int,
    name: str | None,
    price: str | None,
    scan_code: str | None,
) -> None:
    """Update any subset of a product's name, price and scan code."""
    handler = UpdateProductHandler(get_container().unit_of_work())

    try:
        patch_fields: dict = {}
        if name is not None:
            patch_fields["name"] = name
        if price is not None:
            patch_fields["price"] = Money.of(price)
        if scan_code is not None:
            patch_fields["scan_code"] = scan_code
        patch = ProductPatch(**patch_fields)
        if patch.is_empty:
            raise click.UsageError("Nothing to update: pass --name, --price or --scan-code.")
        product = handler.handle(product_id=product_id, patch=patch)
    except DomainException as exc:
        raise command_failed(exc) from exc

    _display_product(product)
