"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from pos.application.cart import Cart
from pos.application.create_order import CreateOrderHandler
from pos.application.dto import OrderDetailDTO
from pos.application.list_orders import ListOrdersHandler
from pos.application.lookup_product import GetProductByScanCodeHandler
from pos.application.show_order import ShowOrderHandler
from pos.application.update_order_status import UpdateOrderStatusHandler
from pos.domain.exceptions import DomainException
from pos.domain.model.order import OrderStatus, PaymentMethod
from pos.infrastructure.cli.context import command_failed, get_container


def _parse_item(raw: str) -> tuple[str, int]:
    """Parse 'TEST001:3' into (scan code, quantity)."""
    raw = raw.strip()
    if ":" not in raw:
        return raw, 1
    code, qty_str = raw.rsplit(":", 1)
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for scan code '{code}'."
        )
    if qty <= 0:
        raise click.BadParameter(f"Quantity for '{code}' must be positive.")
    return code.strip(), qty


def _money(value) -> str:
    return f"${value:.2f}"


@click.command("create")
@click.option(
    "--payment",
    required=True,
    type=click.Choice([m.value for m in PaymentMethod]),
    help="Payment method.",
)
@click.option(
    "--item",
    "items",
    required=True,
    multiple=True,
    help="Scan code with optional quantity, 'CODE' or 'CODE:QTY'. Repeatable.",
)
def order_create(payment: str, items: tuple[str, ...]) -> None:
    """Scan items into a cart and check it out as one order."""
    container = get_container()
    lookup = GetProductByScanCodeHandler(container.unit_of_work())
    cart = Cart()

    try:
        for raw in items:
            code, qty = _parse_item(raw)
            line = cart.scan(code, lookup)
            cart.set_quantity(line.product.id, line.quantity + qty - 1)

        click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
        click.echo(f"  {'-'*48}")
        for line in cart.lines:
            click.echo(
                f"  {line.product.name:<20} {line.quantity:>5} "
                f"{_money(line.product.price):>10} {_money(line.subtotal):>10}"
            )
        click.echo(f"  {'-'*48}")

        dto = cart.checkout(payment, CreateOrderHandler(container.unit_of_work()))
    except DomainException as exc:
        raise command_failed(exc) from exc

    click.echo(f"  {'Order Total':<27} {_money(dto.total_amount):>21}")
    click.echo()
    click.echo(f"Order #{dto.id} processed successfully! Payment: {dto.payment_method}")


@click.command("list")
def order_list() -> None:
    """List orders, most recent first."""
    orders = ListOrdersHandler(get_container().unit_of_work()).handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Created':<18} {'Status':<10} {'Payment':<8} {'Total':>10}")
    click.echo("-" * 56)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.created_at:%Y-%m-%d %H:%M}  {o.status:<10} "
            f"{o.payment_method:<8} {_money(o.total_amount):>10}"
        )


def _display_order(dto: OrderDetailDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_method})")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    click.echo(f"Updated:  {dto.updated_at:%Y-%m-%d %H:%M UTC}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Code':<12} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*61}")
    for item in dto.items:
        click.echo(
            f"  {item.product.name:<20} {item.product.scan_code:<12} {item.quantity:>5} "
            f"{_money(item.unit_price):>10} {_money(item.subtotal):>10}"
        )
    click.echo(f"  {'-'*61}")
    click.echo(f"  {'Order Total':<27} {_money(dto.total_amount):>34}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    dto = ShowOrderHandler(get_container().unit_of_work()).handle(order_id)

    if dto is None:
        raise click.ClickException(f"Order #{order_id} not found")

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
def order_status(order_id: int, new_status: str) -> None:
    """Change an order's status."""
    container = get_container()
    handler = UpdateOrderStatusHandler(
        container.unit_of_work(),
        strict_transitions=container.settings.strict_status_transitions,
    )

    try:
        dto = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise command_failed(exc) from exc

    click.echo(f"Order #{dto.id} is now {dto.status}.")
