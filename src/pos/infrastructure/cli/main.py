import click

from pos.infrastructure.cli.context import get_container
from pos.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from pos.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
    product_update,
)


@click.group()
def cli() -> None:
    """POS — point-of-sale storefront"""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: POS_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: POS_PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from pos.infrastructure.web.fastapi_app import create_app

    container = get_container()
    settings = container.settings
    app = create_app(
        container.uow_factory,
        strict_status_transitions=settings.strict_status_transitions,
    )
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
