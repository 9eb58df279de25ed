# Overview: Flask CLI commands for inspecting and seeding the running data set.

# backend/grocery_erp/cli.py
# Commands Legend (run from the backend directory):
# - flask --app grocery_erp erp dashboard [--store-id 1]
#   Print today's order count, revenue, customer count and low-stock count.
# - flask --app grocery_erp erp low-stock [--store-id 1]
#   List inventory records at or below their minimum stock level.
# - flask --app grocery_erp erp seed
#   Load the demo data set (no-op when stores already exist).
#
# The default database is in-memory, so each command sees a fresh copy
# unless DATABASE_URL points somewhere persistent.

import click
from flask import current_app
from flask.cli import with_appcontext

from .services.dashboard_service import get_dashboard_summary
from .services.entity_store import get_entity_store
from .services.inventory_service import DEFAULT_LOW_STOCK_THRESHOLD, get_low_stock_items
from .services.sample_data import seed_sample_data


def _default_threshold() -> int:
    return current_app.config.get("LOW_STOCK_DEFAULT_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD)


@click.group('erp')
def erp_group():
    """Data set inspection commands."""


@erp_group.command('dashboard')
@click.option('--store-id', type=int, default=None, help='Scope to one store')
@with_appcontext
def dashboard_cli(store_id):
    """Print the dashboard summary."""
    summary = get_dashboard_summary(get_entity_store(), store_id, default_threshold=_default_threshold())

    scope = f"store {store_id}" if store_id is not None else "all stores"
    click.echo(f"\nDashboard ({scope})")
    click.echo("=" * 40)
    click.echo(f"Today's orders:   {summary['todays_orders']}")
    click.echo(f"Today's revenue:  ${summary['todays_revenue_cents'] / 100:,.2f}")
    click.echo(f"Customers:        {summary['customer_count']}")
    click.echo(f"Low-stock items:  {summary['low_stock_count']}")
    click.echo("=" * 40 + "\n")


@erp_group.command('low-stock')
@click.option('--store-id', type=int, default=None, help='Scope to one store')
@with_appcontext
def low_stock_cli(store_id):
    """List low-stock inventory records."""
    entities = get_entity_store()
    records = get_low_stock_items(entities, store_id, default_threshold=_default_threshold())

    if not records:
        click.echo("No low-stock items.")
        return

    click.echo("\n" + "="*70)
    click.echo(f"{'ID':<5} {'Store':<7} {'Product':<30} {'Qty':<6} {'Min'}")
    click.echo("="*70)

    for record in records:
        product = entities.products.get(record.product_id)
        name = product.name if product else f"#{record.product_id}"
        min_level = record.min_stock_level if record.min_stock_level is not None else "-"
        click.echo(f"{record.id:<5} {record.store_id:<7} {name:<30} {record.quantity:<6} {min_level}")

    click.echo("="*70 + "\n")


@erp_group.command('seed')
@with_appcontext
def seed_cli():
    """Load the demo data set."""
    counts = seed_sample_data(
        get_entity_store(),
        bcrypt_rounds=current_app.config.get("BCRYPT_LOG_ROUNDS", 12),
    )
    if not counts:
        click.echo("Data already present; nothing seeded.")
        return

    for name, count in counts.items():
        click.echo(f"  {name:<12} {count}")
    click.echo("Sample data loaded.")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(erp_group)
