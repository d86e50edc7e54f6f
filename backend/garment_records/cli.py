# Overview: Flask CLI command group for inspecting and exporting the session's records.

# backend/garment_records/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to garment_records (PowerShell: $env:FLASK_APP="garment_records").
# - Use: python -m flask records <command> [options]
#
# The store lives in process memory, so each command sees a fresh session
# (seeded with demo data unless RECORDS_SEED_DEMO=false).
#
# - python -m flask records dashboard
#   Status counts, total invoice value, top clients, recent order quantities.
# - python -m flask records orders [--search white] [--vendor "ABC Textiles"] [--status Pending]
#   Job order list with pending quantities computed from challans.
# - python -m flask records status-report [--search ...] [--vendor ...] [--status ...]
#   Joined order/challan/invoice report.
# - python -m flask records export status --format csv --output status-report.csv
#   Export a view (status, job-orders, challans, invoices, clients) as CSV or XLSX.

import os

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import get_store
from .models import JOB_STATUS_OPTIONS
from .services import dashboard_service, export_service, reporting_service
from .services.fulfillment_service import fulfillment


def _money(value) -> str:
    if value is None:
        return "N/A"
    return f"{value:,.2f}"


def _text(value) -> str:
    return "N/A" if value is None else str(value)


STATUS_SEARCH_HELP = 'Substring match on order no, vendor or description'
ORDER_SEARCH_HELP = 'Substring match on order no, description or color'


def with_filters(search_help=STATUS_SEARCH_HELP):
    """Attach --search/--vendor/--status; search_help describes the fields --search covers."""
    filter_options = [
        click.option('--search', default='', help=search_help),
        click.option('--vendor', default='', help='Exact vendor name'),
        click.option('--status', default='', type=click.Choice([''] + JOB_STATUS_OPTIONS), help='Exact status'),
    ]

    def decorator(func):
        for option in reversed(filter_options):
            func = option(func)
        return func
    return decorator


@click.group('records')
def records_group():
    """Job order, challan and invoice reporting commands."""


@records_group.command('dashboard')
@with_appcontext
def show_dashboard():
    """Print dashboard aggregates."""
    store = get_store()
    summary = dashboard_service.dashboard(
        store.job_orders,
        store.invoices,
        top_n=current_app.config["RECORDS_TOP_CLIENTS_LIMIT"],
        recent_n=current_app.config["RECORDS_RECENT_ORDERS_LIMIT"],
    )

    click.echo("\n" + "="*60)
    click.echo("DASHBOARD")
    click.echo("="*60)
    click.echo(f"Total Job Orders:    {summary.total_orders}")
    for status, count in summary.status_counts.items():
        click.echo(f"  {status:<18} {count}")
    click.echo(f"Total Invoices:      {summary.total_invoices}")
    click.echo(f"Total Invoice Value: {_money(summary.total_invoice_value)}")

    click.echo("\nTop Clients by Revenue:")
    if not summary.top_clients:
        click.echo("  No invoice data available to show top clients.")
    for entry in summary.top_clients:
        click.echo(f"  {entry.name:<30} {_money(entry.total):>15}")

    click.echo("\nRecent Job Quantities:")
    for entry in summary.recent_quantities:
        click.echo(f"  {entry.name:<10} qty={entry.quantity:<8} completed={entry.completed_qty}")
    click.echo("="*60 + "\n")


@records_group.command('orders')
@with_filters(ORDER_SEARCH_HELP)
@with_appcontext
def list_orders(search, vendor, status):
    """List job orders with pending quantities."""
    store = get_store()
    challans = store.challans
    orders = reporting_service.filter_job_orders(
        store.job_orders, search=search, vendor=vendor, status=status,
    )

    if not orders:
        click.echo("No job orders found.")
        return

    click.echo("\n" + "="*100)
    click.echo(f"{'Order No':<10} {'Date':<12} {'Vendor':<22} {'Description':<24} {'Total':>7} {'Pending':>8} {'Status'}")
    click.echo("="*100)
    for order in orders:
        pending = fulfillment(order, challans).pending_qty
        click.echo(
            f"{order.job_order_no:<10} {order.date:<12} {order.vendor_name:<22} "
            f"{order.goods_description:<24} {order.quantity:>7} {pending:>8} {order.status.value}"
        )
    click.echo("="*100 + "\n")


@records_group.command('status-report')
@with_filters()
@with_appcontext
def show_status_report(search, vendor, status):
    """Print the joined status report."""
    store = get_store()
    rows = reporting_service.status_report(
        store.job_orders,
        store.challans,
        store.invoices,
        reporting_service.StatusFilter(search=search, vendor=vendor, status=status),
    )

    if not rows:
        click.echo("No data found for the selected filters.")
        return

    for row in rows:
        click.echo(f"\n{row.job_order_no}  {row.date}  {row.vendor_name}  [{row.status.value}]")
        click.echo(f"  Goods:     {row.goods_description} ({row.color})")
        click.echo(f"  Quantity:  {row.quantity} {row.uom}  completed={row.completed_qty}  pending={row.pending_qty}")
        click.echo(f"  Challans:  {_text(row.challan_no)}  dates={_text(row.challan_date)}")
        click.echo(f"  Invoice:   {_text(row.invoice_no)}  billed to={_text(row.billed_to)}")
        click.echo(
            f"  Amounts:   taxable={_money(row.taxable_amount)}  cgst={_money(row.cgst)}  "
            f"sgst={_money(row.sgst)}  total={_money(row.total_amount)}"
        )
    click.echo("")


@records_group.command('export')
@click.argument('view', type=click.Choice(export_service.EXPORT_VIEWS))
@click.option('--format', 'fmt', type=click.Choice(export_service.EXPORT_FORMATS), default='csv', show_default=True)
@click.option('--output', type=click.Path(dir_okay=False), help='Output file (defaults to the view name in RECORDS_EXPORT_DIR)')
@with_filters()
@with_appcontext
def export_records(view, fmt, output, search, vendor, status):
    """Export a view as CSV or XLSX."""
    store = get_store()
    if not output:
        output = os.path.join(
            current_app.config["RECORDS_EXPORT_DIR"],
            export_service.default_filename(view, fmt),
        )

    filters = reporting_service.StatusFilter(search=search, vendor=vendor, status=status)
    try:
        table = export_service.export_view(view, store.snapshot(), output, fmt=fmt, filters=filters)
    except export_service.ExportError as e:
        raise click.ClickException(str(e))
    except OSError:
        current_app.logger.exception("Failed to write export %s", output)
        raise

    current_app.logger.info("Exported %s (%d rows) to %s", view, len(table.rows), output)
    click.echo(f"PASS Wrote {len(table.rows)} row(s) to {output}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(records_group)
