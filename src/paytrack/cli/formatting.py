"""Shared CLI output helpers."""

import json
from typing import Any

import click

from paytrack.domain.entities import Page, PaymentWithRelations
from paytrack.utils.amount_parser import format_amount


def echo_json(data: Any) -> None:
    """Print a JSON document."""
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def echo_payment_table(payments: tuple[PaymentWithRelations, ...] | list[PaymentWithRelations]) -> None:
    """Print payments as a compact table."""
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>14}  {'Account':<20} {'Cost center':<28} {'Description':<26}"
    )
    click.echo("-" * 110)
    for p in payments:
        click.echo(
            f"{p.id:<6} {p.date.date().isoformat():<12} {format_amount(p.amount):>14}  "
            f"{p.account.name[:20]:<20} {p.cost_center.label[:28]:<28} {p.description[:26]:<26}"
        )


def echo_payment_detail(payment: PaymentWithRelations) -> None:
    """Print every field of one payment."""
    click.echo(f"Payment ID: {payment.id}")
    click.echo(f"  Date: {payment.date.isoformat(sep=' ')}")
    click.echo(f"  Amount: {format_amount(payment.amount)}")
    click.echo(f"  Description: {payment.description}")
    click.echo(f"  Account: {payment.account.name} (ID: {payment.account_id})")
    click.echo(f"  Cost center: {payment.cost_center.label} (ID: {payment.cost_center_id})")
    click.echo(f"  Receipt: {payment.receipt_path or '-'}")
    click.echo(f"  Request: {payment.request_path or '-'}")


def echo_page_footer(page: Page) -> None:
    if page.total_pages > 1:
        click.echo(f"Page {page.page} of {page.total_pages} ({page.total_count} payments)")
