"""Expense report command."""

import click

from paytrack.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from paytrack.cli.error_handling import handle_internal_error
from paytrack.cli.formatting import echo_json
from paytrack.cli.resolution import resolve_account_or_exit, resolve_cost_center_or_exit
from paytrack.domain.account import AccountService
from paytrack.domain.cost_center import CostCenterService
from paytrack.domain.errors import RelationNotFoundError
from paytrack.domain.filtering import PaymentFilter
from paytrack.domain.payloads import report_to_dict
from paytrack.domain.report import TOP_EXPENSES, ReportService
from paytrack.utils.amount_parser import format_amount


@click.command("report")
@period_options
@click.option("--category", help="Only include this cost center category")
@click.option("--account", help="Account name or ID")
@click.option("--cost-center", help="Cost center ID or 'Category > Subcategory'")
@click.option(
    "--top", type=click.IntRange(min=0), default=TOP_EXPENSES, show_default=True,
    help="Number of largest payments to show",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def report(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    account: str | None,
    cost_center: str | None,
    top: int,
    as_json: bool,
    **period_kwargs,
):
    """Show total spending, spending per category and the largest payments.

    Examples:
        paytrack report --this-year
        paytrack report --start-date 2024-01-01 --end-date 2024-03-31 --category IT
    """
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None
    cost_center_id = (
        resolve_cost_center_or_exit(ctx, CostCenterService(db), cost_center) if cost_center else None
    )
    payment_filter = PaymentFilter(
        start_date=start,
        end_date=end,
        cost_center_id=cost_center_id,
        account_id=account_id,
        category=category,
    )

    try:
        result = ReportService(db).build_report(payment_filter, top_n=top)
    except RelationNotFoundError as e:
        handle_internal_error(ctx, e)

    if as_json:
        echo_json(report_to_dict(result))
        return

    click.echo(f"\nTotal expenses: {format_amount(result.total_expenses)}")
    click.echo(f"Payments: {result.payment_count}")
    if not result.payment_count:
        return

    click.echo("\nBy category:")
    click.echo("-" * 60)
    for ct in result.category_totals:
        click.echo(
            f"{ct.category:<30} {format_amount(ct.total):>14} {ct.percentage:>6.1f}%  ({ct.count})"
        )

    if result.top_expenses:
        click.echo("\nTop expenses:")
        click.echo("-" * 60)
        for p in result.top_expenses:
            click.echo(
                f"{p.date.date().isoformat()}  {format_amount(p.amount):>14}  "
                f"{p.cost_center.label[:24]:<24} {p.description}"
            )


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
