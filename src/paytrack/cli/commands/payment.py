"""Payment management commands."""

from pathlib import Path
from typing import Any

import click

from paytrack.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from paytrack.cli.error_handling import handle_domain_error, handle_internal_error
from paytrack.cli.formatting import (
    echo_json,
    echo_page_footer,
    echo_payment_detail,
    echo_payment_table,
)
from paytrack.cli.resolution import (
    get_attachment_store,
    resolve_account_or_exit,
    resolve_cost_center_or_exit,
)
from paytrack.domain.account import AccountService
from paytrack.domain.cost_center import CostCenterService
from paytrack.domain.errors import AttachmentIOError, RelationNotFoundError, ValidationError
from paytrack.domain.filtering import PAGE_SIZE, PaymentFilter, paginate
from paytrack.domain.payloads import (
    page_to_dict,
    parse_payment_payload,
    payment_to_dict,
    payment_with_relations_to_dict,
)
from paytrack.domain.payment import AttachmentUpload, PaymentService
from paytrack.domain.report import ReportService
from paytrack.utils.amount_parser import format_amount, parse_amount
from paytrack.utils.date_parser import parse_datetime

REQUIRED_FIELDS = ("date", "amount", "description", "account_id", "cost_center_id")
REMOVE_FLAGS = (("removeReceipt", "remove_receipt"), ("removeRequest", "remove_request"))
ATTACHMENT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _payment_service(ctx) -> PaymentService:
    return PaymentService(ctx.obj["db"], get_attachment_store(ctx))


def _read_upload(path: Path | None) -> AttachmentUpload | None:
    if path is None:
        return None
    return AttachmentUpload(data=path.read_bytes(), filename=path.name)


def _collect_fields(
    ctx,
    data: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    account: str | None,
    cost_center: str | None,
    update: bool = False,
) -> dict[str, Any]:
    """Merge the --data JSON payload with individual options (options win).

    The removeReceipt/removeRequest flags are only accepted when update is set.
    """
    fields: dict[str, Any] = {}
    if data is not None:
        try:
            fields = parse_payment_payload(data, partial=True)
            if not update:
                for wire_name, field_name in REMOVE_FLAGS:
                    if field_name in fields:
                        raise ValidationError(
                            f"{wire_name} is only valid on update", field=wire_name
                        )
        except ValueError as e:
            handle_domain_error(ctx, e)

    if date is not None:
        try:
            fields["date"] = parse_datetime(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    if amount is not None:
        try:
            fields["amount"] = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    if description is not None:
        fields["description"] = description
    if account is not None:
        fields["account_id"] = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), account)
    if cost_center is not None:
        fields["cost_center_id"] = resolve_cost_center_or_exit(
            ctx, CostCenterService(ctx.obj["db"]), cost_center
        )
    return fields


def _payment_field_options(func):
    func = click.option("--cost-center", help="Cost center ID or 'Category > Subcategory'")(func)
    func = click.option("--account", help="Account name or ID")(func)
    func = click.option("--description", help="Payment description")(func)
    func = click.option("--amount", help="Payment amount (e.g., 99.99)")(func)
    func = click.option(
        "--date", help="Payment date (YYYY-MM-DD, ISO timestamp or relative like 'today')"
    )(func)
    func = click.option(
        "--data", help='JSON payload, e.g. \'{"date": "2024-01-15", "amount": "99.99", ...}\''
    )(func)
    return func


@click.group()
def payment_group():
    """Manage payments."""
    pass


@payment_group.command("add")
@_payment_field_options
@click.option("--receipt", type=ATTACHMENT_FILE, help="Receipt file to attach")
@click.option("--request", type=ATTACHMENT_FILE, help="Request file to attach")
@click.option("--json", "as_json", is_flag=True, help="Print the stored payment as JSON")
@click.pass_context
def add_payment(
    ctx,
    data: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    account: str | None,
    cost_center: str | None,
    receipt: Path | None,
    request: Path | None,
    as_json: bool,
):
    """Record a payment.

    Fields come from --data (camelCase JSON) and/or individual options.

    Examples:
        paytrack payment add --date 2024-01-15 --amount 99.99 --description License \\
            --account Cash --cost-center "IT > Software" --receipt invoice.pdf
        paytrack payment add --data '{"date": "2024-01-15", "amount": "99.99",
            "description": "License", "accountId": 1, "costCenterId": 1}'
    """
    fields = _collect_fields(ctx, data, date, amount, description, account, cost_center)
    missing = [name for name in REQUIRED_FIELDS if name not in fields]
    if missing:
        click.echo(f"Error: Missing required field(s): {', '.join(missing)}", err=True)
        ctx.exit(1)

    service = _payment_service(ctx)
    try:
        payment = service.create_payment(
            **fields, receipt=_read_upload(receipt), request=_read_upload(request)
        )
    except AttachmentIOError as e:
        handle_internal_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(payment_to_dict(payment))
        return
    click.echo(f"Created payment {payment.id}")
    click.echo(f"  Date: {payment.date.date().isoformat()}")
    click.echo(f"  Amount: {format_amount(payment.amount)}")
    click.echo(f"  Description: {payment.description}")
    if payment.receipt_path:
        click.echo(f"  Receipt: {payment.receipt_path}")
    if payment.request_path:
        click.echo(f"  Request: {payment.request_path}")


@payment_group.command("list")
@period_options
@click.option("--cost-center", help="Cost center ID or 'Category > Subcategory'")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Cost center category")
@click.option("--search", help="Case-insensitive text search")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--page-size", type=click.IntRange(min=1), default=PAGE_SIZE, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def list_payments(
    ctx,
    start_date: str | None,
    end_date: str | None,
    cost_center: str | None,
    account: str | None,
    category: str | None,
    search: str | None,
    page: int,
    page_size: int,
    as_json: bool,
    **period_kwargs,
):
    """List payments grouped by cost center, newest first within each group.

    Examples:
        paytrack payment list --this-month
        paytrack payment list --cost-center 2 --search license --page 2
    """
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    payment_filter = PaymentFilter(
        start_date=start,
        end_date=end,
        cost_center_id=(
            resolve_cost_center_or_exit(ctx, CostCenterService(db), cost_center)
            if cost_center is not None
            else None
        ),
        account_id=(
            resolve_account_or_exit(ctx, AccountService(db), account) if account is not None else None
        ),
        category=category,
    )

    try:
        payments = ReportService(db).list_payments(payment_filter, search=search)
    except RelationNotFoundError as e:
        handle_internal_error(ctx, e)

    result = paginate(payments, page=page, page_size=page_size)
    if as_json:
        echo_json(page_to_dict(result))
        return
    if not payments:
        click.echo("No payments found.")
        return

    click.echo(f"\nFound {result.total_count} payment(s):")
    echo_payment_table(result.items)
    echo_page_footer(result)


@payment_group.command("show")
@click.argument("payment_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def show_payment(ctx, payment_id: int, as_json: bool):
    """Show one payment with its account and cost center."""
    try:
        payment = _payment_service(ctx).require_payment(payment_id)
    except RelationNotFoundError as e:
        handle_internal_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(payment_with_relations_to_dict(payment))
    else:
        echo_payment_detail(payment)


@payment_group.command("update")
@click.argument("payment_id", type=int)
@_payment_field_options
@click.option("--receipt", type=ATTACHMENT_FILE, help="Replace the receipt file")
@click.option("--request", type=ATTACHMENT_FILE, help="Replace the request file")
@click.option("--remove-receipt", is_flag=True, help="Remove the receipt file")
@click.option("--remove-request", is_flag=True, help="Remove the request file")
@click.pass_context
def update_payment(
    ctx,
    payment_id: int,
    data: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    account: str | None,
    cost_center: str | None,
    receipt: Path | None,
    request: Path | None,
    remove_receipt: bool,
    remove_request: bool,
):
    """Update a payment.

    Updates only the fields that are provided. A new --receipt/--request
    replaces the stored file; --remove-receipt/--remove-request clears it.

    Examples:
        paytrack payment update 1 --amount 120.00
        paytrack payment update 1 --receipt new.pdf --remove-request
        paytrack payment update 1 --data '{"description": "Renewal", "removeReceipt": true}'
    """
    fields = _collect_fields(
        ctx, data, date, amount, description, account, cost_center, update=True
    )
    remove_receipt = fields.pop("remove_receipt", False) or remove_receipt
    remove_request = fields.pop("remove_request", False) or remove_request

    service = _payment_service(ctx)
    try:
        service.update_payment(
            payment_id,
            fields,
            receipt=_read_upload(receipt),
            request=_read_upload(request),
            remove_receipt=remove_receipt,
            remove_request=remove_request,
        )
        click.echo(f"Updated payment {payment_id}")
    except AttachmentIOError as e:
        handle_internal_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)


@payment_group.command("delete")
@click.argument("payment_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_payment(ctx, payment_id: int, yes: bool):
    """Delete a payment and its attached files."""
    if not yes and not click.confirm(f"Are you sure you want to delete payment {payment_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        _payment_service(ctx).delete_payment(payment_id)
        click.echo(f"Deleted payment {payment_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
