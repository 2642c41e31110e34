"""CLI helpers for resolving accounts, cost centers and the attachment store."""

from __future__ import annotations

import click

from paytrack.database.attachments import AttachmentStore
from paytrack.database.factories import create_attachment_store
from paytrack.domain.account import AccountService
from paytrack.domain.cost_center import CostCenterService


def get_attachment_store(ctx: click.Context) -> AttachmentStore:
    """Create the attachment store on first use and cache it on the context."""
    obj = ctx.find_root().obj
    if "attachments" not in obj:
        obj["attachments"] = create_attachment_store(uploads_dir=obj.get("uploads_dir"))
    return obj["attachments"]


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account name or ID to an account ID.

    Raises:
        ValueError: If no account matches
    """
    try:
        account_id = int(account)
    except (TypeError, ValueError):
        account_id = None

    if account_id is not None:
        if account_service.get_account(account_id) is None:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    for acc in account_service.list_accounts():
        if acc.name == account:
            return acc.id
    raise ValueError(f"Account '{account}' not found")


def resolve_cost_center(cost_center_service: CostCenterService, cost_center: str | int) -> int:
    """Resolve a cost center ID or 'Category > Subcategory' label to an ID.

    'Category - Subcategory' is accepted as well.

    Raises:
        ValueError: If no cost center matches
    """
    try:
        cost_center_id = int(cost_center)
    except (TypeError, ValueError):
        cost_center_id = None

    if cost_center_id is not None:
        if cost_center_service.get_cost_center(cost_center_id) is None:
            raise ValueError(f"Cost center ID {cost_center_id} not found")
        return cost_center_id

    label = str(cost_center)
    for separator in (">", " - "):
        category, found, subcategory = label.partition(separator)
        if not found:
            continue
        for cc in cost_center_service.list_cost_centers():
            if cc.category == category.strip() and cc.subcategory == subcategory.strip():
                return cc.id
    raise ValueError(f"Cost center '{cost_center}' not found")


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_cost_center_or_exit(
    ctx: click.Context, cost_center_service: CostCenterService, cost_center: str | int
) -> int:
    """Resolve cost center label or ID, or exit with a CLI error."""
    try:
        return resolve_cost_center(cost_center_service, cost_center)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
