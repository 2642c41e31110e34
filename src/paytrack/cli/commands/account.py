"""Account management commands."""

import click

from paytrack.cli.error_handling import handle_domain_error
from paytrack.cli.formatting import echo_json
from paytrack.cli.resolution import resolve_account_or_exit
from paytrack.domain.account import AccountService
from paytrack.domain.entities import AccountType
from paytrack.domain.payloads import account_to_dict

ACCOUNT_TYPES = click.Choice([t.value for t in AccountType])


@click.group()
def account_group():
    """Manage funding accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=ACCOUNT_TYPES, required=True, help="Account type")
@click.pass_context
def create_account(ctx, name: str, account_type: str):
    """Create a new account.

    Examples:
        paytrack account create "Cash" --type BankAccount
        paytrack account create "PayPal Business" --type PayPal
    """
    service = AccountService(ctx.obj["db"])

    try:
        account = service.create_account(name=name, type=account_type)
        click.echo(f"Created account '{account.name}' (ID: {account.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def list_accounts(ctx, as_json: bool):
    """List all accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if as_json:
        echo_json([account_to_dict(acc) for acc in accounts])
        return
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:25s} | Type: {acc.type.value}")


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def show_account(ctx, account: str, as_json: bool):
    """Show one account. ACCOUNT can be a name or ID."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    if as_json:
        echo_json(account_to_dict(acc))
    else:
        click.echo(f"ID: {acc.id}\nName: {acc.name}\nType: {acc.type.value}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", type=ACCOUNT_TYPES, help="New account type")
@click.pass_context
def update_account(ctx, account: str, name: str | None, account_type: str | None) -> None:
    """Update an account.

    ACCOUNT can be an account name or ID. Only the given fields change.

    Examples:
        paytrack account update "Cash" --name "Petty Cash"
        paytrack account update 1 --type CreditCard
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    changes = {}
    if name is not None:
        changes["name"] = name
    if account_type is not None:
        changes["type"] = account_type

    try:
        updated = service.update_account(account_id, changes)
        click.echo(f"Updated account '{updated.name}' (ID: {updated.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--force", is_flag=True, help="Delete even if payments still use the account")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, force: bool, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no payments use it, unless --force is
    given. Payments left pointing at a deleted account can no longer be read.

    Examples:
        paytrack account delete "Cash"
        paytrack account delete 1 --yes
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.require_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id, force=force)
        click.echo(f"Deleted account '{account_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
