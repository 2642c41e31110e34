"""Cost center management commands."""

import click

from paytrack.cli.error_handling import handle_domain_error
from paytrack.cli.formatting import echo_json
from paytrack.cli.resolution import resolve_cost_center_or_exit
from paytrack.domain.cost_center import CostCenterService
from paytrack.domain.payloads import cost_center_to_dict


@click.group()
def cost_center_group():
    """Manage cost centers."""
    pass


@cost_center_group.command("create")
@click.argument("category")
@click.argument("subcategory")
@click.pass_context
def create_cost_center(ctx, category: str, subcategory: str):
    """Create a cost center.

    Examples:
        paytrack cost-center create IT Software
        paytrack cost-center create Marketing "Trade fairs"
    """
    service = CostCenterService(ctx.obj["db"])

    try:
        cost_center = service.create_cost_center(category=category, subcategory=subcategory)
        click.echo(f"Created cost center '{cost_center.label}' (ID: {cost_center.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@cost_center_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def list_cost_centers(ctx, as_json: bool):
    """List all cost centers."""
    service = CostCenterService(ctx.obj["db"])

    cost_centers = service.list_cost_centers()
    if as_json:
        echo_json([cost_center_to_dict(cc) for cc in cost_centers])
        return
    if not cost_centers:
        click.echo("No cost centers found.")
        return

    click.echo("\nCost centers:")
    click.echo("-" * 60)
    for cc in cost_centers:
        click.echo(f"ID: {cc.id:3d} | {cc.category:20s} | {cc.subcategory}")


@cost_center_group.command("show")
@click.argument("cost_center", metavar="COST_CENTER")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
def show_cost_center(ctx, cost_center: str, as_json: bool):
    """Show one cost center. COST_CENTER is an ID or 'Category > Subcategory'."""
    service = CostCenterService(ctx.obj["db"])
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)
    cc = service.require_cost_center(cost_center_id)

    if as_json:
        echo_json(cost_center_to_dict(cc))
    else:
        click.echo(f"ID: {cc.id}\nCategory: {cc.category}\nSubcategory: {cc.subcategory}")


@cost_center_group.command("update")
@click.argument("cost_center", metavar="COST_CENTER")
@click.option("--category", help="New category")
@click.option("--subcategory", help="New subcategory")
@click.pass_context
def update_cost_center(ctx, cost_center: str, category: str | None, subcategory: str | None):
    """Update a cost center. Only the given fields change."""
    service = CostCenterService(ctx.obj["db"])
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)

    changes = {}
    if category is not None:
        changes["category"] = category
    if subcategory is not None:
        changes["subcategory"] = subcategory

    try:
        updated = service.update_cost_center(cost_center_id, changes)
        click.echo(f"Updated cost center '{updated.label}' (ID: {updated.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@cost_center_group.command("delete")
@click.argument("cost_center", metavar="COST_CENTER")
@click.option("--force", is_flag=True, help="Delete even if payments still use it")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_cost_center(ctx, cost_center: str, force: bool, yes: bool):
    """Delete a cost center.

    Refused while payments use it, unless --force is given.
    """
    service = CostCenterService(ctx.obj["db"])
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)
    cc = service.require_cost_center(cost_center_id)

    if not yes and not click.confirm(f"Are you sure you want to delete cost center '{cc.label}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_cost_center(cost_center_id, force=force)
        click.echo(f"Deleted cost center '{cc.label}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register cost center commands with main CLI."""
    cli.add_command(cost_center_group, name="cost-center")
