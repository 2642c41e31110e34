"""Sample data command."""

import click

from paytrack.domain.sample_data import load_sample_data


@click.command("seed")
@click.pass_context
def seed(ctx):
    """Add sample accounts and cost centers.

    Entries that already exist are left alone, so running this twice is safe.
    """
    accounts_created, cost_centers_created = load_sample_data(ctx.obj["db"])
    click.echo(f"Created {accounts_created} account(s) and {cost_centers_created} cost center(s).")


def register_commands(cli):
    """Register seed command with main CLI."""
    cli.add_command(seed)
