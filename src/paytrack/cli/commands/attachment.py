"""Attachment access commands."""

from pathlib import Path

import click

from paytrack.cli.error_handling import handle_domain_error
from paytrack.cli.resolution import get_attachment_store
from paytrack.domain.errors import NotFoundError, attachment_not_found


@click.group()
def attachment_group():
    """Access stored receipt and request files."""
    pass


@attachment_group.command("path")
@click.argument("stored_name")
@click.pass_context
def attachment_path(ctx, stored_name: str):
    """Print the absolute path of a stored attachment."""
    store = get_attachment_store(ctx)
    try:
        if not store.exists(stored_name):
            raise NotFoundError(attachment_not_found(stored_name))
        click.echo(str(store.resolve(stored_name)))
    except ValueError as e:
        handle_domain_error(ctx, e)


@attachment_group.command("show")
@click.argument("stored_name")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the file here instead of standard output",
)
@click.pass_context
def show_attachment(ctx, stored_name: str, output: Path | None):
    """Output the content of a stored attachment.

    Examples:
        paytrack attachment show receipt-1705312800000-invoice.pdf -o invoice.pdf
    """
    store = get_attachment_store(ctx)
    try:
        data = store.read(stored_name)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if output is None:
        click.echo(data, nl=False)
    else:
        output.write_bytes(data)
        click.echo(f"Wrote {len(data)} bytes to {output}", err=True)


def register_commands(cli):
    """Register attachment commands with main CLI."""
    cli.add_command(attachment_group, name="attachment")
