"""CLI error handling helpers."""

import click

from paytrack.domain.errors import AttachmentIOError, DomainError, RelationNotFoundError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_internal_error(
    ctx: click.Context, error: RelationNotFoundError | AttachmentIOError
) -> None:
    """Render a data integrity or storage fault and exit with status 2."""
    click.echo(f"Internal error: {error}", err=True)
    ctx.exit(2)
