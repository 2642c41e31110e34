"""Main CLI entry point."""

import click

from paytrack.database.factories import create_sqlite_database
from paytrack.logging_config import DEFAULT_LEVEL, configure_logging

# Import and register all commands at module level
from paytrack.cli.commands import (
    account,
    attachment,
    cost_center,
    payment,
    report,
    seed,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PAYTRACK_DB_PATH environment variable)",
    envvar="PAYTRACK_DB_PATH",
)
@click.option(
    "--uploads-dir",
    type=click.Path(file_okay=False),
    help="Directory for stored attachments (overrides PAYTRACK_UPLOADS_DIR)",
    envvar="PAYTRACK_UPLOADS_DIR",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=DEFAULT_LEVEL,
    show_default=True,
    envvar="PAYTRACK_LOG_LEVEL",
    help="Log level for diagnostics written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, uploads_dir: str | None, log_level: str):
    """Paytrack - Business payment tracking.

    Record payments against funding accounts and cost centers, attach
    receipts and requests, and report spending by category.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Open the database only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["uploads_dir"] = uploads_dir
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
cost_center.register_commands(cli)
payment.register_commands(cli)
attachment.register_commands(cli)
report.register_commands(cli)
seed.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
