"""Main CLI entry point."""

import click

from pocketledger import config
from pocketledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from pocketledger.cli.commands import (
    account,
    backup,
    balance,
    category,
    group,
    import_cmd,
    post,
    transaction,
    transfer,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETLEDGER_DB_PATH environment variable)",
    envvar=config.DB_PATH_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to the LOG_LEVEL environment variable, else WARNING)",
)
@click.version_option(config.VERSION, prog_name="pocketledger")
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Pocketledger - personal finance ledger.

    Keep accounts in groups, record income and expenses, move money between
    accounts and see balances per account, group or overall.
    """
    ctx.ensure_object(dict)
    config.configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
group.register_commands(cli)
account.register_commands(cli)
category.register_commands(cli)
post.register_commands(cli)
transfer.register_commands(cli)
transaction.register_commands(cli)
balance.register_commands(cli)
backup.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
