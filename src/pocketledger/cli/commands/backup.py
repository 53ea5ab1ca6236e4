"""Backup and restore commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.backup import BackupService
from pocketledger.domain.errors import DomainError


@click.command("backup")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def backup(ctx, path: str):
    """Write the whole ledger to a JSON file at PATH."""
    service = BackupService(ctx.obj["db"])

    try:
        written = service.write_backup(path)
        click.echo(f"Backup written to {written}")
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)


@click.command("restore")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def restore(ctx, path: str, yes: bool):
    """Replace the whole ledger with the contents of a backup file."""
    if not yes and not click.confirm("This replaces all current data. Continue?"):
        click.echo("Restore cancelled.")
        return

    service = BackupService(ctx.obj["db"])
    try:
        service.restore_backup(path)
        click.echo(f"Restored ledger from {path}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup)
    cli.add_command(restore)
