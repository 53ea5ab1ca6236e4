"""Account group management commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.resolution import resolve_group_or_exit
from pocketledger.domain.account import AccountService
from pocketledger.domain.errors import DomainError
from pocketledger.domain.group import GroupService


@click.group()
def group_group():
    """Manage account groups."""
    pass


@group_group.command("create")
@click.argument("name", metavar="GROUP_NAME")
@click.option("--icon", help="Display icon name")
@click.option("--color", "icon_color", help="Display color (e.g. '#1E90FF')")
@click.pass_context
def create_group(ctx, name: str, icon: str | None, icon_color: str | None):
    """Create a new account group.

    Examples:
        pocketledger group create "Bank"
        pocketledger group create "Cash" --icon banknote --color "#2E8B57"
    """
    service = GroupService(ctx.obj["db"])

    try:
        group_id = service.create_group(name=name, icon=icon, icon_color=icon_color)
        click.echo(f"Created group '{name}' (ID: {group_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@group_group.command("list")
@click.pass_context
def list_groups(ctx):
    """List all groups with their accounts."""
    db = ctx.obj["db"]
    service = GroupService(db)
    account_service = AccountService(db)

    groups = service.list_groups()
    ungrouped = account_service.list_accounts(ungrouped=True)
    if not groups and not ungrouped:
        click.echo("No groups found.")
        return

    click.echo("\nGroups:")
    click.echo("-" * 60)
    for grp in groups:
        click.echo(f"{grp.name} (ID: {grp.id})")
        for acc in account_service.list_accounts(group_id=grp.id):
            click.echo(f"  - {acc.name}")
    if ungrouped:
        click.echo("(no group)")
        for acc in ungrouped:
            click.echo(f"  - {acc.name}")


@group_group.command("rename")
@click.argument("group", metavar="GROUP")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_group(ctx, group: str, new_name: str):
    """Rename a group.

    GROUP can be a group name or ID.
    """
    service = GroupService(ctx.obj["db"])
    group_id = resolve_group_or_exit(ctx, group)

    try:
        service.update_group(group_id, name=new_name)
        click.echo(f"Renamed group to '{new_name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@group_group.command("delete")
@click.argument("group", metavar="GROUP")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_group(ctx, group: str, yes: bool):
    """Delete a group with all of its accounts and their transactions.

    Transfers from other accounts into the deleted accounts are kept, but
    no longer point at a destination.
    """
    service = GroupService(ctx.obj["db"])
    group_id = resolve_group_or_exit(ctx, group)
    group_obj = service.require_group(group_id)

    if not yes and not click.confirm(
        f"Delete group '{group_obj.name}' and all of its accounts and transactions?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        result = service.delete_group(group_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Deleted group '{group_obj.name}': {result.accounts_deleted} accounts, "
        f"{result.transactions_deleted} transactions"
    )
    if result.transfers_detached:
        click.echo(f"{result.transfers_detached} transfers from other accounts lost their destination")


def register_commands(cli):
    """Register group commands with main CLI."""
    cli.add_command(group_group, name="group")
