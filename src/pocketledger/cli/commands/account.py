"""Account management commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.config import ZERO
from pocketledger.cli.resolution import (
    format_amount,
    resolve_account_or_exit,
    resolve_group_or_exit,
)
from pocketledger.domain.account import AccountService
from pocketledger.domain.balance import BalanceService
from pocketledger.domain.entities import AccountKind
from pocketledger.domain.errors import DomainError

KIND_CHOICES = [kind.value for kind in AccountKind]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--group", help="Group name or ID to place the account in")
@click.option("--kind", type=click.Choice(KIND_CHOICES), default="bank", help="Account kind (default: bank)")
@click.option("--exclude-from-total", is_flag=True, help="Keep this account out of group and overall totals")
@click.option("--icon", help="Display icon name")
@click.option("--color", "icon_color", help="Display color")
@click.pass_context
def create_account(
    ctx,
    name: str,
    group: str | None,
    kind: str,
    exclude_from_total: bool,
    icon: str | None,
    icon_color: str | None,
):
    """Create a new account.

    Examples:
        pocketledger account create "Checking" --group "Bank"
        pocketledger account create "Wallet" --kind cash
        pocketledger account create "Loan" --exclude-from-total
    """
    service = AccountService(ctx.obj["db"])
    group_id = resolve_group_or_exit(ctx, group) if group else None

    try:
        account_id = service.create_account(
            name=name,
            group_id=group_id,
            kind=kind,
            include_in_balance=not exclude_from_total,
            icon=icon,
            icon_color=icon_color,
        )
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--group", help="Only show accounts of this group")
@click.pass_context
def list_accounts(ctx, group: str | None):
    """List accounts with their balances."""
    db = ctx.obj["db"]
    service = AccountService(db)
    balances = BalanceService(db).all_account_balances()

    group_id = resolve_group_or_exit(ctx, group) if group else None
    accounts = service.list_accounts(group_id=group_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        marker = "" if acc.include_in_balance else " (not in total)"
        click.echo(
            f"{acc.name:20s} | {acc.kind.value:8s} | {format_amount(balances.get(acc.id, ZERO)):>14s}"
            f"{marker} | ID: {acc.id}"
        )


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--kind", type=click.Choice(KIND_CHOICES), help="New account kind")
@click.option("--include-in-total/--exclude-from-total", default=None, help="Count the account in totals")
@click.option("--icon", help="Display icon name")
@click.option("--color", "icon_color", help="Display color")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    kind: str | None,
    include_in_total: bool | None,
    icon: str | None,
    icon_color: str | None,
):
    """Update an account.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)

    try:
        service.update_account(
            account_id,
            name=name,
            kind=kind,
            include_in_balance=include_in_total,
            icon=icon,
            icon_color=icon_color,
        )
        click.echo("Updated account")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("move")
@click.argument("account", metavar="ACCOUNT")
@click.argument("group", metavar="GROUP", required=False)
@click.pass_context
def move_account(ctx, account: str, group: str | None):
    """Move an account to another group.

    Leave GROUP out to remove the account from its group.

    Examples:
        pocketledger account move "Savings" "Bank"
        pocketledger account move "Savings"
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    group_id = resolve_group_or_exit(ctx, group) if group else None

    try:
        service.move_account(account_id, group_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if group:
        click.echo(f"Moved account to group '{group}'")
    else:
        click.echo("Removed account from its group")


@account_group.command("reorder")
@click.argument("accounts", metavar="ACCOUNT...", nargs=-1, required=True)
@click.pass_context
def reorder_accounts(ctx, accounts: tuple[str, ...]):
    """Set the display order of accounts, first to last."""
    service = AccountService(ctx.obj["db"])
    account_ids = [resolve_account_or_exit(ctx, acc) for acc in accounts]

    try:
        service.reorder_accounts(account_ids)
        click.echo(f"Reordered {len(account_ids)} accounts")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account and its transactions.

    ACCOUNT can be an account name or ID.

    Transfers this account sent are deleted with it. Transfers other
    accounts sent to it are kept without a destination.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    account_obj = service.require_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' and its transactions?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        result = service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Deleted account '{account_obj.name}' with {result.transactions_deleted} transactions"
    )
    if result.transfers_detached:
        click.echo(f"{result.transfers_detached} incoming transfers lost their destination")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
