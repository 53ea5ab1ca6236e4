"""Balance commands."""

import click
from datetime import timedelta

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.resolution import (
    format_amount,
    parse_date_or_exit,
    resolve_account_or_exit,
    resolve_group_or_exit,
)
from pocketledger.domain.balance import BalanceService
from pocketledger.domain.errors import DomainError


@click.command("balance")
@click.option("--account", help="Show the balance of one account (name or ID)")
@click.option("--group", help="Show the balance of one group (name or ID)")
@click.option("--as-of", help="Only count transactions up to this date (requires --account)")
@click.pass_context
def show_balance(ctx, account: str | None, group: str | None, as_of: str | None):
    """Show balances.

    Without options, shows the total over all accounts counted in totals.

    Examples:
        pocketledger balance
        pocketledger balance --group Bank
        pocketledger balance --account Checking --as-of 2024-12-31
    """
    service = BalanceService(ctx.obj["db"])

    if account and group:
        click.echo("Error: --account and --group cannot be combined.", err=True)
        ctx.exit(1)
    if as_of and not account:
        click.echo("Error: --as-of requires --account.", err=True)
        ctx.exit(1)

    try:
        if account:
            account_id = resolve_account_or_exit(ctx, account)
            if as_of:
                cutoff = parse_date_or_exit(ctx, as_of)
                amount = service.running_balance(account_id, cutoff)
                click.echo(f"Balance of '{account}' as of {cutoff}: {format_amount(amount)}")
            else:
                amount = service.account_balance(account_id)
                click.echo(f"Balance of '{account}': {format_amount(amount)}")
        elif group:
            group_id = resolve_group_or_exit(ctx, group)
            amount = service.group_balance(group_id)
            click.echo(f"Balance of group '{group}': {format_amount(amount)}")
        else:
            click.echo(f"Total balance: {format_amount(service.total_balance())}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("history")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--start-date", help="First day (default: 30 days before end date)")
@click.option("--end-date", default="today", show_default=True, help="Last day")
@click.pass_context
def balance_history(ctx, account: str, start_date: str | None, end_date: str):
    """Show the end-of-day balance of an account for each day in a range."""
    service = BalanceService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account)
    end = parse_date_or_exit(ctx, end_date, "end date")
    start = (
        parse_date_or_exit(ctx, start_date, "start date")
        if start_date
        else end - timedelta(days=30)
    )

    try:
        points = service.balance_history(account_id, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    for point in points:
        click.echo(f"{point.date.isoformat()}  {format_amount(point.balance):>14s}")


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(show_balance)
    cli.add_command(balance_history)
