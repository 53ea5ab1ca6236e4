"""Income and expense posting commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.resolution import (
    format_amount,
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_account_or_exit,
    resolve_category_or_exit,
)
from pocketledger.domain.entities import TransactionType
from pocketledger.domain.errors import DomainError
from pocketledger.domain.transaction import TransactionService


def _post(
    ctx,
    type: TransactionType,
    account: str,
    amount: str,
    date: str,
    category: str | None,
    note: str | None,
    usage: str | None,
    exclude: bool,
) -> None:
    service = TransactionService(ctx.obj["db"])

    account_id = resolve_account_or_exit(ctx, account)
    category_id = resolve_category_or_exit(ctx, category) if category else None
    txn_date = parse_date_or_exit(ctx, date)
    txn_amount = parse_amount_or_exit(ctx, amount)

    try:
        transaction_id = service.create_posting(
            account_id=account_id,
            amount=txn_amount,
            type=type,
            date=txn_date,
            category_id=category_id,
            note=note,
            usage=usage,
            exclude_from_balance=exclude,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    txn = service.get_transaction(transaction_id)
    click.echo(f"Created {type.value} {transaction_id}")
    click.echo(f"  Account: {account}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    if category:
        click.echo(f"  Category: {category}")
    if exclude:
        click.echo("  Excluded from balance")


def _posting_command(type: TransactionType, help_text: str):
    @click.command(type.value, help=help_text)
    @click.option("--account", required=True, help="Account name or ID")
    @click.option("--amount", required=True, help="Amount (sign is set by the command)")
    @click.option("--date", default="today", show_default=True, help="Date (YYYY-MM-DD or relative like 'yesterday')")
    @click.option("--category", help="Category name or ID")
    @click.option("--note", help="Free-text note")
    @click.option("--usage", help="Usage / payment reference")
    @click.option("--exclude", is_flag=True, help="Record the posting but keep it out of balances")
    @click.pass_context
    def command(ctx, account, amount, date, category, note, usage, exclude):
        _post(ctx, type, account, amount, date, category, note, usage, exclude)

    return command


income = _posting_command(
    TransactionType.INCOME,
    """Record income on an account.

    Example:
        pocketledger income --account Checking --amount 2500 --category Salary
    """,
)
expense = _posting_command(
    TransactionType.EXPENSE,
    """Record an expense on an account.

    Example:
        pocketledger expense --account Wallet --amount 12.50 --category Food
    """,
)


def register_commands(cli):
    """Register posting commands with main CLI."""
    cli.add_command(income)
    cli.add_command(expense)
