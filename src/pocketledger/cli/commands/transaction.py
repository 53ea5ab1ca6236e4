"""Transaction viewing and management commands."""

import click
from uuid import UUID

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.resolution import (
    format_amount,
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_account_or_exit,
    resolve_category_or_exit,
)
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.errors import DomainError
from pocketledger.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """View and manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--category", help="Category name or ID")
@click.option("--uncategorized", is_flag=True, help="Only transactions without a category")
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    uncategorized: bool,
):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    account_id = resolve_account_or_exit(ctx, account) if account else None
    category_id = resolve_category_or_exit(ctx, category) if category else None
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    transactions = service.list_transactions(
        account_id=account_id,
        start_date=start,
        end_date=end,
        category_id=category_id,
        uncategorized=uncategorized,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in AccountService(db).list_accounts()}
    categories = {cat.id: cat.name for cat in CategoryService(db).list_categories()}

    click.echo(f"\n{'Date':10s} | {'Type':8s} | {'Amount':>12s} | {'Account':24s} | Category")
    click.echo("-" * 80)
    for txn in transactions:
        account_name = accounts.get(txn.account_id, "?")
        if txn.is_transfer:
            target = accounts.get(txn.target_account_id, "(deleted)")
            account_name = f"{account_name} -> {target}"
        amount = format_amount(txn.amount)
        if txn.exclude_from_balance:
            amount = f"({amount})"
        click.echo(
            f"{txn.date.isoformat():10s} | {txn.type.value:8s} | {amount:>12s} | "
            f"{account_name:24s} | {categories.get(txn.category_id, '')}"
        )
        click.echo(f"  ID: {txn.id}" + (f"  {txn.note}" if txn.note else ""))


@transaction_group.command("update")
@click.argument("transaction_id", type=click.UUID)
@click.option("--account", help="Account name or ID")
@click.option("--amount", help="New amount")
@click.option("--type", "type_", type=click.Choice(["income", "expense"]), help="New posting type")
@click.option("--date", help="New date")
@click.option("--note", help="New note")
@click.option("--usage", help="New usage / payment reference")
@click.option("--clear-note", is_flag=True, help="Remove the note")
@click.option("--clear-usage", is_flag=True, help="Remove the usage text")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: UUID,
    account: str | None,
    amount: str | None,
    type_: str | None,
    date: str | None,
    note: str | None,
    usage: str | None,
    clear_note: bool,
    clear_usage: bool,
) -> None:
    """Update an income or expense posting.

    Updates only the fields that are provided. Use 'transfer edit' for transfers.
    """
    service = TransactionService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account) if account else None
    txn_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None
    txn_date = parse_date_or_exit(ctx, date) if date else None

    try:
        service.update_posting(
            transaction_id,
            account_id=account_id,
            amount=txn_amount,
            type=type_,
            date=txn_date,
            note=note,
            usage=usage,
            clear_note=clear_note,
            clear_usage=clear_usage,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("categorize")
@click.argument("transaction_id", type=click.UUID)
@click.argument("category", required=False)
@click.pass_context
def categorize_transaction(ctx, transaction_id: UUID, category: str | None) -> None:
    """Set a transaction's category, or clear it when CATEGORY is omitted."""
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, category) if category else None

    try:
        service.reassign_category(transaction_id, category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if category:
        click.echo(f"Set category of {transaction_id} to '{category}'")
    else:
        click.echo(f"Cleared category of {transaction_id}")


@transaction_group.command("exclude")
@click.argument("transaction_id", type=click.UUID)
@click.option("--include", is_flag=True, help="Count the transaction in balances again")
@click.pass_context
def exclude_transaction(ctx, transaction_id: UUID, include: bool) -> None:
    """Keep a transaction in history but out of balances."""
    service = TransactionService(ctx.obj["db"])

    try:
        service.set_excluded(transaction_id, not include)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    state = "included in" if include else "excluded from"
    click.echo(f"Transaction {transaction_id} is now {state} balances")


@transaction_group.command("delete")
@click.argument("transaction_id", type=click.UUID)
@click.pass_context
def delete_transaction(ctx, transaction_id: UUID) -> None:
    """Delete a transaction (posting or transfer)."""
    service = TransactionService(ctx.obj["db"])

    try:
        service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
