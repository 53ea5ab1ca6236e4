"""Transfer commands."""

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
from pocketledger.domain.errors import DomainError
from pocketledger.domain.transfer import TransferService


@click.group()
def transfer_group():
    """Move money between accounts."""
    pass


@transfer_group.command("create")
@click.argument("source", metavar="FROM")
@click.argument("destination", metavar="TO")
@click.argument("amount")
@click.option("--date", default="today", show_default=True, help="Transfer date")
@click.option("--note", help="Free-text note")
@click.option("--usage", help="Usage / payment reference")
@click.option("--category", help="Category name or ID")
@click.pass_context
def create_transfer(
    ctx,
    source: str,
    destination: str,
    amount: str,
    date: str,
    note: str | None,
    usage: str | None,
    category: str | None,
):
    """Transfer AMOUNT from account FROM to account TO.

    Examples:
        pocketledger transfer create Checking Savings 100
        pocketledger transfer create Checking Wallet 50 --date yesterday --note "ATM"
    """
    service = TransferService(ctx.obj["db"])
    source_id = resolve_account_or_exit(ctx, source)
    destination_id = resolve_account_or_exit(ctx, destination)
    category_id = resolve_category_or_exit(ctx, category) if category else None
    txn_date = parse_date_or_exit(ctx, date)
    value = parse_amount_or_exit(ctx, amount)

    try:
        transfer = service.create_transfer(
            source_id,
            destination_id,
            value,
            txn_date,
            note=note,
            usage=usage,
            category_id=category_id,
        )
        click.echo(
            f"Transferred {format_amount(value)} from '{source}' to '{destination}' "
            f"(ID: {transfer.id})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@transfer_group.command("edit")
@click.argument("transaction_id", type=click.UUID)
@click.option("--amount", help="New transfer amount")
@click.option("--from", "source", help="New source account")
@click.option("--to", "destination", help="New destination account")
@click.option("--date", help="New date")
@click.option("--note", help="New note")
@click.option("--clear-note", is_flag=True, help="Remove the note")
@click.pass_context
def edit_transfer(
    ctx,
    transaction_id: UUID,
    amount: str | None,
    source: str | None,
    destination: str | None,
    date: str | None,
    note: str | None,
    clear_note: bool,
):
    """Change a transfer. Only the given fields are updated."""
    service = TransferService(ctx.obj["db"])
    value = parse_amount_or_exit(ctx, amount) if amount is not None else None
    source_id = resolve_account_or_exit(ctx, source) if source else None
    destination_id = resolve_account_or_exit(ctx, destination) if destination else None
    txn_date = parse_date_or_exit(ctx, date) if date else None

    try:
        service.edit_transfer(
            transaction_id,
            amount=value,
            source_id=source_id,
            destination_id=destination_id,
            date=txn_date,
            note=note,
            clear_note=clear_note,
        )
        click.echo(f"Updated transfer {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transfer_group.command("delete")
@click.argument("transaction_id", type=click.UUID)
@click.pass_context
def delete_transfer(ctx, transaction_id: UUID):
    """Delete a transfer from both accounts."""
    service = TransferService(ctx.obj["db"])

    try:
        service.delete_transfer(transaction_id)
        click.echo(f"Deleted transfer {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transfer commands with main CLI."""
    cli.add_command(transfer_group, name="transfer")
