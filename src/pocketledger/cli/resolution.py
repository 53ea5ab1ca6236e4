"""CLI helpers for entity resolution and input parsing."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.group import GroupService
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date
from pocketledger.utils.resolver import resolve_account, resolve_category, resolve_group


def resolve_account_or_exit(ctx: click.Context, account: str) -> UUID:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(AccountService(ctx.obj["db"]), account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_group_or_exit(ctx: click.Context, group: str) -> UUID:
    """Resolve group name or ID, or exit with a CLI error."""
    try:
        return resolve_group(GroupService(ctx.obj["db"]), group)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(ctx: click.Context, category: str) -> UUID:
    """Resolve category name or ID, or exit with a CLI error."""
    try:
        return resolve_category(CategoryService(ctx.obj["db"]), category)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str) -> Decimal:
    """Parse an amount option, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid amount format: {exc}", err=True)
        ctx.exit(1)


def format_amount(amount: Decimal) -> str:
    """Format an amount for display, e.g. ``-1,234.50``."""
    return f"{amount:,.2f}"
