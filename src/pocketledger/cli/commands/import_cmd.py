"""CSV import command."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.resolution import resolve_account_or_exit
from pocketledger.domain.csv_import import CSVImportService
from pocketledger.domain.errors import DomainError


def _parse_rules(ctx: click.Context, rules: tuple[str, ...]) -> list[tuple[str, str]]:
    parsed = []
    for rule in rules:
        text, sep, category = rule.partition("=")
        if not sep or not text.strip() or not category.strip():
            click.echo(f"Error: Invalid rule '{rule}', expected TEXT=CATEGORY", err=True)
            ctx.exit(1)
        parsed.append((text.strip(), category.strip()))
    return parsed


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", help="Account receiving every row (default: the CSV account column)")
@click.option(
    "--rule",
    "rules",
    multiple=True,
    help="Category rule TEXT=CATEGORY, applied when TEXT occurs in the usage (repeatable)",
)
@click.pass_context
def import_csv(ctx, csv_file: str, account: str | None, rules: tuple[str, ...]):
    """Import income and expense postings from a bank CSV export.

    Rows already in the ledger (same account, day, amount and usage) are
    skipped.

    Examples:
        pocketledger import export.csv
        pocketledger import export.csv --account Checking --rule "Landlord=Rent"
    """
    service = CSVImportService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, account) if account else None
    category_rules = _parse_rules(ctx, rules)

    try:
        result = service.import_csv(
            csv_file_path=csv_file, account_id=account_id, category_rules=category_rules
        )
        click.echo("\nImport complete:")
        click.echo(f"  Imported: {result['imported']} transactions")
        click.echo(f"  Skipped: {result['skipped']} duplicates")
        if result["errors"]:
            click.echo(f"  Errors: {len(result['errors'])}")
            for error in result["errors"]:
                click.echo(f"    {error}", err=True)
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
