"""Category management commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.resolution import resolve_category_or_exit
from pocketledger.domain.category import CategoryService
from pocketledger.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.pass_context
def create_category(ctx, name: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(name=name)
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("rename")
@click.argument("category")
@click.argument("new_name")
@click.pass_context
def rename_category(ctx, category: str, new_name: str):
    """Rename a category. CATEGORY can be a name or ID."""
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, category)

    try:
        service.rename_category(category_id, new_name)
        click.echo(f"Renamed category to '{new_name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category.

    Its transactions are kept and become uncategorized.
    """
    service = CategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, category)

    try:
        cleared = service.delete_category(category_id)
        click.echo(f"Deleted category '{category}'; {cleared} transactions are now uncategorized")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
