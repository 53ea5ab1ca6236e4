"""Resolve user-supplied names or IDs to ledger entity IDs."""

from uuid import UUID

from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.group import GroupService


def _as_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


def resolve_account(account_service: AccountService, account: str | UUID) -> UUID:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name, or ID (UUID or its string form)

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found or the name is ambiguous
    """
    account_id = account if isinstance(account, UUID) else _as_uuid(account)
    if account_id is not None:
        if account_service.get_account(account_id) is None:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    matches = [acc for acc in account_service.list_accounts() if acc.name == account]
    if not matches:
        raise ValueError(f"Account '{account}' not found")
    if len(matches) > 1:
        raise ValueError(f"Account name '{account}' is ambiguous; use the account ID")
    return matches[0].id


def resolve_group(group_service: GroupService, group: str | UUID) -> UUID:
    """Resolve group name or ID to group ID.

    Raises:
        ValueError: If group is not found
    """
    group_id = group if isinstance(group, UUID) else _as_uuid(group)
    if group_id is not None:
        if group_service.get_group(group_id) is None:
            raise ValueError(f"Group ID {group_id} not found")
        return group_id

    found = group_service.get_group_by_name(group)
    if found is None:
        raise ValueError(f"Group '{group}' not found")
    return found.id


def resolve_category(category_service: CategoryService, category: str | UUID) -> UUID:
    """Resolve category name or ID to category ID.

    Raises:
        ValueError: If category is not found
    """
    category_id = category if isinstance(category, UUID) else _as_uuid(category)
    if category_id is not None:
        if category_service.get_category(category_id) is None:
            raise ValueError(f"Category ID {category_id} not found")
        return category_id

    return category_service.require_category_by_name(category).id
