"""Account domain service."""

from typing import Any, Mapping, Optional

import structlog

from paytrack.database.base import Database
from paytrack.domain.entities import Account as AccountEntity, AccountType
from paytrack.domain.errors import (
    DependencyError,
    NotFoundError,
    account_not_found,
    delete_blocked,
)
from paytrack.domain.validation import require_account_type, require_text

logger = structlog.get_logger(__name__)


class AccountService:
    """Service for managing funding accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, type: AccountType | str) -> AccountEntity:
        """Create a new account.

        Args:
            name: Account name
            type: Account type

        Returns:
            Stored account

        Raises:
            ValidationError: If name is empty or type is unknown
        """
        account = self.db.create_account(
            name=require_text(name, "name"), type=require_account_type(type)
        )
        logger.info("account_created", account_id=account.id)
        return account

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID, or None if not found."""
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def update_account(self, account_id: int, changes: Mapping[str, Any]) -> AccountEntity:
        """Apply a partial update to an account.

        Args:
            account_id: Account ID to update
            changes: Subset of 'name' and 'type'

        Raises:
            ValidationError: If a supplied field is invalid
            NotFoundError: If the account does not exist
        """
        validated: dict[str, Any] = {}
        if "name" in changes:
            validated["name"] = require_text(changes["name"], "name")
        if "type" in changes:
            validated["type"] = require_account_type(changes["type"])

        account = self.db.update_account(account_id, validated)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        logger.info("account_updated", account_id=account_id, fields=sorted(validated))
        return account

    def delete_account(self, account_id: int, force: bool = False) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete
            force: Delete even if payments still reference the account

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If payments reference the account and force is False
        """
        self.require_account(account_id)

        payment_count = self.db.count_payments_for_account(account_id)
        if payment_count > 0 and not force:
            raise DependencyError(delete_blocked("account", account_id, payment_count))

        self.db.delete_account(account_id)
        logger.info("account_deleted", account_id=account_id, orphaned_payments=payment_count)
