"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from paytrack.domain.entities import (
    Account,
    AccountType,
    CostCenter,
    Payment,
)

ACCOUNT_FIELDS = frozenset({"name", "type"})
COST_CENTER_FIELDS = frozenset({"category", "subcategory"})
PAYMENT_FIELDS = frozenset(
    {
        "date",
        "amount",
        "description",
        "account_id",
        "cost_center_id",
        "receipt_path",
        "request_path",
    }
)


def check_fields(changes: Mapping[str, Any], allowed: frozenset[str], entity: str) -> None:
    """Reject update keys that are not fields of the entity."""
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Unknown {entity} field(s): {', '.join(sorted(unknown))}")


class Database(ABC):
    """Abstract database interface for paytrack.

    Ids are positive integers assigned per entity type in strictly increasing
    order and are never reused after a delete. Foreign keys between payments
    and accounts/cost centers are not enforced here.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    def __enter__(self) -> "Database":
        self.connect()
        self.initialize_schema()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    # Account operations
    @abstractmethod
    def create_account(self, name: str, type: AccountType) -> Account:
        """Create a new account. Returns the stored account."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts in insertion order."""
        pass

    @abstractmethod
    def update_account(self, account_id: int, changes: Mapping[str, Any]) -> Optional[Account]:
        """Merge the supplied fields into an account.

        Returns None if the account does not exist.
        """
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> bool:
        """Delete an account. Returns False if it did not exist."""
        pass

    # Cost center operations
    @abstractmethod
    def create_cost_center(self, category: str, subcategory: str) -> CostCenter:
        """Create a new cost center. Returns the stored cost center."""
        pass

    @abstractmethod
    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenter]:
        """Get cost center by ID."""
        pass

    @abstractmethod
    def list_cost_centers(self) -> list[CostCenter]:
        """List all cost centers in insertion order."""
        pass

    @abstractmethod
    def update_cost_center(
        self, cost_center_id: int, changes: Mapping[str, Any]
    ) -> Optional[CostCenter]:
        """Merge the supplied fields into a cost center.

        Returns None if the cost center does not exist.
        """
        pass

    @abstractmethod
    def delete_cost_center(self, cost_center_id: int) -> bool:
        """Delete a cost center. Returns False if it did not exist."""
        pass

    # Payment operations
    @abstractmethod
    def create_payment(
        self,
        date: datetime,
        amount: Decimal,
        description: str,
        account_id: int,
        cost_center_id: int,
        receipt_path: Optional[str] = None,
        request_path: Optional[str] = None,
    ) -> Payment:
        """Create a payment. Returns the stored payment."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID."""
        pass

    @abstractmethod
    def list_payments(self) -> list[Payment]:
        """List all payments in insertion order."""
        pass

    @abstractmethod
    def update_payment(self, payment_id: int, changes: Mapping[str, Any]) -> Optional[Payment]:
        """Merge the supplied fields into a payment.

        Returns None if the payment does not exist. A key present with a
        None value (e.g. receipt_path) clears that field.
        """
        pass

    @abstractmethod
    def delete_payment(self, payment_id: int) -> bool:
        """Delete a payment row. Returns False if it did not exist.

        Attachment files are not touched; PaymentService owns their cleanup.
        """
        pass

    @abstractmethod
    def count_payments_for_account(self, account_id: int) -> int:
        """Get count of payments referencing an account."""
        pass

    @abstractmethod
    def count_payments_for_cost_center(self, cost_center_id: int) -> int:
        """Get count of payments referencing a cost center."""
        pass
