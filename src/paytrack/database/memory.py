"""In-memory database implementation."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from paytrack.database.base import (
    ACCOUNT_FIELDS,
    COST_CENTER_FIELDS,
    PAYMENT_FIELDS,
    Database,
    check_fields,
)
from paytrack.domain.entities import Account, AccountType, CostCenter, Payment


class InMemoryDatabase(Database):
    """Dictionary-backed implementation of Database interface.

    Entities are kept in insertion-ordered dicts keyed by id. Each entity type
    has its own id counter, so ids are never reused after a delete.
    """

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._cost_centers: dict[int, CostCenter] = {}
        self._payments: dict[int, Payment] = {}
        self._next_ids = {"account": 1, "cost_center": 1, "payment": 1}

    def _allocate_id(self, kind: str) -> int:
        new_id = self._next_ids[kind]
        self._next_ids[kind] = new_id + 1
        return new_id

    def connect(self) -> None:
        """Connect to the database."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Initialize database schema."""
        pass

    # Account operations
    def create_account(self, name: str, type: AccountType) -> Account:
        account = Account(id=self._allocate_id("account"), name=name, type=AccountType(type))
        self._accounts[account.id] = account
        return account

    def get_account(self, account_id: int) -> Optional[Account]:
        return self._accounts.get(account_id)

    def list_accounts(self) -> list[Account]:
        return list(self._accounts.values())

    def update_account(self, account_id: int, changes: Mapping[str, Any]) -> Optional[Account]:
        check_fields(changes, ACCOUNT_FIELDS, "account")
        account = self._accounts.get(account_id)
        if account is None:
            return None
        if "type" in changes:
            changes = {**changes, "type": AccountType(changes["type"])}
        updated = replace(account, **changes)
        self._accounts[account_id] = updated
        return updated

    def delete_account(self, account_id: int) -> bool:
        return self._accounts.pop(account_id, None) is not None

    # Cost center operations
    def create_cost_center(self, category: str, subcategory: str) -> CostCenter:
        cost_center = CostCenter(
            id=self._allocate_id("cost_center"), category=category, subcategory=subcategory
        )
        self._cost_centers[cost_center.id] = cost_center
        return cost_center

    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenter]:
        return self._cost_centers.get(cost_center_id)

    def list_cost_centers(self) -> list[CostCenter]:
        return list(self._cost_centers.values())

    def update_cost_center(
        self, cost_center_id: int, changes: Mapping[str, Any]
    ) -> Optional[CostCenter]:
        check_fields(changes, COST_CENTER_FIELDS, "cost center")
        cost_center = self._cost_centers.get(cost_center_id)
        if cost_center is None:
            return None
        updated = replace(cost_center, **changes)
        self._cost_centers[cost_center_id] = updated
        return updated

    def delete_cost_center(self, cost_center_id: int) -> bool:
        return self._cost_centers.pop(cost_center_id, None) is not None

    # Payment operations
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
        payment = Payment(
            id=self._allocate_id("payment"),
            date=date,
            amount=Decimal(amount),
            description=description,
            account_id=account_id,
            cost_center_id=cost_center_id,
            receipt_path=receipt_path or None,
            request_path=request_path or None,
        )
        self._payments[payment.id] = payment
        return payment

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        return self._payments.get(payment_id)

    def list_payments(self) -> list[Payment]:
        return list(self._payments.values())

    def update_payment(self, payment_id: int, changes: Mapping[str, Any]) -> Optional[Payment]:
        check_fields(changes, PAYMENT_FIELDS, "payment")
        payment = self._payments.get(payment_id)
        if payment is None:
            return None
        updated = replace(payment, **changes)
        self._payments[payment_id] = updated
        return updated

    def delete_payment(self, payment_id: int) -> bool:
        return self._payments.pop(payment_id, None) is not None

    def count_payments_for_account(self, account_id: int) -> int:
        return sum(1 for p in self._payments.values() if p.account_id == account_id)

    def count_payments_for_cost_center(self, cost_center_id: int) -> int:
        return sum(1 for p in self._payments.values() if p.cost_center_id == cost_center_id)
