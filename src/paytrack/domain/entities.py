"""Domain model entities for paytrack.

These are pure data classes representing business concepts, independent of
the storage backend. Both the in-memory and the SQLAlchemy databases hand
these out, so services never see ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Funding source kinds."""

    PAYPAL = "PayPal"
    CREDIT_CARD = "CreditCard"
    BANK_ACCOUNT = "BankAccount"


class AttachmentSlot(str, Enum):
    """Fixed roles a payment attachment can fill."""

    RECEIPT = "receipt"
    REQUEST = "request"


@dataclass(frozen=True)
class Account:
    """Funding account domain entity."""

    id: int
    name: str
    type: AccountType


@dataclass(frozen=True)
class CostCenter:
    """Cost center domain entity."""

    id: int
    category: str
    subcategory: str

    @property
    def label(self) -> str:
        """Display label, e.g. 'IT - Software'."""
        return f"{self.category} - {self.subcategory}"


@dataclass(frozen=True)
class Payment:
    """Payment domain entity."""

    id: int
    date: datetime
    amount: Decimal
    description: str
    account_id: int
    cost_center_id: int
    receipt_path: Optional[str] = None
    request_path: Optional[str] = None

    def attachment_path(self, slot: AttachmentSlot) -> Optional[str]:
        """Return the stored attachment name for a slot."""
        if slot == AttachmentSlot.RECEIPT:
            return self.receipt_path
        return self.request_path


@dataclass(frozen=True)
class PaymentWithRelations:
    """Payment joined with its account and cost center.

    Read-only projection assembled by the relation resolver; never persisted.
    """

    payment: Payment
    account: Account
    cost_center: CostCenter

    @property
    def id(self) -> int:
        return self.payment.id

    @property
    def date(self) -> datetime:
        return self.payment.date

    @property
    def amount(self) -> Decimal:
        return self.payment.amount

    @property
    def description(self) -> str:
        return self.payment.description

    @property
    def account_id(self) -> int:
        return self.payment.account_id

    @property
    def cost_center_id(self) -> int:
        return self.payment.cost_center_id

    @property
    def receipt_path(self) -> Optional[str]:
        return self.payment.receipt_path

    @property
    def request_path(self) -> Optional[str]:
        return self.payment.request_path


@dataclass(frozen=True)
class Page:
    """One page of a paginated listing."""

    items: tuple
    page: int
    page_size: int
    total_pages: int
    total_count: int


@dataclass(frozen=True)
class CategoryTotal:
    """Aggregated spend for one cost center category."""

    category: str
    total: Decimal
    percentage: Decimal
    count: int


@dataclass(frozen=True)
class ExpenseReport:
    """Aggregated view over a filtered payment set."""

    total_expenses: Decimal
    payment_count: int
    category_totals: tuple[CategoryTotal, ...] = field(default_factory=tuple)
    top_expenses: tuple[PaymentWithRelations, ...] = field(default_factory=tuple)
