"""Tests for database mappers."""

from datetime import datetime
from decimal import Decimal

from paytrack.database.models import (
    Account as ORMAccount,
    CostCenter as ORMCostCenter,
    Payment as ORMPayment,
)
from paytrack.database.mappers import (
    account_to_domain,
    cost_center_to_domain,
    payment_to_domain,
)
from paytrack.domain.entities import Account, AccountType, CostCenter, Payment


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        orm_account = ORMAccount(id=1, name="PayPal Business", type=AccountType.PAYPAL)

        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.id == 1
        assert domain_account.name == "PayPal Business"
        assert domain_account.type is AccountType.PAYPAL

    def test_account_type_from_raw_value(self):
        orm_account = ORMAccount(id=2, name="Card", type="CreditCard")
        assert account_to_domain(orm_account).type is AccountType.CREDIT_CARD


def test_cost_center_to_domain():
    orm_cost_center = ORMCostCenter(id=3, category="Marketing", subcategory="Events")

    domain_cost_center = cost_center_to_domain(orm_cost_center)

    assert domain_cost_center == CostCenter(id=3, category="Marketing", subcategory="Events")


class TestPaymentMapper:
    """Tests for Payment mapper."""

    def test_payment_to_domain(self):
        orm_payment = ORMPayment(
            id=7,
            date=datetime(2024, 1, 15, 10, 30),
            amount=Decimal("99.99"),
            description="IDE license",
            account_id=1,
            cost_center_id=2,
            receipt_path="receipt-1705312800000-invoice.pdf",
            request_path=None,
        )

        payment = payment_to_domain(orm_payment)

        assert isinstance(payment, Payment)
        assert payment.id == 7
        assert payment.date == datetime(2024, 1, 15, 10, 30)
        assert payment.amount == Decimal("99.99")
        assert payment.account_id == 1
        assert payment.cost_center_id == 2
        assert payment.receipt_path == "receipt-1705312800000-invoice.pdf"
        assert payment.request_path is None

    def test_amount_string_becomes_decimal(self):
        orm_payment = ORMPayment(
            id=1,
            date=datetime(2024, 1, 1),
            amount="0.10",
            description="Fee",
            account_id=1,
            cost_center_id=1,
        )

        payment = payment_to_domain(orm_payment)

        assert isinstance(payment.amount, Decimal)
        assert payment.amount == Decimal("0.10")
