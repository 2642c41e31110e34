"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from paytrack.domain import entities as domain
from paytrack.database.models import (
    Account as ORMAccount,
    CostCenter as ORMCostCenter,
    Payment as ORMPayment,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
    )


def cost_center_to_domain(orm_cost_center: ORMCostCenter) -> domain.CostCenter:
    """Convert SQLAlchemy CostCenter model to domain CostCenter entity."""
    return domain.CostCenter(
        id=orm_cost_center.id,
        category=orm_cost_center.category,
        subcategory=orm_cost_center.subcategory,
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        date=orm_payment.date,
        amount=Decimal(orm_payment.amount),
        description=orm_payment.description,
        account_id=orm_payment.account_id,
        cost_center_id=orm_payment.cost_center_id,
        receipt_path=orm_payment.receipt_path,
        request_path=orm_payment.request_path,
    )
