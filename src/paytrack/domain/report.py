"""Expense reporting domain service."""

from collections import defaultdict
from decimal import Decimal
from typing import Optional, Sequence

from paytrack.database.base import Database
from paytrack.domain.entities import CategoryTotal, ExpenseReport, PaymentWithRelations
from paytrack.domain.filtering import (
    PaymentFilter,
    filter_payments,
    search_payments,
    sort_payments,
)
from paytrack.domain.relations import RelationResolver

TOP_EXPENSES = 5
HUNDRED = Decimal(100)


def build_report(
    payments: Sequence[PaymentWithRelations], top_n: int = TOP_EXPENSES
) -> ExpenseReport:
    """Aggregate an already filtered payment set.

    Args:
        payments: Payments to aggregate
        top_n: Number of largest payments to include

    Returns:
        ExpenseReport with totals per category and the top expenses
    """
    total_expenses = sum((p.amount for p in payments), Decimal(0))

    totals: dict[str, Decimal] = defaultdict(Decimal)
    counts: dict[str, int] = defaultdict(int)
    for p in payments:
        totals[p.cost_center.category] += p.amount
        counts[p.cost_center.category] += 1

    category_totals = [
        CategoryTotal(
            category=category,
            total=total,
            percentage=(total / total_expenses * HUNDRED) if total_expenses else Decimal(0),
            count=counts[category],
        )
        for category, total in totals.items()
    ]
    category_totals.sort(key=lambda ct: (-ct.total, ct.category))

    top_expenses = sorted(payments, key=lambda p: p.amount, reverse=True)[: max(top_n, 0)]

    return ExpenseReport(
        total_expenses=total_expenses,
        payment_count=len(payments),
        category_totals=tuple(category_totals),
        top_expenses=tuple(top_expenses),
    )


class ReportService:
    """Service for filtered payment listings and expense reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.resolver = RelationResolver(db)

    def get_filtered_payments(
        self, payment_filter: Optional[PaymentFilter] = None
    ) -> list[PaymentWithRelations]:
        """Resolve every payment and keep those matching the filter.

        Raises:
            RelationNotFoundError: If any payment has a dangling reference
        """
        payments = self.resolver.resolve_all(self.db.list_payments())
        return filter_payments(payments, payment_filter)

    def list_payments(
        self,
        payment_filter: Optional[PaymentFilter] = None,
        search: Optional[str] = None,
    ) -> list[PaymentWithRelations]:
        """Filtered, searched payments in display order."""
        payments = search_payments(self.get_filtered_payments(payment_filter), search)
        return sort_payments(payments)

    def build_report(
        self, payment_filter: Optional[PaymentFilter] = None, top_n: int = TOP_EXPENSES
    ) -> ExpenseReport:
        """Build an expense report over the filtered payments."""
        return build_report(self.get_filtered_payments(payment_filter), top_n=top_n)

    def list_categories(self) -> list[str]:
        """Distinct cost center categories, sorted for filter choices."""
        categories = {cc.category for cc in self.db.list_cost_centers()}
        return sorted(categories, key=str.casefold)
