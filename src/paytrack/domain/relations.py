"""Join payments to the accounts and cost centers they reference."""

from typing import Iterable, Optional

import structlog

from paytrack.database.base import Database
from paytrack.domain.entities import (
    Account,
    CostCenter,
    Payment,
    PaymentWithRelations,
)
from paytrack.domain.errors import RelationNotFoundError

logger = structlog.get_logger(__name__)


class RelationResolver:
    """Builds PaymentWithRelations projections.

    A missing account or cost center is an integrity fault: it raises
    RelationNotFoundError instead of dropping or patching the record.
    """

    def __init__(self, db: Database):
        self.db = db

    def resolve(self, payment: Payment) -> PaymentWithRelations:
        """Resolve a single payment."""
        return self._join(
            payment,
            self.db.get_account(payment.account_id),
            self.db.get_cost_center(payment.cost_center_id),
        )

    def resolve_all(self, payments: Iterable[Payment]) -> list[PaymentWithRelations]:
        """Resolve a batch of payments, loading each relation table once."""
        accounts = {acc.id: acc for acc in self.db.list_accounts()}
        cost_centers = {cc.id: cc for cc in self.db.list_cost_centers()}
        return [
            self._join(p, accounts.get(p.account_id), cost_centers.get(p.cost_center_id))
            for p in payments
        ]

    def _join(
        self,
        payment: Payment,
        account: Optional[Account],
        cost_center: Optional[CostCenter],
    ) -> PaymentWithRelations:
        if account is None:
            logger.error("relation_missing", payment_id=payment.id, account_id=payment.account_id)
            raise RelationNotFoundError(payment.id, "account", payment.account_id)
        if cost_center is None:
            logger.error(
                "relation_missing", payment_id=payment.id, cost_center_id=payment.cost_center_id
            )
            raise RelationNotFoundError(payment.id, "cost center", payment.cost_center_id)
        return PaymentWithRelations(payment=payment, account=account, cost_center=cost_center)
