"""Cost center domain service."""

from typing import Any, Mapping, Optional

import structlog

from paytrack.database.base import Database
from paytrack.domain.entities import CostCenter as CostCenterEntity
from paytrack.domain.errors import (
    DependencyError,
    NotFoundError,
    cost_center_not_found,
    delete_blocked,
)
from paytrack.domain.validation import require_text

logger = structlog.get_logger(__name__)


class CostCenterService:
    """Service for managing cost centers."""

    def __init__(self, db: Database):
        self.db = db

    def create_cost_center(self, category: str, subcategory: str) -> CostCenterEntity:
        """Create a cost center.

        Raises:
            ValidationError: If category or subcategory is empty
        """
        cost_center = self.db.create_cost_center(
            category=require_text(category, "category"),
            subcategory=require_text(subcategory, "subcategory"),
        )
        logger.info("cost_center_created", cost_center_id=cost_center.id)
        return cost_center

    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenterEntity]:
        return self.db.get_cost_center(cost_center_id)

    def require_cost_center(self, cost_center_id: int) -> CostCenterEntity:
        """Get cost center by ID, raising NotFoundError if missing."""
        cost_center = self.db.get_cost_center(cost_center_id)
        if cost_center is None:
            raise NotFoundError(cost_center_not_found(cost_center_id))
        return cost_center

    def list_cost_centers(self) -> list[CostCenterEntity]:
        return self.db.list_cost_centers()

    def update_cost_center(
        self, cost_center_id: int, changes: Mapping[str, Any]
    ) -> CostCenterEntity:
        """Apply a partial update to a cost center.

        Raises:
            ValidationError: If a supplied field is empty
            NotFoundError: If the cost center does not exist
        """
        validated = {
            name: require_text(changes[name], name)
            for name in ("category", "subcategory")
            if name in changes
        }
        cost_center = self.db.update_cost_center(cost_center_id, validated)
        if cost_center is None:
            raise NotFoundError(cost_center_not_found(cost_center_id))
        logger.info("cost_center_updated", cost_center_id=cost_center_id, fields=sorted(validated))
        return cost_center

    def delete_cost_center(self, cost_center_id: int, force: bool = False) -> None:
        """Delete a cost center.

        Raises:
            NotFoundError: If the cost center does not exist
            DependencyError: If payments reference it and force is False
        """
        self.require_cost_center(cost_center_id)

        payment_count = self.db.count_payments_for_cost_center(cost_center_id)
        if payment_count > 0 and not force:
            raise DependencyError(delete_blocked("cost center", cost_center_id, payment_count))

        self.db.delete_cost_center(cost_center_id)
        logger.info(
            "cost_center_deleted", cost_center_id=cost_center_id, orphaned_payments=payment_count
        )
