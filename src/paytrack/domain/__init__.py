"""Domain layer for paytrack application."""

from paytrack.domain.payment import PaymentService
from paytrack.domain.cost_center import CostCenterService
from paytrack.domain.account import AccountService
from paytrack.domain.report import ReportService
from paytrack.domain.relations import RelationResolver

__all__ = [
    "PaymentService",
    "CostCenterService",
    "AccountService",
    "ReportService",
    "RelationResolver",
]
