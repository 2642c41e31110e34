"""Filtering, searching, ordering and pagination of payment listings."""

import math
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence

from paytrack.domain.entities import Page, PaymentWithRelations

PAGE_SIZE = 5


@dataclass(frozen=True)
class PaymentFilter:
    """Optional constraints combined with AND; None means unconstrained."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cost_center_id: Optional[int] = None
    account_id: Optional[int] = None
    category: Optional[str] = None

    def lower_bound(self) -> Optional[datetime]:
        """Start of the start_date calendar day."""
        if self.start_date is None:
            return None
        return datetime.combine(_as_date(self.start_date), time.min)

    def upper_bound(self) -> Optional[datetime]:
        """End of the end_date calendar day."""
        if self.end_date is None:
            return None
        return datetime.combine(_as_date(self.end_date), time.max)

    def matches(self, payment: PaymentWithRelations) -> bool:
        """Check a single payment against every set constraint."""
        lower = self.lower_bound()
        if lower is not None and payment.date < lower:
            return False
        upper = self.upper_bound()
        if upper is not None and payment.date > upper:
            return False
        if self.cost_center_id is not None and payment.cost_center_id != self.cost_center_id:
            return False
        if self.account_id is not None and payment.account_id != self.account_id:
            return False
        if self.category is not None and payment.cost_center.category != self.category:
            return False
        return True


def _as_date(value: date) -> date:
    # datetime is a date subclass; only the calendar day counts here
    if isinstance(value, datetime):
        return value.date()
    return value


def filter_payments(
    payments: Iterable[PaymentWithRelations], payment_filter: Optional[PaymentFilter] = None
) -> list[PaymentWithRelations]:
    """Keep payments matching the filter, preserving input order."""
    if payment_filter is None:
        return list(payments)
    return [p for p in payments if payment_filter.matches(p)]


def search_payments(
    payments: Iterable[PaymentWithRelations], term: Optional[str]
) -> list[PaymentWithRelations]:
    """Case-insensitive substring search.

    Matches against the description, the account name and the
    'category - subcategory' label. A blank term matches everything.
    """
    if not term or not term.strip():
        return list(payments)
    needle = term.casefold()
    return [
        p
        for p in payments
        if needle in p.description.casefold()
        or needle in p.account.name.casefold()
        or needle in p.cost_center.label.casefold()
    ]


def collation_key(value: str) -> tuple[str, str]:
    """Sort key approximating a locale-aware comparison.

    Accents and case are ignored first and only break ties afterwards, so the
    result does not depend on the process locale.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value


def sort_payments(payments: Iterable[PaymentWithRelations]) -> list[PaymentWithRelations]:
    """Order by category, then subcategory, then most recent date first."""
    # Stable sorts applied from the least to the most significant key
    ordered = sorted(payments, key=lambda p: p.date, reverse=True)
    ordered.sort(key=lambda p: collation_key(p.cost_center.subcategory))
    ordered.sort(key=lambda p: collation_key(p.cost_center.category))
    return ordered


def paginate(items: Sequence, page: int = 1, page_size: int = PAGE_SIZE) -> Page:
    """Slice one 1-indexed page; out-of-range pages are clamped."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total_count = len(items)
    total_pages = math.ceil(total_count / page_size)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * page_size
    return Page(
        items=tuple(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_count=total_count,
    )
