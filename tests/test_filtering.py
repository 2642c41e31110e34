"""Tests for payment filtering, search, ordering and pagination."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from paytrack.domain.entities import (
    Account,
    AccountType,
    CostCenter,
    Payment,
    PaymentWithRelations,
)
from paytrack.domain.filtering import (
    PAGE_SIZE,
    PaymentFilter,
    collation_key,
    filter_payments,
    paginate,
    search_payments,
    sort_payments,
)

CARD = Account(id=1, name="Company Card", type=AccountType.CREDIT_CARD)
PAYPAL = Account(id=2, name="PayPal Business", type=AccountType.PAYPAL)
SOFTWARE = CostCenter(id=1, category="IT", subcategory="Software")
INFRA = CostCenter(id=2, category="IT", subcategory="Infrastructure")
EVENTS = CostCenter(id=3, category="Marketing", subcategory="Events")

_next_id = iter(range(1, 1000))


def make(when, account=CARD, cost_center=SOFTWARE, description="Payment", amount="10"):
    payment = Payment(
        id=next(_next_id),
        date=when,
        amount=Decimal(amount),
        description=description,
        account_id=account.id,
        cost_center_id=cost_center.id,
    )
    return PaymentWithRelations(payment=payment, account=account, cost_center=cost_center)


class TestPaymentFilter:
    def test_no_filter_keeps_everything(self):
        payments = [make(datetime(2024, 1, 1)), make(datetime(2024, 2, 1))]
        assert filter_payments(payments, None) == payments
        assert filter_payments(payments, PaymentFilter()) == payments

    def test_same_start_and_end_day_selects_that_day(self):
        day = date(2024, 3, 15)
        inside = [
            make(datetime(2024, 3, 15, 0, 0)),
            make(datetime(2024, 3, 15, 12, 0)),
            make(datetime(2024, 3, 15, 23, 59, 59, 999000)),
        ]
        outside = [
            make(datetime(2024, 3, 14, 23, 59, 59)),
            make(datetime(2024, 3, 16, 0, 0)),
        ]

        result = filter_payments(inside + outside, PaymentFilter(start_date=day, end_date=day))

        assert result == inside

    def test_end_date_covers_whole_day(self):
        payment_filter = PaymentFilter(end_date=date(2024, 3, 15))
        assert payment_filter.upper_bound() == datetime(2024, 3, 15, 23, 59, 59, 999999)
        assert payment_filter.lower_bound() is None

    def test_datetime_bounds_use_calendar_day(self):
        payment_filter = PaymentFilter(start_date=datetime(2024, 3, 15, 18, 0))
        assert payment_filter.lower_bound() == datetime(2024, 3, 15, 0, 0)

    def test_cost_center_filter(self):
        payments = [
            make(datetime(2024, 1, 1), cost_center=SOFTWARE),
            make(datetime(2024, 1, 2), cost_center=INFRA),
            make(datetime(2024, 1, 3), cost_center=INFRA),
        ]

        result = filter_payments(payments, PaymentFilter(cost_center_id=2))

        assert len(result) == 2
        assert all(p.cost_center_id == 2 for p in result)

    def test_account_and_category_combine_with_and(self):
        match = make(datetime(2024, 1, 1), account=PAYPAL, cost_center=EVENTS)
        payments = [
            match,
            make(datetime(2024, 1, 1), account=CARD, cost_center=EVENTS),
            make(datetime(2024, 1, 1), account=PAYPAL, cost_center=SOFTWARE),
        ]

        result = filter_payments(payments, PaymentFilter(account_id=2, category="Marketing"))

        assert result == [match]


class TestSearch:
    @pytest.fixture
    def payments(self):
        return [
            make(datetime(2024, 1, 1), description="Annual IDE licence"),
            make(datetime(2024, 1, 2), account=PAYPAL, description="Domain"),
            make(datetime(2024, 1, 3), cost_center=EVENTS, description="Booth"),
        ]

    def test_matches_description_case_insensitively(self, payments):
        assert search_payments(payments, "ide LICENCE") == [payments[0]]

    def test_matches_account_name(self, payments):
        assert search_payments(payments, "paypal") == [payments[1]]

    def test_matches_cost_center_label(self, payments):
        assert search_payments(payments, "marketing - ev") == [payments[2]]

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_blank_term_matches_everything(self, payments, term):
        assert search_payments(payments, term) == payments


class TestSort:
    def test_category_then_subcategory_then_newest(self):
        old_software = make(datetime(2024, 1, 1), cost_center=SOFTWARE)
        new_software = make(datetime(2024, 6, 1), cost_center=SOFTWARE)
        infra = make(datetime(2024, 3, 1), cost_center=INFRA)
        events = make(datetime(2024, 2, 1), cost_center=EVENTS)

        result = sort_payments([events, old_software, infra, new_software])

        assert result == [infra, new_software, old_software, events]

    def test_collation_ignores_case_and_accents(self):
        names = ["zeta", "Édition", "alpha", "Beta"]
        assert sorted(names, key=collation_key) == ["alpha", "Beta", "Édition", "zeta"]


class TestPaginate:
    def test_default_page_size(self):
        assert PAGE_SIZE == 5
        page = paginate(list(range(12)))

        assert page.items == (0, 1, 2, 3, 4)
        assert page.page == 1
        assert page.total_pages == 3
        assert page.total_count == 12

    def test_last_page_is_partial(self):
        page = paginate(list(range(12)), page=3)
        assert page.items == (10, 11)

    @pytest.mark.parametrize("requested, expected", [(0, 1), (-3, 1), (4, 3), (100, 3)])
    def test_out_of_range_pages_clamp(self, requested, expected):
        assert paginate(list(range(12)), page=requested).page == expected

    def test_empty_listing(self):
        page = paginate([], page=2)

        assert page.items == ()
        assert page.page == 1
        assert page.total_pages == 0
        assert page.total_count == 0

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            paginate([1, 2], page_size=0)
