import pytest

from lms_checkout.models.item import BillingCycle, CheckoutItem, PlanPricing
from lms_checkout.services.recurring_service import (
    billing_label,
    build_recurring_info,
    plan_pricing_to_item,
    pricing_period,
    resolve_recurring_pricing,
    select_pricing_for_period,
    sort_by_price,
)


class TestBillingLabel:
    @pytest.mark.parametrize("frequency,unit,expected", [
        (1, "weeks", "weekly"),
        (1, "months", "monthly"),
        (3, "months", "quarterly"),
        (1, "years", "yearly"),
        (1, "Months", "monthly"),
        (2, "weeks", "every 2 weeks"),
        (6, "months", "every 6 months"),
        (2, "years", "every 2 years"),
    ])
    def test_mapping(self, frequency, unit, expected):
        assert billing_label(BillingCycle(frequency=frequency, unit=unit)) == expected

    def test_no_cycle(self):
        assert billing_label(None) == ""


class TestResolveRecurringPricing:
    def test_one_time_item(self, course_item):
        pricing = resolve_recurring_pricing(course_item)

        assert pricing.upfront_amount == 100
        assert pricing.recurring_amount == 0
        assert pricing.billing_label == ""

    def test_recurring_item(self, recurring_item):
        pricing = resolve_recurring_pricing(recurring_item)

        assert pricing.upfront_amount == 25
        assert pricing.recurring_amount == 50
        assert pricing.billing_label == "monthly"

    def test_recurring_without_amounts(self):
        item = CheckoutItem(id="r", price=0, membership_type="recurring")

        pricing = resolve_recurring_pricing(item)

        assert pricing.upfront_amount == 0
        assert pricing.recurring_amount == 0


class TestRecurringInfo:
    def test_defaults(self):
        item = CheckoutItem(
            id="r", price=10, membership_type="recurring", subscription_amount=10,
            billing_cycle=BillingCycle(frequency=1, unit="weeks"),
        )

        info = build_recurring_info(item)

        assert info.billing_freq_text == "weekly"
        assert info.next_billing_period == "Today"
        assert info.billing_ends_after == "Manual Request"

    def test_billing_day_and_cycles(self, recurring_item):
        item = recurring_item.model_copy(update={"billing_day_of_month": 5})

        info = build_recurring_info(item)

        assert info.next_billing_period == "On 5 day of Month"
        assert info.billing_ends_after == "12 billing cycles"
        assert info.processing_fees == 25


def _pricing(pid, payment_type="recurring", frequency=1, unit="months", sub=20, once=0):
    cycle = BillingCycle(frequency=frequency, unit=unit) if payment_type == "recurring" else None
    return PlanPricing(
        id=pid, plan_id="plan_1", payment_type=payment_type,
        subscription_amount=sub, one_time_payment=once, billing_cycle=cycle,
    )


class TestPlanPricing:
    def test_pricing_period(self):
        assert pricing_period(_pricing("a")) == "monthly"
        assert pricing_period(_pricing("b", frequency=3)) == "quarterly"
        assert pricing_period(_pricing("c", frequency=2)) == "other"
        assert pricing_period(_pricing("d", payment_type="one-time", once=99)) == "other"

    def test_select_for_period(self):
        rows = [
            _pricing("m"),
            _pricing("y", unit="years", sub=200),
            _pricing("q", frequency=3, sub=55),
        ]

        assert [p.id for p in select_pricing_for_period(rows, "Yearly")] == ["y"]
        assert select_pricing_for_period(rows, "weekly") == []

    def test_recurring_pricing_to_item(self):
        item = plan_pricing_to_item(_pricing("p1", sub=20, once=10))

        assert item.is_recurring
        assert item.subscription_amount == 20
        assert item.registration_fee == 10
        assert item.price == 30
        assert item.plan_id == "plan_1"
        assert item.pricing_id == "p1"

    def test_one_time_pricing_to_item(self):
        item = plan_pricing_to_item(_pricing("p2", payment_type="one-time", sub=0, once=99))

        assert not item.is_recurring
        assert item.price == 99
        assert item.registration_fee is None


class TestSortByPrice:
    def test_other_price_rows_last(self):
        rows = [
            CheckoutItem(id="any", price=0, is_other_price=True),
            CheckoutItem(id="b", price=50),
            CheckoutItem(id="a", price=10),
        ]

        assert [r.id for r in sort_by_price(rows)] == ["a", "b", "any"]

    def test_empty(self):
        assert sort_by_price([]) == []
