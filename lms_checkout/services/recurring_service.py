from typing import Iterable, List, Optional, TypeVar

from lms_checkout.constants.checkout_status import BILLING_LABELS, OTHER_PERIOD, MembershipType
from lms_checkout.models.item import BillingCycle, CheckoutItem, PlanPricing
from lms_checkout.schemas.checkout_schemas import RecurringInfo, RecurringPricing

T = TypeVar("T")


def billing_label(cycle: Optional[BillingCycle]) -> str:
    """
    Canonical name of a billing cadence.

    1 week -> weekly, 1 month -> monthly, 3 months -> quarterly,
    1 year -> yearly; anything else reads "every {frequency} {unit}".
    """
    if cycle is None:
        return ""
    unit = cycle.unit.lower()
    label = BILLING_LABELS.get((cycle.frequency, unit))
    if label:
        return label
    return f"every {cycle.frequency} {unit}"


def resolve_recurring_pricing(item: CheckoutItem) -> RecurringPricing:
    if not item.is_recurring:
        return RecurringPricing(
            upfront_amount=item.price,
            recurring_amount=0,
            billing_label="",
        )

    return RecurringPricing(
        upfront_amount=item.registration_fee or 0,
        recurring_amount=item.subscription_amount or 0,
        billing_label=billing_label(item.billing_cycle),
    )


def pricing_period(pricing: PlanPricing) -> str:
    if pricing.payment_type != MembershipType.RECURRING or pricing.billing_cycle is None:
        return OTHER_PERIOD
    return BILLING_LABELS.get(
        (pricing.billing_cycle.frequency, pricing.billing_cycle.unit.lower()),
        OTHER_PERIOD,
    )


def select_pricing_for_period(pricings: Iterable[PlanPricing], period: str) -> List[PlanPricing]:
    period = (period or "").strip().lower()
    return [p for p in pricings if pricing_period(p) == period]


def _row_price(row) -> float:
    if isinstance(row, PlanPricing):
        return row.one_time_payment + row.subscription_amount
    return getattr(row, "price", 0) or 0


def sort_by_price(items: Iterable[T]) -> List[T]:
    """Fixed-price rows cheapest first, pay-what-you-want rows last."""
    items = list(items or [])
    priced = sorted(
        (i for i in items if not getattr(i, "is_other_price", False)),
        key=_row_price,
    )
    other = [i for i in items if getattr(i, "is_other_price", False)]
    return priced + other


def plan_pricing_to_item(pricing: PlanPricing) -> CheckoutItem:
    recurring = pricing.payment_type == MembershipType.RECURRING

    if recurring:
        price = pricing.subscription_amount + pricing.one_time_payment
    else:
        price = pricing.one_time_payment

    return CheckoutItem(
        id=pricing.id,
        name=pricing.plan_name,
        item_type="plan",
        price=price,
        quantity=1,
        membership_type=pricing.payment_type,
        subscription_amount=pricing.subscription_amount if recurring else None,
        registration_fee=pricing.one_time_payment if recurring else None,
        billing_cycle=pricing.billing_cycle,
        number_of_billing_cycles=pricing.number_of_billing_cycles,
        plan_id=pricing.plan_id,
        pricing_id=pricing.id,
    )


def build_recurring_info(item: CheckoutItem) -> RecurringInfo:
    """Display details of a recurring item; amounts are filled by the cart calculator."""
    pricing = resolve_recurring_pricing(item)

    if item.billing_day_of_month:
        next_billing_period = f"On {item.billing_day_of_month} day of Month"
    else:
        next_billing_period = "Today"

    if item.number_of_billing_cycles > 0:
        billing_ends_after = f"{item.number_of_billing_cycles} billing cycles"
    else:
        billing_ends_after = "Manual Request"

    return RecurringInfo(
        billing_freq_text=pricing.billing_label,
        next_billing_period=next_billing_period,
        processing_fees=pricing.upfront_amount,
        billing_ends_after=billing_ends_after,
        recurring_amount=pricing.recurring_amount,
    )
