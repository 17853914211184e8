from datetime import datetime, timezone
from typing import Optional
import logging

from lms_checkout.constants.checkout_status import DiscountType, RecurringLeg
from lms_checkout.models.item import CheckoutItem
from lms_checkout.models.offer import OfferToApply
from lms_checkout.schemas.checkout_schemas import OfferResult
from lms_checkout.utils.money import percent_of

logger = logging.getLogger(__name__)


def resolve_leg(item: CheckoutItem, recurring_leg: Optional[str]) -> Optional[RecurringLeg]:
    """
    Leg of a recurring item that an offer discounts.

    Without an explicit leg the registration fee is discounted when there
    is one, otherwise the subscription charge.
    """
    if not item.is_recurring:
        return None
    if recurring_leg:
        return RecurringLeg(recurring_leg)
    if (item.registration_fee or 0) > 0:
        return RecurringLeg.REGISTRATION
    return RecurringLeg.SUBSCRIPTION


def price_to_discount_for(
    item: CheckoutItem,
    recurring_leg: Optional[str] = None,
    other_price: Optional[float] = None,
) -> float:
    leg = resolve_leg(item, recurring_leg)
    if leg is None:
        return item.unit_price(other_price) * item.quantity
    if leg == RecurringLeg.SUBSCRIPTION:
        return item.subscription_amount or 0
    return item.registration_fee or 0


def _as_utc(value: datetime) -> datetime:
    # naive datetimes are read as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _rejected(reason: str, price_to_discount: float = 0) -> OfferResult:
    return OfferResult(
        accepted=False,
        discount_amount=0,
        price_to_discount=price_to_discount,
        reason=reason,
    )


def evaluate_offer(
    offer: OfferToApply,
    item: CheckoutItem,
    recurring_leg: Optional[str] = None,
    other_price: Optional[float] = None,
    now: Optional[datetime] = None,
) -> OfferResult:
    """
    Price an offer code against an item without touching the item.

    An offer that cannot apply is returned with accepted=False and a
    reason; nothing here raises for business conditions.
    """
    price_to_discount = price_to_discount_for(item, recurring_leg, other_price)

    if price_to_discount <= 0:
        return _rejected("Nothing to discount on this item", price_to_discount)

    if offer.expires_at is not None:
        now = _as_utc(now or datetime.now(timezone.utc))
        if _as_utc(offer.expires_at) <= now:
            return _rejected("This offer code has expired", price_to_discount)

    if offer.min_price is not None and price_to_discount < offer.min_price:
        return _rejected(
            f"This offer requires a minimum price of {offer.min_price:.2f}",
            price_to_discount,
        )

    if offer.max_price is not None and price_to_discount > offer.max_price:
        return _rejected(
            f"This offer applies only up to a price of {offer.max_price:.2f}",
            price_to_discount,
        )

    if offer.discount_value is None or offer.discount_value < 0:
        return _rejected("Invalid discount value", price_to_discount)

    discount_type = (offer.discount_type or "").strip().lower()

    if discount_type == DiscountType.PERCENTAGE.value:
        discount = min(percent_of(price_to_discount, offer.discount_value), price_to_discount)
    elif discount_type == DiscountType.AMOUNT.value:
        discount = min(float(offer.discount_value), price_to_discount)
    else:
        logger.warning(f"Offer {offer.code} has unknown discount type {offer.discount_type!r}")
        return _rejected("Unsupported offer type", price_to_discount)

    if price_to_discount - discount < 0:
        return _rejected("Discount exceeds the price", price_to_discount)

    logger.info(
        f"Offer {offer.code} accepted for item {item.id}: "
        f"{discount} off {price_to_discount}"
    )

    return OfferResult(
        accepted=True,
        discount_amount=discount,
        price_to_discount=price_to_discount,
        offer_id=offer.id,
    )


def discount_is_valid(
    item: CheckoutItem,
    discount_amount: Optional[float] = None,
    recurring_leg: Optional[str] = None,
    other_price: Optional[float] = None,
) -> bool:
    """Check a stored discount (defaults to item.discount) against the item as it is now."""
    if discount_amount is None:
        discount_amount = item.discount
    if discount_amount is None:
        return True
    if discount_amount < 0:
        return False

    price_to_discount = price_to_discount_for(item, recurring_leg, other_price)
    if price_to_discount <= 0:
        return False
    return discount_amount <= price_to_discount


def apply_offer_to_item(item: CheckoutItem, result: OfferResult) -> CheckoutItem:
    """Return a copy of the item carrying the accepted offer; a rejected result clears it."""
    if not result.accepted:
        return clear_offer(item)

    return item.model_copy(update={
        "discount": result.discount_amount,
        "price_to_discount": result.price_to_discount,
        "offer_id": result.offer_id,
    })


def clear_offer(item: CheckoutItem) -> CheckoutItem:
    return item.model_copy(update={
        "discount": None,
        "price_to_discount": None,
        "offer_id": None,
    })
