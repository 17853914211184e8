from typing import Optional
import logging

from lms_checkout.config import settings
from lms_checkout.models.item import CheckoutItem
from lms_checkout.models.offer import OfferToApply
from lms_checkout.models.tenant import TenantFeeConfig
from lms_checkout.schemas.checkout_schemas import CartSummary, CheckoutState, RecurringInfo
from lms_checkout.services.offer_service import (
    apply_offer_to_item,
    clear_offer,
    evaluate_offer,
)
from lms_checkout.services.recurring_service import build_recurring_info, resolve_recurring_pricing
from lms_checkout.utils.money import money_add, percent_of, round2

logger = logging.getLogger(__name__)


def _pick(explicit: Optional[float], configured: Optional[float]) -> float:
    if explicit is not None:
        return explicit
    return configured or 0


def init_cart_summary() -> CartSummary:
    return CartSummary()


def calculate_cart_summary(
    item: CheckoutItem,
    fee_config: Optional[TenantFeeConfig] = None,
    offer: Optional[OfferToApply] = None,
    recurring_leg: Optional[str] = None,
    tax_percent: Optional[float] = None,
    card_fees_percent: Optional[float] = None,
    bank_fees_percent: Optional[float] = None,
    apply_card_fees: Optional[bool] = None,
    apply_bank_fees: Optional[bool] = None,
    other_price: Optional[float] = None,
) -> CartSummary:
    """
    Price one checkout item.

    Order of operations:
      1. chargeable amount (price * qty, or registration + subscription)
      2. offer discount, re-validated against the item as it is now
      3. tax on the discounted subtotal
      4. card and bank fees on subtotal + tax, independent of each other
      5. total, rounded once

    Explicit percentages win over fee_config. Safe to call on every input
    change; nothing is cached.
    """
    fee_config = fee_config or TenantFeeConfig()
    tax = _pick(tax_percent, fee_config.tax_percent)
    card = _pick(card_fees_percent, fee_config.card_fees_percent)
    bank = _pick(bank_fees_percent, fee_config.bank_fees_percent)

    if apply_card_fees is None:
        apply_card_fees = settings.apply_card_fees
    if apply_bank_fees is None:
        apply_bank_fees = settings.apply_bank_fees

    # 1. chargeable amount
    pricing = resolve_recurring_pricing(item)
    if item.is_recurring:
        subtotal = money_add(pricing.upfront_amount, pricing.recurring_amount)
    else:
        subtotal = item.unit_price(other_price) * item.quantity

    # 2. discount
    item_discount = 0.0
    offer_applied = False
    if offer is not None:
        result = evaluate_offer(offer, item, recurring_leg, other_price)
        if result.accepted:
            item_discount = result.discount_amount
            offer_applied = True
        else:
            logger.info(f"Offer {offer.code} not applied to item {item.id}: {result.reason}")

    # 3. tax
    taxable_subtotal = subtotal - item_discount
    if taxable_subtotal < 0:
        logger.warning(
            f"Discount {item_discount} exceeds subtotal {subtotal} for item {item.id}; clamped to 0"
        )
        taxable_subtotal = 0.0

    tax_rate = tax if item.is_taxable else 0
    total_tax = percent_of(taxable_subtotal, tax_rate)

    # 4. fees
    card_on = bool(apply_card_fees) and item.charge_card_fees
    card_rate = card if card_on else 0
    bank_rate = bank if apply_bank_fees else 0

    fee_base = taxable_subtotal + total_tax
    card_fees = percent_of(fee_base, card_rate)
    bank_fees = percent_of(fee_base, bank_rate)

    # 5. total
    total_price = round2(money_add(taxable_subtotal, total_tax, card_fees, bank_fees))

    summary = CartSummary(
        subtotal=subtotal,
        item_discount=item_discount,
        taxable_subtotal=taxable_subtotal,
        total_tax=total_tax,
        card_fees=card_fees,
        bank_fees=bank_fees,
        total_price=total_price,
        tax_percent=tax,
        card_percent=card,
        bank_percent=bank,
        show_taxable=item.is_taxable and tax > 0,
        show_card_fees=card_on and card > 0,
        show_bank_fees=bool(apply_bank_fees) and bank > 0,
        offer_applied=offer_applied,
        payment_required=total_price > 0,
    )

    if item.is_recurring:
        summary.recurring_info = _recurring_split(
            item,
            summary,
            recurring_full=pricing.recurring_amount,
            tax_rate=tax_rate,
            card_rate=card_rate,
            bank_rate=bank_rate,
        )

    return summary


def _recurring_split(
    item: CheckoutItem,
    summary: CartSummary,
    recurring_full: float,
    tax_rate: float,
    card_rate: float,
    bank_rate: float,
) -> RecurringInfo:
    """
    Split the first bill into its repeating and one-time parts.

    Later bills are never discounted, so the subscription part is priced
    on the full recurring amount. The one-time part is whatever remains of
    the first bill, which is where any offer lands whichever leg it was
    measured against. The two parts always add up to summary.total_price.
    """
    info = build_recurring_info(item)

    sub_tax = percent_of(recurring_full, tax_rate)
    sub_card = percent_of(recurring_full + sub_tax, card_rate)
    sub_bank = percent_of(recurring_full + sub_tax, bank_rate)
    final_subscription = round2(money_add(recurring_full, sub_tax, sub_card, sub_bank))

    info.subscription_tax = sub_tax
    info.subscription_card_fees = sub_card
    info.registration_tax = money_add(summary.total_tax, -sub_tax)
    info.registration_card_fees = money_add(summary.card_fees, -sub_card)
    info.final_subscription_amount = final_subscription
    # both operands already sit on whole cents
    info.final_one_time_payment = money_add(summary.total_price, -final_subscription)

    if info.final_one_time_payment < 0:
        logger.warning(
            f"First-bill discount on item {item.id} exceeds its one-time charge; "
            f"one-time leg is {info.final_one_time_payment}"
        )
    return info


def refresh_checkout(
    item: CheckoutItem,
    fee_config: Optional[TenantFeeConfig] = None,
    offer: Optional[OfferToApply] = None,
    recurring_leg: Optional[str] = None,
    apply_card_fees: Optional[bool] = None,
    apply_bank_fees: Optional[bool] = None,
    other_price: Optional[float] = None,
) -> CheckoutState:
    """
    Recompute the whole checkout after any input change.

    The offer is re-validated against the current item: when it still
    holds its discount is written onto a copy of the item, otherwise the
    offer is dropped and the item's discount fields are cleared.
    """
    offer_result = None

    if offer is not None:
        offer_result = evaluate_offer(offer, item, recurring_leg, other_price)
        if offer_result.accepted:
            item = apply_offer_to_item(item, offer_result)
        else:
            logger.info(f"Clearing stale offer {offer.code} on item {item.id}: {offer_result.reason}")
            item = clear_offer(item)
            offer = None
    elif item.offer_id is not None or item.discount is not None:
        item = clear_offer(item)

    summary = calculate_cart_summary(
        item,
        fee_config=fee_config,
        offer=offer,
        recurring_leg=recurring_leg,
        apply_card_fees=apply_card_fees,
        apply_bank_fees=apply_bank_fees,
        other_price=other_price,
    )

    return CheckoutState(item=item, offer=offer, summary=summary, offer_result=offer_result)
