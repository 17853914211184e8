from datetime import datetime
from typing import List, Optional
import logging

from lms_checkout.constants.checkout_status import (
    ANY_AMOUNT_METHODS,
    DEFAULT_PAYMENT_TYPES,
    EVENT_PRODUCT_TYPES,
    CheckoutKind,
    PaymentMethod,
    PaymentProvider,
)
from lms_checkout.exceptions import CheckoutValidationError
from lms_checkout.models.item import CheckoutItem
from lms_checkout.models.offer import OfferToApply
from lms_checkout.models.tenant import TenantFeeConfig
from lms_checkout.schemas.checkout_schemas import (
    CartSummary,
    CheckoutContext,
    CheckoutPayload,
    CheckoutUserForm,
    EventCheckoutPayload,
    EventRef,
    ItemCheckoutPayload,
    MembershipListItem,
    PaymentBlock,
    PaymentTransactionInfo,
    PlanCheckoutPayload,
    SubscriptionDetail,
)
from lms_checkout.services.recurring_service import billing_label
from lms_checkout.utils.contact import with_names_from_full_name
from lms_checkout.utils.money import format_amount, round2

logger = logging.getLogger(__name__)

CARD_PROVIDERS = [
    PaymentProvider.STRIPE.value,
    PaymentProvider.RAZORPAY.value,
    PaymentProvider.PHONEPE.value,
    PaymentProvider.PSPRING.value,
    PaymentProvider.SWIREPAY.value,
]


def validate_contact(user: CheckoutUserForm) -> None:
    """Last guard before the checkout call: name and email must be filled in."""
    missing = [
        name for name in ("first_name", "last_name", "email")
        if not (getattr(user, name) or "").strip()
    ]
    if missing:
        raise CheckoutValidationError(
            f"Missing required contact details: {', '.join(missing)}",
            fields=missing,
        )


def resolve_payment_provider(fee_config: Optional[TenantFeeConfig], total: float) -> str:
    """Which provider flow the buyer goes through; 'none' when nothing is owed."""
    if round2(total) == 0:
        return PaymentProvider.NONE.value
    if fee_config is None:
        return PaymentProvider.NONE.value
    for provider in fee_config.providers:
        if provider in CARD_PROVIDERS:
            return provider
    return PaymentProvider.NONE.value


def resolve_payment_method(info: Optional[PaymentTransactionInfo], total: float) -> PaymentMethod:
    info = info or PaymentTransactionInfo()
    raw = (info.method_type or "").strip().lower()
    zero_total = round2(total) == 0

    if not raw:
        if zero_total:
            return PaymentMethod.NONE
        # a token without a method type came from a card widget
        if info.nonce or info.method_id or info.payment_intent:
            return PaymentMethod.CARD
        raise CheckoutValidationError("No payment method selected", fields=["payment"])

    if raw == "zero":
        raw = PaymentMethod.NONE.value

    try:
        method = PaymentMethod(raw)
    except ValueError:
        raise CheckoutValidationError(f"Unsupported payment method: {raw}", fields=["payment"])

    if method in ANY_AMOUNT_METHODS:
        return method

    if method == PaymentMethod.NONE and not zero_total:
        raise CheckoutValidationError(
            "A payment method is required for a non-zero total", fields=["payment"]
        )

    if method == PaymentMethod.CARD:
        if zero_total:
            raise CheckoutValidationError(
                "Card payment is not allowed on a zero total", fields=["payment"]
            )
        if not (info.nonce or info.method_id or info.payment_intent):
            raise CheckoutValidationError("Card payment token is missing", fields=["payment"])

    return method


def build_payment_block(
    summary: CartSummary,
    info: Optional[PaymentTransactionInfo],
    currency: str,
    notes: str = "",
    payment_date: Optional[str] = None,
) -> PaymentBlock:
    info = info or PaymentTransactionInfo()
    method = resolve_payment_method(info, summary.total_price)

    return PaymentBlock(
        amount=format_amount(summary.total_price),
        currency=currency,
        nonce=info.nonce,
        method_id=info.method_id or "",
        method_type=method.value,
        payment_type=info.payment_type or DEFAULT_PAYMENT_TYPES[method],
        payment_intent=info.payment_intent or "",
        is_save_card=info.is_save_card and method == PaymentMethod.CARD,
        is_pay_later=method == PaymentMethod.PAY_LATER,
        notes=notes or "",
        payment_date=payment_date,
    )


def _product_fields(kind: CheckoutKind, item: CheckoutItem, context: CheckoutContext):
    if kind == CheckoutKind.EVENT:
        event = context.event
        return event.id, event.name, EVENT_PRODUCT_TYPES.get(
            (event.payment_type or "").lower(), "paidevent"
        )
    if kind == CheckoutKind.PLAN:
        return item.plan_id or item.id, item.name, "plan"
    return item.category_id or item.id, item.category_name or item.name, "paidevent"


def build_membership_list(
    kind: CheckoutKind,
    item: CheckoutItem,
    summary: CartSummary,
    context: CheckoutContext,
    currency: str,
) -> List[MembershipListItem]:
    kind = CheckoutKind(kind)
    product_id, product_name, product_type = _product_fields(kind, item, context)

    line = MembershipListItem(
        org_id=context.org_id,
        tenant_id=context.tenant_id,
        item_id=item.id,
        item_name=item.name,
        membership_type=item.membership_type.value,
        product_id=product_id,
        product_name=product_name,
        product_type=product_type,
        total=summary.total_price,
        discount=summary.item_discount,
        qty=item.quantity,
        currency=currency,
        item_price=item.price,
        item_total=summary.total_price,
        card_fees=round2(summary.card_fees),
        tax=round2(summary.total_tax),
    )

    info = summary.recurring_info
    if item.is_recurring and info is not None:
        # one-time leg goes on the line, the repeating charge in the subscription block
        line.item_price = item.registration_fee or 0
        line.item_total = info.final_one_time_payment
        line.card_fees = round2(info.registration_card_fees)
        line.tax = round2(info.registration_tax)
        line.subscription = SubscriptionDetail(
            frequency=billing_label(item.billing_cycle) or None,
            billing_day=item.billing_day_of_month or 0,
            no_of_billing_cycles=max(item.number_of_billing_cycles - 1, 0),
            subscription_amount=item.subscription_amount or 0,
            subscription_total_amount=info.final_subscription_amount,
            subscription_card_fees=round2(info.subscription_card_fees),
            subscription_tax=round2(info.subscription_tax),
        )

    return [line]


def build_checkout_payload(
    kind: str,
    item: CheckoutItem,
    user: CheckoutUserForm,
    cart_summary: CartSummary,
    offer: Optional[OfferToApply],
    payment_info: Optional[PaymentTransactionInfo],
    context: CheckoutContext,
    fee_config: Optional[TenantFeeConfig] = None,
    payment_date: Optional[str] = None,
) -> CheckoutPayload:
    """
    Shape the request body for the backend checkout endpoint.

    The amount is the summary total rounded once and written with two
    decimals. Raises CheckoutValidationError when contact details are
    incomplete, the payment method does not fit the total, or the
    product identifiers for the chosen kind are missing.
    """
    kind = CheckoutKind(kind)
    user = with_names_from_full_name(user)
    validate_contact(user)

    fee_config = fee_config or TenantFeeConfig()
    currency = fee_config.currency
    total = format_amount(cart_summary.total_price)

    offer_code = offer.code if (offer and cart_summary.offer_applied) else ""
    offer_id = offer.id if (offer and cart_summary.offer_applied) else ""

    common = dict(
        tenant_id=context.tenant_id,
        contact_id=context.contact_id,
        first_name=user.first_name.strip(),
        last_name=user.last_name.strip(),
        email=user.email.strip(),
        phone=user.phone,
        currency=currency,
    )

    if kind == CheckoutKind.PLAN:
        if not item.plan_id or not item.pricing_id:
            raise CheckoutValidationError(
                "Plan checkout needs plan_id and pricing_id", fields=["plan_id", "pricing_id"]
            )
        payment = build_payment_block(
            cart_summary,
            payment_info,
            currency,
            notes=user.note,
            payment_date=payment_date or datetime.utcnow().isoformat(),
        )
        payload = PlanCheckoutPayload(
            **common,
            payment=payment,
            org_id=context.org_id,
            plan_id=item.plan_id,
            pricing_id=item.pricing_id,
            product_id=item.plan_id,
            product_name=item.name,
            is_change_plan=context.is_change_plan,
            offer_code=offer_code,
            discount_total=cart_summary.item_discount,
        )
        logger.info(f"Built plan checkout payload for plan {item.plan_id}, amount {total}")
        return payload

    if kind == CheckoutKind.EVENT and context.event is None:
        raise CheckoutValidationError("Event checkout needs event details", fields=["event"])

    payment = build_payment_block(cart_summary, payment_info, currency, notes=user.note)
    membership_list = build_membership_list(kind, item, cart_summary, context, currency)

    if kind == CheckoutKind.EVENT:
        payload = EventCheckoutPayload(
            **common,
            payment=payment,
            custom_fields=user.custom_fields,
            guardians=user.guardians,
            offer_code=offer_code,
            offer_id=offer_id,
            discount_total=cart_summary.item_discount,
            total=total,
            notes=user.note,
            membership_list=membership_list,
            event=EventRef(
                id=context.event.id,
                schedule_id=context.event.schedule_id,
                class_start_time=context.event.class_start_time,
            ),
        )
        logger.info(f"Built event checkout payload for event {context.event.id}, amount {total}")
        return payload

    payload = ItemCheckoutPayload(
        **common,
        payment=payment,
        custom_fields=user.custom_fields,
        registration_form_id=item.registration_form_id,
        offer_code=offer_code,
        offer_id=offer_id,
        discount_total=cart_summary.item_discount,
        total=total,
        notes=user.note,
        membership_list=membership_list,
    )
    logger.info(f"Built item checkout payload for item {item.id}, amount {total}")
    return payload
