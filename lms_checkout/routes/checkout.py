from fastapi import APIRouter, HTTPException
import logging

from lms_checkout.constants.checkout_status import CheckoutKind
from lms_checkout.exceptions import CheckoutValidationError
from lms_checkout.schemas.cart_schemas import (
    CartSummaryRequest,
    CheckoutPayloadRequest,
    OfferApplyRequest,
    PlanSelectRequest,
)
from lms_checkout.services.cart_service import refresh_checkout
from lms_checkout.services.offer_service import apply_offer_to_item, evaluate_offer
from lms_checkout.services.payload_service import build_checkout_payload, resolve_payment_provider
from lms_checkout.services.recurring_service import select_pricing_for_period, sort_by_price

logger = logging.getLogger(__name__)

router = APIRouter()


# Order summary, recomputed on every change of item / offer / fees

@router.post("/summary")
def cart_summary(data: CartSummaryRequest):
    try:
        state = refresh_checkout(
            data.item,
            fee_config=data.fee_config,
            offer=data.offer,
            recurring_leg=data.recurring_leg,
            apply_card_fees=data.apply_card_fees,
            apply_bank_fees=data.apply_bank_fees,
            other_price=data.other_price,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))

    return {
        "item": state.item,
        "offer": state.offer,
        "summary": state.summary,
        "offer_result": state.offer_result,
        "payment_provider": resolve_payment_provider(data.fee_config, state.summary.total_price),
    }


# Apply offer code

@router.post("/offer")
def apply_offer(data: OfferApplyRequest):
    try:
        result = evaluate_offer(data.offer, data.item, data.recurring_leg, data.other_price)
    except ValueError as e:
        raise HTTPException(400, str(e))

    if not result.accepted:
        raise HTTPException(400, result.reason or "Invalid offer code")

    return {
        "message": "Offer applied",
        "item": apply_offer_to_item(data.item, result),
        "result": result,
    }


# Final checkout body (item / event / plan)

@router.post("/payload/{kind}")
def checkout_payload(kind: str, data: CheckoutPayloadRequest):
    if kind not in {k.value for k in CheckoutKind}:
        raise HTTPException(404, f"Unknown checkout kind: {kind}")

    try:
        payload = build_checkout_payload(
            kind,
            data.item,
            data.user,
            data.summary,
            data.offer,
            data.payment_info,
            data.context,
            fee_config=data.fee_config,
        )
    except CheckoutValidationError as e:
        logger.warning(f"Checkout payload rejected: {e.message}")
        raise HTTPException(400, {"message": e.message, "fields": e.fields})

    return payload.model_dump(by_alias=True)


@router.post("/plans/select")
def select_plans(data: PlanSelectRequest):
    pricings = select_pricing_for_period(data.pricings, data.period)
    return {
        "period": data.period,
        "pricings": sort_by_price(pricings),
    }
