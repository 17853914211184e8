from pydantic import BaseModel
from typing import List, Optional

from lms_checkout.models.item import CheckoutItem, PlanPricing
from lms_checkout.models.offer import OfferToApply
from lms_checkout.models.tenant import TenantFeeConfig
from lms_checkout.schemas.checkout_schemas import (
    CartSummary,
    CheckoutContext,
    CheckoutUserForm,
    PaymentTransactionInfo,
)


class CartSummaryRequest(BaseModel):
    item: CheckoutItem
    fee_config: Optional[TenantFeeConfig] = None
    offer: Optional[OfferToApply] = None
    recurring_leg: Optional[str] = None
    apply_card_fees: Optional[bool] = None
    apply_bank_fees: Optional[bool] = None
    other_price: Optional[float] = None


class OfferApplyRequest(BaseModel):
    item: CheckoutItem
    offer: OfferToApply
    recurring_leg: Optional[str] = None
    other_price: Optional[float] = None


class CheckoutPayloadRequest(BaseModel):
    item: CheckoutItem
    user: CheckoutUserForm
    summary: CartSummary
    offer: Optional[OfferToApply] = None
    payment_info: Optional[PaymentTransactionInfo] = None
    context: CheckoutContext
    fee_config: Optional[TenantFeeConfig] = None


class PlanSelectRequest(BaseModel):
    period: str
    pricings: List[PlanPricing]
