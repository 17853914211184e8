# lms_checkout/schemas/checkout_schemas.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Any, Union

from lms_checkout.models.item import CheckoutItem
from lms_checkout.models.offer import OfferToApply


class OfferResult(BaseModel):
    accepted: bool
    discount_amount: float = 0
    price_to_discount: float = 0
    offer_id: Optional[str] = None
    reason: Optional[str] = None  # shown to the buyer when rejected


class RecurringPricing(BaseModel):
    upfront_amount: float
    recurring_amount: float
    billing_label: str


class RecurringInfo(BaseModel):
    billing_freq_text: str = ""
    next_billing_period: str = "Today"
    processing_fees: float = 0       # registration fee collected with the first bill
    billing_ends_after: str = "Manual Request"
    recurring_amount: float = 0

    subscription_tax: float = 0
    subscription_card_fees: float = 0
    registration_tax: float = 0
    registration_card_fees: float = 0

    final_subscription_amount: float = 0  # every later bill
    final_one_time_payment: float = 0


class CartSummary(BaseModel):
    subtotal: float = 0           # chargeable amount before discount
    item_discount: float = 0
    taxable_subtotal: float = 0   # subtotal - item_discount
    total_tax: float = 0
    card_fees: float = 0
    bank_fees: float = 0
    total_price: float = 0        # the only rounded amount

    tax_percent: float = 0
    card_percent: float = 0
    bank_percent: float = 0

    show_taxable: bool = False
    show_card_fees: bool = False
    show_bank_fees: bool = False

    offer_applied: bool = False
    payment_required: bool = False

    recurring_info: Optional[RecurringInfo] = None


class CheckoutState(BaseModel):
    item: CheckoutItem
    offer: Optional[OfferToApply] = None
    summary: CartSummary
    offer_result: Optional[OfferResult] = None


class CustomFieldValue(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    gu_id: str = Field(alias="guId")
    value: str = ""
    name: Optional[str] = None
    type: Optional[str] = None
    tag: Optional[str] = None


class CheckoutUserForm(BaseModel):
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    note: str = ""
    address: Optional[Union[str, dict]] = None
    other_price: Optional[float] = None
    guardians: List[Any] = []
    custom_fields: List[CustomFieldValue] = []


class PaymentTransactionInfo(BaseModel):
    """Token data handed back by the provider flow (Stripe, Razorpay, PhonePe...)."""

    nonce: Optional[str] = None
    method_id: Optional[str] = None
    method_type: Optional[str] = None
    payment_type: Optional[str] = None
    payment_intent: Optional[str] = None
    setup_intent: Optional[str] = None
    is_save_card: bool = False


class EventInfo(BaseModel):
    id: str
    name: Optional[str] = None
    schedule_id: Optional[str] = None
    class_start_time: Optional[int] = None
    payment_type: str = "paid"  # paid | free | donation


class CheckoutContext(BaseModel):
    tenant_id: str
    org_id: str = ""
    contact_id: str = ""  # empty for guest checkout
    is_change_plan: bool = False
    event: Optional[EventInfo] = None


# ---- wire shapes, serialised with model_dump(by_alias=True) ----

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentBlock(_CamelModel):
    amount: str
    currency: str
    nonce: Optional[str] = None
    method_id: str = ""
    method_type: str
    payment_type: str
    payment_intent: str = ""
    is_save_card: bool = False
    is_pay_later: bool = False
    notes: str = ""
    payment_date: Optional[str] = None


class SubscriptionDetail(_CamelModel):
    trial_period: int = 0
    billing_day: int = 0
    frequency: Optional[str] = None
    no_of_billing_cycles: int = 0
    subscription_amount: float = 0
    subscription_total_amount: float = 0
    subscription_card_fees: float = 0
    subscription_tax: float = 0


class MembershipListItem(_CamelModel):
    org_id: str = ""
    tenant_id: str
    item_id: str
    item_name: Optional[str] = None
    membership_type: str
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    product_type: str
    total: float
    discount: float = 0
    qty: int = 1
    currency: str
    item_price: float
    item_total: float
    card_fees: float = 0
    tax: float = 0
    subscription: Optional[SubscriptionDetail] = None


class EventRef(_CamelModel):
    id: str = Field(alias="guId")
    schedule_id: Optional[str] = None
    class_start_time: Optional[int] = None


class _ContactPayload(_CamelModel):
    tenant_id: str
    contact_id: str = ""
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    currency: str
    payment: PaymentBlock


class ItemCheckoutPayload(_ContactPayload):
    custom_fields: List[CustomFieldValue] = []
    registration_form_id: Optional[str] = None
    offer_code: str = ""
    offer_id: str = ""
    discount_total: float = 0
    total: str
    notes: str = ""
    membership_list: List[MembershipListItem]
    attendee_list: List[Any] = []


class EventCheckoutPayload(_ContactPayload):
    custom_fields: List[CustomFieldValue] = []
    guardians: List[Any] = []
    offer_code: str = ""
    offer_id: str = ""
    discount_total: float = 0
    total: str
    notes: str = ""
    membership_list: List[MembershipListItem]
    event: EventRef


class PlanCheckoutPayload(_ContactPayload):
    org_id: str
    plan_id: str
    pricing_id: str
    product_id: str
    product_name: Optional[str] = None
    is_change_plan: bool = False
    offer_code: str = ""
    discount_total: float = 0


CheckoutPayload = Union[ItemCheckoutPayload, EventCheckoutPayload, PlanCheckoutPayload]
