from sqlmodel import SQLModel, Field
from pydantic import field_validator
from typing import Optional

from lms_checkout.constants.checkout_status import MembershipType


class BillingCycle(SQLModel):
    frequency: int = Field(default=1, ge=1)
    unit: str  # weeks | months | years

    @field_validator("unit")
    @classmethod
    def normalise_unit(cls, value: str) -> str:
        return value.strip().lower()


class CheckoutItem(SQLModel):
    """
    A purchasable row: course membership, event ticket or plan pricing.

    discount / price_to_discount / offer_id stay None until the caller
    writes an accepted offer back through offer_service.apply_offer_to_item.
    """

    #main info
    id: str
    name: Optional[str] = None
    item_type: Optional[str] = None  # course | event | plan

    #pricing
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    is_other_price: bool = False
    is_taxable: bool = True
    charge_card_fees: bool = True

    #recurring
    membership_type: MembershipType = MembershipType.ONE_TIME
    subscription_amount: Optional[float] = Field(default=None, ge=0)
    registration_fee: Optional[float] = Field(default=None, ge=0)
    billing_cycle: Optional[BillingCycle] = None
    number_of_billing_cycles: int = 0
    billing_day_of_month: Optional[int] = Field(default=None, ge=1, le=31)

    #product identity
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    registration_form_id: Optional[str] = None
    plan_id: Optional[str] = None
    pricing_id: Optional[str] = None

    #offer write-back
    discount: Optional[float] = None
    price_to_discount: Optional[float] = None
    offer_id: Optional[str] = None

    @property
    def is_recurring(self) -> bool:
        return self.membership_type == MembershipType.RECURRING

    def unit_price(self, other_price: Optional[float] = None) -> float:
        # pay-what-you-want rows take the buyer's amount when one was entered
        if self.is_other_price and other_price is not None and other_price > 0:
            return float(other_price)
        return self.price


class PlanPricing(SQLModel):
    """Pricing row of a membership plan as the public plan list returns it."""

    id: str
    plan_id: str
    plan_name: Optional[str] = None
    payment_type: MembershipType = MembershipType.ONE_TIME
    one_time_payment: float = Field(default=0, ge=0)
    subscription_amount: float = Field(default=0, ge=0)
    billing_cycle: Optional[BillingCycle] = None
    number_of_billing_cycles: int = 0
