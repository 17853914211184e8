# tests/conftest.py
import pytest

from lms_checkout.models.item import BillingCycle, CheckoutItem
from lms_checkout.models.offer import OfferToApply
from lms_checkout.models.tenant import PaymentKey, TenantFeeConfig
from lms_checkout.schemas.checkout_schemas import (
    CheckoutContext,
    CheckoutUserForm,
    EventInfo,
    PaymentTransactionInfo,
)


@pytest.fixture
def course_item():
    return CheckoutItem(
        id="mem_1",
        name="Yoga Basics - 10 classes",
        item_type="course",
        price=100,
        category_id="cat_1",
        category_name="Yoga Basics",
        registration_form_id="form_1",
    )


@pytest.fixture
def recurring_item():
    return CheckoutItem(
        id="mem_2",
        name="Monthly Membership",
        price=50,
        membership_type="recurring",
        subscription_amount=50,
        registration_fee=25,
        billing_cycle=BillingCycle(frequency=1, unit="months"),
        number_of_billing_cycles=12,
    )


@pytest.fixture
def plan_item():
    return CheckoutItem(
        id="pricing_1",
        name="Gold Plan",
        item_type="plan",
        price=30,
        plan_id="plan_1",
        pricing_id="pricing_1",
    )


@pytest.fixture
def fee_config():
    return TenantFeeConfig(
        tax_percent=10,
        card_fees_percent=3,
        bank_fees_percent=0,
        currency="usd",
        payment_keys=[PaymentKey(provider="Stripe", api_key="pk_test")],
    )


@pytest.fixture
def percent_offer():
    return OfferToApply(id="off_1", code="SAVE20", discount_type="percentage", discount_value=20)


@pytest.fixture
def amount_offer():
    return OfferToApply(id="off_2", code="FLAT50", discount_type="amount", discount_value=50)


@pytest.fixture
def user():
    return CheckoutUserForm(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone="555-0100",
        note="See you there",
    )


@pytest.fixture
def card_payment():
    return PaymentTransactionInfo(nonce="tok_123", method_type="card", payment_type="stripe")


@pytest.fixture
def context():
    return CheckoutContext(tenant_id="tenant_1", org_id="org_1")


@pytest.fixture
def event_context():
    return CheckoutContext(
        tenant_id="tenant_1",
        org_id="org_1",
        event=EventInfo(id="evt_1", name="Spring Retreat", schedule_id="sch_1", class_start_time=1700000000),
    )
