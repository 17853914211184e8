from lms_checkout.models.item import BillingCycle, CheckoutItem, PlanPricing
from lms_checkout.models.offer import OfferToApply
from lms_checkout.models.tenant import PaymentKey, TenantFeeConfig

# add ALL models here
