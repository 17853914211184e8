from enum import Enum


class MembershipType(str, Enum):
    ONE_TIME = "one-time"
    RECURRING = "recurring"


class DiscountType(str, Enum):
    AMOUNT = "amount"
    PERCENTAGE = "percentage"


class RecurringLeg(str, Enum):
    SUBSCRIPTION = "subscription"
    REGISTRATION = "registration"


class CheckoutKind(str, Enum):
    ITEM = "item"
    EVENT = "event"
    PLAN = "plan"


class PaymentMethod(str, Enum):
    CARD = "card"
    CASH = "cash"
    PAY_LATER = "paylater"
    NONE = "none"


class PaymentProvider(str, Enum):
    STRIPE = "stripe"
    PSPRING = "pspring"
    RAZORPAY = "razorpay"
    PHONEPE = "phonepe"
    SWIREPAY = "swirepay"
    NONE = "none"


# payment_type sent to the backend when the provider flow did not set one
DEFAULT_PAYMENT_TYPES = {
    PaymentMethod.CARD: "card",
    PaymentMethod.CASH: "cash",
    PaymentMethod.PAY_LATER: "paylater",
    PaymentMethod.NONE: "none",
}

# methods that may be used whatever the total is
ANY_AMOUNT_METHODS = {PaymentMethod.CASH, PaymentMethod.PAY_LATER}

BILLING_LABELS = {
    (1, "weeks"): "weekly",
    (1, "months"): "monthly",
    (3, "months"): "quarterly",
    (1, "years"): "yearly",
}

OTHER_PERIOD = "other"

EVENT_PRODUCT_TYPES = {
    "paid": "paidevent",
    "free": "freeevent",
    "donation": "donationevent",
}
