from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import logging

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _clamp(value: Optional[float], name: str) -> float:
    if value is None:
        return 0.0
    value = float(value)
    if value < 0:
        logger.warning(f"Negative {name} {value} clamped to 0")
        return 0.0
    return value


def percent_of(amount: Optional[float], percent: Optional[float]) -> float:
    """
    amount * percent / 100, never negative.

    A missing percent counts as 0 so an unset tenant fee means no fee.
    """
    amount = _clamp(amount, "amount")
    percent = _clamp(percent, "percent")
    return amount * percent / 100


def round2(amount: Optional[float]) -> float:
    # Decimal(str()) keeps 1.005 as 1.005 instead of 1.00499999...
    amount = _clamp(amount, "amount")
    return float(Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP))


def money_add(*amounts: Optional[float]) -> float:
    total = Decimal("0")
    for amount in amounts:
        if amount is None:
            continue
        total += Decimal(str(amount))
    return float(total)


def format_amount(amount: Optional[float]) -> str:
    """Fixed two-decimal string the checkout endpoint expects, e.g. "50.00"."""
    amount = _clamp(amount, "amount")
    return str(Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP))
