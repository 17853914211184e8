from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class OfferToApply(SQLModel):
    id: str
    code: str

    # kept as a plain string: an unknown type is a rejected offer, not a crash
    discount_type: str  # amount | percentage
    discount_value: float = 0

    # eligibility window on the price being discounted
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    expires_at: Optional[datetime] = None
