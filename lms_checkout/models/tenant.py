from sqlmodel import SQLModel, Field
from pydantic import field_validator
from typing import Optional, List, Any, Dict

from lms_checkout.config import settings


class PaymentKey(SQLModel):
    provider: str
    api_key: Optional[str] = None
    client_id: Optional[str] = None
    is_test_mode: bool = False

    @field_validator("provider")
    @classmethod
    def normalise_provider(cls, value: str) -> str:
        return value.strip().lower()


class TenantFeeConfig(SQLModel):
    """
    Tenant tax/fee settings, fetched once per checkout session.

    Missing percentages are stored as 0: a malformed config means
    "no tax or fee", never a blocked checkout.
    """

    tax_percent: Optional[float] = Field(default=0, ge=0, le=100)
    card_fees_percent: Optional[float] = Field(default=0, ge=0, le=100)
    bank_fees_percent: Optional[float] = Field(default=0, ge=0, le=100)
    currency: str = Field(default_factory=lambda: settings.default_currency)
    payment_keys: List[PaymentKey] = Field(default_factory=list)

    @field_validator("tax_percent", "card_fees_percent", "bank_fees_percent", mode="before")
    @classmethod
    def missing_is_zero(cls, value):
        return 0 if value in (None, "") else value

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, value):
        if not value:
            return settings.default_currency
        return str(value).upper()

    @property
    def providers(self) -> List[str]:
        return [key.provider for key in self.payment_keys]

    @classmethod
    def from_tenant_dto(cls, dto: Optional[Dict[str, Any]]) -> "TenantFeeConfig":
        """Build from the backend's item/tenant dto (tax|taxPercent, cardFees, bankFees...)."""
        dto = dto or {}
        tax = dto.get("tax")
        if tax is None:
            tax = dto.get("taxPercent")

        keys = []
        for key in dto.get("paymentKeys") or []:
            if not key.get("provider"):
                continue
            keys.append(PaymentKey(
                provider=key["provider"],
                api_key=key.get("apiKey"),
                client_id=key.get("clientId"),
                is_test_mode=bool(key.get("isTestMode")),
            ))

        return cls(
            tax_percent=tax,
            card_fees_percent=dto.get("cardFees"),
            bank_fees_percent=dto.get("bankFees"),
            currency=dto.get("currency"),
            payment_keys=keys,
        )
