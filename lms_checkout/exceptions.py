from typing import Iterable, Optional


class CheckoutValidationError(ValueError):
    """Raised when a checkout payload cannot be built from the given data."""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])
