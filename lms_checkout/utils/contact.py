from typing import List, Tuple

from lms_checkout.schemas.checkout_schemas import CheckoutUserForm


def init_user() -> CheckoutUserForm:
    return CheckoutUserForm()


def get_last_name(name_parts: List[str]) -> str:
    if not name_parts or len(name_parts) <= 1:
        return ""
    return " ".join(name_parts[1:])


def split_full_name(full_name: str) -> Tuple[str, str]:
    """Ada King Lovelace -> (Ada, King Lovelace)"""
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], get_last_name(parts)


def with_names_from_full_name(user: CheckoutUserForm) -> CheckoutUserForm:
    # forms that only ask for a full name still need first/last on the payload
    if user.first_name.strip() and user.last_name.strip():
        return user
    first, last = split_full_name(user.full_name)
    return user.model_copy(update={
        "first_name": user.first_name.strip() or first,
        "last_name": user.last_name.strip() or last,
    })
