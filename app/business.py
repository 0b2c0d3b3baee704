from __future__ import annotations

import re

from db.models import BusinessSettings


def digits_only(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def format_phone_number(phone: str) -> str:
    """(903) 399-6021 for ten-digit US numbers, anything else is returned as given."""
    cleaned = digits_only(phone)
    if len(cleaned) == 10:
        return f"({cleaned[:3]}) {cleaned[3:6]}-{cleaned[6:]}"
    return phone


def phone_link(phone: str) -> str:
    return f"tel:+1{digits_only(phone)}"


def settings_from_phone_input(raw_phone: str, email: str, settings_id: str = "default") -> BusinessSettings:
    cleaned = digits_only(raw_phone)
    return BusinessSettings(
        id=settings_id or "default",
        phone_number=cleaned,
        phone_formatted=format_phone_number(cleaned),
        phone_link=phone_link(cleaned),
        email=(email or "").strip(),
    )
