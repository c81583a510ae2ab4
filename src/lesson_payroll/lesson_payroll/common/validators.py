from __future__ import annotations

from typing import Iterable, List, Optional, Union

from ..core.constants import MAX_WEEK, MAX_YEAR, MIN_WEEK, MIN_YEAR
from ..core.enums import PaymentKind
from ..core.exceptions import ValidationError


def require_int(value, message: str) -> int:
    # bool is an int subclass and floats truncate silently under int().
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(message)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(message) from None


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value, field_name: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip() or None


def require_name_list(value: Union[str, Iterable[str], None], field_name: str) -> List[str]:
    """Normalise a list of names; a lone string counts as one name. Blank entries are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list of names")

    names: List[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f"{field_name} must be a list of names")
        item = item.strip()
        if item and item not in names:
            names.append(item)
    return names


def require_non_negative(value, field_name: str) -> int:
    number = require_int(value, f"{field_name} must be an integer")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_week_number(value) -> int:
    week = require_int(value, "Week number must be an integer")
    if week < MIN_WEEK or week > MAX_WEEK:
        raise ValidationError(f"Week number must be between {MIN_WEEK} and {MAX_WEEK}")
    return week


def require_academic_year(value) -> int:
    year = require_int(value, "Academic year must be an integer")
    if year < MIN_YEAR or year > MAX_YEAR:
        raise ValidationError("Academic year must have four digits")
    return year


def require_payment_kind(value) -> PaymentKind:
    try:
        return PaymentKind(value)
    except ValueError:
        allowed = ", ".join(k.value for k in PaymentKind)
        raise ValidationError(f"Payment kind must be one of: {allowed}") from None
