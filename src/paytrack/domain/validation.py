"""Field validation helpers shared by services and payload parsing."""

from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from paytrack.domain.entities import AccountType
from paytrack.domain.errors import ValidationError


def require_text(value: Any, field: str) -> str:
    """Return a stripped non-empty string or raise ValidationError."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)
    value = value.strip()
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    return value


def require_id(value: Any, field: str) -> int:
    """Return a positive integer id or raise ValidationError."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field} must be a positive integer", field=field)
    return value


def require_account_type(value: Any, field: str = "type") -> AccountType:
    """Coerce a value to AccountType or raise ValidationError."""
    try:
        return AccountType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in AccountType)
        raise ValidationError(f"{field} must be one of: {allowed}", field=field) from None


def require_amount(value: Any, field: str = "amount") -> Decimal:
    """Coerce a value to a finite Decimal without passing through float.

    Floats are rejected: their binary value is already inexact.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ValidationError(f"{field} must be a decimal string or integer", field=field)
    if isinstance(value, (int, Decimal)):
        amount = Decimal(value)
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValidationError(f"{field} '{value}' is not a valid amount", field=field) from None
    else:
        raise ValidationError(f"{field} must be a decimal string or integer", field=field)
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field)
    return amount


def require_datetime(value: Any, field: str = "date") -> datetime:
    """Coerce a date, datetime or ISO 8601 string to a naive datetime.

    Aware values are converted to UTC before the offset is dropped.
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            result = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"{field} '{value}' is not an ISO 8601 date", field=field) from None
    else:
        raise ValidationError(f"{field} must be a date", field=field)
    if result.tzinfo is not None:
        result = result.astimezone(timezone.utc).replace(tzinfo=None)
    return result
