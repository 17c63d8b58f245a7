from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from stationery.core.constants import MAX_COUNT, MONEY_LIMIT, MONEY_QUANTUM
from stationery.core.errors import ValidationError


def _is_blank(value):
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def quantize_money(value: Decimal, field: str = "amount") -> Decimal:
    try:
        amount = value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"{field} is out of range") from None
    if abs(amount) >= MONEY_LIMIT:
        raise ValidationError(f"{field} is out of range")
    return amount


def to_str(value, field, required=True):
    if _is_blank(value):
        if required:
            raise ValidationError(f"{field} is required")
        return None
    return str(value).strip()


def to_int(value, field, required=True):
    number = _to_int(value, field, required)
    if number is not None and abs(number) > MAX_COUNT:
        raise ValidationError(f"{field} is out of range")
    return number


def _to_int(value, field, required):
    if _is_blank(value):
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, (str, Decimal)):
        try:
            numeric = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{field} must be an integer") from None
        if not numeric.is_finite() or numeric != numeric.to_integral_value():
            raise ValidationError(f"{field} must be an integer")
        return int(numeric)
    raise ValidationError(f"{field} must be an integer")


def to_count(value, field, required=True):
    count = to_int(value, field, required=required)
    if count is not None and count < 0:
        raise ValidationError(f"{field} cannot be negative")
    return count


def to_money(value, field, allow_negative=False):
    if _is_blank(value):
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, str):
        value = value.replace(",", "").strip()
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number") from None
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    if amount < 0 and not allow_negative:
        raise ValidationError(f"{field} cannot be negative")
    return quantize_money(amount, field)


def to_date(value, field):
    if _is_blank(value):
        raise ValidationError(f"{field} is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field} must be a date (YYYY-MM-DD)")


def to_datetime(value, field, required=True):
    if _is_blank(value):
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field} must be an ISO 8601 timestamp")
