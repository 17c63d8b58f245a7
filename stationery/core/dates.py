from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def business_today(timezone_mode: str = "local") -> date:
    mode = (timezone_mode or "local").strip()
    if mode.lower() == "local":
        return date.today()
    if mode.lower() == "utc":
        return datetime.now(timezone.utc).date()
    try:
        return datetime.now(ZoneInfo(mode)).date()
    except (ZoneInfoNotFoundError, OSError, ValueError) as exc:
        raise ValueError(f"Unknown BUSINESS_TZ: {mode}") from exc
