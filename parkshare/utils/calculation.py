import math
from datetime import datetime, timezone
from parkshare.config import Config

LOCAL_TZ = Config.get_timezone()

def to_utc(value: datetime) -> datetime:
    # SQLITE HANDS BACK NAIVE DATETIMES, THEY ARE STORED AS UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def calculate_duration_minutes(check_in_time: datetime, check_out_time: datetime) -> int:
    duration = to_utc(check_out_time) - to_utc(check_in_time)
    minutes = math.ceil(duration.total_seconds() / Config.SECONDS_PER_MINUTE)
    return max(0, minutes)

def calculate_charge(duration_minutes: int, rate_per_hour: float) -> float:
    # EVERY STARTED HOUR IS BILLED, ONE HOUR MINIMUM
    if duration_minutes < 0:
        raise ValueError(f"duration_minutes must not be negative, got {duration_minutes}")

    hours_billed = max(1, math.ceil(duration_minutes / Config.MINUTES_PER_HOUR))
    return hours_billed * rate_per_hour

def format_local_time(value: datetime) -> str:
    return to_utc(value).astimezone(tz=LOCAL_TZ).strftime("%I:%M %p")
