from __future__ import annotations


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def add_hours(value: str, hours: int) -> str:
    """Shift the hour component only; no wrap past midnight."""
    hour_part, minute_part = value.split(":")
    return f"{int(hour_part) + int(hours):02d}:{int(minute_part):02d}"


def time_overlaps(start1: str, end1: str, start2: str, end2: str) -> bool:
    # Strict: intervals that only touch at an endpoint do not overlap.
    return time_to_minutes(start1) < time_to_minutes(end2) and time_to_minutes(start2) < time_to_minutes(end1)
