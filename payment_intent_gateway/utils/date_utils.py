"""Date manipulation utilities"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


def utc_calendar_date(moment: datetime) -> date:
    """Calendar date of *moment* in UTC (naive datetimes are taken as UTC)"""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()
