from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for PostgreSQL TIMESTAMP).

    Database columns use TIMESTAMP WITHOUT TIME ZONE, so we strip tzinfo.
    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def utc_now_after(previous: datetime) -> datetime:
    """Return current UTC time, bumped past ``previous`` if the clock has not moved.

    Used where successive rows must carry strictly increasing timestamps.
    """
    now = utc_now()
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now
