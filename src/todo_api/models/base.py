from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time in UTC, without tzinfo.

    ``created_at``/``updated_at`` are naive timestamp columns holding UTC.
    """
    return datetime.now(UTC).replace(tzinfo=None)
