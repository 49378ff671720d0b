from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MILLI = 1_000_000
SECONDS_PER_DAY = 86400


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def to_nanos(moment: datetime) -> int:
    """Nanoseconds since the epoch; naive datetimes are read as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    delta = moment - EPOCH
    seconds = delta.days * SECONDS_PER_DAY + delta.seconds
    return seconds * NANOS_PER_SECOND + delta.microseconds * 1000


def nanos_to_millis(nanos: int) -> int:
    return nanos // NANOS_PER_MILLI


def millis_to_datetime(millis: int) -> datetime:
    return EPOCH + timedelta(milliseconds=millis)


def compose_dataset_id(start_nanos: int, end_nanos: int) -> str:
    """Range key understood by datasets.get: ``<start>-<end>`` in epoch nanos."""
    return f"{start_nanos}-{end_nanos}"
