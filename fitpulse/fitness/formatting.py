from typing import Optional

from fitpulse.infrastructure.time import millis_to_datetime, nanos_to_millis

from .models import DataPoint, DataSource

# Shown when a point carries no floating-point reading.
DEFAULT_VALUE = 0.0


def format_timestamp(millis: int) -> str:
    """RFC 3339 in UTC with millisecond precision."""
    return millis_to_datetime(millis).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_value(value: Optional[float]) -> str:
    return str(DEFAULT_VALUE if value is None else value)


def format_point(point: DataPoint) -> str:
    return f"{format_timestamp(nanos_to_millis(point.start_time_nanos))}=>{format_value(point.fp_value)}"


def begin_marker(data_source_id: str, dataset_id: str) -> str:
    return f"<BOD:\t data-source-id[{data_source_id}], dataset-id[{dataset_id}]>"


def end_marker(data_source_id: str, dataset_id: str) -> str:
    return f"<EOD:\t data-source-id[{data_source_id}], dataset-id[{dataset_id}]>"


def format_source(source: DataSource) -> str:
    return f"{source.data_stream_id}\t{source.data_type_name}"
