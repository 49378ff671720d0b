from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from fitpulse.core.exceptions import FitnessApiError
from fitpulse.infrastructure.time import compose_dataset_id, to_nanos


@dataclass(frozen=True)
class DataSource:
    data_stream_id: str
    data_type_name: str
    name: Optional[str] = None
    application: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "DataSource":
        try:
            stream_id = payload["dataStreamId"]
            type_name = payload["dataType"]["name"]
        except (KeyError, TypeError) as exc:
            raise FitnessApiError(f"Malformed data source entry: {payload!r}") from exc
        application = (payload.get("application") or {}).get("packageName")
        return cls(
            data_stream_id=stream_id,
            data_type_name=type_name,
            name=payload.get("dataStreamName"),
            application=application,
        )


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    @classmethod
    def ending_at(cls, end: datetime, lookback: timedelta) -> "TimeWindow":
        return cls(start=end - lookback, end=end)

    @property
    def start_nanos(self) -> int:
        return to_nanos(self.start)

    @property
    def end_nanos(self) -> int:
        return to_nanos(self.end)

    @property
    def dataset_id(self) -> str:
        return compose_dataset_id(self.start_nanos, self.end_nanos)


@dataclass(frozen=True)
class DataPoint:
    start_time_nanos: int
    end_time_nanos: int
    fp_value: Optional[float] = None

    @classmethod
    def from_api(cls, payload: dict) -> "DataPoint":
        try:
            start = int(payload["startTimeNanos"])
            end = int(payload.get("endTimeNanos", start))
            # only the first reading is shown; later ones are ignored
            values = payload.get("value") or []
            raw = values[0].get("fpVal") if values else None
            fp_value = float(raw) if raw is not None else None
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise FitnessApiError(f"Malformed data point: {payload!r}") from exc
        return cls(start_time_nanos=start, end_time_nanos=end, fp_value=fp_value)


@dataclass
class Dataset:
    data_source_id: str
    dataset_id: str
    points: List[DataPoint] = field(default_factory=list)
