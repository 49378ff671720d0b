import logging
from datetime import timedelta
from typing import Iterable, List, TextIO

from .formatting import begin_marker, end_marker, format_point
from .models import DataSource, TimeWindow

logger = logging.getLogger(__name__)


def filter_by_data_type(sources: Iterable[DataSource], data_type: str) -> List[DataSource]:
    """Sources whose declared type name is exactly ``data_type``, in input order."""
    return [source for source in sources if source.data_type_name == data_type]


class HeartRateService:
    name = "heart_rate"

    def __init__(self, context) -> None:
        self.context = context

    def list_sources(self) -> List[DataSource]:
        return self.context.repository.list_data_sources(self.context.user_id)

    def show_data(self, data_source_id: str, window: TimeWindow, out: TextIO) -> int:
        dataset_id = window.dataset_id
        out.write(begin_marker(data_source_id, dataset_id) + "\n")

        dataset = self.context.repository.get_dataset(
            self.context.user_id, data_source_id, dataset_id
        )
        for point in dataset.points:
            out.write(format_point(point) + "\n")

        out.write(end_marker(data_source_id, dataset_id) + "\n")
        return len(dataset.points)

    def run(self, out: TextIO) -> int:
        data_type = self.context.settings.data_type
        matches = filter_by_data_type(self.list_sources(), data_type)
        if not matches:
            logger.warning("No data source of type %s is registered", data_type)

        lookback = timedelta(hours=self.context.settings.lookback_hours)
        for source in matches:
            window = TimeWindow.ending_at(self.context.clock(), lookback)
            self.show_data(source.data_stream_id, window, out)
        return len(matches)
