import logging
import urllib.parse
from typing import List

import requests

from fitpulse.core.exceptions import FitnessApiError

from .models import DataPoint, DataSource, Dataset

logger = logging.getLogger(__name__)


class FitnessRepository:
    """Read-only access to the users/{userId}/dataSources resources."""

    def __init__(self, session: requests.Session, base_url: str, timeout: int = 30) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def list_data_sources(self, user_id: str) -> List[DataSource]:
        url = f"{self.base_url}/users/{user_id}/dataSources"
        payload = self._get_json(url)
        sources = [DataSource.from_api(entry) for entry in payload.get("dataSource") or []]
        logger.info("Found %s registered data sources", len(sources))
        return sources

    def get_dataset(self, user_id: str, data_source_id: str, dataset_id: str) -> Dataset:
        source = urllib.parse.quote(data_source_id, safe=":")
        url = f"{self.base_url}/users/{user_id}/dataSources/{source}/datasets/{dataset_id}"

        dataset = Dataset(data_source_id=data_source_id, dataset_id=dataset_id)
        params = {}
        while True:
            payload = self._get_json(url, params=params)
            dataset.points.extend(DataPoint.from_api(point) for point in payload.get("point") or [])
            page_token = payload.get("nextPageToken")
            if not page_token:
                break
            params = {"pageToken": page_token}

        logger.info("Fetched %s points for %s", len(dataset.points), data_source_id)
        return dataset

    def _get_json(self, url: str, params=None) -> dict:
        r = self.session.get(url, params=params, timeout=self.timeout)
        r.raise_for_status()
        try:
            payload = r.json()
        except ValueError as exc:
            raise FitnessApiError(f"Non-JSON response from {url}") from exc
        if not isinstance(payload, dict):
            raise FitnessApiError(f"Unexpected response shape from {url}: {type(payload).__name__}")
        return payload
