from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from fitpulse.auth.base import Authorizer
from fitpulse.fitness.repositories import FitnessRepository
from fitpulse.infrastructure.time import utcnow
from fitpulse.infrastructure.transport import build_session


@dataclass(frozen=True)
class FitnessContext:
    """Everything a pipeline step needs, built once per run and passed along."""

    settings: Any
    repository: FitnessRepository
    user_id: str
    clock: Callable[[], datetime] = utcnow


def build_context(project_settings, authorizer: Authorizer) -> FitnessContext:
    credential = authorizer.obtain_credential()
    session = build_session(authorizer, credential)
    repository = FitnessRepository(
        session,
        project_settings.api_base_url,
        timeout=project_settings.request_timeout,
    )
    return FitnessContext(
        settings=project_settings,
        repository=repository,
        user_id=project_settings.user_id,
    )
