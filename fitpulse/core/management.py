import logging
import sys
from typing import Callable, Dict, List, Optional, TextIO

import requests
from google.auth.exceptions import GoogleAuthError

from fitpulse.auth.base import Authorizer
from fitpulse.auth.installed_app import InstalledAppAuthorizer
from fitpulse.core.context import build_context
from fitpulse.core.exceptions import (
    AuthorizationError,
    CommandError,
    ConfigurationError,
    FitnessApiError,
)
from fitpulse.core.logging import configure_logging
from fitpulse.fitness.formatting import format_source
from fitpulse.fitness.services import HeartRateService
from fitpulse.infrastructure.filesystem import TokenStore
from fitpulse.settings import settings

logger = logging.getLogger(__name__)

IO_ERRORS = (OSError, requests.RequestException, FitnessApiError)
CREDENTIAL_ERRORS = (AuthorizationError, GoogleAuthError)


def execute_from_command_line(
    command: str,
    argv: List[str] | None = None,
    project_settings=None,
    authorizer: Optional[Authorizer] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Entry point for manage.py commands; returns the process exit status."""
    argv = argv or []
    project_settings = project_settings or settings
    out = out or sys.stdout
    configure_logging(project_settings.log_level)

    handler = COMMANDS.get(command)
    if handler is None:
        raise CommandError(f"Unknown command '{command}'. Expected {'|'.join(COMMANDS)}.")

    logger.info("Loading settings from %s", project_settings.environment)
    errors = project_settings.validate()
    if errors:
        raise ConfigurationError(f"Configuration errors: {errors}")

    try:
        handler(project_settings, authorizer, argv, out)
    except IO_ERRORS:
        logger.exception("I/O failure while running %s", command)
        return 1
    except CREDENTIAL_ERRORS:
        logger.exception("Credential failure while running %s", command)
        return 1
    return 0


def _default_authorizer(project_settings, authorizer: Optional[Authorizer]) -> Authorizer:
    return authorizer or InstalledAppAuthorizer(project_settings)


def _heart_rate(project_settings, authorizer, argv: List[str], out: TextIO) -> None:
    """Print the last lookback window of heart-rate samples for every matching source."""
    context = build_context(project_settings, _default_authorizer(project_settings, authorizer))
    matched = HeartRateService(context).run(out)
    logger.info("Printed data for %s source(s)", matched)


def _sources(project_settings, authorizer, argv: List[str], out: TextIO) -> None:
    """List every data source registered for the user."""
    context = build_context(project_settings, _default_authorizer(project_settings, authorizer))
    for source in HeartRateService(context).list_sources():
        out.write(format_source(source) + "\n")


def _authorize(project_settings, authorizer, argv: List[str], out: TextIO) -> None:
    """Obtain (or with --force, replace) the cached credential."""
    store = TokenStore(project_settings.token_dir, project_settings.token_user)
    if "--force" in argv:
        logger.info("Discarding cached credential at %s", store.path)
        store.clear()
    _default_authorizer(project_settings, authorizer).obtain_credential()
    out.write(f"Credential cached in {store.path}\n")


COMMANDS: Dict[str, Callable[..., None]] = {
    "heart_rate": _heart_rate,
    "sources": _sources,
    "authorize": _authorize,
}
