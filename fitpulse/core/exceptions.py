class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


class CommandError(Exception):
    """Raised for invalid manage.py commands."""


class AuthorizationError(Exception):
    """Raised when a credential cannot be obtained, loaded or refreshed."""


class FitnessApiError(Exception):
    """Raised when the Fitness API returns a payload we cannot interpret."""
