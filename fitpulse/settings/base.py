import os
from pathlib import Path
from typing import List

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CLIENT_SECRETS = PACKAGE_DIR / "resources" / "client_id.json"
DEFAULT_TOKEN_DIR = Path.home() / "sony_sbr12_auth"

HEART_RATE_BPM = "com.google.heart_rate.bpm"

# Read access to every public Fitness data type.
FITNESS_READ_SCOPES = [
    "https://www.googleapis.com/auth/fitness.activity.read",
    "https://www.googleapis.com/auth/fitness.blood_glucose.read",
    "https://www.googleapis.com/auth/fitness.blood_pressure.read",
    "https://www.googleapis.com/auth/fitness.body.read",
    "https://www.googleapis.com/auth/fitness.body_temperature.read",
    "https://www.googleapis.com/auth/fitness.heart_rate.read",
    "https://www.googleapis.com/auth/fitness.location.read",
    "https://www.googleapis.com/auth/fitness.nutrition.read",
    "https://www.googleapis.com/auth/fitness.oxygen_saturation.read",
    "https://www.googleapis.com/auth/fitness.reproductive_health.read",
    "https://www.googleapis.com/auth/fitness.sleep.read",
]


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Django-inspired settings container with explicit configuration."""

    def __init__(self) -> None:
        self.environment = os.environ.get("FITPULSE_ENV", "base")
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        self.client_secrets_file = Path(
            os.environ.get("FITPULSE_CLIENT_SECRETS", str(DEFAULT_CLIENT_SECRETS))
        )
        self.token_dir = Path(
            os.environ.get("FITPULSE_TOKEN_DIR", str(DEFAULT_TOKEN_DIR))
        ).expanduser()
        self.token_user = "user"
        self.scopes: List[str] = list(FITNESS_READ_SCOPES)

        self.oauth_host = "localhost"
        self.oauth_port = int(os.environ.get("FITPULSE_OAUTH_PORT", "0"))
        self.open_browser = _env_flag("FITPULSE_OPEN_BROWSER", "true")

        self.api_base_url = "https://www.googleapis.com/fitness/v1"
        self.request_timeout = int(os.environ.get("FITPULSE_REQUEST_TIMEOUT", "30"))
        self.user_id = "me"
        self.data_type = HEART_RATE_BPM
        self.lookback_hours = int(os.environ.get("FITPULSE_LOOKBACK_HOURS", "24"))

    def validate(self) -> dict:
        """Validate configuration and return any errors."""
        errors = {}

        if not self.client_secrets_file.is_file():
            errors["client_secrets"] = (
                f"OAuth client secrets not found at {self.client_secrets_file} "
                "(download an installed-app client JSON or set FITPULSE_CLIENT_SECRETS)"
            )

        if self.lookback_hours <= 0:
            errors["lookback_hours"] = "FITPULSE_LOOKBACK_HOURS must be a positive number of hours"

        return errors


settings = Settings()
