import os

from fitpulse.settings.base import Settings


class ProdSettings(Settings):
    """Unattended runs: no browser to open and only warnings on stderr."""

    def __init__(self) -> None:
        super().__init__()
        self.environment = "prod"
        self.log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
        # the consent URL is printed instead; forward the port to finish it
        self.open_browser = False
        self.oauth_port = int(os.environ.get("FITPULSE_OAUTH_PORT", "8080"))


settings = ProdSettings()
