import importlib
import os

from dotenv import load_dotenv

load_dotenv()


def load_settings():
    """Load the configured settings module (mirrors Django's approach)."""
    module_path = os.environ.get(
        "FITPULSE_SETTINGS_MODULE",
        "fitpulse.settings.base",
    )
    module = importlib.import_module(module_path)
    return getattr(module, "settings")


settings = load_settings()

__all__ = ["settings"]
