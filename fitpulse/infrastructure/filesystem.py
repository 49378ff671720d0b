import json
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from google.oauth2.credentials import Credentials

logger = logging.getLogger(__name__)


class TokenStore:
    """JSON-backed cache for one user's OAuth credential."""

    def __init__(self, directory: Path, user: str = "user") -> None:
        self.directory = Path(directory)
        self.user = user
        self.path = self.directory / f"{user}.json"

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self, scopes: Optional[Sequence[str]] = None) -> Optional[Credentials]:
        if not self.exists():
            return None
        try:
            info = json.loads(self.path.read_text())
            return Credentials.from_authorized_user_info(info, scopes=scopes)
        except (json.JSONDecodeError, ValueError):
            logger.warning("Ignoring unreadable token cache at %s", self.path, exc_info=True)
            return None

    def save(self, credential: Credentials) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # owner-only from creation; the real file is swapped in whole
        staging = self.path.with_suffix(".tmp")
        staging.unlink(missing_ok=True)
        fd = os.open(staging, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w") as handle:
            handle.write(credential.to_json())
        os.replace(staging, self.path)
        logger.debug("Stored credential for %s in %s", self.user, self.path)

    def clear(self) -> None:
        if self.exists():
            self.path.unlink()
