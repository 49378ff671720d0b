import logging

import requests
from requests.auth import AuthBase

logger = logging.getLogger(__name__)


class CredentialAuth(AuthBase):
    """Attach the bearer token, refreshing through the authorizer when it lapses."""

    def __init__(self, authorizer, credential) -> None:
        self.authorizer = authorizer
        self.credential = credential

    def __call__(self, request):
        if not self.credential.valid:
            logger.info("Access token expired, refreshing")
            self.credential = self.authorizer.refresh_credential(self.credential)
        request.headers["Authorization"] = f"Bearer {self.credential.token}"
        return request


def build_session(authorizer, credential) -> requests.Session:
    session = requests.Session()
    session.auth = CredentialAuth(authorizer, credential)
    session.headers.update({"Accept": "application/json"})
    return session
