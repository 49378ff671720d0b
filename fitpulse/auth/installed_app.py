import logging
from typing import Callable, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from fitpulse.auth.base import Authorizer
from fitpulse.core.exceptions import AuthorizationError
from fitpulse.infrastructure.filesystem import TokenStore

logger = logging.getLogger(__name__)

AUTHORIZATION_PROMPT = "Open this URL in a browser to allow read access to your fitness data:\n{url}\n"
SUCCESS_MESSAGE = "Authorization complete. You may close this window."


class InstalledAppAuthorizer(Authorizer):
    """Authorization-code flow with a local redirect listener and a file token cache.

    A cached credential is reused while it is valid, refreshed when it has
    expired but carries a refresh token, and otherwise the user is sent
    through the consent screen again.
    """

    def __init__(
        self,
        project_settings,
        token_store: Optional[TokenStore] = None,
        flow_factory: Callable[..., InstalledAppFlow] = InstalledAppFlow.from_client_secrets_file,
        request_factory: Callable[[], Request] = Request,
    ) -> None:
        self.settings = project_settings
        self.token_store = token_store or TokenStore(
            project_settings.token_dir, project_settings.token_user
        )
        self.flow_factory = flow_factory
        self.request_factory = request_factory

    def obtain_credential(self) -> Credentials:
        credential = self.token_store.load(self.settings.scopes)
        if credential is not None and credential.valid:
            logger.info("Using cached credential from %s", self.token_store.path)
            return credential
        if credential is not None and credential.refresh_token:
            return self.refresh_credential(credential)
        return self._run_consent_flow()

    def refresh_credential(self, credential: Credentials) -> Credentials:
        if not credential.refresh_token:
            raise AuthorizationError("Credential has no refresh token; run `manage.py authorize --force`")
        try:
            credential.refresh(self.request_factory())
        except RefreshError as exc:
            raise AuthorizationError(f"Refreshing the access token failed: {exc}") from exc
        self.token_store.save(credential)
        logger.info("Refreshed access token (expires %s)", credential.expiry)
        return credential

    def _run_consent_flow(self) -> Credentials:
        secrets_file = str(self.settings.client_secrets_file)
        try:
            flow = self.flow_factory(secrets_file, scopes=self.settings.scopes)
        except ValueError as exc:
            raise AuthorizationError(f"Malformed client secrets in {secrets_file}: {exc}") from exc

        logger.info("No usable cached credential, requesting consent")
        try:
            credential = flow.run_local_server(
                host=self.settings.oauth_host,
                port=self.settings.oauth_port,
                open_browser=self.settings.open_browser,
                authorization_prompt_message=AUTHORIZATION_PROMPT,
                success_message=SUCCESS_MESSAGE,
                access_type="offline",
                prompt="consent",
            )
        except OAuth2Error as exc:
            raise AuthorizationError(f"Authorization was not granted: {exc.description or exc.error}") from exc

        self.token_store.save(credential)
        logger.info("Stored new credential in %s", self.token_store.path)
        return credential
