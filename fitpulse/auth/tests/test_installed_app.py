from pathlib import Path

import pytest
from google.auth.exceptions import RefreshError
from oauthlib.oauth2.rfc6749.errors import AccessDeniedError

from fitpulse.auth.installed_app import InstalledAppAuthorizer
from fitpulse.core.exceptions import AuthorizationError


class DummySettings:
    client_secrets_file = Path("/nonexistent/client_id.json")
    token_dir = Path("/nonexistent/auth")
    token_user = "user"
    scopes = ["https://www.googleapis.com/auth/fitness.heart_rate.read"]
    oauth_host = "localhost"
    oauth_port = 0
    open_browser = False


class DummyCredential:
    def __init__(self, valid=True, refresh_token="refresh", fail_refresh=False):
        self.valid = valid
        self.refresh_token = refresh_token
        self.expiry = None
        self.fail_refresh = fail_refresh
        self.refresh_requests = []

    def refresh(self, request):
        if self.fail_refresh:
            raise RefreshError("invalid_grant")
        self.refresh_requests.append(request)
        self.valid = True


class DummyStore:
    path = Path("/nonexistent/auth/user.json")

    def __init__(self, credential=None):
        self.credential = credential
        self.saved = []

    def load(self, scopes=None):
        return self.credential

    def save(self, credential):
        self.saved.append(credential)


class DummyFlow:
    def __init__(self, credential=None, error=None):
        self.credential = credential or DummyCredential()
        self.error = error
        self.kwargs = None

    def run_local_server(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.credential


def _flow_factory(flow, calls):
    def factory(path, scopes=None):
        calls.append((path, scopes))
        return flow

    return factory


def test_valid_cached_credential_skips_consent():
    cached = DummyCredential()
    calls = []
    authorizer = InstalledAppAuthorizer(
        DummySettings(), token_store=DummyStore(cached), flow_factory=_flow_factory(DummyFlow(), calls)
    )

    assert authorizer.obtain_credential() is cached
    assert calls == []


def test_expired_cached_credential_is_refreshed_and_saved():
    cached = DummyCredential(valid=False)
    store = DummyStore(cached)
    authorizer = InstalledAppAuthorizer(
        DummySettings(), token_store=store, flow_factory=_flow_factory(DummyFlow(), []),
        request_factory=lambda: "request",
    )

    credential = authorizer.obtain_credential()

    assert credential is cached
    assert cached.refresh_requests == ["request"]
    assert store.saved == [cached]


def test_missing_cache_runs_consent_flow():
    flow = DummyFlow()
    calls = []
    store = DummyStore()
    authorizer = InstalledAppAuthorizer(
        DummySettings(), token_store=store, flow_factory=_flow_factory(flow, calls)
    )

    credential = authorizer.obtain_credential()

    assert credential is flow.credential
    assert store.saved == [flow.credential]
    assert calls == [(str(DummySettings.client_secrets_file), DummySettings.scopes)]
    assert flow.kwargs["access_type"] == "offline"
    assert flow.kwargs["open_browser"] is False


def test_expired_without_refresh_token_runs_consent_flow():
    flow = DummyFlow()
    authorizer = InstalledAppAuthorizer(
        DummySettings(),
        token_store=DummyStore(DummyCredential(valid=False, refresh_token=None)),
        flow_factory=_flow_factory(flow, []),
    )
    assert authorizer.obtain_credential() is flow.credential


def test_malformed_secrets_raise_authorization_error():
    def factory(path, scopes=None):
        raise ValueError("Client secrets must be for a web or installed app.")

    authorizer = InstalledAppAuthorizer(DummySettings(), token_store=DummyStore(), flow_factory=factory)
    with pytest.raises(AuthorizationError):
        authorizer.obtain_credential()


def test_declined_consent_raises_authorization_error():
    flow = DummyFlow(error=AccessDeniedError())
    store = DummyStore()
    authorizer = InstalledAppAuthorizer(DummySettings(), token_store=store, flow_factory=_flow_factory(flow, []))

    with pytest.raises(AuthorizationError):
        authorizer.obtain_credential()
    assert store.saved == []


def test_failed_refresh_raises_authorization_error():
    authorizer = InstalledAppAuthorizer(
        DummySettings(), token_store=DummyStore(), request_factory=lambda: None
    )
    with pytest.raises(AuthorizationError):
        authorizer.refresh_credential(DummyCredential(valid=False, fail_refresh=True))


def test_refresh_requires_refresh_token():
    authorizer = InstalledAppAuthorizer(DummySettings(), token_store=DummyStore())
    with pytest.raises(AuthorizationError):
        authorizer.refresh_credential(DummyCredential(valid=False, refresh_token=None))
