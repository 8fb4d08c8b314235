"""Shared fixtures: fake credential providers and secret stores."""
from pathlib import Path

import pytest

from secret_lister.secrets.domains.errors import MalformedResponseError, RequestError
from secret_lister.secrets.domains.models import SecretProperties
from secret_lister.secrets.domains.providers import Provider


class FakeCredentialProvider:
    """Records acquire() calls; optionally fails."""

    def __init__(self, events, error=None):
        self.events = events
        self.error = error
        self.credential = object()

    def acquire(self):
        self.events.append("acquire")
        if self.error:
            raise self.error
        return self.credential


class FakeSecretStore:
    """Client factory whose clients yield the given ids, optionally failing mid-stream."""

    def __init__(self, events, ids=(), fail_after=None, construct_error=None, request_error=None):
        self.events = events
        self.ids = list(ids)
        self.fail_after = fail_after
        self.construct_error = construct_error
        self.request_error = request_error
        self.endpoints = []
        self.credentials = []
        self.closed = False

    def __call__(self, endpoint, credential):
        self.events.append("construct")
        if self.construct_error:
            raise self.construct_error
        self.endpoints.append(endpoint)
        self.credentials.append(credential)
        return self

    def list_secret_properties(self):
        self.events.append("list")
        if self.request_error:
            raise self.request_error
        return self._pages()

    def _pages(self):
        for index, identifier in enumerate(self.ids):
            if self.fail_after is not None and index == self.fail_after:
                raise RequestError("connection reset while fetching next page")
            yield SecretProperties(id=identifier)
        if self.fail_after is not None and self.fail_after >= len(self.ids):
            raise RequestError("connection reset while fetching next page")

    def extract_name(self, identifier):
        if "/secrets/" not in identifier:
            raise MalformedResponseError(f"Malformed secret identifier '{identifier}'")
        return identifier.split("/secrets/", 1)[1].split("/")[0]

    def close(self):
        self.closed = True


@pytest.fixture
def events():
    return []


@pytest.fixture
def make_provider(events):
    """Build a Provider around fakes sharing one event log."""

    def _make(ids=(), credential_error=None, **store_kwargs):
        credentials = FakeCredentialProvider(events, error=credential_error)
        store = FakeSecretStore(events, ids=ids, **store_kwargs)
        provider = Provider(
            name="fake",
            endpoint_label="Key Vault endpoint",
            env_var="AZURE_KEYVAULT_URL",
            credential_provider=credentials,
            client_factory=store,
        )
        return provider, store

    return _make


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to create a temporary home directory for testing."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    monkeypatch.delenv("SECRET_LISTER_CONFIG", raising=False)
    return fake_home


@pytest.fixture
def temp_config_dir(temp_home):
    """Fixture to create temporary config directory."""
    config_dir = temp_home / ".config" / "secret-lister"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
