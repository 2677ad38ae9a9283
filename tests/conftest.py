"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

import pytest

from firebase_cli.client.api import ApiClient
from firebase_cli.client.operations import OperationPoller
from firebase_cli.config.manager import ConfigStore
from firebase_cli.management.projects import ProjectsAPI
from firebase_cli.models.auth import LoginResult, StructuredIdentity, Tokens
from firebase_cli.utils.prompt import Choice, Prompter

FIREBASE = "https://firebase.googleapis.com"
FB = f"{FIREBASE}/v1beta1"
FB_V1 = f"{FIREBASE}/v1"
CRM = "https://cloudresourcemanager.googleapis.com/v1"


class FakePrompter(Prompter):
    """Prompter that answers from scripted queues and records what was asked."""

    def __init__(
        self,
        *,
        confirms: Iterable[bool] = (),
        texts: Iterable[str] = (),
        selects: Iterable[str] = (),
        non_interactive: bool = False,
    ) -> None:
        super().__init__(non_interactive=non_interactive)
        self.confirms = list(confirms)
        self.texts = list(texts)
        self.selects = list(selects)
        self.asked: list[str] = []
        self.validation_errors: list[str] = []
        self.last_choices: list[Choice] = []

    def confirm(self, message: str, *, default: bool = False) -> bool:
        self._ensure_interactive(message)
        self.asked.append(message)
        return self.confirms.pop(0)

    def text(self, message, *, default=None, validate=None) -> str:
        self._ensure_interactive(message)
        self.asked.append(message)
        while True:
            answer = self.texts.pop(0) or (default or "")
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.validation_errors.append(error)

    def select(self, message: str, choices: Sequence[Choice]) -> str:
        self._ensure_interactive(message)
        self.asked.append(message)
        self.last_choices = list(choices)
        wanted = self.selects.pop(0)
        for choice in choices:
            if choice.name == wanted:
                return choice.value
        raise AssertionError(f"{wanted!r} is not among the offered choices")


class FakeAuthenticator:
    """Stands in for the Google OAuth flow."""

    def __init__(self, result: LoginResult | None = None) -> None:
        self.result = result or LoginResult(
            user=StructuredIdentity(email="dev@example.com", sub="123"),
            tokens=Tokens(access_token="ya29.new", refresh_token="1//refresh"),
            scopes=["openid", "email"],
        )
        self.calls: list[tuple[bool, str | None]] = []

    def login(self, use_localhost: bool, email_hint: str | None = None) -> LoginResult:
        self.calls.append((use_localhost, email_hint))
        return self.result


def no_sleep_poller(client: ApiClient) -> OperationPoller:
    return OperationPoller(client, interval=0, timeout=5, sleep=lambda _: None)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CODESPACES", "GOOGLE_CLOUD_WORKSTATIONS", "MONOSPACE_ENV", "CLOUD_SHELL"):
        monkeypatch.delenv(name, raising=False)
    # Keep rich from wrapping long lines in captured output
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "configstore.toml"


@pytest.fixture
def store(tmp_config: Path) -> ConfigStore:
    """Return a ConfigStore pointed at a temp config file."""
    return ConfigStore(config_path=tmp_config)


@pytest.fixture
def logged_in_store(store: ConfigStore) -> ConfigStore:
    store.set("user", {"email": "dev@example.com", "sub": "123"})
    store.set("tokens", {"access_token": "ya29.token", "refresh_token": "1//refresh"})
    return store


@pytest.fixture
def api() -> ProjectsAPI:
    """ProjectsAPI against the real origins (mocked with respx), no auth, no sleeping."""
    projects_api = ProjectsAPI(
        firebase=ApiClient(FIREBASE, "v1beta1"),
        firebase_v1=ApiClient(FIREBASE, "v1"),
        resource_manager=ApiClient("https://cloudresourcemanager.googleapis.com", "v1"),
        poller_factory=no_sleep_poller,
    )
    yield projects_api
    projects_api.close()


@pytest.fixture
def sample_projects() -> list[dict]:
    return [
        {"projectId": "zeta-app", "projectNumber": "3", "displayName": "Zeta", "state": "ACTIVE"},
        {"projectId": "Alpha-app", "projectNumber": "1", "displayName": "Alpha", "state": "ACTIVE"},
        {"projectId": "beta-app", "projectNumber": "2", "state": "ACTIVE"},
    ]


@pytest.fixture
def make_prompter():
    """Factory for scripted prompters."""
    return FakePrompter


@pytest.fixture
def authenticator() -> FakeAuthenticator:
    return FakeAuthenticator()
