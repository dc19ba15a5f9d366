"""Shared pytest fixtures for the setup wizard test suite.

Provides reusable fixtures for:
- A scripted prompter that replays operator answers in order
- Sample topology models (minimal, fully local, hosted)
- A real TemplateRenderer and a SetupConfig rooted in tmp_path
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

import pytest

from deltas_setup.config import SetupConfig
from deltas_setup.emitters.templates import TemplateRenderer
from deltas_setup.models import AdminSettings, ServiceSelection, SmtpSettings
from deltas_setup.topology import build_topology


# ---------------------------------------------------------------------------
# Scripted prompter
# ---------------------------------------------------------------------------

class ScriptedPrompter:
    """Replays ``(message, answer)`` pairs in order.

    ``None`` accepts the prompt default (empty string for secrets). A
    rejected answer is followed by the next scripted answer for the same
    message, like a real re-prompt.
    """

    def __init__(self, script: Sequence[tuple[str, Any]]) -> None:
        self.script = list(script)
        self.asked: list[str] = []
        self.errors: list[str] = []
        self.defaults: dict[str, Any] = {}

    def _next(self, message: str) -> Any:
        assert self.script, f"Unexpected prompt: {message!r}"
        expected, answer = self.script.pop(0)
        assert expected == message, f"Expected prompt {expected!r}, got {message!r}"
        self.asked.append(message)
        return answer

    def _validated(self, message: str, default: str, validate) -> str:
        while True:
            answer = self._next(message)
            value = default if answer is None else answer
            error = validate(value) if validate else None
            if not error:
                return value
            self.errors.append(error)

    def text(self, message: str, default: str = "", validate=None) -> str:
        self.defaults[message] = default
        return self._validated(message, default, validate)

    def secret(self, message: str, validate=None) -> str:
        return self._validated(message, "", validate)

    def confirm(self, message: str, default: bool = False) -> bool:
        self.defaults[message] = default
        answer = self._next(message)
        return default if answer is None else answer

    def select(self, message: str, choices) -> str:
        answer = self._next(message)
        values = [value for value, _ in choices]
        assert answer in values, f"{answer!r} not in {values}"
        return answer

    @property
    def exhausted(self) -> bool:
        return not self.script


@pytest.fixture
def scripted_prompter():
    """Factory: ``scripted_prompter([(message, answer), ...])``."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

@pytest.fixture
def admin() -> AdminSettings:
    return AdminSettings(email="admin@deltas.email", password="StrongPassword123", org_name="Deltas")


@pytest.fixture
def make_model(admin):
    """Factory building a ``TopologyModel`` from selection keyword arguments."""

    def _make(
        smtp: Optional[SmtpSettings] = None,
        origin: str = "http://localhost:5173",
        auth_secret: str = "c2VjcmV0",
        **services: Optional[ServiceSelection],
    ):
        return build_topology(
            origin=origin,
            auth_secret=auth_secret,
            admin=admin,
            smtp=smtp or SmtpSettings(),
            **services,
        )

    return _make


@pytest.fixture
def local_postgres() -> ServiceSelection:
    return ServiceSelection(
        enabled=True,
        exposed=False,
        parameters={"POSTGRES_USER": "root", "POSTGRES_PASSWORD": "pw", "POSTGRES_DB": "deltas"},
    )


@pytest.fixture
def api_selection() -> ServiceSelection:
    return ServiceSelection(enabled=True, exposed=True, parameters={"API_PORT": "3000"})


@pytest.fixture
def app_selection() -> ServiceSelection:
    return ServiceSelection(enabled=True, exposed=True, parameters={"APP_PORT": "5173"})


@pytest.fixture
def nginx_selection() -> ServiceSelection:
    return ServiceSelection(
        enabled=True, exposed=True, parameters={"DOMAIN": "localhost", "SSL_ENABLED": "false"}
    )


@pytest.fixture
def make_full_local_model(make_model, api_selection, app_selection, nginx_selection, local_postgres):
    """Factory: every service deployed locally; infrastructure bound to loopback."""

    def _make():
        return make_model(
            api=api_selection,
            app=app_selection,
            nginx=nginx_selection,
            postgres=local_postgres,
            redis=ServiceSelection(enabled=True, exposed=False),
            clickhouse=ServiceSelection(
                enabled=True, exposed=False, parameters={"CLICKHOUSE_PASSWORD": "chpw"}
            ),
            minio=ServiceSelection(
                enabled=True,
                exposed=True,
                parameters={"S3_ACCESS_KEY": "minioadmin", "S3_SECRET_KEY": "miniosecret", "S3_BUCKET": "deltas-bucket"},
            ),
            smtp=SmtpSettings(host="localhost", port="1025", sender="noreply@localhost"),
        )

    return _make


@pytest.fixture
def full_local_model(make_full_local_model):
    return make_full_local_model()


# ---------------------------------------------------------------------------
# Paths & rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def setup_config(tmp_path: Path) -> SetupConfig:
    """A SetupConfig writing into a temporary directory."""
    return SetupConfig(output_dir=tmp_path, secret_command="echo generated-secret")
