"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Generator
from typing import Any

import pytest

from taskpilot.core.config import Settings, clear_settings_cache
from taskpilot.decomposition.models import ProviderConfig, Task, TaskPriority
from taskpilot.providers.base import AIProvider
from taskpilot.providers.errors import ErrorCategory

PROVIDER_ENV_VARS = (
    "AI_PROVIDER",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "GOOGLE_API_KEY",
    "GOOGLE_MODEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator:
    """Keep real credentials out of tests."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()

    yield

    clear_settings_cache()


@pytest.fixture
def make_settings(tmp_path):
    """Build Settings without reading a .env file."""

    def _make(**overrides: Any) -> Settings:
        overrides.setdefault("taskpilot_log_dir", str(tmp_path / "logs"))
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    """Settings with no provider credentials."""
    return make_settings()


@pytest.fixture
def sample_prd() -> str:
    """Provide a sample PRD."""
    return """# Todo API

Build a REST API for a todo application with the following features:
- User authentication (register, login, logout)
- Todo CRUD operations (create, read, update, delete)
- Due dates and reminders
- PostgreSQL database
"""


@pytest.fixture
def sample_task() -> Task:
    """Provide a single task for expansion and analysis."""
    return Task(
        id=3,
        title="Implement authentication",
        description="Register, login and logout endpoints",
        dependencies=[1, 2],
        priority=TaskPriority.HIGH,
        details="Use JWT access tokens with refresh tokens",
        test_strategy="Integration tests for each endpoint",
    )


@pytest.fixture
def tasks_payload() -> dict[str, Any]:
    """A well-formed task generation reply payload."""
    return {
        "tasks": [
            {
                "id": 1,
                "title": "Setup Project Repository",
                "description": "Initialize the repository and tooling",
                "status": "pending",
                "dependencies": [],
                "priority": "high",
                "details": "Create pyproject.toml and CI",
                "testStrategy": "CI pipeline runs",
            },
            {
                "id": 2,
                "title": "Create database schema",
                "description": "Users and todos tables",
                "status": "pending",
                "dependencies": [1],
                "priority": "high",
                "details": "Alembic migrations",
                "testStrategy": "Migration round trip",
            },
            {
                "id": 3,
                "title": "Implement authentication",
                "description": "Register, login and logout",
                "status": "pending",
                "dependencies": [1, 2],
                "priority": "medium",
                "details": "JWT",
                "testStrategy": "Endpoint tests",
            },
        ]
    }


# =============================================================================
# FAKE PROVIDER
# =============================================================================


class FakeProvider(AIProvider):
    """In-memory provider; behaviour is set through class attributes."""

    provider_type = "fake"
    display_name = "Fake"
    default_model = "fake-model"

    reply: str = "{}"
    available: bool = True
    init_error: Exception | None = None
    created: int = 0

    def __init__(self) -> None:
        super().__init__()
        type(self).created += 1
        self.requests: list[dict[str, Any]] = []

    def _create_client(self, config: ProviderConfig) -> Any:
        if self.init_error is not None:
            raise self.init_error
        return object()

    async def _complete(self, system_prompt, user_message, max_tokens):
        self.requests.append(
            {"system": system_prompt, "user": user_message, "max_tokens": max_tokens}
        )
        if not self.available:
            raise ConnectionError("network unreachable")
        return self.reply

    def _classify_vendor_error(self, error):
        if isinstance(error, ConnectionError):
            return ErrorCategory.NETWORK
        return None


@pytest.fixture
def fake_provider_class():
    """Create a fresh FakeProvider subclass per test."""

    def _make(
        reply: Any = None,
        available: bool = True,
        init_error: Exception | None = None,
    ) -> type[FakeProvider]:
        text = reply if isinstance(reply, str) or reply is None else json.dumps(reply)
        return type(
            "TestProvider",
            (FakeProvider,),
            {
                "reply": text or "{}",
                "available": available,
                "init_error": init_error,
                "created": 0,
            },
        )

    return _make


# Markers
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
