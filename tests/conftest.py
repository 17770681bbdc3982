import os
import tempfile
from collections.abc import Generator

os.environ.setdefault("LMLOG_DATA_DIR", tempfile.mkdtemp(prefix="lmlog-test-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import lm_log_service.models  # noqa: E402, F401 (registers all tables)
from lm_log_service.database import get_session  # noqa: E402
from lm_log_service.main import app  # noqa: E402
from lm_log_service.schemas.log_record import CreateLogRecord  # noqa: E402


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(eng)
    return eng


@pytest.fixture
def session(engine, monkeypatch):
    monkeypatch.setattr("lm_log_service.database.engine", engine)
    with Session(engine) as sess:
        yield sess


@pytest.fixture
def client(engine, monkeypatch):
    monkeypatch.setattr("lm_log_service.database.engine", engine)

    def _override_session() -> Generator[Session, None, None]:
        with Session(engine) as sess:
            yield sess

    app.dependency_overrides[get_session] = _override_session
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture
def log_payload():
    """Return a factory for valid create/replace request bodies."""

    def _make(**overrides) -> dict:
        payload = {
            "model_provider": "openai",
            "model_name": "gpt-4o",
            "model_version": "2024-08-06",
            "app_name": "support-bot",
            "app_project": "helpdesk",
            "app_version": "1.4.2",
            "prompt": [
                {"role": "system", "content": "You are a helpful assistant."},
                {"role": "user", "content": "How do I reset my password?"},
            ],
            "response": "Open Settings and choose 'Reset password'.",
            "prompt_user_id": "user-42",
            "prompt_app_hostname": "web-01.internal",
            "prompt_submit_ts": "2025-03-14T09:26:53.589793",
            "response_receipt_ts": "2025-03-14T09:26:55.123456",
            "input_tokens": 10,
            "output_tokens": 5,
            "total_tokens": 15,
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def make_create(log_payload):
    def _make(**overrides) -> CreateLogRecord:
        return CreateLogRecord.model_validate(log_payload(**overrides))

    return _make
