from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from measurebot.api import ask as ask_api
from measurebot.core.errors import ExecutionFailure, TranslationFailure
from measurebot.db.session import get_session
from measurebot.main import app
from measurebot.services import pipeline


@pytest.fixture
def client():
    async def no_session():
        yield None

    app.dependency_overrides[get_session] = no_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_translator(result=None, exc=None):
    async def translator(prompt: str) -> str:
        if exc is not None:
            raise exc
        return result

    app.dependency_overrides[ask_api.get_translator] = lambda: translator


def test_ask_returns_rows_unchanged(client, monkeypatch, measurement_rows) -> None:
    async def fake_run_sql(session, sql):
        assert sql == "SELECT 1"
        return measurement_rows

    monkeypatch.setattr(pipeline, "run_sql", fake_run_sql)
    _use_translator("SELECT 1")

    response = client.post("/ask", json={"question": "hemoglobin trend"})

    assert response.status_code == 200
    assert response.json() == measurement_rows


def test_ask_translation_failure_is_opaque_500(client, monkeypatch) -> None:
    async def fake_run_sql(session, sql):
        raise AssertionError("executor must not run")

    monkeypatch.setattr(pipeline, "run_sql", fake_run_sql)
    _use_translator(exc=TranslationFailure("api key sk-secret rejected"))

    response = client.post("/ask", json={"question": "anything"})

    assert response.status_code == 500
    assert response.text == "Server Error"
    assert "sk-secret" not in response.text


def test_ask_execution_failure_is_opaque_500_and_skips_rendering(client, monkeypatch) -> None:
    async def fake_run_sql(session, sql):
        raise ExecutionFailure('column "secret_col" does not exist', sql=sql)

    def fake_render(rows):
        raise AssertionError("renderer must not run")

    monkeypatch.setattr(pipeline, "run_sql", fake_run_sql)
    monkeypatch.setattr(ask_api, "render_rows", fake_render)
    _use_translator("SELECT secret_col FROM vw_patients")

    response = client.post("/ask", json={"question": "anything"})

    assert response.status_code == 500
    assert response.text == "Server Error"


def test_ask_requires_question(client) -> None:
    assert client.post("/ask", json={}).status_code == 422


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_slack_events_unavailable_before_startup(client) -> None:
    response = client.post("/slack/events", json={"type": "url_verification", "challenge": "abc"})
    assert response.status_code == 503
