"""Tests for the FastAPI routes (mocked Hashnode and LLM)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

# Ensure auth is disabled for tests (no INTERNAL_TOKEN set)
import os
os.environ.pop("INTERNAL_TOKEN", None)

from main import app
from schemas.response import BlogPost


client = TestClient(app)

_POST = BlogPost(
    title="Scaling Postgres",
    author="Ada Lovelace",
    content="Read replicas and connection pooling.",
    source_url="https://eng.example.dev/scaling-postgres",
)


def _mock_judge_json(prompt: str, msg: str, **kw):  # noqa: ARG001
    """Return canned verdicts depending on which rubric is calling."""
    if "expert editor" in prompt:
        return {"hasHallucinations": False, "factuallyAccurate": True, "coveredKeyPoints": True, "explanation": "ok"}
    if "content strategist" in prompt:
        return {"capturedCoreThesis": True, "technicalDepthAdequate": False, "alignmentScore": 0.5, "explanation": ""}
    if "minimalist editor" in prompt:
        return {"containsFiller": False, "isRepetitive": False, "efficiencyScore": 0.9, "explanation": ""}
    return {}


def _known_post(host: str, slug: str):
    return _POST if (host, slug) == ("eng.example.dev", "scaling-postgres") else None


@pytest.fixture(autouse=True)
def _patch_io():
    patches = [
        patch("engine.fetcher.query_post", new_callable=AsyncMock, side_effect=_known_post),
        patch("engine.agent.chat_completion", new_callable=AsyncMock, return_value="TITLE: Scaling Postgres"),
        patch("engine.judge.chat_completion_json", new_callable=AsyncMock, side_effect=_mock_judge_json),
    ]
    for p in patches:
        p.start()
    yield
    for p in patches:
        p.stop()


class TestHealthEndpoint:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["engine"] == "socialia"


class TestSummarizeEndpoint:
    def test_successful_summary(self):
        resp = client.post("/summarize", json={"postSlug": "scaling-postgres", "hostname": "eng.example.dev"})
        assert resp.status_code == 200
        assert resp.json() == {"summary": "TITLE: Scaling Postgres"}

    def test_snake_case_accepted(self):
        resp = client.post("/summarize", json={"post_slug": "scaling-postgres", "hostname": "eng.example.dev"})
        assert resp.status_code == 200

    def test_missing_post_is_404(self):
        resp = client.post("/summarize", json={"postSlug": "ghost-post", "hostname": "eng.example.dev"})
        assert resp.status_code == 404
        assert "eng.example.dev" in resp.json()["detail"]

    def test_empty_slug_rejected(self):
        resp = client.post("/summarize", json={"postSlug": "", "hostname": "eng.example.dev"})
        assert resp.status_code == 422

    def test_llm_failure_is_500(self):
        with patch("engine.agent.chat_completion", new_callable=AsyncMock, side_effect=RuntimeError("rate limited")):
            resp = client.post("/summarize", json={"postSlug": "scaling-postgres", "hostname": "eng.example.dev"})
        assert resp.status_code == 500


class TestToolEndpoint:
    def test_success_by_url(self):
        resp = client.post("/tools/get-hashnode-summary", json={"url": "https://eng.example.dev/scaling-postgres"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["summaryStatus"] == "Success"
        assert data["author"] == "Ada Lovelace"

    def test_not_found_still_200(self):
        resp = client.post("/tools/get-hashnode-summary", json={"postSlug": "ghost-post", "hostname": "eng.example.dev"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "Not Found"
        assert "ghost-post" in data["summaryStatus"]
        assert "eng.example.dev" in data["summaryStatus"]

    def test_no_arguments_still_200(self):
        resp = client.post("/tools/get-hashnode-summary", json={})
        assert resp.status_code == 200
        assert resp.json()["summaryStatus"].startswith("Error")


class TestAgentEndpoint:
    def test_generate_scores_reply_by_default(self):
        call = SimpleNamespace(
            id="call_1",
            function=SimpleNamespace(
                name="get_hashnode_summary",
                arguments='{"url": "https://eng.example.dev/scaling-postgres"}',
            ),
        )
        replies = [
            SimpleNamespace(content=None, tool_calls=[call]),
            SimpleNamespace(content="Scaling Postgres by Ada Lovelace: use read replicas.", tool_calls=None),
        ]
        with patch("engine.agent.chat_completion_with_tools", new_callable=AsyncMock, side_effect=replies):
            resp = client.post(
                "/agent/generate",
                json={
                    "messages": [{"role": "user", "content": "Summarize https://eng.example.dev/scaling-postgres"}],
                },
            )

        assert resp.status_code == 200
        data = resp.json()
        assert data["text"].startswith("Scaling Postgres by Ada Lovelace")
        assert data["run"]["output"][0]["toolInvocations"][0]["name"] == "get_hashnode_summary"
        scores = data["evaluation"]["scores"]
        assert set(scores) == {
            "blog-summary-accuracy-scorer",
            "blog-summarization-quality-scorer",
            "blog-conciseness-scorer",
        }
        assert scores["blog-summary-accuracy-scorer"]["score"] == 1
        assert scores["blog-summarization-quality-scorer"]["score"] == pytest.approx(0.55)
        assert scores["blog-conciseness-scorer"]["score"] == pytest.approx(0.9)
        assert scores["blog-summary-accuracy-scorer"]["explanation"].endswith("ok")
        assert "reason" not in scores["blog-summary-accuracy-scorer"]
        assert data["evaluation"]["errors"] == {}

    def test_generate_without_evaluation(self):
        reply = SimpleNamespace(content="Which post? Please share its URL.", tool_calls=None)
        with patch("engine.agent.chat_completion_with_tools", new_callable=AsyncMock, return_value=reply):
            resp = client.post(
                "/agent/generate",
                json={"messages": [{"role": "user", "content": "hi"}], "evaluate": False},
            )
        assert resp.status_code == 200
        assert resp.json()["evaluation"] is None

    def test_empty_messages_rejected(self):
        resp = client.post("/agent/generate", json={"messages": []})
        assert resp.status_code == 422


class TestEvaluateEndpoint:
    _RUN = {
        "input": [{"role": "user", "content": "Summarize the Postgres post"}],
        "output": [{"role": "assistant", "content": "Postgres scales with replicas."}],
    }

    def test_selected_scorers(self):
        resp = client.post(
            "/evaluate",
            json={"run": self._RUN, "scorers": ["blog-conciseness-scorer", "tool-call-accuracy-scorer"]},
        )
        assert resp.status_code == 200
        scores = resp.json()["scores"]
        assert set(scores) == {"blog-conciseness-scorer", "tool-call-accuracy-scorer"}
        assert scores["tool-call-accuracy-scorer"]["score"] == 0
        assert scores["blog-conciseness-scorer"]["scorerId"] == "blog-conciseness-scorer"

    def test_judge_parse_failure_reported(self):
        with patch("engine.judge.chat_completion_json", new_callable=AsyncMock, return_value={"nonsense": 1}):
            resp = client.post("/evaluate", json={"run": self._RUN, "scorers": ["blog-summary-accuracy-scorer"]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["scores"] == {}
        assert "JudgeParseError" in data["errors"]["blog-summary-accuracy-scorer"]

    def test_unknown_scorer_is_422(self):
        resp = client.post("/evaluate", json={"run": self._RUN, "scorers": ["nope"]})
        assert resp.status_code == 422


class TestInternalAuth:
    def test_no_auth_when_token_not_configured(self):
        resp = client.post("/tools/get-hashnode-summary", json={"url": "https://eng.example.dev/scaling-postgres"})
        assert resp.status_code == 200

    def test_auth_rejects_bad_token_when_configured(self):
        from config import settings
        original = settings.internal_token
        try:
            settings.internal_token = "super-secret-token"
            resp = client.post(
                "/summarize",
                json={"postSlug": "scaling-postgres", "hostname": "eng.example.dev"},
                headers={"X-Internal-Token": "wrong-token"},
            )
            assert resp.status_code == 401
        finally:
            settings.internal_token = original

    def test_auth_accepts_correct_token_when_configured(self):
        from config import settings
        original = settings.internal_token
        try:
            settings.internal_token = "super-secret-token"
            resp = client.post(
                "/summarize",
                json={"postSlug": "scaling-postgres", "hostname": "eng.example.dev"},
                headers={"X-Internal-Token": "super-secret-token"},
            )
            assert resp.status_code == 200
        finally:
            settings.internal_token = original

    def test_auth_rejects_missing_token_when_configured(self):
        from config import settings
        original = settings.internal_token
        try:
            settings.internal_token = "super-secret-token"
            resp = client.post("/evaluate", json={"run": {"input": [], "output": []}})
            assert resp.status_code == 401
        finally:
            settings.internal_token = original
