"""Shared test fixtures for the agent tests."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

import aisec_agent
from aisec_agent.agent import SecurityAgent

INGEST_URL = "https://ingest.test/v1/events"

_ENV_VARS = ("AI_SEC_PROJECT_ID", "AI_SEC_INGEST_URL", "AI_SEC_AGENT_KEY", "AI_SEC_AGENT_ID")


class RecordingHandler:
    """MockTransport handler that records requests and replays a fixed reply."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 202
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text="ok")

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host AI_SEC_* variables out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_default_agent():
    yield
    aisec_agent.shutdown()


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def http_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def agent(http_client):
    """A SecurityAgent that posts into the recording handler."""
    agent = SecurityAgent(http_client=http_client)
    yield agent
    agent.shutdown()


@pytest.fixture
def ready_agent(agent):
    agent.init(
        ingestion_url=INGEST_URL,
        agent_key="k1",
        project_id="proj-1",
        fetch_policies_interval_ms=0,
    )
    return agent
