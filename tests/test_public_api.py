"""Tests for the module-level host API backed by the default agent."""

from __future__ import annotations

import asyncio

import pytest

import aisec_agent
from aisec_agent import (
    HttpCallContext,
    LlmCallContext,
    LogEventContext,
    NotInitializedError,
    PolicyViolationContext,
)

# Nothing listens on the discard port, so connections are refused
UNREACHABLE_URL = "http://127.0.0.1:9/ingest"


@pytest.fixture
def default_agent(monkeypatch, http_client):
    agent = aisec_agent.get_agent()
    monkeypatch.setattr(agent.transport, "_client", http_client)
    return agent


def test_sdk_version():
    assert aisec_agent.SDK_VERSION == "1.0.0"


def test_classifiers_exported():
    assert aisec_agent.classify_pii("a@b.io")["email"] is True
    assert aisec_agent.classify_secrets("") == {"api_key_pattern": False}


@pytest.mark.asyncio
async def test_record_before_init_raises():
    with pytest.raises(NotInitializedError):
        await aisec_agent.record_llm_call(LlmCallContext(provider="openai", prompt="hi"))


@pytest.mark.asyncio
async def test_record_resolves_when_network_fails():
    aisec_agent.init(ingestion_url=UNREACHABLE_URL, agent_key="k1", fetch_policies_interval_ms=0)

    assert await aisec_agent.record_llm_call(LlmCallContext(provider="openai", prompt="hi")) is None
    assert await aisec_agent.record_http_call(HttpCallContext(host="h")) is None
    assert await aisec_agent.record_log_event(LogEventContext(level="debug", message="m")) is None
    assert (
        await aisec_agent.record_policy_violation(
            PolicyViolationContext(violation_type="v", severity="critical")
        )
        is None
    )


@pytest.mark.asyncio
async def test_shutdown_restores_not_initialized():
    aisec_agent.init(ingestion_url=UNREACHABLE_URL, agent_key="k1", fetch_policies_interval_ms=0)
    aisec_agent.shutdown()
    with pytest.raises(NotInitializedError):
        await aisec_agent.record_log_event(LogEventContext(level="info", message="m"))


@pytest.mark.asyncio
async def test_init_from_environment(monkeypatch, default_agent, handler):
    monkeypatch.setenv("AI_SEC_INGEST_URL", "https://env.test/ingest")
    monkeypatch.setenv("AI_SEC_AGENT_KEY", "env-key")
    monkeypatch.setenv("AI_SEC_AGENT_ID", "env-agent")
    aisec_agent.init(fetch_policies_interval_ms=0)

    await aisec_agent.record_policy_violation(
        PolicyViolationContext(violation_type="prompt_injection", severity="high")
    )

    request = handler.requests[0]
    assert str(request.url) == "https://env.test/ingest"
    assert request.headers["x-agent-key"] == "env-key"
    assert handler.payloads[0]["catalog_agent_id"] == "env-agent"


@pytest.mark.asyncio
async def test_two_inits_leave_one_refresher(default_agent):
    aisec_agent.init(ingestion_url=UNREACHABLE_URL, agent_key="k1", fetch_policies_interval_ms=5000)
    first = default_agent.refresher._task
    aisec_agent.init(ingestion_url=UNREACHABLE_URL, agent_key="k1", fetch_policies_interval_ms=200)
    await asyncio.sleep(0.01)

    assert first.cancelled()
    assert default_agent.refresher.running
    assert default_agent.refresher.interval_ms == 200

    aisec_agent.shutdown()
    await asyncio.sleep(0)
    assert not default_agent.refresher.running
