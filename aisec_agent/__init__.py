"""In-process AI security telemetry agent.

Usage::

    import aisec_agent

    aisec_agent.init(ingestion_url="https://ingest.example.com/v1/events", agent_key="...")
    await aisec_agent.record_llm_call(
        aisec_agent.LlmCallContext(provider="openai", model="gpt-4o", prompt=prompt)
    )
    aisec_agent.shutdown()

Record functions never raise on network failures; they raise
``AgentSecurityError`` subclasses only when the agent is not initialized or
is missing ``ingestion_url``/``agent_key``.
"""

from __future__ import annotations

from typing import Any

from aisec_agent.agent import SecurityAgent
from aisec_agent.config.settings import AgentConfig
from aisec_agent.errors import AgentSecurityError, MissingConfigFieldError, NotInitializedError
from aisec_agent.events.protocol import (
    EventType,
    HttpCallContext,
    LlmCallContext,
    LogEventContext,
    LogLevel,
    PolicyViolationContext,
    Severity,
    TelemetryEvent,
)
from aisec_agent.pii.classifier import classify_pii, classify_secrets
from aisec_agent.upload.transport import DeliveryStatus, SendOutcome

SDK_VERSION = "1.0.0"

__all__ = [
    "SDK_VERSION",
    "AgentConfig",
    "AgentSecurityError",
    "DeliveryStatus",
    "EventType",
    "HttpCallContext",
    "LlmCallContext",
    "LogEventContext",
    "LogLevel",
    "MissingConfigFieldError",
    "NotInitializedError",
    "PolicyViolationContext",
    "SecurityAgent",
    "SendOutcome",
    "Severity",
    "TelemetryEvent",
    "classify_pii",
    "classify_secrets",
    "get_agent",
    "init",
    "record_http_call",
    "record_llm_call",
    "record_log_event",
    "record_policy_violation",
    "shutdown",
]

_default_agent = SecurityAgent()


def get_agent() -> SecurityAgent:
    """Return the process-wide agent used by the module-level functions."""
    return _default_agent


def init(config: AgentConfig | None = None, **overrides: Any) -> AgentConfig:
    return _default_agent.init(config, **overrides)


def shutdown() -> None:
    _default_agent.shutdown()


async def record_llm_call(ctx: LlmCallContext) -> None:
    await _default_agent.record_llm_call(ctx)


async def record_http_call(ctx: HttpCallContext) -> None:
    await _default_agent.record_http_call(ctx)


async def record_log_event(ctx: LogEventContext) -> None:
    await _default_agent.record_log_event(ctx)


async def record_policy_violation(ctx: PolicyViolationContext) -> None:
    await _default_agent.record_policy_violation(ctx)
