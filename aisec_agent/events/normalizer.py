"""Builds telemetry event records from host call contexts.

One builder per context kind. The classifier runs over the primary
sensitive field of each kind; raw prompt/response text never leaves
this module, only its length.
"""

from __future__ import annotations

from typing import Any

from aisec_agent.events.protocol import (
    EventType,
    HttpCallContext,
    LlmCallContext,
    LogEventContext,
    PolicyViolationContext,
    TelemetryEvent,
)
from aisec_agent.pii.classifier import classify_pii, classify_secrets


def build_llm_call_event(ctx: LlmCallContext) -> TelemetryEvent:
    return TelemetryEvent(
        event_type=EventType.LLM_CALL,
        provider=ctx.provider,
        model=ctx.model,
        region=ctx.region,
        route=ctx.route,
        tenant_id=ctx.tenant_id,
        prompt_length=len(ctx.prompt),
        response_length=len(ctx.response) if ctx.response is not None else None,
        pii_flags=classify_pii(ctx.prompt),
        secret_flags=classify_secrets(ctx.prompt),
    )


def build_http_call_event(ctx: HttpCallContext) -> TelemetryEvent:
    """Build an ``http_call`` record.

    Without a payload sample nothing is classified and both flag mappings
    are empty, not all-False.
    """
    sample = ctx.payload_sample
    return TelemetryEvent(
        event_type=EventType.HTTP_CALL,
        host=ctx.host,
        path=ctx.path,
        ip_address=ctx.ip_address,
        route=ctx.route,
        tenant_id=ctx.tenant_id,
        pii_flags=classify_pii(sample) if sample else {},
        secret_flags=classify_secrets(sample) if sample else {},
    )


def build_log_event(ctx: LogEventContext) -> TelemetryEvent:
    """Build a ``log_event`` record; level and flags travel in metadata."""
    return TelemetryEvent(
        event_type=EventType.LOG_EVENT,
        route=ctx.route,
        tenant_id=ctx.tenant_id,
        metadata={
            "level": ctx.level,
            "pii_flags": classify_pii(ctx.message),
            "secret_flags": classify_secrets(ctx.message),
        },
    )


def build_policy_violation_event(ctx: PolicyViolationContext) -> TelemetryEvent:
    metadata: dict[str, Any] = {"severity": ctx.severity}
    if ctx.details is not None:
        metadata["details"] = ctx.details
    return TelemetryEvent(
        event_type=EventType.POLICY_VIOLATION,
        route=ctx.route,
        tenant_id=ctx.tenant_id,
        policy_flags={ctx.violation_type: True},
        metadata=metadata,
    )
