"""Call contexts supplied by the host and the telemetry event wire record.

Field names of ``TelemetryEvent`` are the wire contract with the ingestion
service and MUST stay snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any


class EventType(StrEnum):
    """Kinds of observation reported to the ingestion service."""

    LLM_CALL = "llm_call"
    HTTP_CALL = "http_call"
    LOG_EVENT = "log_event"
    POLICY_VIOLATION = "policy_violation"


class LogLevel(StrEnum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class LlmCallContext:
    """A single LLM invocation observed by the host."""

    provider: str
    prompt: str
    model: str | None = None
    region: str | None = None
    route: str | None = None
    tenant_id: str | None = None
    response: str | None = None


@dataclass
class HttpCallContext:
    """An outbound HTTP call observed by the host."""

    host: str
    path: str | None = None
    ip_address: str | None = None
    route: str | None = None
    tenant_id: str | None = None
    payload_sample: str | None = None


@dataclass
class LogEventContext:
    level: str
    message: str
    route: str | None = None
    tenant_id: str | None = None


@dataclass
class PolicyViolationContext:
    violation_type: str
    severity: str
    route: str | None = None
    tenant_id: str | None = None
    details: dict[str, Any] | None = None


@dataclass
class TelemetryEvent:
    """Normalized event record posted to the ingestion endpoint.

    Carries lengths of sensitive text, never the text itself.
    """

    event_type: str
    catalog_agent_id: str | None = None
    provider: str | None = None
    model: str | None = None
    region: str | None = None
    host: str | None = None
    path: str | None = None
    ip_address: str | None = None
    route: str | None = None
    tenant_id: str | None = None
    prompt_length: int | None = None
    response_length: int | None = None
    pii_flags: dict[str, bool] | None = None
    secret_flags: dict[str, bool] | None = None
    policy_flags: dict[str, bool] | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a dict suitable for JSON upload.

        Unset fields are dropped. Empty flag mappings are kept: ``{}``
        means "not evaluated", which differs from an absent field.
        """
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result
