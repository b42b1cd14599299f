"""Integration errors raised by the agent.

These indicate a host integration bug (agent used before ``init`` or with
incomplete configuration). Transient telemetry faults are never raised;
see ``aisec_agent.upload.transport``.
"""

from __future__ import annotations


class AgentSecurityError(Exception):
    """Base class for all agent integration errors."""


class NotInitializedError(AgentSecurityError):
    """Raised when the agent is used before ``init`` or after ``shutdown``."""

    def __init__(self) -> None:
        super().__init__("Agent security not initialized. Call init() first.")


class MissingConfigFieldError(AgentSecurityError):
    """Raised when a field required for dispatch is absent from the config."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Missing required configuration field: {field_name}")
