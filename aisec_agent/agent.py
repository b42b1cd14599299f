"""Security agent: the host-facing handle tying config, transport and refresh together.

A ``SecurityAgent`` owns its own configuration store, transport and policy
refresher, so independent instances never share state. The module-level
functions in ``aisec_agent`` delegate to a process-wide default instance.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from aisec_agent.config.manager import ConfigStore
from aisec_agent.config.settings import AgentConfig
from aisec_agent.events.normalizer import (
    build_http_call_event,
    build_llm_call_event,
    build_log_event,
    build_policy_violation_event,
)
from aisec_agent.events.protocol import (
    HttpCallContext,
    LlmCallContext,
    LogEventContext,
    PolicyViolationContext,
)
from aisec_agent.policy.refresher import PolicyRefresher, RefreshHook, fetch_policies
from aisec_agent.upload.transport import SendOutcome, Transport

logger = logging.getLogger(__name__)


class SecurityAgent:
    """Observes host call sites and forwards classified telemetry.

    Args:
        http_client: Optional shared client for all sends. The caller owns
            it and closes it; without one each send opens its own client.
        refresh_hook: Coroutine function run on every policy refresh tick.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        refresh_hook: RefreshHook = fetch_policies,
    ) -> None:
        self.store = ConfigStore()
        self.transport = Transport(self.store, http_client=http_client)
        self.refresher = PolicyRefresher(hook=refresh_hook)

    @property
    def config(self) -> AgentConfig | None:
        return self.store.active

    def init(self, config: AgentConfig | None = None, **overrides: Any) -> AgentConfig:
        """Install configuration and (re)start the policy refresher.

        Environment defaults are overlaid by ``config`` and then by keyword
        overrides. A running refresher is replaced when the new interval is
        positive; otherwise it is left as is.
        """
        cfg = self.store.init(config, **overrides)
        if cfg.refresh_enabled:
            self.refresher.start(cfg.fetch_policies_interval_ms)
        logger.info("Agent security initialized")
        return cfg

    def shutdown(self) -> None:
        """Stop the refresher and clear configuration. Safe to call twice.

        Sends already in flight are not cancelled.
        """
        if not self.store.is_initialized and not self.refresher.running:
            return
        self.refresher.stop()
        self.store.shutdown()
        logger.info("Agent security shutdown complete")

    async def aclose(self) -> None:
        """Shut down and wait for the refresh loop to finish cancelling."""
        await self.refresher.aclose()
        self.shutdown()

    async def __aenter__(self) -> SecurityAgent:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def record_llm_call(self, ctx: LlmCallContext) -> SendOutcome:
        return await self.transport.send(build_llm_call_event(ctx))

    async def record_http_call(self, ctx: HttpCallContext) -> SendOutcome:
        return await self.transport.send(build_http_call_event(ctx))

    async def record_log_event(self, ctx: LogEventContext) -> SendOutcome:
        return await self.transport.send(build_log_event(ctx))

    async def record_policy_violation(self, ctx: PolicyViolationContext) -> SendOutcome:
        return await self.transport.send(build_policy_violation_event(ctx))
