"""Best-effort transport: posts one telemetry event to the ingestion endpoint.

Each send is a single POST. There is no retry, backoff, or queue; a failed
event is logged and dropped. Only integration errors (agent not initialized
or missing required configuration) propagate to the caller.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import StrEnum

import httpx

from aisec_agent.config.manager import ConfigStore
from aisec_agent.config.settings import AgentConfig
from aisec_agent.events.protocol import TelemetryEvent

logger = logging.getLogger(__name__)


class DeliveryStatus(StrEnum):
    DELIVERED = "delivered"
    REJECTED = "rejected"  # endpoint answered with a non-2xx status
    FAILED = "failed"  # request never completed


@dataclass(frozen=True)
class SendOutcome:
    """Result of a single send attempt. Transport faults end up here."""

    status: DeliveryStatus
    status_code: int | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status is DeliveryStatus.DELIVERED


def build_headers(cfg: AgentConfig) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "X-Agent-Key": cfg.agent_key_value,
        "X-Project-Id": cfg.project_id or "",
    }


class Transport:
    """Sends telemetry events using the store's current configuration."""

    def __init__(
        self,
        store: ConfigStore,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.store = store
        self._client = http_client

    async def send(self, event: TelemetryEvent) -> SendOutcome:
        """Post ``event`` to the configured ingestion URL.

        Raises:
            NotInitializedError: The agent has not been initialized.
            MissingConfigFieldError: ``ingestion_url`` or ``agent_key`` is unset.
        """
        cfg = self.store.get_active_or_fail()
        if cfg.agent_id and not event.catalog_agent_id:
            event.catalog_agent_id = cfg.agent_id

        try:
            body = json.dumps(event.to_dict(), default=str).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.warning("Failed to encode %s telemetry: %s", event.event_type, str(e))
            return SendOutcome(DeliveryStatus.FAILED, error=str(e))

        try:
            response = await self._post(cfg, body)
        # Header values that cannot be encoded surface as ValueError/TypeError
        except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError) as e:
            logger.warning("Failed to send %s telemetry: %s", event.event_type, str(e))
            return SendOutcome(DeliveryStatus.FAILED, error=str(e))

        if response.is_success:
            logger.debug("Sent %s telemetry (%d)", event.event_type, response.status_code)
            return SendOutcome(DeliveryStatus.DELIVERED, status_code=response.status_code)

        logger.error(
            "Telemetry request rejected: %d %s",
            response.status_code,
            response.text[:200],
        )
        return SendOutcome(DeliveryStatus.REJECTED, status_code=response.status_code)

    async def _post(self, cfg: AgentConfig, body: bytes) -> httpx.Response:
        url = cfg.ingestion_url or ""
        kwargs = {
            "content": body,
            "headers": build_headers(cfg),
            "timeout": cfg.request_timeout_seconds,
        }
        if self._client is not None:
            return await self._client.post(url, **kwargs)
        async with httpx.AsyncClient() as client:
            return await client.post(url, **kwargs)
