"""Configuration store: owns the single active ``AgentConfig``.

Readers must call ``get_active_or_fail`` at the moment of use and must not
keep the returned config; ``init`` and ``shutdown`` may replace or clear it
at any time.
"""

from __future__ import annotations

import logging
from typing import Any

from aisec_agent.config.settings import AgentConfig, build_config
from aisec_agent.errors import MissingConfigFieldError, NotInitializedError

logger = logging.getLogger(__name__)


class ConfigStore:
    """Holds the active agent configuration between init and shutdown."""

    def __init__(self) -> None:
        self._active: AgentConfig | None = None

    @property
    def active(self) -> AgentConfig | None:
        return self._active

    @property
    def is_initialized(self) -> bool:
        return self._active is not None

    def init(self, config: AgentConfig | None = None, **overrides: Any) -> AgentConfig:
        """Install a new configuration, replacing any previous one."""
        self._active = build_config(config, **overrides)
        logger.info(
            "Configuration installed (project=%s, agent=%s, refresh=%sms)",
            self._active.project_id,
            self._active.agent_id,
            self._active.fetch_policies_interval_ms,
        )
        return self._active

    def get_active_or_fail(self) -> AgentConfig:
        """Return the active config, validated for dispatch.

        Raises:
            NotInitializedError: No configuration is installed.
            MissingConfigFieldError: ``ingestion_url`` or ``agent_key`` is empty.
        """
        cfg = self._active
        if cfg is None:
            raise NotInitializedError()
        if not cfg.ingestion_url:
            raise MissingConfigFieldError("ingestion_url")
        if not cfg.agent_key_value:
            raise MissingConfigFieldError("agent_key")
        return cfg

    def shutdown(self) -> None:
        self._active = None
