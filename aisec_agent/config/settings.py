"""Agent configuration models.

``EnvDefaults`` sources defaults from the host environment via Pydantic
Settings v2. ``AgentConfig`` is the validated, immutable configuration the
agent runs with; it is built by overlaying caller-supplied fields on the
environment defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FETCH_POLICIES_INTERVAL_MS = 60_000


class EnvDefaults(BaseSettings):
    """Configuration defaults read from ``AI_SEC_*`` environment variables.

    No ``.env`` file is read: the host application owns its environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="AI_SEC_",
        case_sensitive=False,
        extra="ignore",
    )

    project_id: str | None = None
    ingest_url: str | None = None
    agent_key: str | None = None
    agent_id: str | None = None

    def as_config_fields(self) -> dict[str, Any]:
        """Return the defaults keyed by ``AgentConfig`` field names."""
        return {
            "project_id": self.project_id,
            "ingestion_url": self.ingest_url,
            "agent_key": self.agent_key,
            "agent_id": self.agent_id,
        }


class AgentConfig(BaseModel):
    """Active agent configuration.

    ``ingestion_url`` and ``agent_key`` are optional here but required
    before any event is dispatched. A ``fetch_policies_interval_ms`` of 0
    or None disables the policy refresh loop.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_id: str | None = None
    ingestion_url: str | None = None
    agent_key: SecretStr | None = None
    agent_id: str | None = None
    fetch_policies_interval_ms: int | None = Field(
        default=DEFAULT_FETCH_POLICIES_INTERVAL_MS, ge=0
    )
    # None leaves outbound requests without a timeout
    request_timeout_seconds: float | None = Field(default=None, gt=0)

    @property
    def agent_key_value(self) -> str:
        return self.agent_key.get_secret_value() if self.agent_key else ""

    @property
    def refresh_enabled(self) -> bool:
        return bool(self.fetch_policies_interval_ms)


def build_config(
    config: AgentConfig | None = None, **overrides: Any
) -> AgentConfig:
    """Merge environment defaults with caller overrides, field by field.

    Precedence, lowest first: environment, fields explicitly set on
    ``config``, keyword ``overrides``.

    Raises:
        pydantic.ValidationError: If a merged value is invalid or an
            unknown field is supplied.
    """
    merged = EnvDefaults().as_config_fields()
    if config is not None:
        merged.update(config.model_dump(exclude_unset=True))
    merged.update(overrides)
    return AgentConfig.model_validate(merged)
