"""Pydantic v2 models for the setup wizard.

Defines the topology model that every artifact emitter reads: one
``ServiceSelection`` per optional infrastructure service plus the global
scalars (auth secret, database URL, origin, admin and SMTP settings).
All models are frozen and their mappings are read-only proxies; a
``TopologyModel`` is built once per run and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _read_only(value: Mapping[Any, Any]) -> Mapping[Any, Any]:
    """Copy *value* into a mapping that rejects item assignment."""
    return MappingProxyType(dict(value))


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ServiceKind(str, Enum):
    """Optional services. Declaration order is the compose emission order."""
    NGINX = "nginx"
    API = "api"
    APP = "app"
    POSTGRES = "postgres"
    REDIS = "redis"
    CLICKHOUSE = "clickhouse"
    MINIO = "minio"


class DeploymentMode(str, Enum):
    """How an infrastructure dependency is provided."""
    LOCAL = "local"
    HOSTED = "hosted"
    SKIP = "skip"


# ---------------------------------------------------------------------------
# Service selection
# ---------------------------------------------------------------------------

class ServiceSelection(BaseModel):
    """An operator's decision for one service.

    ``enabled`` means the service is deployed by the generated compose file.
    A disabled selection may still carry ``parameters`` for an externally
    hosted equivalent (e.g. ``DATABASE_URL`` of a managed Postgres).
    """
    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Deployed via docker-compose")
    exposed: bool = Field(default=False, description="Bound to all interfaces instead of loopback")
    parameters: Mapping[str, str] = Field(
        default_factory=dict, validate_default=True, description="Credentials, ports, hostnames"
    )

    @field_validator("parameters")
    @classmethod
    def freeze_parameters(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return _read_only(value)

    def param(self, key: str, default: str = "") -> str:
        """Return a parameter, or *default* when missing or empty."""
        return self.parameters.get(key) or default


class AdminSettings(BaseModel):
    """Bootstrap admin identity and organisation."""
    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    org_name: str


class SmtpSettings(BaseModel):
    """Outgoing mail settings. Empty strings mean "not configured"."""
    model_config = ConfigDict(frozen=True)

    host: str = ""
    port: str = ""
    sender: str = ""
    user: str = ""
    password: str = ""


# ---------------------------------------------------------------------------
# Topology
# ---------------------------------------------------------------------------

class TopologyModel(BaseModel):
    """The complete, immutable set of choices driving artifact generation."""
    model_config = ConfigDict(frozen=True)

    services: Mapping[ServiceKind, ServiceSelection] = Field(default_factory=dict, validate_default=True)
    auth_secret: str = ""
    database_url: str = ""
    origin: str = ""
    admin: AdminSettings
    smtp: SmtpSettings = Field(default_factory=SmtpSettings)

    @field_validator("services")
    @classmethod
    def freeze_services(
        cls, value: Mapping[ServiceKind, ServiceSelection]
    ) -> Mapping[ServiceKind, ServiceSelection]:
        return _read_only(value)

    def selection(self, kind: ServiceKind) -> Optional[ServiceSelection]:
        """Return the selection for *kind*, or ``None`` when skipped."""
        return self.services.get(kind)

    def is_enabled(self, kind: ServiceKind) -> bool:
        """True when *kind* is deployed locally by the compose file."""
        selection = self.services.get(kind)
        return selection is not None and selection.enabled

    def enabled_kinds(self) -> list[ServiceKind]:
        """Enabled services in compose emission order."""
        return [kind for kind in ServiceKind if self.is_enabled(kind)]
