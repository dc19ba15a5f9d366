"""Environment (``.env``) file generation.

The same document is written to every deployable unit. Redis, ClickHouse,
S3 and SMTP keys are always present so consumers find every key they
expect; unconfigured services get empty values. The PostgreSQL block is
only emitted for a locally deployed Postgres.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..models import ServiceKind, TopologyModel
from .templates import TemplateRenderer

CLICKHOUSE_KEYS = (
    "CLICKHOUSE_HOST",
    "CLICKHOUSE_PORT",
    "CLICKHOUSE_NATIVE_PORT",
    "CLICKHOUSE_USER",
    "CLICKHOUSE_PASSWORD",
    "CLICKHOUSE_DATABASE",
)
S3_KEYS = ("S3_ENDPOINT", "S3_ACCESS_KEY", "S3_SECRET_KEY", "S3_BUCKET")
POSTGRES_KEYS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_DB")


@dataclass
class EnvSection:
    """A commented group of ``KEY="value"`` lines."""

    title: str
    entries: list[tuple[str, str]] = field(default_factory=list)

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]


class EnvGenerator:
    """Generates the shared ``.env`` document from a topology model."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None, project_title: str = "Deltas") -> None:
        self.renderer = renderer or TemplateRenderer()
        self.project_title = project_title

    def build_sections(self, model: TopologyModel) -> list[EnvSection]:
        sections = [
            EnvSection("Drizzle", [("DATABASE_URL", model.database_url)]),
            EnvSection("Application", [("ORIGIN", model.origin)]),
            EnvSection("Better Auth", [("BETTER_AUTH_SECRET", model.auth_secret)]),
            EnvSection(
                "Admin User",
                [("ADMIN_EMAIL", model.admin.email), ("ADMIN_PASSWORD", model.admin.password)],
            ),
            EnvSection("Organization", [("ORG_NAME", model.admin.org_name)]),
            self._redis(model),
            self._clickhouse(model),
            self._s3(model),
            EnvSection(
                "Mailpit (SMTP)",
                [
                    ("SMTP_HOST", model.smtp.host),
                    ("SMTP_PORT", model.smtp.port),
                    ("SMTP_FROM", model.smtp.sender),
                    ("SMTP_USER", model.smtp.user),
                    ("SMTP_PASSWORD", model.smtp.password),
                ],
            ),
        ]
        postgres = model.selection(ServiceKind.POSTGRES)
        if postgres is not None and postgres.enabled:
            sections.append(
                EnvSection("PostgreSQL", [(key, postgres.param(key)) for key in POSTGRES_KEYS])
            )
        return sections

    def emit(self, model: TopologyModel) -> str:
        """Render the ``.env`` document for *model*."""
        context = {"title": self.project_title, "sections": self.build_sections(model)}
        return self.renderer.render("env.j2", context)

    # -- Always-present service blocks ----------------------------------------

    @staticmethod
    def _redis(model: TopologyModel) -> EnvSection:
        redis = model.selection(ServiceKind.REDIS)
        if redis is not None and redis.enabled:
            url = "redis://redis:6379"
        elif redis is not None:
            url = redis.param("REDIS_URL")
        else:
            url = ""
        return EnvSection("Redis", [("REDIS_URL", url)])

    @staticmethod
    def _clickhouse(model: TopologyModel) -> EnvSection:
        clickhouse = model.selection(ServiceKind.CLICKHOUSE)
        if clickhouse is not None and clickhouse.enabled:
            values = {
                "CLICKHOUSE_HOST": "clickhouse",
                "CLICKHOUSE_PORT": "8123",
                "CLICKHOUSE_NATIVE_PORT": "19000",
                "CLICKHOUSE_USER": "default",
                "CLICKHOUSE_PASSWORD": clickhouse.param("CLICKHOUSE_PASSWORD"),
                "CLICKHOUSE_DATABASE": "default",
            }
        elif clickhouse is not None:
            values = {key: clickhouse.param(key) for key in CLICKHOUSE_KEYS}
        else:
            values = {}
        return EnvSection("ClickHouse", [(key, values.get(key, "")) for key in CLICKHOUSE_KEYS])

    @staticmethod
    def _s3(model: TopologyModel) -> EnvSection:
        minio = model.selection(ServiceKind.MINIO)
        if minio is not None and minio.enabled:
            values = {"S3_ENDPOINT": "http://minio:9000"}
            values.update({key: minio.param(key) for key in S3_KEYS[1:]})
        elif minio is not None:
            values = {key: minio.param(key) for key in S3_KEYS}
        else:
            values = {}
        return EnvSection("MinIO (S3)", [(key, values.get(key, "")) for key in S3_KEYS])
