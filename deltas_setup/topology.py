"""Topology model builder.

Pure aggregation of collector answers into one ``TopologyModel``. The only
derived values are the database URL and whether the reverse proxy survives.
"""

from __future__ import annotations

from typing import Optional

from .models import AdminSettings, ServiceKind, ServiceSelection, SmtpSettings, TopologyModel

POSTGRES_HOST = "db"
POSTGRES_PORT = 5432


def derive_database_url(postgres: Optional[ServiceSelection]) -> str:
    """Synthesize ``DATABASE_URL`` from the Postgres selection.

    A locally deployed Postgres is reached through the compose network under
    the ``db`` service name. A hosted Postgres uses the operator-supplied URL
    verbatim. A skipped Postgres yields an empty string.
    """
    if postgres is None:
        return ""
    if postgres.enabled:
        user = postgres.param("POSTGRES_USER")
        password = postgres.param("POSTGRES_PASSWORD")
        db = postgres.param("POSTGRES_DB")
        return f"postgres://{user}:{password}@{POSTGRES_HOST}:{POSTGRES_PORT}/{db}"
    return postgres.param("DATABASE_URL")


def build_topology(
    *,
    origin: str,
    auth_secret: str,
    admin: AdminSettings,
    smtp: SmtpSettings,
    api: Optional[ServiceSelection] = None,
    app: Optional[ServiceSelection] = None,
    nginx: Optional[ServiceSelection] = None,
    postgres: Optional[ServiceSelection] = None,
    redis: Optional[ServiceSelection] = None,
    clickhouse: Optional[ServiceSelection] = None,
    minio: Optional[ServiceSelection] = None,
) -> TopologyModel:
    """Aggregate collector outputs into a ``TopologyModel``.

    Nginx is kept only when at least one of API or App is enabled, whatever
    the operator answered.
    """
    has_upstream = any(s is not None and s.enabled for s in (api, app))
    if not has_upstream:
        nginx = None

    candidates = {
        ServiceKind.NGINX: nginx,
        ServiceKind.API: api,
        ServiceKind.APP: app,
        ServiceKind.POSTGRES: postgres,
        ServiceKind.REDIS: redis,
        ServiceKind.CLICKHOUSE: clickhouse,
        ServiceKind.MINIO: minio,
    }
    services = {kind: sel for kind, sel in candidates.items() if sel is not None}

    return TopologyModel(
        services=services,
        auth_secret=auth_secret,
        database_url=derive_database_url(postgres),
        origin=origin,
        admin=admin,
        smtp=smtp,
    )
