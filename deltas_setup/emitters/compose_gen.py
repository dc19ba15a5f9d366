"""Docker Compose file generation.

``build_services`` turns a ``TopologyModel`` into ordered ``ComposeService``
blocks; ``emit`` renders them through ``docker-compose.yaml.j2``. Only
enabled services produce a block.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..models import ServiceKind, ServiceSelection, TopologyModel
from .templates import TemplateRenderer

API_CONTAINER_PORT = 3000
APP_CONTAINER_PORT = 5173

# Postgres tuning passed as ``-c`` startup flags.
POSTGRES_TUNING: dict[str, str] = {
    "shared_buffers": "256MB",
    "max_connections": "200",
    "effective_cache_size": "1GB",
    "maintenance_work_mem": "64MB",
    "checkpoint_completion_target": "0.9",
    "wal_buffers": "16MB",
    "default_statistics_target": "100",
    "random_page_cost": "1.1",
    "effective_io_concurrency": "200",
    "work_mem": "2621kB",
    "min_wal_size": "1GB",
    "max_wal_size": "4GB",
}


def port_mapping(host_port: Union[int, str], container_port: int, exposed: bool) -> str:
    """Compose port string; loopback-only unless *exposed*."""
    if exposed:
        return f"{host_port}:{container_port}"
    return f"127.0.0.1:{host_port}:{container_port}"


@dataclass
class ComposeService:
    """One service block of the compose file."""

    name: str
    comment: str
    container_name: str
    image: str = ""
    build: str = ""
    ports: list[str] = field(default_factory=list)
    env_file: str = ""
    environment: dict[str, str] = field(default_factory=dict)
    volumes: list[str] = field(default_factory=list)
    depends_on: list[str] = field(default_factory=list)
    command: Optional[Union[str, list[str]]] = None
    nofile: Optional[int] = None


class ComposeGenerator:
    """Generates ``docker-compose.yaml`` from a topology model."""

    def __init__(
        self,
        renderer: Optional[TemplateRenderer] = None,
        project_slug: str = "deltas",
        project_title: str = "Deltas",
        app_dir: str = "app",
        api_dir: str = "deltas",
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.project_slug = project_slug
        self.project_title = project_title
        self.app_dir = app_dir
        self.api_dir = api_dir

    @property
    def network(self) -> str:
        return f"{self.project_slug}-network"

    def _container(self, suffix: str) -> str:
        return f"{self.project_slug}-{suffix}"

    # -- Structured output -------------------------------------------------

    def build_services(self, model: TopologyModel) -> list[ComposeService]:
        """Return one block per enabled service in fixed emission order."""
        builders = {
            ServiceKind.NGINX: self._nginx,
            ServiceKind.API: self._api,
            ServiceKind.APP: self._app,
            ServiceKind.POSTGRES: self._postgres,
            ServiceKind.REDIS: self._redis,
            ServiceKind.CLICKHOUSE: self._clickhouse,
            ServiceKind.MINIO: self._minio,
        }
        return [builders[kind](model, model.services[kind]) for kind in model.enabled_kinds()]

    def build_volumes(self, model: TopologyModel) -> list[str]:
        """Named volumes for the enabled stateful services."""
        stateful = [
            (ServiceKind.NGINX, ["nginx_logs"]),
            (ServiceKind.POSTGRES, ["pgdata"]),
            (ServiceKind.REDIS, ["redis_data"]),
            (ServiceKind.CLICKHOUSE, ["clickhouse_data", "clickhouse_logs"]),
            (ServiceKind.MINIO, ["minio_data"]),
        ]
        volumes: list[str] = []
        for kind, names in stateful:
            if model.is_enabled(kind):
                volumes.extend(names)
        return volumes

    def build_context(self, model: TopologyModel) -> dict:
        return {
            "title": self.project_title,
            "network": self.network,
            "services": self.build_services(model),
            "volumes": self.build_volumes(model),
        }

    def emit(self, model: TopologyModel) -> str:
        """Render the compose file for *model*."""
        return self.renderer.render("docker-compose.yaml.j2", self.build_context(model))

    # -- Per-service blocks ------------------------------------------------

    def _nginx(self, model: TopologyModel, sel: ServiceSelection) -> ComposeService:
        volumes = ["./nginx.conf:/etc/nginx/nginx.conf:ro", "nginx_logs:/var/log/nginx"]
        if sel.param("SSL_ENABLED") == "true":
            volumes.append("./ssl:/etc/nginx/ssl:ro")
        return ComposeService(
            name="nginx",
            comment="Nginx - Reverse Proxy & Load Balancer",
            container_name=self._container("nginx"),
            image="nginx:alpine",
            ports=[port_mapping(80, 80, sel.exposed), port_mapping(443, 443, sel.exposed)],
            volumes=volumes,
            depends_on=[
                name
                for kind, name in ((ServiceKind.API, "api"), (ServiceKind.APP, "app"))
                if model.is_enabled(kind)
            ],
        )

    def _api(self, model: TopologyModel, sel: ServiceSelection) -> ComposeService:
        host_port = sel.param("API_PORT", str(API_CONTAINER_PORT))
        return ComposeService(
            name="api",
            comment=f"{self.project_title} API - High Performance Event Ingestion",
            container_name=self._container("api"),
            build=f"./{self.api_dir}",
            ports=[port_mapping(host_port, API_CONTAINER_PORT, sel.exposed)],
            env_file=f"./{self.api_dir}/.env",
            environment={"NODE_ENV": "production", "PORT": str(API_CONTAINER_PORT)},
            depends_on=[
                name
                for kind, name in (
                    (ServiceKind.POSTGRES, "db"),
                    (ServiceKind.REDIS, "redis"),
                    (ServiceKind.CLICKHOUSE, "clickhouse"),
                )
                if model.is_enabled(kind)
            ],
            nofile=65536,
        )

    def _app(self, model: TopologyModel, sel: ServiceSelection) -> ComposeService:
        host_port = sel.param("APP_PORT", str(APP_CONTAINER_PORT))
        return ComposeService(
            name="app",
            comment=f"{self.project_title} App - SvelteKit Frontend",
            container_name=self._container("app"),
            build=f"./{self.app_dir}",
            ports=[port_mapping(host_port, APP_CONTAINER_PORT, sel.exposed)],
            env_file=f"./{self.app_dir}/.env",
            environment={"NODE_ENV": "production", "PORT": str(APP_CONTAINER_PORT)},
            depends_on=["api"] if model.is_enabled(ServiceKind.API) else [],
        )

    def _postgres(self, model: TopologyModel, sel: ServiceSelection) -> ComposeService:
        command = ["postgres"]
        for setting, value in POSTGRES_TUNING.items():
            command.extend(["-c", f"{setting}={value}"])
        return ComposeService(
            name="db",
            comment="PostgreSQL - Primary Database",
            container_name=self._container("postgres"),
            image="postgres:16-alpine",
            ports=[port_mapping(5432, 5432, sel.exposed)],
            environment={
                "POSTGRES_USER": "${POSTGRES_USER}",
                "POSTGRES_PASSWORD": "${POSTGRES_PASSWORD}",
                "POSTGRES_DB": "${POSTGRES_DB}",
                "POSTGRES_SHARED_BUFFERS": POSTGRES_TUNING["shared_buffers"],
                "POSTGRES_MAX_CONNECTIONS": POSTGRES_TUNING["max_connections"],
            },
            volumes=["pgdata:/var/lib/postgresql/data"],
            command=command,
        )

    def _redis(self, model: TopologyModel, sel: ServiceSelection) -> ComposeService:
        return ComposeService(
            name="redis",
            comment="Redis - Cache & Message Broker",
            container_name=self._container("redis"),
            image="redis:7-alpine",
            ports=[port_mapping(6379, 6379, sel.exposed)],
            volumes=["redis_data:/data"],
            command="redis-server --appendonly yes --maxmemory 512mb --maxmemory-policy allkeys-lru",
        )

    def _clickhouse(self, model: TopologyModel, sel: ServiceSelection) -> ComposeService:
        return ComposeService(
            name="clickhouse",
            comment="ClickHouse - Analytics Database for Events/Logs",
            container_name=self._container("clickhouse"),
            image="clickhouse/clickhouse-server:latest",
            ports=[port_mapping(8123, 8123, sel.exposed), port_mapping(19000, 9000, sel.exposed)],
            environment={
                "CLICKHOUSE_DB": "${CLICKHOUSE_DATABASE:-default}",
                "CLICKHOUSE_USER": "${CLICKHOUSE_USER:-default}",
                "CLICKHOUSE_PASSWORD": "${CLICKHOUSE_PASSWORD}",
                "CLICKHOUSE_DEFAULT_ACCESS_MANAGEMENT": "1",
            },
            volumes=["clickhouse_data:/var/lib/clickhouse", "clickhouse_logs:/var/log/clickhouse-server"],
            nofile=262144,
        )

    def _minio(self, model: TopologyModel, sel: ServiceSelection) -> ComposeService:
        return ComposeService(
            name="minio",
            comment="MinIO - S3-Compatible Object Storage",
            container_name=self._container("minio"),
            image="minio/minio:latest",
            ports=[port_mapping(9000, 9000, sel.exposed), port_mapping(9001, 9001, sel.exposed)],
            environment={
                "MINIO_ROOT_USER": "${S3_ACCESS_KEY}",
                "MINIO_ROOT_PASSWORD": "${S3_SECRET_KEY}",
            },
            volumes=["minio_data:/data"],
            command='server /data --console-address ":9001"',
        )
