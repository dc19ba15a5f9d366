"""Reverse-proxy (``nginx.conf``) generation.

Only used when the topology keeps Nginx. API traffic is limited to the
``/post/`` and ``/get/`` prefixes with a single upstream attempt; every other
path goes to the App upstream when there is one. ``/health`` always answers
200 without touching an upstream.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..models import ServiceKind, TopologyModel
from .compose_gen import API_CONTAINER_PORT, APP_CONTAINER_PORT
from .templates import TemplateRenderer

API_ROUTE_MATCH = "~ ^/(post|get)/"


class NginxDisabledError(Exception):
    """Raised when asked to emit ``nginx.conf`` for a topology without Nginx."""


@dataclass
class NginxUpstream:
    name: str
    server: str
    keepalive: int


@dataclass
class NginxLocation:
    """A proxied location.

    ``profile`` is ``"ingest"`` (short timeouts, no retries, no buffering)
    or ``"web"`` (long timeouts, connection upgrade headers).
    """

    match: str
    upstream: str
    profile: str


@dataclass
class NginxSections:
    domain: str
    ssl_enabled: bool
    upstreams: list[NginxUpstream] = field(default_factory=list)
    locations: list[NginxLocation] = field(default_factory=list)

    @property
    def redirect_http(self) -> bool:
        """A redirect-only port 80 server exists exactly when SSL is on."""
        return self.ssl_enabled


class NginxGenerator:
    """Generates ``nginx.conf`` from a topology model."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None, project_title: str = "Deltas") -> None:
        self.renderer = renderer or TemplateRenderer()
        self.project_title = project_title

    def build_sections(self, model: TopologyModel) -> NginxSections:
        nginx = model.selection(ServiceKind.NGINX)
        if nginx is None or not nginx.enabled:
            raise NginxDisabledError("Nginx is not part of this topology")

        sections = NginxSections(
            domain=nginx.param("DOMAIN", "localhost"),
            ssl_enabled=nginx.param("SSL_ENABLED") == "true",
        )

        if model.is_enabled(ServiceKind.API):
            sections.upstreams.append(NginxUpstream("api", f"api:{API_CONTAINER_PORT}", 64))
            sections.locations.append(NginxLocation(API_ROUTE_MATCH, "api", "ingest"))
        if model.is_enabled(ServiceKind.APP):
            sections.upstreams.append(NginxUpstream("app", f"app:{APP_CONTAINER_PORT}", 32))
            sections.locations.append(NginxLocation("/", "app", "web"))
        return sections

    def emit(self, model: TopologyModel) -> str:
        """Render ``nginx.conf`` for *model*.

        Raises:
            NginxDisabledError: If the topology has no Nginx service.
        """
        sections = self.build_sections(model)
        context = {
            "title": self.project_title,
            "domain": sections.domain,
            "ssl_enabled": sections.ssl_enabled,
            "redirect_http": sections.redirect_http,
            "upstreams": sections.upstreams,
            "locations": sections.locations,
        }
        return self.renderer.render("nginx.conf.j2", context)
