"""Deltas environment setup wizard.

Collects service choices interactively, builds one immutable topology model
and derives the deployment artifacts from it:

- ``docker-compose.yaml``
- ``nginx.conf`` (only with the reverse proxy)
- ``app/.env`` and ``deltas/.env`` (identical)

Usage::

    deltas-setup
    python -m deltas_setup.wizard
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .auth_secret import generate_secret
from .collector import ExistingEnv, Prompter, RichPrompter, ServiceCollector, SetupCancelled, detect_existing_env
from .config import SetupConfig
from .emitters import ComposeGenerator, EnvGenerator, NginxGenerator, TemplateRenderer
from .models import ServiceKind, TopologyModel
from .topology import build_topology
from .utils import (
    console,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)
from .writer import ArtifactWriter, Artifacts

_SERVICE_LABELS: dict[ServiceKind, str] = {
    ServiceKind.NGINX: "Nginx (reverse proxy)",
    ServiceKind.API: "API (event ingestion)",
    ServiceKind.APP: "App (frontend)",
    ServiceKind.POSTGRES: "PostgreSQL (database)",
    ServiceKind.REDIS: "Redis (cache)",
    ServiceKind.CLICKHOUSE: "ClickHouse (analytics)",
    ServiceKind.MINIO: "MinIO (storage)",
}


@dataclass
class WizardResult:
    """What one completed run produced."""

    model: TopologyModel
    artifacts: Artifacts
    written: list[Path] = field(default_factory=list)


class SetupWizard:
    """Drives one run: collect -> build model -> emit -> write.

    Attributes:
        config: Run configuration (output directory, naming, secret command).
        prompter: Source of operator answers.
    """

    def __init__(self, config: SetupConfig, prompter: Prompter) -> None:
        self.config = config
        self.prompter = prompter
        renderer = TemplateRenderer()
        self.compose_gen = ComposeGenerator(
            renderer,
            project_slug=config.project_slug,
            project_title=config.project_title,
            app_dir=config.app_dir,
            api_dir=config.api_dir,
        )
        self.nginx_gen = NginxGenerator(renderer, project_title=config.project_title)
        self.env_gen = EnvGenerator(renderer, project_title=config.project_title)
        self.writer = ArtifactWriter(config)

    # ------------------------------------------------------------------
    # Existing configuration
    # ------------------------------------------------------------------

    def load_snapshot(self, existing: ExistingEnv) -> dict[str, str]:
        """Ask whether to replace existing ``.env`` files.

        Returns the parsed values to use as defaults, or an empty mapping
        when nothing exists or the operator chose to replace.
        """
        if not existing.found:
            return {}

        print_warning("\nExisting .env files detected!")
        for path in existing.files:
            console.print(f"[dim]  -> {self._display(path)}[/dim]")
        console.print()

        if self.prompter.confirm("Replace with new configuration?", default=False):
            return {}

        snapshot = existing.snapshot()
        print_success("Configuration loaded!")
        console.print("[dim]Using existing values as defaults[/dim]\n")
        return snapshot

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    async def collect(self, snapshot: dict[str, str]) -> TopologyModel:
        """Ask every question and build the topology model."""
        collector = ServiceCollector(self.prompter, snapshot)

        origin = collector.configure_origin()
        auth_secret = snapshot.get("BETTER_AUTH_SECRET") or await generate_secret(
            self.config.secret_command
        )
        admin = collector.configure_admin()

        api = collector.configure_api()
        app = collector.configure_app()
        nginx = collector.configure_nginx(
            has_api=api is not None and api.enabled,
            has_app=app is not None and app.enabled,
        )

        postgres = collector.configure_postgres()
        redis = collector.configure_redis()
        clickhouse = collector.configure_clickhouse()
        minio = collector.configure_minio()
        smtp = collector.configure_smtp()

        return build_topology(
            origin=origin,
            auth_secret=auth_secret,
            admin=admin,
            smtp=smtp,
            api=api,
            app=app,
            nginx=nginx,
            postgres=postgres,
            redis=redis,
            clickhouse=clickhouse,
            minio=minio,
        )

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def emit(self, model: TopologyModel) -> Artifacts:
        nginx_conf = self.nginx_gen.emit(model) if model.is_enabled(ServiceKind.NGINX) else None
        return Artifacts(
            compose=self.compose_gen.emit(model),
            env=self.env_gen.emit(model),
            nginx=nginx_conf,
        )

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    async def run(self) -> WizardResult:
        print_banner(f"{self.config.project_title} Setup")

        existing = detect_existing_env(self.config.env_paths)
        snapshot = self.load_snapshot(existing)

        model = await self.collect(snapshot)
        artifacts = self.emit(model)
        console.print()
        print_success("Configuration generated!")

        written = await self.writer.write(artifacts)
        self._print_next_steps(model)
        return WizardResult(model=model, artifacts=artifacts, written=written)

    def _print_next_steps(self, model: TopologyModel) -> None:
        console.print()
        print_success("Setup Complete!")
        console.print("\n[white]Next steps:[/white]")
        console.print("[yellow]  1.[/yellow] Review configuration files")
        console.print("[yellow]  2.[/yellow] Run [cyan]docker compose up -d[/cyan]")
        console.print("[yellow]  3.[/yellow] Check logs with [cyan]docker compose logs -f[/cyan]")
        console.print()

        enabled = {
            _SERVICE_LABELS[kind]: "enabled" + (" (exposed)" if model.services[kind].exposed else "")
            for kind in model.enabled_kinds()
        }
        if enabled:
            print_summary_table(enabled, title="Enabled services")

    def _display(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.config.output_dir))
        except ValueError:
            return str(path)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point for ``deltas-setup`` / ``python -m deltas_setup.wizard``."""
    import argparse

    parser = argparse.ArgumentParser(
        description=(
            "Interactive setup wizard: generates docker-compose.yaml, nginx.conf "
            "and the app/deltas .env files in the current directory"
        ),
    )
    parser.parse_args()

    config = SetupConfig.from_env()
    wizard = SetupWizard(config, RichPrompter())

    try:
        asyncio.run(wizard.run())
    except (SetupCancelled, KeyboardInterrupt):
        print_warning("\nSetup cancelled")
        return
    except Exception as exc:
        print_error(f"\nSetup failed: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
