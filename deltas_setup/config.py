"""Deltas setup wizard configuration.

Centralised, typed settings for one wizard run. Uses a Pydantic v2 model so
values are validated at construction time and can be overridden from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class SetupConfig(BaseModel):
    """Global setup wizard configuration.

    Created once by the CLI entry point and then passed to ``SetupWizard``
    and the writer. Nothing else reads process-wide state.
    """

    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory that receives docker-compose.yaml, nginx.conf and the .env files",
    )
    project_slug: str = Field(
        default="deltas",
        description="Prefix for container names and the compose network",
    )
    project_title: str = Field(default="Deltas", description="Display name used in headers")
    app_dir: str = Field(default="app", description="Deployable unit holding the SvelteKit app")
    api_dir: str = Field(default="deltas", description="Deployable unit holding the ingestion API")
    secret_command: str = Field(
        default="openssl rand -base64 32",
        description="Shell command whose stdout becomes BETTER_AUTH_SECRET",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def compose_path(self) -> Path:
        """Path to the generated ``docker-compose.yaml``."""
        return self.output_dir / "docker-compose.yaml"

    @property
    def nginx_path(self) -> Path:
        """Path to the generated ``nginx.conf``."""
        return self.output_dir / "nginx.conf"

    @property
    def env_paths(self) -> list[Path]:
        """The ``.env`` files written on every run, app first."""
        return [
            self.output_dir / self.app_dir / ".env",
            self.output_dir / self.api_dir / ".env",
        ]

    @property
    def network_name(self) -> str:
        """Name of the bridge network every compose service joins."""
        return f"{self.project_slug}-network"

    @classmethod
    def from_env(cls) -> "SetupConfig":
        """Build a ``SetupConfig`` from environment variables.

        Recognised variables (all optional):
            DELTAS_SETUP_OUTPUT_DIR, DELTAS_SETUP_SECRET_COMMAND.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("DELTAS_SETUP_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["DELTAS_SETUP_OUTPUT_DIR"])
        if os.environ.get("DELTAS_SETUP_SECRET_COMMAND"):
            kwargs["secret_command"] = os.environ["DELTAS_SETUP_SECRET_COMMAND"]
        return cls(**kwargs)
