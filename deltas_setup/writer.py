"""Writes emitted artifacts to disk.

Files are written one after another, each awaited before the next starts.
The first filesystem error aborts the run; files already written stay on
disk.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import SetupConfig
from .utils import console, create_progress


@dataclass(frozen=True)
class Artifacts:
    """The three emitted texts. ``nginx`` is ``None`` without a reverse proxy."""

    compose: str
    env: str
    nginx: Optional[str] = None


class ArtifactWriter:
    """Persists ``Artifacts`` under ``config.output_dir``."""

    def __init__(self, config: SetupConfig) -> None:
        self.config = config

    def targets(self, artifacts: Artifacts) -> list[tuple[Path, str]]:
        """Ordered ``(path, content)`` pairs for *artifacts*."""
        targets = [(self.config.compose_path, artifacts.compose)]
        if artifacts.nginx is not None:
            targets.append((self.config.nginx_path, artifacts.nginx))
        targets.extend((path, artifacts.env) for path in self.config.env_paths)
        return targets

    async def write(self, artifacts: Artifacts) -> list[Path]:
        """Write every artifact, reporting progress per file.

        Returns:
            The written paths in write order.

        Raises:
            OSError: On the first failed directory creation or write.
        """
        written: list[Path] = []
        with create_progress() as progress:
            task = progress.add_task("Saving configuration files...", total=None)
            for path, content in self.targets(artifacts):
                await asyncio.to_thread(_write_file, path, content)
                written.append(path)
                progress.update(task, description=f"[green]✓[/green] {self._display(path)}")

        console.print("[dim]\nFiles created:[/dim]")
        for path in written:
            console.print(f"  [green]✓[/green] {self._display(path)}")
        return written

    def _display(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.config.output_dir))
        except ValueError:
            return str(path)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
