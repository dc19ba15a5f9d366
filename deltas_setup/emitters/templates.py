"""Jinja2 template rendering for deployment artifacts.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``deltas_setup/emitters/templates/`` directory and renders them with the
structured sections built by each emitter.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for deployment artifacts.

    Autoescaping is off (none of the outputs are HTML) and undefined
    variables raise instead of rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["dotenv_quote"] = _dotenv_quote_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"nginx.conf.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _dotenv_quote_filter(value: Any) -> str:
    """Wrap a value in double quotes for a ``.env`` file.

    No escaping is applied; the reader strips exactly one layer of quotes.
    A value containing ``"`` or ``\\`` is written verbatim, so it round-trips
    through ``parse_env`` but other dotenv readers that interpret escapes
    may read it differently.
    """
    return f'"{value}"'
