"""Operator-facing side of the setup wizard.

    ServiceCollector   - one configure_* operation per service domain
    RichPrompter       - rich.prompt-backed terminal prompter
    parse_env          - .env parser used to seed defaults
    resolve_default    - explicit -> saved -> literal fallback chain
"""

from .defaults import resolve_default
from .envfile import ExistingEnv, detect_existing_env, parse_env
from .prompts import Prompter, RichPrompter, SetupCancelled
from .services import ServiceCollector

__all__ = [
    "ExistingEnv",
    "Prompter",
    "RichPrompter",
    "ServiceCollector",
    "SetupCancelled",
    "detect_existing_env",
    "parse_env",
    "resolve_default",
]
