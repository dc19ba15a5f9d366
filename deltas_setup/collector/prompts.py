"""Interactive prompt primitives.

``ServiceCollector`` only talks to the ``Prompter`` protocol, so the wizard
can run against the terminal (``RichPrompter``) or a scripted prompter in
tests.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from ..utils import console as default_console

Validator = Callable[[str], Optional[str]]
"""Returns an error message for invalid input, ``None`` when accepted."""


class SetupCancelled(Exception):
    """Raised when the operator aborts the interactive session."""


class Prompter(Protocol):
    def text(self, message: str, default: str = "", validate: Optional[Validator] = None) -> str: ...

    def secret(self, message: str, validate: Optional[Validator] = None) -> str: ...

    def confirm(self, message: str, default: bool = False) -> bool: ...

    def select(self, message: str, choices: Sequence[tuple[str, str]]) -> str: ...


class RichPrompter:
    """Terminal prompter backed by ``rich.prompt``.

    Invalid answers are reported and asked again in place. Ctrl-C or EOF at
    any prompt raises ``SetupCancelled``.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or default_console

    def text(self, message: str, default: str = "", validate: Optional[Validator] = None) -> str:
        while True:
            answer = self._ask(
                lambda: Prompt.ask(
                    message,
                    default=default,
                    show_default=bool(default),
                    console=self.console,
                )
            )
            if self._accepts(answer, validate):
                return answer

    def secret(self, message: str, validate: Optional[Validator] = None) -> str:
        while True:
            answer = self._ask(
                lambda: Prompt.ask(message, password=True, default="", show_default=False, console=self.console)
            )
            if self._accepts(answer, validate):
                return answer

    def confirm(self, message: str, default: bool = False) -> bool:
        return self._ask(lambda: Confirm.ask(message, default=default, console=self.console))

    def select(self, message: str, choices: Sequence[tuple[str, str]]) -> str:
        """Ask for one of *choices*, given as ``(value, label)`` pairs.

        The first choice is the default.
        """
        self.console.print(message)
        for index, (_, label) in enumerate(choices, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {label}")
        numbers = [str(i) for i in range(1, len(choices) + 1)]
        picked = self._ask(
            lambda: Prompt.ask("Choice", choices=numbers, default="1", console=self.console)
        )
        return choices[int(picked) - 1][0]

    # -- Internals ---------------------------------------------------------

    def _accepts(self, answer: str, validate: Optional[Validator]) -> bool:
        if validate is None:
            return True
        error = validate(answer)
        if error:
            self.console.print(f"[red]{error}[/red]")
            return False
        return True

    @staticmethod
    def _ask(ask):
        try:
            return ask()
        except (KeyboardInterrupt, EOFError):
            raise SetupCancelled("Setup cancelled by operator") from None
