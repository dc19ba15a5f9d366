"""Auth secret generation via an external random-bytes command."""

from __future__ import annotations

from .utils import console, run_command


class SecretGenerationError(Exception):
    """Raised when the secret command fails or prints nothing."""


async def generate_secret(command: str = "openssl rand -base64 32") -> str:
    """Run *command* and return its trimmed stdout as the secret.

    Raises:
        SecretGenerationError: If the command exits non-zero or prints nothing.
    """
    with console.status("Generating secure secret..."):
        returncode, stdout, stderr = await run_command(command)

    if returncode != 0:
        raise SecretGenerationError(
            f"Secret command failed (exit {returncode}): {stderr or command}"
        )
    if not stdout:
        raise SecretGenerationError(f"Secret command produced no output: {command}")
    console.print("[green]Secret generated![/green]")
    return stdout
