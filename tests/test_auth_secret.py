"""Tests for auth secret generation."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from deltas_setup.auth_secret import SecretGenerationError, generate_secret

pytestmark = pytest.mark.unit


class TestGenerateSecret:
    async def test_returns_stdout(self):
        assert await generate_secret("echo c2VjcmV0") == "c2VjcmV0"

    async def test_default_command_is_openssl(self):
        mock = AsyncMock(return_value=(0, "abc=", ""))
        with patch("deltas_setup.auth_secret.run_command", mock):
            assert await generate_secret() == "abc="
        mock.assert_awaited_once_with("openssl rand -base64 32")

    async def test_failure_raises(self):
        with pytest.raises(SecretGenerationError, match="exit 2"):
            await generate_secret("exit 2")

    async def test_empty_output_raises(self):
        with pytest.raises(SecretGenerationError, match="no output"):
            await generate_secret("true")
