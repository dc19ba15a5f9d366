"""Tests for the prompt-default fallback chain."""

from __future__ import annotations

import pytest

from deltas_setup.collector.defaults import resolve_default

pytestmark = pytest.mark.unit


class TestResolveDefault:
    def test_explicit_wins(self):
        assert resolve_default("typed", "saved", "literal") == "typed"

    def test_saved_when_blank(self):
        assert resolve_default("", "saved", "literal") == "saved"

    def test_literal_last(self):
        assert resolve_default("", None, "literal") == "literal"

    def test_all_empty(self):
        assert resolve_default("", None, "") == ""

    def test_no_candidates(self):
        assert resolve_default() == ""
