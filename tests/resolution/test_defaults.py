"""
Tests for default command resolution.
"""

import logging

import pytest

from cmdtree.core.models import Group, InlineCommand
from cmdtree.exceptions import DanglingDefaultError
from cmdtree.resolution.defaults import resolve_default

ROOT = Group.model_validate(
    {
        "commands": {
            "g1": {
                "default": "g2",
                "commands": {
                    "g2": {"default": "leaf", "commands": {"leaf": "echo leaf", "other": "echo other"}}
                },
            },
            "dangling": {"default": "missing", "commands": {"present": "echo present"}},
            "plain": {"commands": {"x": "echo x"}},
        }
    }
)


class TestResolveDefault:
    """Tests for default command resolution."""

    def test_follows_chain_to_leaf(self):
        """Test every group passed through is appended to the ancestors."""
        g1 = ROOT.commands["g1"]
        g2 = g1.commands["g2"]

        command, ancestors = resolve_default(g1, (ROOT,))

        assert isinstance(command, InlineCommand)
        assert command.command == "echo leaf"
        assert len(ancestors) == 3
        assert ancestors[0] is ROOT
        assert ancestors[1] is g1
        assert ancestors[2] is g2

    def test_leaf_is_returned_unchanged(self):
        leaf = ROOT.commands["g1"].commands["g2"].commands["other"]
        command, ancestors = resolve_default(leaf, (ROOT,))
        assert command is leaf
        assert ancestors == (ROOT,)

    def test_group_without_default_stays_a_group(self):
        """Test groups without a default are returned as they are."""
        plain = ROOT.commands["plain"]
        command, ancestors = resolve_default(plain, (ROOT,))
        assert command is plain
        assert ancestors == (ROOT,)

    def test_dangling_default_degrades_to_no_default(self, caplog):
        """Test a dangling default is logged and treated as no default."""
        dangling = ROOT.commands["dangling"]

        with caplog.at_level(logging.WARNING, logger="cmdtree.resolution.defaults"):
            command, ancestors = resolve_default(dangling, (ROOT,))

        assert command is dangling
        assert ancestors == (ROOT,)
        assert "missing" in caplog.text

    def test_dangling_default_raises_in_strict_mode(self):
        """Test strict mode raises for a dangling default."""
        with pytest.raises(DanglingDefaultError) as excinfo:
            resolve_default(ROOT.commands["dangling"], (ROOT,), strict=True)
        assert excinfo.value.default == "missing"
        assert excinfo.value.available == ("present",)
