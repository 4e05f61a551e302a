"""
Tests for exception messages and attributes.

Error messages are shown to users verbatim, so they must name the offending
keys, paths and the available alternatives.
"""

from pathlib import Path

import pytest

from cmdtree.exceptions import (
    CmdTreeError,
    ConflictError,
    DanglingDefaultError,
    DefaultEnvironmentMissingError,
    EnvironmentFileError,
    EnvironmentSelectionError,
    NoEnvironmentSpecifiedError,
    NoMatchError,
    ScopeResolutionError,
    UnknownEnvironmentError,
)


class TestHierarchy:
    """Tests for the exception class hierarchy."""

    @pytest.mark.parametrize(
        "error",
        [
            NoEnvironmentSpecifiedError(["dev"]),
            UnknownEnvironmentError("qa", ["dev"]),
            DefaultEnvironmentMissingError("qa", ["dev"]),
            EnvironmentFileError(Path(".env"), "file not found"),
        ],
    )
    def test_environment_errors_share_a_base(self, error):
        """Test environment errors can be caught together."""
        assert isinstance(error, EnvironmentSelectionError)
        assert isinstance(error, CmdTreeError)


class TestMessages:
    """Tests for user-facing error messages."""

    def test_conflict_names_keys_and_sources(self):
        """Test conflict messages name the command, its documents and the fix."""
        error = ConflictError(["app", "build"], [Path("/a/cmdtree.json"), Path("/b/cmdtree.json")])
        message = str(error)
        assert "'app build'" in message
        assert "/a/cmdtree.json, /b/cmdtree.json" in message
        assert "on_conflict setting to Override" in message

    def test_no_match(self):
        assert str(NoMatchError(["app", "deploy"])).endswith("app deploy")

    def test_environment_lists_alternatives(self):
        """Test environment errors list the available environments."""
        message = str(UnknownEnvironmentError("qa", ["dev", "prod"]))
        assert "'qa'" in message
        assert message.endswith("dev, prod")

    def test_dangling_default_without_commands(self):
        assert str(DanglingDefaultError("run", [])).endswith("none")

    def test_scope_error_keeps_keys(self):
        """Test scope errors keep the key path of the command."""
        error = ScopeResolutionError(["deploy", "prod"], "path is empty")
        assert error.keys == ("deploy", "prod")
        assert "deploy prod" in str(error)
