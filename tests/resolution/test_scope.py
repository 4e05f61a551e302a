"""
Tests for scope filtering.

GitRoot scope anchors a node to one specific repository rather than to any
repository, so both the location check and the root equality are covered.
"""

from pathlib import Path

import pytest

from cmdtree.core.models import Group
from cmdtree.exceptions import ScopeResolutionError
from cmdtree.resolution.scope import ScopeContext, is_in_scope, walk_in_scope
from cmdtree.resolution.walker import Walk

HOME = Path("/home/alice")
DOCS = Path("/docs")


def node(root: dict | None) -> Group:
    return Group.model_validate({"root": root} if root else {})


def context(current_dir: str, repo_root: str | None = None) -> ScopeContext:
    return ScopeContext(
        current_dir=Path(current_dir),
        repo_root=Path(repo_root) if repo_root else None,
        home=HOME,
    )


class TestIsInScope:
    """Tests for the scope predicate."""

    def test_no_root_is_visible(self):
        assert is_in_scope(node(None), context("/anywhere"), DOCS)

    def test_root_without_scope_is_visible(self):
        assert is_in_scope(node({"path": "/repo"}), context("/anywhere"), DOCS)

    def test_global_is_visible(self):
        assert is_in_scope(node({"path": "/repo", "scope": "Global"}), context("/x"), DOCS)

    def test_exact_requires_equal_directory(self):
        """Test Exact only matches the configured directory itself."""
        exact = node({"path": "/repo/app", "scope": "Exact"})
        assert is_in_scope(exact, context("/repo/app"), DOCS)
        assert not is_in_scope(exact, context("/repo/app/src"), DOCS)
        assert not is_in_scope(exact, context("/repo"), DOCS)

    def test_exact_expands_home(self):
        exact = node({"path": "~/proj", "scope": "Exact"})
        assert is_in_scope(exact, context("/home/alice/proj"), DOCS)

    def test_exact_relative_to_document(self):
        """Test relative roots resolve against the document directory."""
        exact = node({"path": "app", "scope": "Exact"})
        assert is_in_scope(exact, context("/docs/app"), DOCS)


class TestGitRootScope:
    """Tests for GitRoot scopes."""

    git = node({"path": "/repo", "scope": "GitRoot"})

    def test_outside_any_repository_is_hidden(self):
        """Test GitRoot nodes are hidden outside any repository."""
        assert not is_in_scope(self.git, context("/elsewhere"), DOCS)

    def test_inside_the_configured_repository_is_visible(self):
        assert is_in_scope(self.git, context("/repo/src", "/repo"), DOCS)
        assert is_in_scope(self.git, context("/repo", "/repo"), DOCS)

    def test_other_repository_is_hidden(self):
        """Test GitRoot nodes are hidden in another repository."""
        assert not is_in_scope(self.git, context("/other/src", "/other"), DOCS)

    def test_current_dir_outside_detected_root_is_hidden(self):
        assert not is_in_scope(self.git, context("/elsewhere", "/repo"), DOCS)


class TestWalkInScope:
    """Tests for walking only in-scope commands."""

    tree = Group.model_validate(
        {
            "commands": {
                "here": {"root": {"path": "/work", "scope": "Exact"}, "commands": {"x": "echo x"}},
                "there": {"root": {"path": "/other", "scope": "Exact"}, "commands": {"y": "echo y"}},
                "always": "echo always",
            }
        }
    )

    def test_out_of_scope_subtrees_are_skipped(self):
        """Test visitors never see nodes below an out-of-scope group."""
        visited = []

        def visit(keys, node, ancestors):
            visited.append(keys)
            return Walk.CONTINUE

        walk_in_scope(self.tree, visit, context("/work"), DOCS)
        assert visited == [("here",), ("here", "x"), ("always",)]

    def test_unresolvable_root_stops_and_raises(self):
        """Test a root that cannot be resolved stops the walk with an error."""
        tree = Group.model_validate(
            {
                "commands": {
                    "broken": {"command": "echo", "root": {"path": "", "scope": "Exact"}},
                    "after": "echo after",
                }
            }
        )
        visited = []

        def visit(keys, node, ancestors):
            visited.append(keys)
            return Walk.CONTINUE

        with pytest.raises(ScopeResolutionError) as excinfo:
            walk_in_scope(tree, visit, context("/work"), DOCS)

        assert excinfo.value.keys == ("broken",)
        assert visited == []
