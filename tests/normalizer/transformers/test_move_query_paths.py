"""Tests for the move-query-paths rule."""

import copy

import pytest

from normalizer.errors import CollisionError
from normalizer.transformers.move_query_paths import move_query_paths

OPERATION = {"get": {"responses": {"200": {"description": "OK"}}}}


class TestMoveQueryPaths:
    """Test the move_query_paths function."""

    def test_moves_query_paths(self):
        """Test that paths with a query string move to x-ms-paths."""
        spec = {"swagger": "2.0", "paths": {"/a": OPERATION, "/a?foo=bar": OPERATION}}

        result = move_query_paths(spec)

        assert result["paths"] == {"/a": OPERATION}
        assert result["x-ms-paths"] == {"/a?foo=bar": OPERATION}

    def test_keeps_empty_paths(self):
        """Test that paths is kept even when every path moves."""
        spec = {"openapi": "3.0.3", "paths": {"/a?x=1": OPERATION}}

        result = move_query_paths(spec)

        assert result["paths"] == {}
        assert result["x-ms-paths"] == {"/a?x=1": OPERATION}

    def test_appends_to_existing_x_ms_paths(self):
        """Test that existing x-ms-paths entries are kept."""
        spec = {
            "swagger": "2.0",
            "paths": {"/b?y=2": OPERATION},
            "x-ms-paths": {"/a?x=1": OPERATION},
        }

        result = move_query_paths(spec)

        assert list(result["x-ms-paths"]) == ["/a?x=1", "/b?y=2"]

    def test_collision_raises(self):
        """Test that a path already in x-ms-paths raises CollisionError."""
        spec = {
            "swagger": "2.0",
            "paths": {"/a?x=1": OPERATION},
            "x-ms-paths": {"/a?x=1": {}},
        }

        with pytest.raises(CollisionError, match="/a\\?x=1 already present"):
            move_query_paths(spec)

    def test_no_query_paths_returns_input(self):
        """Test that a document without query paths is returned as-is."""
        spec = {"swagger": "2.0", "paths": {"/a": OPERATION}}

        result = move_query_paths(spec)

        assert result is spec

    def test_does_not_mutate_input(self):
        """Test that the input document is not modified."""
        spec = {"swagger": "2.0", "paths": {"/a": OPERATION, "/a?foo=bar": OPERATION}}
        snapshot = copy.deepcopy(spec)

        move_query_paths(spec)

        assert spec == snapshot
