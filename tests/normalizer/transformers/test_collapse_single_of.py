"""Tests for the collapse-single-of rule."""

import copy

from normalizer.transformers.collapse_single_of import collapse_single_of


def _schemas(**schemas):
    return {"openapi": "3.0.3", "paths": {}, "components": {"schemas": schemas}}


class TestCollapseSingleOf:
    """Test the collapse_single_of function."""

    def test_all_of_ref(self):
        """Test that a single $ref in allOf is merged into the parent."""
        result = collapse_single_of(
            _schemas(
                A={"description": "Example?", "allOf": [{"$ref": "#/components/schemas/Example"}]}
            )
        )

        assert result["components"]["schemas"]["A"] == {
            "description": "Example?",
            "$ref": "#/components/schemas/Example",
        }

    def test_any_of_and_one_of(self):
        """Test that anyOf and oneOf are collapsed too."""
        result = collapse_single_of(
            _schemas(A={"anyOf": [{"type": "string"}]}, B={"oneOf": [{"type": "integer"}]})
        )

        assert result["components"]["schemas"]["A"] == {"type": "string"}
        assert result["components"]["schemas"]["B"] == {"type": "integer"}

    def test_multiple_members_unchanged(self):
        """Test that allOf with more than one member is kept."""
        spec = _schemas(A={"allOf": [{"type": "string"}, {"maxLength": 3}]})

        result = collapse_single_of(spec)

        assert result == spec

    def test_collision_keeps_keyword(self):
        """Test that differing shared attributes prevent collapsing."""
        spec = _schemas(
            A={"description": "outer", "allOf": [{"description": "inner", "type": "string"}]}
        )

        result = collapse_single_of(spec)

        assert result == spec

    def test_collision_distinguishes_bool_from_number(self):
        """Test that false and 0 are different values when checking for collisions."""
        spec = _schemas(A={"default": 0, "allOf": [{"type": "boolean", "default": False}]})

        result = collapse_single_of(spec)

        assert result == spec
        assert "allOf" in result["components"]["schemas"]["A"]

    def test_equal_shared_attribute_collapses(self):
        """Test that equal shared attributes do not count as a collision."""
        result = collapse_single_of(
            _schemas(A={"type": "object", "allOf": [{"type": "object", "title": "T"}]})
        )

        assert result["components"]["schemas"]["A"] == {"type": "object", "title": "T"}

    def test_nested_collapses_first(self):
        """Test that inner single-of wrappers are collapsed bottom-up."""
        result = collapse_single_of(
            _schemas(A={"allOf": [{"allOf": [{"$ref": "#/components/schemas/B"}]}]})
        )

        assert result["components"]["schemas"]["A"] == {"$ref": "#/components/schemas/B"}

    def test_idempotent(self):
        """Test that applying the rule twice equals applying it once."""
        once = collapse_single_of(_schemas(A={"description": "x", "allOf": [{"$ref": "#/A"}]}))

        assert collapse_single_of(once) == once

    def test_does_not_mutate_input(self):
        """Test that the input document is not modified."""
        spec = _schemas(A={"description": "x", "allOf": [{"$ref": "#/A"}]})
        snapshot = copy.deepcopy(spec)

        collapse_single_of(spec)

        assert spec == snapshot
