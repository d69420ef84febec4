"""Tests for the nullable-to-type-null rule."""

import copy

from normalizer.transformers.nullable_to_type_null import convert_nullable_to_type_null


NULLABLE_STRING = {"type": "string", "nullable": True}


def _schemas(**schemas):
    return {"openapi": "3.0.3", "paths": {}, "components": {"schemas": schemas}}


class TestNullableToTypeNull:
    """Test the convert_nullable_to_type_null function."""

    def test_scalar_type(self):
        """Test that nullable: true adds null to a scalar type."""
        result = convert_nullable_to_type_null(_schemas(A={"type": "number", "nullable": True}))

        assert result["components"]["schemas"]["A"] == {"type": ["number", "null"]}

    def test_list_type(self):
        """Test that null is appended to a list type."""
        result = convert_nullable_to_type_null(
            _schemas(A={"type": ["string", "integer"], "nullable": True})
        )

        assert result["components"]["schemas"]["A"] == {"type": ["string", "integer", "null"]}

    def test_list_type_already_null(self):
        """Test that null is not added twice."""
        result = convert_nullable_to_type_null(
            _schemas(A={"type": ["string", "null"], "nullable": True})
        )

        assert result["components"]["schemas"]["A"] == {"type": ["string", "null"]}

    def test_x_nullable(self):
        """Test that the x-nullable extension is converted too."""
        result = convert_nullable_to_type_null(
            _schemas(A={"type": "string", "x-nullable": True, "nullable": True})
        )

        assert result["components"]["schemas"]["A"] == {"type": ["string", "null"]}

    def test_no_type(self):
        """Test that the flags are dropped when there is no type."""
        result = convert_nullable_to_type_null(_schemas(A={"nullable": True, "description": "d"}))

        assert result["components"]["schemas"]["A"] == {"description": "d"}

    def test_nullable_false_unchanged(self):
        """Test that nullable: false is left alone."""
        spec = _schemas(A={"type": "string", "nullable": False})

        result = convert_nullable_to_type_null(spec)

        assert result == spec

    def test_nested_property(self):
        """Test that properties are converted."""
        result = convert_nullable_to_type_null(
            _schemas(A={"type": "object", "properties": {"b": NULLABLE_STRING}})
        )

        assert result["components"]["schemas"]["A"]["properties"]["b"] == {
            "type": ["string", "null"]
        }

    def test_idempotent(self):
        """Test that applying the rule twice equals applying it once."""
        once = convert_nullable_to_type_null(_schemas(A={"type": "number", "nullable": True}))

        assert convert_nullable_to_type_null(once) == once

    def test_does_not_mutate_input(self):
        """Test that the input document is not modified."""
        spec = _schemas(A={"type": "number", "nullable": True})
        snapshot = copy.deepcopy(spec)

        convert_nullable_to_type_null(spec)

        assert spec == snapshot
