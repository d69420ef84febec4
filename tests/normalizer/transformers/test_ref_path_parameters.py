"""Tests for the ref-path-parameters rule."""

import copy

import pytest

from normalizer.errors import CollisionError
from normalizer.transformers.ref_path_parameters import ref_path_parameters

MYQUERY = {"name": "myquery", "in": "query", "schema": {"type": "string"}}


class TestRefPathParameters:
    """Test the ref_path_parameters function."""

    def test_openapi3_hoists_to_components(self):
        """Test that Path Item parameters move to components.parameters."""
        spec = {"openapi": "3.0.3", "paths": {"/": {"parameters": [MYQUERY], "get": {}}}}

        result = ref_path_parameters(spec)

        assert result["components"] == {"parameters": {"myquery": MYQUERY}}
        assert result["paths"]["/"]["parameters"] == [
            {"$ref": "#/components/parameters/myquery"}
        ]
        assert result["paths"]["/"]["get"] == {}

    def test_swagger_hoists_to_parameters(self):
        """Test that OpenAPI 2 parameters move to the top-level parameters."""
        param = {"name": "id", "in": "path", "required": True, "type": "string"}
        spec = {"swagger": "2.0", "paths": {"/{id}": {"parameters": [param]}}}

        result = ref_path_parameters(spec)

        assert result["parameters"] == {"id": param}
        assert result["paths"]["/{id}"]["parameters"] == [{"$ref": "#/parameters/id"}]

    def test_identical_parameters_shared(self):
        """Test that equal parameters on several paths share one entry."""
        spec = {
            "openapi": "3.0.3",
            "paths": {"/a": {"parameters": [MYQUERY]}, "/b": {"parameters": [MYQUERY]}},
        }

        result = ref_path_parameters(spec)

        assert result["components"]["parameters"] == {"myquery": MYQUERY}
        assert result["paths"]["/b"]["parameters"] == [
            {"$ref": "#/components/parameters/myquery"}
        ]

    def test_existing_pool_entries_kept(self):
        """Test that existing components.parameters entries are kept."""
        limit = {"name": "limit", "in": "query", "schema": {"type": "integer"}}
        spec = {
            "openapi": "3.0.3",
            "paths": {"/": {"parameters": [MYQUERY]}},
            "components": {"parameters": {"limit": limit}, "schemas": {}},
        }

        result = ref_path_parameters(spec)

        assert result["components"] == {
            "parameters": {"limit": limit, "myquery": MYQUERY},
            "schemas": {},
        }

    def test_collision_raises(self):
        """Test that a different parameter with an existing name raises."""
        spec = {
            "openapi": "3.0.3",
            "paths": {"/": {"parameters": [MYQUERY]}},
            "components": {"parameters": {"myquery": {"name": "myquery", "in": "header"}}},
        }

        with pytest.raises(CollisionError) as exc_info:
            ref_path_parameters(spec)

        assert exc_info.value.location == "#/paths/~1/parameters/0"

    def test_collision_between_path_items(self):
        """Test that differently shaped parameters of the same name on two paths raise."""
        spec = {
            "swagger": "2.0",
            "paths": {
                "/a/{id}": {"parameters": [{"name": "id", "in": "path", "type": "string"}]},
                "/b/{id}": {"parameters": [{"name": "id", "in": "path", "type": "integer"}]},
            },
        }

        with pytest.raises(CollisionError) as exc_info:
            ref_path_parameters(spec)

        assert exc_info.value.location == "#/paths/~1b~1{id}/parameters/0"

    def test_collision_distinguishes_bool_from_number(self):
        """Test that required: true and required: 1 are different parameters."""
        spec = {
            "openapi": "3.0.3",
            "paths": {
                "/a": {"parameters": [{**MYQUERY, "required": True}]},
                "/b": {"parameters": [{**MYQUERY, "required": 1}]},
            },
        }

        with pytest.raises(CollisionError):
            ref_path_parameters(spec)

    def test_refs_left_alone(self):
        """Test that parameters that are already $ref are unchanged."""
        ref = {"$ref": "#/components/parameters/limit"}
        spec = {"openapi": "3.0.3", "paths": {"/": {"parameters": [ref]}}}

        result = ref_path_parameters(spec)

        assert result["paths"]["/"]["parameters"] == [ref]
        assert "components" not in result

    def test_operation_parameters_untouched(self):
        """Test that Operation parameters are not hoisted."""
        spec = {"openapi": "3.0.3", "paths": {"/": {"get": {"parameters": [MYQUERY]}}}}

        result = ref_path_parameters(spec)

        assert result == spec
        assert "components" not in result

    def test_idempotent(self):
        """Test that applying the rule twice equals applying it once."""
        spec = {"openapi": "3.0.3", "paths": {"/": {"parameters": [MYQUERY]}}}

        once = ref_path_parameters(spec)

        assert ref_path_parameters(once) == once

    def test_does_not_mutate_input(self):
        """Test that the input document and its pool are not modified."""
        spec = {
            "openapi": "3.0.3",
            "paths": {"/": {"parameters": [MYQUERY]}},
            "components": {"parameters": {}},
        }
        snapshot = copy.deepcopy(spec)

        ref_path_parameters(spec)

        assert spec == snapshot
