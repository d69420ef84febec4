"""Tests for the remove-response-headers rule."""

import copy

from normalizer.transformers.remove_response_headers import remove_response_headers

HEADERS = {"X-Rate-Limit": {"schema": {"type": "integer"}}}


class TestRemoveResponseHeaders:
    """Test the remove_response_headers function."""

    def test_operation_responses(self):
        """Test that headers are removed from Operation responses."""
        spec = {
            "openapi": "3.0.3",
            "paths": {
                "/": {"get": {"responses": {"200": {"description": "OK", "headers": HEADERS}}}}
            },
        }

        result = remove_response_headers(spec)

        assert result["paths"]["/"]["get"]["responses"]["200"] == {"description": "OK"}

    def test_component_responses(self):
        """Test that headers are removed from reusable responses."""
        spec = {
            "openapi": "3.0.3",
            "paths": {},
            "components": {"responses": {"Error": {"description": "E", "headers": HEADERS}}},
        }

        result = remove_response_headers(spec)

        assert result["components"]["responses"]["Error"] == {"description": "E"}

    def test_component_headers_kept(self):
        """Test that reusable Header Objects are kept."""
        spec = {"openapi": "3.0.3", "paths": {}, "components": {"headers": HEADERS}}

        result = remove_response_headers(spec)

        assert result == spec

    def test_swagger_responses(self):
        """Test that OpenAPI 2 responses lose their headers."""
        spec = {
            "swagger": "2.0",
            "paths": {},
            "responses": {"Error": {"description": "E", "headers": {"X-A": {"type": "string"}}}},
        }

        result = remove_response_headers(spec)

        assert result["responses"]["Error"] == {"description": "E"}

    def test_does_not_mutate_input(self):
        """Test that the input document is not modified."""
        spec = {
            "openapi": "3.0.3",
            "paths": {
                "/": {"get": {"responses": {"200": {"description": "OK", "headers": HEADERS}}}}
            },
        }
        snapshot = copy.deepcopy(spec)

        remove_response_headers(spec)

        assert spec == snapshot
