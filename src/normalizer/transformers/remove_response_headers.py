"""Remove headers from Response Objects.

Autorest generates a strongly typed class for each response with headers,
which is an annoyance (especially if the default error response has headers)
and ``x-ms-headers`` does not work correctly:
https://github.com/Azure/autorest/pull/3322

Reusable Header Objects (``components.headers``) are left alone, since they
have no effect on generated code.
"""

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object, omit_keys


class RemoveResponseHeadersTransformer(OpenApiTransformer):
    """Strip ``headers`` from every Response Object."""

    name = "remove-response-headers"

    def transform_response(self, response: dict, ctx: TransformContext) -> dict:
        if is_object(response) and "headers" in response:
            return omit_keys(response, "headers")
        return response

    def transform_components(self, components: dict, ctx: TransformContext) -> dict:
        # Only responses need to be transformed
        if not is_object(components) or "responses" not in components:
            return components
        responses = self.visit(ctx, "responses", self.transform_responses, components["responses"])
        return {**components, "responses": responses}

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        # Schemas can't contain responses
        return schema


def remove_response_headers(spec: dict) -> dict:
    """Remove ``headers`` from all Response Objects.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return RemoveResponseHeadersTransformer().transform(spec)
