"""Set produces: [] on OpenAPI 2 operations with only a default response.

If an operation only produces non-JSON types and only has a default response
code, Autorest generates a method which does not return a value.  If the
operation does not produce any types, Autorest generates a method which
returns the response value (e.g. a Stream for ``type: file``).

An empty ``produces`` is needed (rather than no ``produces``) to override the
document-level default.

There is no way to remove response media types in OpenAPI 3 without removing
the schema, so OpenAPI 3 documents are rejected.
"""

from normalizer.errors import VersionMismatchError
from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object


class RemoveDefaultOnlyProducesTransformer(OpenApiTransformer):
    """Force ``produces: []`` on operations whose only response is ``default``."""

    name = "remove-default-only-response-produces"

    def transform_operation(self, operation: dict, ctx: TransformContext) -> dict:
        if not is_object(operation):
            return operation

        responses = operation.get("responses")
        if not is_object(responses) or list(responses) != ["default"]:
            return operation

        return {**operation, "produces": []}

    def transform_document(self, document: dict, ctx: TransformContext) -> dict:
        if not is_object(document) or not ctx.version.is_swagger:
            raise VersionMismatchError(
                f"{self.name} can only be applied to OpenAPI 2.0 documents"
            )

        # Only paths need to be transformed
        if "paths" not in document:
            return document
        paths = self.visit(ctx, "paths", self.transform_paths, document["paths"])
        return {**document, "paths": paths}


def remove_default_only_response_produces(spec: dict) -> dict:
    """
    Set ``produces: []`` on operations with only a ``default`` response.

    Args:
        spec: The OpenAPI 2.0 specification as a dictionary

    Returns:
        The transformed specification

    Raises:
        VersionMismatchError: If spec is not an OpenAPI 2.0 document
    """
    return RemoveDefaultOnlyProducesTransformer().transform(spec)
