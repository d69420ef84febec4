"""Convert type: string with format: binary (or file) to type: file.

Autorest generates a Stream for ``type: file`` but a string for
``type: string, format: binary``.

Before:
    type: string
    format: binary

After:
    type: file
"""

from typing import Any

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object


def _to_file_type(node: Any) -> Any:
    """Return a copy of node with type: file if it is a binary string."""
    if not is_object(node):
        return node

    if node.get("type") == "string" and node.get("format") in ("binary", "file"):
        new_node = {**node, "type": "file"}
        del new_node["format"]
        return new_node

    return node


class BinaryStringToFileTransformer(OpenApiTransformer):
    """Replace binary string schemas and parameters with ``type: file``."""

    name = "binary-string-to-file"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        # No recursion: type: file is only meaningful on the root schema of a
        # response.  Nothing enforces that, since a response may $ref any schema.
        return _to_file_type(schema)

    def transform_parameter(self, parameter: dict, ctx: TransformContext) -> dict:
        # OpenAPI 3 has no type: file, so only the inline OpenAPI 2 shape matters
        return _to_file_type(parameter)


def convert_binary_string_to_file(spec: dict) -> dict:
    """Convert binary string schemas and parameters to ``type: file``.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return BinaryStringToFileTransformer().transform(spec)
