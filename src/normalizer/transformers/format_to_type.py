"""Convert numeric string formats to numeric types.

Autorest doesn't generate int/decimal/double properties for ``type: string``,
so the type is changed to match the format.

Before:
    type: string
    format: int64

After:
    type: integer
    format: int64

``format: integer`` is redundant with ``type: integer`` and is dropped.
"""

from typing import Any

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object

_FORMAT_TO_TYPE = {
    "decimal": "number",
    "double": "number",
    "float": "number",
    "integer": "integer",
    "int32": "integer",
    "int64": "integer",
}


def _format_to_type(node: Any) -> Any:
    """Return a copy of node with its type derived from its format, if known."""
    if not is_object(node) or node.get("type") != "string":
        return node

    new_type = _FORMAT_TO_TYPE.get(node.get("format"))
    if new_type is None:
        return node

    new_node = {**node, "type": new_type}
    if new_node["format"] == new_type:
        del new_node["format"]
    return new_node


class FormatToTypeTransformer(OpenApiTransformer):
    """Set ``type`` from numeric ``format`` on schemas, parameters and headers."""

    name = "format-to-type"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        return _format_to_type(super().transform_schema(schema, ctx))

    def transform_parameter(self, parameter: dict, ctx: TransformContext) -> dict:
        return _format_to_type(super().transform_parameter(parameter, ctx))

    def transform_header(self, header: dict, ctx: TransformContext) -> dict:
        return _format_to_type(super().transform_header(header, ctx))


def convert_format_to_type(spec: dict) -> dict:
    """
    Convert ``type: string`` with a numeric format to a numeric type.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification

    Example:
        Before:
        {"type": "string", "format": "int32"}

        After:
        {"type": "integer", "format": "int32"}
    """
    return FormatToTypeTransformer().transform(spec)
