"""Convert nullable: true (and x-nullable: true) to a "null" entry in type.

This is useful for converting from OpenAPI 2.0/3.0 to OpenAPI 3.1 or JSON
Schema.

Before:
    type: number
    nullable: true

After:
    type: [number, "null"]

Without ``type`` the schema already accepts null, so the flags are just
dropped.
"""

from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    is_array,
    is_object,
    omit_keys,
)


class NullableToTypeNullTransformer(OpenApiTransformer):
    """Replace ``nullable``/``x-nullable`` flags with a ``"null"`` type."""

    name = "nullable-to-type-null"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema):
            return schema

        if schema.get("nullable") is not True and schema.get("x-nullable") is not True:
            return schema

        new_schema = omit_keys(schema, "nullable", "x-nullable")

        type_value = schema.get("type")
        if is_array(type_value):
            if "null" not in type_value:
                new_schema["type"] = [*type_value, "null"]
        elif type_value is not None:
            new_schema["type"] = [type_value, "null"]

        return new_schema


def convert_nullable_to_type_null(spec: dict) -> dict:
    """Add ``"null"`` to ``type`` of every nullable schema.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return NullableToTypeNullTransformer().transform(spec)
