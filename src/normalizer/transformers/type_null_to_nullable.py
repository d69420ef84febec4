"""Convert a "null" entry in type to nullable: true.

The reverse of ``nullable-to-type-null``, for converting OpenAPI 3.1 schemas
to OpenAPI 3.0.

Before:
    type: [string, "null"]

After:
    type: string
    nullable: true
"""

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_array, is_object


class TypeNullToNullableTransformer(OpenApiTransformer):
    """Remove ``"null"`` from list ``type`` and set ``nullable: true``."""

    name = "type-null-to-nullable"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema):
            return schema

        type_value = schema.get("type")
        if not is_array(type_value):
            # A scalar type can't have "null" removed
            return schema

        new_type = [t for t in type_value if t != "null"]
        if len(new_type) == len(type_value) or not new_type:
            # No "null", or only "null" (which nullable can't express)
            return schema

        nullable = schema.get("nullable", True)
        if nullable is not True:
            self.warn(ctx, "Schema with nullable: %r and type: null", nullable)

        return {
            **schema,
            "type": new_type[0] if len(new_type) == 1 else new_type,
            "nullable": nullable,
        }


def convert_type_null_to_nullable(spec: dict) -> dict:
    """Replace ``"null"`` in list types by ``nullable: true``.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return TypeNullToNullableTransformer().transform(spec)
