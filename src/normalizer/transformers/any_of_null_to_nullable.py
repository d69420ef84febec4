"""Convert {type: null} members of anyOf to nullable: true.

Before:
    anyOf:
      - type: string
      - type: integer
      - type: "null"

After:
    nullable: true
    anyOf:
      - type: string
      - type: integer

``anyOf`` is kept (even with one remaining member) so that
``collapse-single-of`` can decide whether to unwrap it.
"""

from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    deep_equal,
    is_array,
    is_object,
)

_NULL_SCHEMA = {"type": "null"}


class AnyOfNullToNullableTransformer(OpenApiTransformer):
    """Replace ``{type: null}`` in ``anyOf`` by ``nullable: true``."""

    name = "any-of-null-to-nullable"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema):
            return schema

        if schema.get("nullable", True) is not True:
            return schema

        any_of = schema.get("anyOf")
        if not is_array(any_of) or len(any_of) < 2:
            return schema

        any_of_no_null = [member for member in any_of if not deep_equal(member, _NULL_SCHEMA)]
        if len(any_of_no_null) == len(any_of) or not any_of_no_null:
            return schema

        return {**schema, "nullable": True, "anyOf": any_of_no_null}


def convert_any_of_null_to_nullable(spec: dict) -> dict:
    """Replace ``{type: null}`` members of ``anyOf`` by ``nullable: true``.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return AnyOfNullToNullableTransformer().transform(spec)
