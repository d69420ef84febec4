"""Convert const to enum.

This transformation converts the JSON Schema ``const`` keyword (OpenAPI 3.1)
to an ``enum`` array with a single value, which OpenAPI 2.0/3.0 generators
understand.
"""

from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    deep_equal,
    is_array,
    is_object,
    omit_keys,
)


class ConstToEnumTransformer(OpenApiTransformer):
    """Replace ``const`` with a single-value ``enum``."""

    name = "const-to-enum"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema) or "const" not in schema:
            return schema

        const_value = schema["const"]
        new_schema = omit_keys(schema, "const")

        enum_values = schema.get("enum")
        if enum_values is None:
            new_schema["enum"] = [const_value]
        elif is_array(enum_values):
            if any(deep_equal(const_value, value) for value in enum_values):
                # Validation could only succeed for the const value
                new_schema["enum"] = [const_value]
            elif enum_values:
                # Validation always fails (const or enum is unsatisfied), as
                # it does with an empty enum
                self.warn(ctx, "Using empty enum for schema with const not in enum")
                new_schema["enum"] = []

        return new_schema


def convert_const_to_enum(spec: dict) -> dict:
    """
    Convert all 'const' keywords to 'enum' arrays throughout the OpenAPI spec.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification with const converted to enum

    Example:
        Before:
        {
            "properties": {
                "status": {
                    "type": "string",
                    "const": "active"
                }
            }
        }

        After:
        {
            "properties": {
                "status": {
                    "type": "string",
                    "enum": ["active"]
                }
            }
        }
    """
    return ConstToEnumTransformer().transform(spec)
