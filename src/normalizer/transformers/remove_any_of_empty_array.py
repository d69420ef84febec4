"""Remove empty-array alternatives from anyOf and oneOf.

Some APIs return an empty array in place of an empty object, which gets
described as ``anyOf: [{$ref: Thing}, {type: array, maxItems: 0}]``.  Code
generators handle anyOf/oneOf poorly, so the empty-array member is dropped.
When a single member remains and the anyOf/oneOf was the only keyword, the
schema is replaced by that member.
"""

from typing import Any

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_array, is_object


def _is_empty_array_schema(schema: Any) -> bool:
    return (
        is_object(schema) and schema.get("type") == "array" and schema.get("maxItems") == 0
    )


class RemoveAnyOfEmptyArrayTransformer(OpenApiTransformer):
    """Filter ``{type: array, maxItems: 0}`` out of ``anyOf``/``oneOf``."""

    name = "remove-any-of-empty-array"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        new_schema = super().transform_schema(schema, ctx)
        if not is_object(new_schema):
            return new_schema

        for key in ("anyOf", "oneOf"):
            members = new_schema.get(key)
            if not is_array(members):
                continue

            filtered = [member for member in members if not _is_empty_array_schema(member)]
            if len(filtered) == len(members):
                continue

            if len(filtered) == 1 and len(new_schema) == 1:
                # anyOf/oneOf was the only keyword, use the remaining choice directly
                new_schema = filtered[0]
                if not is_object(new_schema):
                    break
            else:
                new_schema = {**new_schema, key: filtered}

        return new_schema


def remove_any_of_empty_array(spec: dict) -> dict:
    """Remove empty-array schemas from every ``anyOf``/``oneOf``.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return RemoveAnyOfEmptyArrayTransformer().transform(spec)
