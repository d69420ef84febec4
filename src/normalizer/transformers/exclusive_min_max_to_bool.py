"""Convert numeric exclusiveMinimum/exclusiveMaximum to the boolean form.

OpenAPI 3.1 (JSON Schema 2019-09+) uses a number for ``exclusiveMaximum``,
OpenAPI 2.0/3.0 use a boolean modifier on ``maximum``.

Before:
    exclusiveMaximum: 10

After:
    maximum: 10
    exclusiveMaximum: true

If ``maximum`` is already below the exclusive bound, the exclusive bound is
redundant and is dropped (likewise for minimums).
"""

from typing import Any

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ExclusiveMinMaxToBoolTransformer(OpenApiTransformer):
    """Rewrite numeric exclusive bounds as ``maximum``/``minimum`` + boolean."""

    name = "exclusive-min-max-to-bool"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema):
            return schema

        exclusive_maximum = schema.get("exclusiveMaximum")
        exclusive_minimum = schema.get("exclusiveMinimum")
        if not _is_number(exclusive_maximum) and not _is_number(exclusive_minimum):
            return schema

        new_schema = dict(schema)

        if _is_number(exclusive_maximum):
            maximum = schema.get("maximum")
            if _is_number(maximum) and maximum < exclusive_maximum:
                del new_schema["exclusiveMaximum"]
            else:
                new_schema["maximum"] = exclusive_maximum
                new_schema["exclusiveMaximum"] = True

        if _is_number(exclusive_minimum):
            minimum = schema.get("minimum")
            if _is_number(minimum) and minimum > exclusive_minimum:
                del new_schema["exclusiveMinimum"]
            else:
                new_schema["minimum"] = exclusive_minimum
                new_schema["exclusiveMinimum"] = True

        return new_schema


def convert_exclusive_min_max_to_bool(spec: dict) -> dict:
    """Convert numeric exclusive bounds to the OpenAPI 3.0 boolean form.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return ExclusiveMinMaxToBoolTransformer().transform(spec)
