"""Remove nullable properties from required.

Generators (Autorest in particular) treat a required property as non-null,
even when its schema is ``nullable``.  This transformation removes from
``required`` every property whose value may be null.

Before:
    type: object
    required: [id, description]
    properties:
      id: {type: string}
      description: {type: string, nullable: true}

After:
    type: object
    required: [id]
    properties:
      id: {type: string}
      description: {type: string, nullable: true}
"""

from typing import Any

from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    is_array,
    is_object,
    omit_keys,
)


def _allows_null(schema: Any) -> bool:
    return is_object(schema) and bool(schema.get("nullable") or schema.get("x-nullable"))


def _is_nullable_property(schema: Any, prop_name: str) -> bool:
    """
    Determine whether property prop_name of schema may be null.

    Args:
        schema: The object schema
        prop_name: Name of the property

    Returns:
        True unless some constraint of schema forbids null for the property
    """
    if not is_object(schema):
        return True

    properties = schema.get("properties")
    additional_properties = schema.get("additionalProperties")
    if is_object(properties) and prop_name in properties:
        if not _allows_null(properties[prop_name]):
            return False
    elif additional_properties is False:
        # Validation would fail if the property were present
        return False
    elif is_object(additional_properties) and not _allows_null(additional_properties):
        return False

    all_of = schema.get("allOf")
    if is_array(all_of) and not all(_is_nullable_property(s, prop_name) for s in all_of):
        return False

    for key in ("anyOf", "oneOf"):
        members = schema.get(key)
        if is_array(members) and not any(
            _is_nullable_property(s, prop_name) for s in members
        ):
            return False

    return True


class NullableNotRequiredTransformer(OpenApiTransformer):
    """Remove properties which allow null from ``required``."""

    name = "nullable-not-required"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema):
            return schema

        required = schema.get("required")
        if not is_array(required) or not required:
            return schema

        new_required = [
            name
            for name in required
            if not (isinstance(name, str) and _is_nullable_property(schema, name))
        ]
        if len(new_required) == len(required):
            return schema

        if not new_required:
            return omit_keys(schema, "required")
        return {**schema, "required": new_required}


def remove_nullable_from_required(spec: dict) -> dict:
    """Remove nullable properties from ``required`` arrays.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return NullableNotRequiredTransformer().transform(spec)
