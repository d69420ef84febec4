"""Collapse allOf/anyOf/oneOf with a single child schema into the parent.

Schemas often wrap a ``$ref`` in a single-element ``allOf`` so that sibling
attributes (description, deprecated, xml, ...) can be attached to it.
Autorest does not handle that wrapper, but it does accept attributes next to
``$ref`` (which violates OpenAPI and JSON Reference).  This transformation
moves the child's attributes onto the parent.

Before:
    description: Example?
    allOf:
      - $ref: '#/components/schemas/Example'

After:
    description: Example?
    $ref: '#/components/schemas/Example'

A keyword is left alone if the child and the parent share an attribute with
different values.
"""

import logging
from typing import Any

from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    deep_equal,
    is_array,
    is_object,
)

logger = logging.getLogger(__name__)

_OF_KEYWORDS = ("allOf", "anyOf", "oneOf")


def _has_collision(schema: dict, of_schema: Any, of_name: str) -> bool:
    """Return True if schema and of_schema disagree on a shared attribute."""
    for prop, value in schema.items():
        if prop in of_schema and not deep_equal(of_schema[prop], value):
            logger.debug("Not collapsing %s due to differing %s", of_name, prop)
            return True
    return False


class CollapseSingleOfTransformer(OpenApiTransformer):
    """Merge the only child of ``allOf``/``anyOf``/``oneOf`` into its parent."""

    name = "collapse-single-of"

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        new_schema = super().transform_schema(schema, ctx)
        if not is_object(new_schema):
            return new_schema

        for of_name in _OF_KEYWORDS:
            of_schemas = new_schema.get(of_name)
            if (
                is_array(of_schemas)
                and len(of_schemas) == 1
                and is_object(of_schemas[0])
                and not _has_collision(new_schema, of_schemas[0], of_name)
            ):
                new_schema = {**new_schema, **of_schemas[0]}
                del new_schema[of_name]

        return new_schema


def collapse_single_of(spec: dict) -> dict:
    """
    Replace single-child ``allOf``/``anyOf``/``oneOf`` by the child itself.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification

    Example:
        Before:
        {"description": "x", "allOf": [{"$ref": "#/A"}]}

        After:
        {"description": "x", "$ref": "#/A"}
    """
    return CollapseSingleOfTransformer().transform(spec)
