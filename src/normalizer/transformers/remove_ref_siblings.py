"""Remove keywords next to $ref in Schema Objects.

Before OpenAPI 3.1, keywords adjacent to ``$ref`` are ignored, and some
tools choke on them.  By default every sibling is removed; ``remove`` or
``retain`` narrow that down to a set of keyword names.
"""

from collections.abc import Iterable

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object


class RemoveRefSiblingsTransformer(OpenApiTransformer):
    """Strip keywords from Schema Objects which have ``$ref``."""

    name = "remove-ref-siblings"

    def __init__(self, remove: Iterable[str] | None = None, retain: Iterable[str] | None = None):
        """Initialize the transformer.

        Args:
            remove: Only remove these keywords
            retain: Remove every keyword except these

        Raises:
            ValueError: If both remove and retain are given
        """
        if remove is not None and retain is not None:
            raise ValueError("remove and retain options are exclusive")
        self.remove = frozenset(remove) if remove is not None else None
        self.retain = frozenset(retain) if retain is not None else None

    def should_remove(self, keyword: str) -> bool:
        """Return True if keyword should be removed from a schema with ``$ref``."""
        if self.remove is not None:
            return keyword in self.remove
        if self.retain is not None:
            return keyword not in self.retain
        return True

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema) or "$ref" not in schema:
            return schema

        return {
            keyword: value
            for keyword, value in schema.items()
            if keyword == "$ref" or not self.should_remove(keyword)
        }


def remove_ref_siblings(spec: dict) -> dict:
    """Remove all keywords next to ``$ref`` in Schema Objects.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return RemoveRefSiblingsTransformer().transform(spec)
