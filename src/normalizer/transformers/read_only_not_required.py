"""Remove readOnly properties from required.

A required ``readOnly`` property must be sent by the server but must not be
sent by the client.  Generators which use one model for requests and
responses enforce ``required`` on both, so the property is made optional.

Options:
    remove_validation: Also drop validation keywords (maximum, pattern, ...)
        from the affected properties, since client-side validation of a
        value the client never sends is only a source of errors.
    set_non_nullable: Add ``x-nullable: false`` to the affected properties,
        so Autorest still generates a non-nullable type for them.
"""

from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    is_array,
    is_object,
    omit_keys,
)

_VALIDATION_KEYWORDS = (
    "exclusiveMaximum",
    "exclusiveMinimum",
    "maxItems",
    "maxLength",
    "maximum",
    "minItems",
    "minLength",
    "minimum",
    "multipleOf",
    "pattern",
)


class ReadOnlyNotRequiredTransformer(OpenApiTransformer):
    """Remove ``readOnly`` properties from ``required``."""

    name = "read-only-not-required"

    def __init__(self, remove_validation: bool = False, set_non_nullable: bool = False):
        """Initialize the transformer.

        Args:
            remove_validation: Remove validation keywords from affected properties
            set_non_nullable: Add ``x-nullable: false`` to affected properties
        """
        self.remove_validation = remove_validation
        self.set_non_nullable = set_non_nullable

    def _update_property(self, prop_schema: dict) -> dict:
        # TODO: follow $ref so validation can be removed from referenced schemas
        new_property = prop_schema
        if self.remove_validation:
            new_property = omit_keys(new_property, *_VALIDATION_KEYWORDS)
        if self.set_non_nullable and "x-nullable" not in new_property:
            # Ignored by Autorest for enum and class types
            new_property = {**new_property, "x-nullable": False}
        return new_property

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        schema = super().transform_schema(schema, ctx)
        if not is_object(schema):
            return schema

        properties = schema.get("properties")
        required = schema.get("required")
        if not is_object(properties) or not is_array(required) or not required:
            return schema

        read_only_names = {
            name
            for name, prop in properties.items()
            if is_object(prop) and prop.get("readOnly")
        }
        new_required = [name for name in required if name not in read_only_names]
        if len(new_required) == len(required):
            return schema

        new_properties = properties
        if self.remove_validation or self.set_non_nullable:
            new_properties = dict(properties)
            for name in required:
                if name in read_only_names:
                    new_properties[name] = self._update_property(properties[name])

        new_schema = {**schema, "properties": new_properties, "required": new_required}
        if not new_required:
            del new_schema["required"]
        return new_schema


def remove_read_only_from_required(
    spec: dict, remove_validation: bool = False, set_non_nullable: bool = False
) -> dict:
    """Remove ``readOnly`` properties from ``required`` arrays.

    Args:
        spec: The OpenAPI specification as a dictionary
        remove_validation: Remove validation keywords from affected properties
        set_non_nullable: Add ``x-nullable: false`` to affected properties

    Returns:
        The transformed specification
    """
    transformer = ReadOnlyNotRequiredTransformer(
        remove_validation=remove_validation, set_non_nullable=set_non_nullable
    )
    return transformer.transform(spec)
