"""Move Path Item parameters to the reusable parameters pool.

Parameters declared on a Path Item are moved to the document's reusable
parameters (``#/parameters`` in OpenAPI 2, ``#/components/parameters`` in
OpenAPI 3) and replaced by a ``$ref``, so that Autorest treats them as
properties of the generated client rather than method arguments:
https://github.com/Azure/autorest/tree/master/docs/extensions#x-ms-parameter-location

Before:
    paths:
      /:
        parameters:
          - {name: myquery, in: query, schema: {type: string}}

After:
    components:
      parameters:
        myquery: {name: myquery, in: query, schema: {type: string}}
    paths:
      /:
        parameters:
          - $ref: '#/components/parameters/myquery'
"""

from dataclasses import dataclass, field

from normalizer.errors import CollisionError
from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    deep_equal,
    is_array,
    is_object,
    is_ref,
)


@dataclass
class ParameterPoolContext(TransformContext):
    """Context carrying the reusable parameters pool being built."""

    pool: dict = field(default_factory=dict)
    hoisted: int = 0


class RefPathParametersTransformer(OpenApiTransformer):
    """Replace inline Path Item parameters by ``$ref`` to shared parameters."""

    name = "ref-path-parameters"

    def create_context(self, document: dict) -> ParameterPoolContext:
        ctx = super().create_context(document)
        if not is_object(document):
            pool = None
        elif ctx.version.is_swagger:
            pool = document.get("parameters")
        else:
            pool = (document.get("components") or {}).get("parameters")
        return ParameterPoolContext(version=ctx.version, pool=dict(pool or {}))

    def transform_path_item(self, path_item: dict, ctx: ParameterPoolContext) -> dict:
        if not is_object(path_item) or not path_item.get("parameters"):
            return path_item

        parameters = self.visit(ctx, "parameters", self._hoist_parameters, path_item["parameters"])
        return {**path_item, "parameters": parameters}

    def _hoist_parameters(self, parameters: list, ctx: ParameterPoolContext) -> list:
        if not is_array(parameters):
            self.warn(ctx, "Ignoring non-array parameters: %r", parameters)
            return parameters
        return [
            self.visit(ctx, index, self._hoist_parameter, param)
            for index, param in enumerate(parameters)
        ]

    def _hoist_parameter(self, parameter: dict, ctx: ParameterPoolContext) -> dict:
        if not is_object(parameter) or is_ref(parameter):
            return parameter

        name = parameter.get("name")
        if not isinstance(name, str):
            self.warn(ctx, "Ignoring parameter without a name: %r", parameter)
            return parameter

        existing = ctx.pool.get(name)
        if existing is None:
            ctx.pool[name] = parameter
        elif not deep_equal(existing, parameter):
            raise CollisionError(
                f"Parameter {name!r} differs from the shared parameter of the same name",
                ctx.pointer,
            )

        ctx.hoisted += 1
        return {"$ref": ctx.version.parameter_ref_prefix + name}

    def transform_document(self, document: dict, ctx: ParameterPoolContext) -> dict:
        # Only paths need to be transformed
        if not is_object(document) or not is_object(document.get("paths")):
            return document

        paths = self.visit(ctx, "paths", self.transform_paths, document["paths"])
        new_document = {**document, "paths": paths}
        if not ctx.hoisted:
            return new_document

        if ctx.version.is_swagger:
            new_document["parameters"] = ctx.pool
        else:
            components = document.get("components") or {}
            new_document["components"] = {**components, "parameters": ctx.pool}
        return new_document


def ref_path_parameters(spec: dict) -> dict:
    """
    Move Path Item parameters to reusable parameters referenced by ``$ref``.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification

    Raises:
        CollisionError: If a parameter name is already used by a different parameter
    """
    return RefPathParametersTransformer().transform(spec)
