"""Move Path Item parameters into each of its Operations.

Some generators ignore parameters declared on the Path Item.  Copying them to
each Operation keeps them while removing the Path Item ``parameters``.
Operation parameters override Path Item parameters with the same ``name``
and ``in``.
"""

from typing import Any

from normalizer.transformers.base import (
    HTTP_METHODS,
    OpenApiTransformer,
    TransformContext,
    is_array,
    is_object,
    omit_keys,
)


def _combine_parameters(op_params: Any, path_params: list) -> Any:
    """Combine Operation and Path Item parameters, Operation first."""
    if op_params is None:
        return path_params
    if not is_array(op_params):
        return op_params
    if not op_params:
        return path_params

    overridden = {
        (param.get("name"), param.get("in")) for param in op_params if is_object(param)
    }
    return [
        *op_params,
        *(
            param
            for param in path_params
            if not (is_object(param) and (param.get("name"), param.get("in")) in overridden)
        ),
    ]


class PathParametersToOperationTransformer(OpenApiTransformer):
    """Copy Path Item ``parameters`` into every Operation of the Path Item."""

    name = "path-parameters-to-operations"

    def transform_path_item(self, path_item: dict, ctx: TransformContext) -> dict:
        if not is_object(path_item):
            return path_item

        parameters = path_item.get("parameters")
        if not is_array(parameters) or not parameters:
            return path_item

        new_path_item = omit_keys(path_item, "parameters")
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if is_object(operation):
                new_path_item[method] = {
                    **operation,
                    "parameters": _combine_parameters(operation.get("parameters"), parameters),
                }
        return new_path_item

    def transform_document(self, document: dict, ctx: TransformContext) -> dict:
        # Only paths need to be transformed
        if not is_object(document) or "paths" not in document:
            return document
        paths = self.visit(ctx, "paths", self.transform_paths, document["paths"])
        return {**document, "paths": paths}


def move_path_parameters_to_operations(spec: dict) -> dict:
    """Move Path Item parameters into each Operation.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return PathParametersToOperationTransformer().transform(spec)
