"""Move paths with a query string from paths to x-ms-paths.

Keys such as ``/search?type=user`` are a common but non-standard way to
describe query-parameterized paths.  Autorest accepts them only in the
``x-ms-paths`` extension:
https://github.com/Azure/autorest/tree/master/docs/extensions#x-ms-paths
"""

from normalizer.errors import CollisionError
from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object


class MoveQueryPathsTransformer(OpenApiTransformer):
    """Move ``paths`` entries whose key contains ``?`` into ``x-ms-paths``."""

    name = "move-query-paths"

    def transform_document(self, document: dict, ctx: TransformContext) -> dict:
        paths = document.get("paths") if is_object(document) else None
        if not is_object(paths):
            return document

        query_paths = [path for path in paths if "?" in path]
        if not query_paths:
            return document

        new_paths = dict(paths)
        x_ms_paths = dict(document.get("x-ms-paths") or {})
        for path in query_paths:
            if path in x_ms_paths:
                raise CollisionError(f"{path} already present in x-ms-paths", "#/x-ms-paths")
            x_ms_paths[path] = new_paths.pop(path)

        return {**document, "paths": new_paths, "x-ms-paths": x_ms_paths}


def move_query_paths(spec: dict) -> dict:
    """
    Move paths containing a query string into ``x-ms-paths``.

    ``paths`` is kept even if it ends up empty, since it is a required field.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification (``spec`` itself if nothing moved)

    Raises:
        CollisionError: If a moved path already exists in ``x-ms-paths``

    Example:
        Before:
        {"paths": {"/a": {...}, "/a?foo=bar": {...}}}

        After:
        {"paths": {"/a": {...}}, "x-ms-paths": {"/a?foo=bar": {...}}}
    """
    return MoveQueryPathsTransformer().transform(spec)
