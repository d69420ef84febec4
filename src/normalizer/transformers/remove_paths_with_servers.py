"""Remove Path Items which declare their own servers.

Per-path servers can't be represented in OpenAPI 2 (or by Autorest), so the
whole Path Item is dropped.  An empty ``servers`` list counts too.
"""

from normalizer.transformers.base import OpenApiTransformer, TransformContext, is_object


class RemovePathsWithServersTransformer(OpenApiTransformer):
    """Drop Path Items that have a ``servers`` key."""

    name = "remove-paths-with-servers"

    def transform_paths(self, paths: dict, ctx: TransformContext) -> dict:
        if not is_object(paths):
            return paths
        return {
            path: path_item
            for path, path_item in paths.items()
            if not (is_object(path_item) and "servers" in path_item)
        }

    def transform_document(self, document: dict, ctx: TransformContext) -> dict:
        # Only paths need to be transformed
        if not is_object(document) or "paths" not in document:
            return document
        paths = self.visit(ctx, "paths", self.transform_paths, document["paths"])
        return {**document, "paths": paths}


def remove_paths_with_servers(spec: dict) -> dict:
    """Remove every Path Item that overrides ``servers``.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return RemovePathsWithServersTransformer().transform(spec)
