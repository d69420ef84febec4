"""Remove response schemas for the text/html media type.

Autorest does not provide a good way to consume text/html:
- With ``type: string`` the generated method tries to JSON-decode the HTML.
- With ``type: file`` it returns a Stream, which the caller can't easily
  convert to a string without reimplementing charset detection.

OpenAPI 3: ``schema`` and ``encoding`` are removed from each ``text/html``
Media Type Object of a Response.

OpenAPI 2: one ``schema`` is shared by every type the Operation produces, so
it is removed only when all of them are HTML.
"""

import re
from dataclasses import dataclass
from typing import Any

from normalizer.transformers.base import (
    OpenApiTransformer,
    TransformContext,
    is_array,
    is_object,
    omit_keys,
)

_HTML_RE = re.compile(r"^\s*text/html\s*(;.*)?$", re.IGNORECASE)


def is_html(media_type: Any) -> bool:
    """Return True if media_type is text/html (with optional parameters)."""
    return isinstance(media_type, str) and _HTML_RE.match(media_type) is not None


def _produces_only_html(produces: Any) -> bool:
    return is_array(produces) and len(produces) > 0 and all(map(is_html, produces))


@dataclass
class HtmlResponseContext(TransformContext):
    """Context tracking whether the current OpenAPI 2 Operation produces only HTML."""

    global_produces: Any = None
    html_only: bool = False


class RemoveHtmlResponseContentTransformer(OpenApiTransformer):
    """Drop schemas describing ``text/html`` response bodies."""

    name = "remove-html-response-content"

    def create_context(self, document: dict) -> HtmlResponseContext:
        ctx = super().create_context(document)
        global_produces = document.get("produces") if is_object(document) else None
        return HtmlResponseContext(version=ctx.version, global_produces=global_produces)

    def transform_operation(self, operation: dict, ctx: HtmlResponseContext) -> dict:
        if not is_object(operation) or not operation.get("responses"):
            return operation

        if not ctx.version.is_swagger:
            return super().transform_operation(operation, ctx)

        # Operation produces overrides the document-level default
        produces = operation.get("produces", ctx.global_produces)
        if not _produces_only_html(produces):
            return operation

        ctx.html_only = True
        try:
            return super().transform_operation(operation, ctx)
        finally:
            ctx.html_only = False

    def transform_response(self, response: dict, ctx: HtmlResponseContext) -> dict:
        if not is_object(response):
            return response

        new_response = response

        content = response.get("content")
        if is_object(content):
            html_types = [media_type for media_type in content if is_html(media_type)]
            if html_types:
                new_content = dict(content)
                for html_type in html_types:
                    media_type_obj = content[html_type]
                    if is_object(media_type_obj):
                        new_content[html_type] = omit_keys(media_type_obj, "schema", "encoding")
                new_response = {**new_response, "content": new_content}

        if ctx.html_only and "schema" in new_response:
            new_response = omit_keys(new_response, "schema")

        return new_response

    def transform_schema(self, schema: dict, ctx: HtmlResponseContext) -> dict:
        # Schemas are left untouched
        return schema


def remove_html_response_content(spec: dict) -> dict:
    """
    Remove schemas of ``text/html`` response bodies.

    Args:
        spec: The OpenAPI specification as a dictionary

    Returns:
        The transformed specification
    """
    return RemoveHtmlResponseContentTransformer().transform(spec)
