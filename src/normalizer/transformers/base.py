"""Base class for OpenAPI transformation rules.

``OpenApiTransformer`` walks an OpenAPI 2.0 or 3.x document and rebuilds it
through one method per node kind (document, paths, path item, operation,
parameter, response, media type, schema, components, header, request body).
Each default method copies the node into a new container and recurses into
the children it knows about; everything else is shared by reference.

A rule subclasses ``OpenApiTransformer`` and overrides the methods for the
node kinds it cares about.  Calling ``super()`` first gives the node with its
children already transformed:

    class UppercaseTitles(OpenApiTransformer):
        def transform_schema(self, schema, ctx):
            schema = super().transform_schema(schema, ctx)
            if is_object(schema) and "title" in schema:
                schema = {**schema, "title": schema["title"].upper()}
            return schema

The input document is never modified.  ``$ref`` nodes are passed to the
rule's method for their position but the default methods never look behind
them.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from normalizer.config import OpenApiVersion, detect_version

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Schema keywords holding a name -> schema mapping
_SCHEMA_MAP_KEYWORDS = (
    "properties",
    "patternProperties",
    "definitions",
    "$defs",
    "dependentSchemas",
)

# Schema keywords holding a list of schemas
_SCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf", "prefixItems")

# Schema keywords holding a single schema
_SCHEMA_KEYWORDS = (
    "additionalProperties",
    "additionalItems",
    "not",
    "if",
    "then",
    "else",
    "contains",
    "propertyNames",
    "unevaluatedItems",
    "unevaluatedProperties",
)

Transform = Callable[[Any, "TransformContext"], Any]


def is_object(node: Any) -> bool:
    """Return True if node is a JSON object (any read-only or mutable mapping)."""
    return isinstance(node, Mapping)


def is_array(node: Any) -> bool:
    """Return True if node is a JSON array (a list or tuple, never a string)."""
    return isinstance(node, (list, tuple))


def deep_equal(a: Any, b: Any) -> bool:
    """
    Compare two JSON values structurally.

    Unlike ``==``, scalars must also have the same type, so ``0``, ``0.0`` and
    ``False`` are all different values.  Mappings compare equal regardless of
    key order, as do a list and a tuple with equal items.
    """
    if is_object(a) and is_object(b):
        return a.keys() == b.keys() and all(deep_equal(a[key], b[key]) for key in a)
    if is_array(a) and is_array(b):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


def is_ref(node: Any) -> bool:
    """Return True if node is a Reference Object (or a schema using ``$ref``)."""
    return is_object(node) and "$ref" in node


def omit_keys(node: dict, *keys: str) -> dict:
    """Return a shallow copy of node without the given keys."""
    return {k: v for k, v in node.items() if k not in keys}


def _escape_pointer_token(token: str | int) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


@dataclass
class TransformContext:
    """Working state for a single ``transform()`` call.

    Created at the start of the call and dropped at the end, so a rule
    instance never carries state from one document to the next.  Rules that
    need more state subclass this and override ``create_context``.
    """

    version: OpenApiVersion
    location: list[str | int] = field(default_factory=list)

    @property
    def pointer(self) -> str:
        """JSON pointer (URI fragment form) of the node being transformed."""
        return "#" + "".join("/" + _escape_pointer_token(token) for token in self.location)


class OpenApiTransformer:
    """Rebuilds an OpenAPI document, one overridable method per node kind."""

    #: Name used to select the rule in a pipeline or config file
    name: str = ""

    def transform(self, document: dict) -> dict:
        """
        Transform an OpenAPI document.

        Args:
            document: The OpenAPI document as a dictionary (not modified)

        Returns:
            The transformed document

        Raises:
            TransformError: If the rule cannot be applied to the document
        """
        ctx = self.create_context(document)
        return self.transform_document(document, ctx)

    def create_context(self, document: dict) -> TransformContext:
        """Create the per-call context for ``document``."""
        return TransformContext(version=detect_version(document))

    def visit(self, ctx: TransformContext, key: str | int, method: Transform, node: Any) -> Any:
        """Call ``method`` on ``node`` with ``key`` appended to the current location."""
        ctx.location.append(key)
        try:
            return method(node, ctx)
        finally:
            ctx.location.pop()

    def warn(self, ctx: TransformContext, message: str, *args: Any) -> None:
        """Log a warning about the node at the current location."""
        logging.getLogger(type(self).__module__).warning(
            "%s: " + message, ctx.pointer, *args
        )

    def _transform_fields(
        self, node: dict, ctx: TransformContext, handlers: dict[str, Transform]
    ) -> dict:
        """Copy ``node``, replacing each field that has a handler by its transformed value."""
        new_node = dict(node)
        for key, value in node.items():
            handler = handlers.get(key)
            if handler is not None:
                new_node[key] = self.visit(ctx, key, handler, value)
        return new_node

    def _transform_map(
        self, node: Any, ctx: TransformContext, method: Transform, kind: str
    ) -> Any:
        if not is_object(node):
            self.warn(ctx, "Ignoring non-object %s: %r", kind, node)
            return node
        return {key: self.visit(ctx, key, method, value) for key, value in node.items()}

    def _transform_list(
        self, node: Any, ctx: TransformContext, method: Transform, kind: str
    ) -> Any:
        if not is_array(node):
            self.warn(ctx, "Ignoring non-array %s: %r", kind, node)
            return node
        return [self.visit(ctx, index, method, item) for index, item in enumerate(node)]

    def _is_object(self, node: Any, ctx: TransformContext, kind: str) -> bool:
        if is_object(node):
            return True
        self.warn(ctx, "Ignoring non-object %s: %r", kind, node)
        return False

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def transform_document(self, document: dict, ctx: TransformContext) -> dict:
        """Transform the root OpenAPI (or Swagger) Object."""
        if not self._is_object(document, ctx, "OpenAPI document"):
            return document

        handlers: dict[str, Transform] = {
            "paths": self.transform_paths,
            "x-ms-paths": self.transform_paths,
        }
        if ctx.version.is_swagger:
            handlers["definitions"] = self.transform_schemas
            handlers["parameters"] = self._transform_parameter_map
            handlers["responses"] = self.transform_responses
        else:
            handlers["components"] = self.transform_components
            handlers["webhooks"] = self._transform_path_item_map

        return self._transform_fields(document, ctx, handlers)

    def transform_components(self, components: dict, ctx: TransformContext) -> dict:
        """Transform an OpenAPI 3 Components Object."""
        if not self._is_object(components, ctx, "Components"):
            return components

        return self._transform_fields(
            components,
            ctx,
            {
                "schemas": self.transform_schemas,
                "responses": self.transform_responses,
                "parameters": self._transform_parameter_map,
                "headers": self.transform_headers,
                "requestBodies": self._transform_request_body_map,
                "callbacks": self.transform_callbacks,
                "pathItems": self._transform_path_item_map,
            },
        )

    def transform_paths(self, paths: dict, ctx: TransformContext) -> dict:
        """Transform a Paths Object (path template -> Path Item)."""
        return self._transform_map(paths, ctx, self.transform_path_item, "Paths")

    def transform_path_item(self, path_item: dict, ctx: TransformContext) -> dict:
        """Transform a Path Item Object."""
        if not self._is_object(path_item, ctx, "Path Item"):
            return path_item
        if is_ref(path_item):
            return dict(path_item)

        handlers: dict[str, Transform] = {"parameters": self.transform_parameters}
        for method in HTTP_METHODS:
            handlers[method] = self.transform_operation
        return self._transform_fields(path_item, ctx, handlers)

    def transform_operation(self, operation: dict, ctx: TransformContext) -> dict:
        """Transform an Operation Object."""
        if not self._is_object(operation, ctx, "Operation"):
            return operation

        return self._transform_fields(
            operation,
            ctx,
            {
                "parameters": self.transform_parameters,
                "requestBody": self.transform_request_body,
                "responses": self.transform_responses,
                "callbacks": self.transform_callbacks,
            },
        )

    def transform_callbacks(self, callbacks: dict, ctx: TransformContext) -> dict:
        """Transform a map of Callback Objects (expression -> Path Item)."""
        return self._transform_map(callbacks, ctx, self._transform_callback, "Callbacks")

    def _transform_callback(self, callback: dict, ctx: TransformContext) -> dict:
        if is_ref(callback):
            return dict(callback)
        return self._transform_path_item_map(callback, ctx)

    def _transform_path_item_map(self, path_items: dict, ctx: TransformContext) -> dict:
        return self._transform_map(path_items, ctx, self.transform_path_item, "Path Item map")

    # ------------------------------------------------------------------
    # Parameters, request bodies and responses
    # ------------------------------------------------------------------

    def transform_parameters(self, parameters: list, ctx: TransformContext) -> list:
        """Transform the ``parameters`` list of a Path Item or Operation."""
        return self._transform_list(parameters, ctx, self.transform_parameter, "parameters")

    def _transform_parameter_map(self, parameters: dict, ctx: TransformContext) -> dict:
        return self._transform_map(parameters, ctx, self.transform_parameter, "parameters")

    def transform_parameter(self, parameter: dict, ctx: TransformContext) -> dict:
        """Transform a Parameter Object.

        OpenAPI 2 non-body parameters carry ``type``/``format`` inline (with
        ``items`` for arrays); body parameters and OpenAPI 3 parameters carry
        a ``schema`` (or ``content``).
        """
        if not self._is_object(parameter, ctx, "Parameter"):
            return parameter
        if is_ref(parameter):
            return dict(parameter)

        return self._transform_fields(
            parameter,
            ctx,
            {
                "schema": self.transform_schema,
                "content": self.transform_content,
                "items": self.transform_schema,
            },
        )

    def _transform_request_body_map(self, request_bodies: dict, ctx: TransformContext) -> dict:
        return self._transform_map(
            request_bodies, ctx, self.transform_request_body, "requestBodies"
        )

    def transform_request_body(self, request_body: dict, ctx: TransformContext) -> dict:
        """Transform an OpenAPI 3 Request Body Object."""
        if not self._is_object(request_body, ctx, "Request Body"):
            return request_body
        if is_ref(request_body):
            return dict(request_body)

        return self._transform_fields(request_body, ctx, {"content": self.transform_content})

    def transform_responses(self, responses: dict, ctx: TransformContext) -> dict:
        """Transform a map of Response Objects (status code or name -> Response)."""
        return self._transform_map(responses, ctx, self.transform_response, "Responses")

    def transform_response(self, response: dict, ctx: TransformContext) -> dict:
        """Transform a Response Object."""
        if not self._is_object(response, ctx, "Response"):
            return response
        if is_ref(response):
            return dict(response)

        return self._transform_fields(
            response,
            ctx,
            {
                "headers": self.transform_headers,
                "content": self.transform_content,
                "schema": self.transform_schema,
            },
        )

    def transform_content(self, content: dict, ctx: TransformContext) -> dict:
        """Transform a content map (media type -> Media Type Object)."""
        return self._transform_map(content, ctx, self.transform_media_type, "content")

    def transform_media_type(self, media_type: dict, ctx: TransformContext) -> dict:
        """Transform an OpenAPI 3 Media Type Object."""
        if not self._is_object(media_type, ctx, "Media Type"):
            return media_type

        return self._transform_fields(
            media_type,
            ctx,
            {
                "schema": self.transform_schema,
                "encoding": self._transform_encoding_map,
            },
        )

    def _transform_encoding_map(self, encodings: dict, ctx: TransformContext) -> dict:
        return self._transform_map(encodings, ctx, self._transform_encoding, "encoding")

    def _transform_encoding(self, encoding: dict, ctx: TransformContext) -> dict:
        if not self._is_object(encoding, ctx, "Encoding"):
            return encoding
        return self._transform_fields(encoding, ctx, {"headers": self.transform_headers})

    def transform_headers(self, headers: dict, ctx: TransformContext) -> dict:
        """Transform a map of Header Objects."""
        return self._transform_map(headers, ctx, self.transform_header, "headers")

    def transform_header(self, header: dict, ctx: TransformContext) -> dict:
        """Transform a Header Object."""
        if not self._is_object(header, ctx, "Header"):
            return header
        if is_ref(header):
            return dict(header)

        return self._transform_fields(
            header,
            ctx,
            {
                "schema": self.transform_schema,
                "content": self.transform_content,
                "items": self.transform_schema,
            },
        )

    # ------------------------------------------------------------------
    # Schemas
    # ------------------------------------------------------------------

    def transform_schemas(self, schemas: dict, ctx: TransformContext) -> dict:
        """Transform a map of Schema Objects (name -> Schema)."""
        return self._transform_map(schemas, ctx, self.transform_schema, "schemas")

    def transform_schema_list(self, schemas: list, ctx: TransformContext) -> list:
        """Transform a list of Schema Objects (e.g. ``allOf``)."""
        return self._transform_list(schemas, ctx, self.transform_schema, "schemas")

    def _transform_items(self, items: Any, ctx: TransformContext) -> Any:
        # draft-04 tuple validation allows a list of schemas
        if is_array(items):
            return self.transform_schema_list(items, ctx)
        return self.transform_schema(items, ctx)

    def transform_schema(self, schema: dict, ctx: TransformContext) -> dict:
        """Transform a Schema Object.

        Boolean schemas (OpenAPI 3.1) and other non-objects are returned
        unchanged.
        """
        if not is_object(schema):
            return schema
        if is_ref(schema):
            return dict(schema)

        handlers: dict[str, Transform] = {"items": self._transform_items}
        for keyword in _SCHEMA_MAP_KEYWORDS:
            handlers[keyword] = self.transform_schemas
        for keyword in _SCHEMA_LIST_KEYWORDS:
            handlers[keyword] = self.transform_schema_list
        for keyword in _SCHEMA_KEYWORDS:
            handlers[keyword] = self.transform_schema
        return self._transform_fields(schema, ctx, handlers)
