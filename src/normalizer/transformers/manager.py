"""Manager to orchestrate OpenAPI normalization rules.

This module coordinates the complete transformation pipeline:
1. Load the OpenAPI specification from a file
2. Apply the selected rules in sequence
3. Save the transformed specification back to a file
"""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console

from normalizer.config import detect_version
from normalizer.core.loader import load_spec
from normalizer.core.writer import write_spec
from normalizer.transformers.any_of_null_to_nullable import AnyOfNullToNullableTransformer
from normalizer.transformers.base import OpenApiTransformer
from normalizer.transformers.binary_string_to_file import BinaryStringToFileTransformer
from normalizer.transformers.collapse_single_of import CollapseSingleOfTransformer
from normalizer.transformers.const_to_enum import ConstToEnumTransformer
from normalizer.transformers.exclusive_min_max_to_bool import ExclusiveMinMaxToBoolTransformer
from normalizer.transformers.format_to_type import FormatToTypeTransformer
from normalizer.transformers.move_query_paths import MoveQueryPathsTransformer
from normalizer.transformers.nullable_not_required import NullableNotRequiredTransformer
from normalizer.transformers.nullable_to_type_null import NullableToTypeNullTransformer
from normalizer.transformers.path_parameters_to_operations import (
    PathParametersToOperationTransformer,
)
from normalizer.transformers.read_only_not_required import ReadOnlyNotRequiredTransformer
from normalizer.transformers.ref_path_parameters import RefPathParametersTransformer
from normalizer.transformers.remove_any_of_empty_array import RemoveAnyOfEmptyArrayTransformer
from normalizer.transformers.remove_default_only_produces import (
    RemoveDefaultOnlyProducesTransformer,
)
from normalizer.transformers.remove_html_response_content import (
    RemoveHtmlResponseContentTransformer,
)
from normalizer.transformers.remove_paths_with_servers import RemovePathsWithServersTransformer
from normalizer.transformers.remove_ref_siblings import RemoveRefSiblingsTransformer
from normalizer.transformers.remove_response_headers import RemoveResponseHeadersTransformer
from normalizer.transformers.type_null_to_nullable import TypeNullToNullableTransformer

logger = logging.getLogger(__name__)

# Every available rule, by name, in catalog order
RULES: dict[str, type[OpenApiTransformer]] = {
    rule.name: rule
    for rule in (
        BinaryStringToFileTransformer,
        FormatToTypeTransformer,
        NullableToTypeNullTransformer,
        CollapseSingleOfTransformer,
        RemoveAnyOfEmptyArrayTransformer,
        MoveQueryPathsTransformer,
        RefPathParametersTransformer,
        RemovePathsWithServersTransformer,
        RemoveHtmlResponseContentTransformer,
        RemoveResponseHeadersTransformer,
        RemoveDefaultOnlyProducesTransformer,
        ConstToEnumTransformer,
        TypeNullToNullableTransformer,
        AnyOfNullToNullableTransformer,
        ExclusiveMinMaxToBoolTransformer,
        NullableNotRequiredTransformer,
        ReadOnlyNotRequiredTransformer,
        RemoveRefSiblingsTransformer,
        PathParametersToOperationTransformer,
    )
}

# Pipeline used when no rules are selected.  The rules converting nullable
# representations pull in opposite directions and are left out.
_DEFAULT_PIPELINE: list[str] = [
    "remove-paths-with-servers",
    "move-query-paths",
    "ref-path-parameters",
    "remove-any-of-empty-array",
    "collapse-single-of",
    "format-to-type",
    "binary-string-to-file",
    "remove-html-response-content",
    "remove-response-headers",
]

# Rules which only apply to OpenAPI 2.0, added to the default pipeline for 2.0 documents
_SWAGGER_ONLY_DEFAULTS: list[str] = ["remove-default-only-response-produces"]


def default_rule_names(spec: dict) -> list[str]:
    """Return the names of the rules applied to spec when none are selected."""
    if detect_version(spec).is_swagger:
        return _DEFAULT_PIPELINE + _SWAGGER_ONLY_DEFAULTS
    return list(_DEFAULT_PIPELINE)


def build_pipeline(
    rule_names: list[str], options: dict[str, dict[str, Any]] | None = None
) -> list[OpenApiTransformer]:
    """
    Instantiate the named rules, in order.

    Args:
        rule_names: Names of the rules (see ``RULES``)
        options: Keyword arguments for each rule, keyed by rule name

    Returns:
        The rule instances

    Raises:
        ValueError: If a rule name or option is unknown
    """
    options = options or {}
    unknown = [name for name in [*rule_names, *options] if name not in RULES]
    if unknown:
        raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")

    transformers = []
    for name in rule_names:
        try:
            transformers.append(RULES[name](**options.get(name, {})))
        except TypeError as e:
            raise ValueError(f"Invalid options for rule {name}: {e}") from e
    return transformers


def apply_pipeline(
    spec: dict, transformers: list[OpenApiTransformer], console: Console | None = None
) -> dict:
    """
    Apply each rule to the output of the previous one.

    Args:
        spec: The OpenAPI specification as a dictionary (not modified)
        transformers: The rules to apply, in order
        console: Optional Rich Console for progress output

    Returns:
        The transformed specification

    Raises:
        TransformError: If a rule fails; no partial result is returned
    """
    for transformer in transformers:
        if console:
            console.print(f"  [dim]→ {transformer.name}[/dim]")
        logger.debug("Applying %s", transformer.name)
        spec = transformer.transform(spec)
    return spec


def transform_spec(
    input_path: Path,
    output_path: Path,
    rule_names: list[str] | None = None,
    options: dict[str, dict[str, Any]] | None = None,
    console: Console | None = None,
) -> None:
    """
    Load OpenAPI spec, apply the rules, and save the result.

    Args:
        input_path: Path to the input OpenAPI specification file (.json, .yaml, or .yml)
        output_path: Path where the transformed specification will be written
        rule_names: Rules to apply, in order (default pipeline if None)
        options: Keyword arguments for each rule, keyed by rule name
        console: Optional Rich Console for progress output

    Raises:
        FileNotFoundError: If the input file doesn't exist
        ValueError: If the input file has an unsupported extension or a rule is unknown
        TransformError: If a rule cannot be applied
        json.JSONDecodeError: If JSON parsing fails
        yaml.YAMLError: If YAML parsing fails
        IOError: If writing to output_path fails
    """
    spec, file_format = load_spec(input_path)

    if rule_names is None:
        rule_names = default_rule_names(spec)
    spec = apply_pipeline(spec, build_pipeline(rule_names, options), console)

    write_spec(spec, output_path, file_format)
