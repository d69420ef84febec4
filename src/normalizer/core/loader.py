"""Module for loading OpenAPI specification files."""

import json
from pathlib import Path
from typing import Any

import yaml

from normalizer.config import FileFormat

_SUFFIX_FORMATS = {
    ".json": FileFormat.JSON,
    ".yaml": FileFormat.YAML,
    ".yml": FileFormat.YAML,
}


def _as_document(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError("OpenAPI document must be an object")
    return data


def parse_spec(text: str) -> tuple[dict, FileFormat]:
    """
    Parse an OpenAPI specification of unknown format (e.g. read from stdin).

    Args:
        text: The document text

    Returns:
        A tuple of (parsed_dict, FileFormat): JSON if the text parses as
        JSON, YAML otherwise

    Raises:
        yaml.YAMLError: If the text is neither JSON nor YAML
        ValueError: If the document is not an object
    """
    try:
        data, file_format = json.loads(text), FileFormat.JSON
    except json.JSONDecodeError:
        data, file_format = yaml.safe_load(text), FileFormat.YAML

    return _as_document(data), file_format


def load_spec(path: Path) -> tuple[dict, FileFormat]:
    """
    Load an OpenAPI specification, choosing the parser by file extension.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        A tuple of (parsed_dict, FileFormat) for the file

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the extension is unsupported or the document (an empty
            YAML file, say) is not an object
        json.JSONDecodeError: If JSON parsing fails
        yaml.YAMLError: If YAML parsing fails
    """
    if not path.exists():
        raise FileNotFoundError(f"OpenAPI file not found: {path}")

    suffix = path.suffix.lower()
    file_format = _SUFFIX_FORMATS.get(suffix)
    if file_format is None:
        raise ValueError(f"Unsupported file format: {suffix}. Expected .json, .yaml, or .yml")

    with open(path, encoding="utf-8") as f:
        data = json.load(f) if file_format is FileFormat.JSON else yaml.safe_load(f)
    return _as_document(data), file_format
