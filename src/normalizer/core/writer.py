"""Module for writing OpenAPI specification files."""

import json
from pathlib import Path

import yaml

from normalizer.config import FileFormat


class NoAliasDumper(yaml.SafeDumper):
    """
    YAML dumper that disables alias/anchor generation.

    Rules share unchanged subtrees between nodes, which the default dumper
    would emit as anchors and aliases.  Generators do not all handle those,
    so every node is written out in full.
    """

    def ignore_aliases(self, data):
        """Always return True to disable alias generation."""
        return True


def dump_spec(data: dict, format: FileFormat) -> str:
    """
    Serialize an OpenAPI specification as JSON or YAML, keeping key order.

    Args:
        data: The OpenAPI spec as a Python dictionary
        format: FileFormat indicating whether to write JSON or YAML

    Returns:
        The serialized document, ending with a newline

    Raises:
        ValueError: If an unsupported FileFormat is provided
    """
    if format == FileFormat.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    elif format == FileFormat.YAML:
        return yaml.dump(
            data,
            Dumper=NoAliasDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            indent=2,
        )

    else:
        raise ValueError(f"Unsupported file format: {format}")


def write_spec(data: dict, path: Path, format: FileFormat) -> None:
    """
    Write an OpenAPI specification to a JSON or YAML file.

    Args:
        data: The OpenAPI spec as a Python dictionary
        path: Path where the file should be written
        format: FileFormat indicating whether to write JSON or YAML

    Raises:
        ValueError: If an unsupported FileFormat is provided
        IOError: If writing to the file fails
    """
    content = dump_spec(data, format)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
