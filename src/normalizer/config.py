"""Configuration constants, enums and the pipeline config model."""

import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

CONFIG_FILENAME = ".openapi-normalizer.yaml"

logger = logging.getLogger(__name__)


class FileFormat(Enum):
    """Enum representing the format of an OpenAPI specification file."""

    JSON = "json"
    YAML = "yaml"


class OpenApiVersion(Enum):
    """Shape family of an OpenAPI document.

    Rules branch on this instead of probing for version-specific fields.
    """

    V2 = "2.0"
    V3_0 = "3.0"
    V3_1 = "3.1"

    @property
    def is_swagger(self) -> bool:
        return self is OpenApiVersion.V2

    @property
    def parameter_ref_prefix(self) -> str:
        """Prefix of a ``$ref`` pointing into the reusable parameters pool."""
        if self.is_swagger:
            return "#/parameters/"
        return "#/components/parameters/"


def detect_version(document: Any) -> OpenApiVersion:
    """
    Detect the OpenAPI version of a document from ``swagger`` / ``openapi``.

    Unrecognized or missing versions are logged and treated as 3.1, the most
    permissive shape.

    Args:
        document: The OpenAPI document

    Returns:
        The detected OpenApiVersion
    """
    if not isinstance(document, Mapping):
        logger.warning("Document is not an object, assuming OpenAPI 3.1")
        return OpenApiVersion.V3_1

    if "openapi" in document:
        openapi = str(document["openapi"])
        if openapi == "3" or openapi.startswith("3.0"):
            return OpenApiVersion.V3_0
        if openapi.startswith("3."):
            return OpenApiVersion.V3_1
        logger.warning("Unrecognized OpenAPI version %r, assuming 3.1", document["openapi"])
        return OpenApiVersion.V3_1

    if "swagger" in document:
        swagger = str(document["swagger"])
        if swagger in ("2", "2.0"):
            return OpenApiVersion.V2
        logger.warning("Unrecognized Swagger version %r, assuming OpenAPI 3.1", document["swagger"])
        return OpenApiVersion.V3_1

    logger.warning("Document missing openapi and swagger version, assuming 3.1")
    return OpenApiVersion.V3_1


class NormalizerConfig(BaseModel):
    """Configuration model for a normalization pipeline."""

    rules: list[str] | None = Field(
        default=None,
        description="Names of the rules to apply, in order (default pipeline if unset)",
    )
    options: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Keyword options passed to each rule, keyed by rule name",
    )


def get_config_path(target_dir: Path) -> Path:
    """Get the path to the config file in the target directory."""
    return target_dir / CONFIG_FILENAME


def load_config(config_path: Path) -> NormalizerConfig:
    """
    Load configuration from a YAML file.
    Returns empty config if file doesn't exist.
    """
    if not config_path.exists():
        return NormalizerConfig()
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return NormalizerConfig(**data)
