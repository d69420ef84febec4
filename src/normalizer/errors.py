"""Exceptions raised by normalization rules.

All of them abort the whole pipeline call; no partial document is returned.
"""


class TransformError(Exception):
    """Base class for fatal rule errors."""

    def __init__(self, message: str, location: str = ""):
        """Initialize a TransformError.

        Args:
            message: Human-readable description of the failure
            location: JSON pointer of the node being transformed, if known
        """
        super().__init__(f"{location}: {message}" if location else message)
        self.location = location


class VersionMismatchError(TransformError):
    """A rule was applied to a document of a version it does not support."""


class CollisionError(TransformError):
    """A rule would overwrite a differently-valued entry in a shared pool."""
