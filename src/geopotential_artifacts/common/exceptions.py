"""Contains all the custom-defined exceptions used in geopotential artifact generation."""

from __future__ import annotations


class ModelConfigurationError(Exception):
    """Exception indicating an unknown model identifier or bad model metadata."""

    def __init__(self, model_id: str, message: str) -> None:
        """Instantiate an exception dealing with a bad model configuration.

        Args:
            model_id (``str``): identifier of the model causing the error.
            message (``str``): message associated with error.
        """
        super().__init__(model_id, message)
        self.model_id = model_id
        self.message = message

    def __str__(self) -> str:
        """``str``: string representation of this exception."""
        return f"Bad configuration for model {self.model_id!r}: {self.message}"


class CoefficientParseError(ValueError):
    """Exception indicating a coefficient file does not match its expected format."""

    def __init__(self, filename: str, line_number: int, message: str) -> None:
        """Instantiate an exception dealing with a malformed coefficient line.

        Args:
            filename (``str``): path of the coefficient file being parsed.
            line_number (``int``): 1-based line number of the offending line.
            message (``str``): message associated with error.
        """
        super().__init__(filename, line_number, message)
        self.filename = filename
        self.line_number = line_number
        self.message = message

    def __str__(self) -> str:
        """``str``: string representation of this exception."""
        return f"{self.filename}:{self.line_number}: {self.message}"


class CoefficientAssemblyError(Exception):
    """Exception indicating a coefficient table cannot be assembled into matrices."""


class ShapeError(Exception):
    """Exception indicating an improperly shaped matrix was given."""


class ArtifactFormatError(OSError):
    """Exception indicating a binary artifact does not follow the expected layout."""


class TruncatedArtifactError(ArtifactFormatError):
    """Exception indicating a binary artifact is shorter than its header declares."""
