"""Configuration management for exonloc.

Settings come from, in increasing priority:
- Default values
- Environment variables (REFGENE, EXONLOC_FORMAT)
- Command-line arguments

Example:
    >>> from exonloc.config import Config
    >>> config = Config.from_env()
    >>> config.format
    'genepred'
"""

import os
from pathlib import Path
from typing import Any

import attrs

from exonloc.errors import ConfigurationError
from exonloc.io.formats import DEFAULT_FORMAT, FORMATS
from exonloc.io.genepred import DEFAULT_DELIMITER

# =============================================================================
# Default Configuration Values
# =============================================================================

# Environment variables
ENV_DATA_PATH = "REFGENE"
ENV_FORMAT = "EXONLOC_FORMAT"


# =============================================================================
# Configuration Classes
# =============================================================================


@attrs.define
class Config:
    """Settings for opening and querying a genePred database.

    Attributes:
        data_path: genePred-style data file (optionally bgzipped + indexed).
        format: Column layout (genepred, refgene or refflat).
        delimiter: Column separator.
        genes_path: Gene symbol list for the filtered scan.
        transcripts_path: Transcript identifier list for the filtered scan.
        header: Write the table header.
        require_index: Refuse to open a data file without a tabix index.
    """

    data_path: Path | None = attrs.field(default=None, converter=attrs.converters.optional(Path))
    format: str = DEFAULT_FORMAT
    delimiter: str = DEFAULT_DELIMITER
    genes_path: Path | None = attrs.field(default=None, converter=attrs.converters.optional(Path))
    transcripts_path: Path | None = attrs.field(
        default=None, converter=attrs.converters.optional(Path)
    )
    header: bool = True
    require_index: bool = False

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides: Any) -> "Config":
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ.
            **overrides: Explicit values; None values are ignored.

        Returns:
            Configuration object.
        """
        environ = os.environ if environ is None else environ

        values: dict[str, Any] = {}
        if environ.get(ENV_DATA_PATH):
            values["data_path"] = environ[ENV_DATA_PATH]
        if environ.get(ENV_FORMAT):
            values["format"] = environ[ENV_FORMAT]

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> None:
        """Check that the configuration is usable.

        Raises:
            ConfigurationError: If the format is unknown, the delimiter is
                not a single character, or no data file is set.
        """
        if self.format.lower() not in FORMATS:
            raise ConfigurationError(
                f"Unknown format '{self.format}'. Expected one of: {', '.join(FORMATS)}"
            )
        if len(self.delimiter) != 1:
            raise ConfigurationError(
                f"Delimiter must be a single character, got {self.delimiter!r}"
            )
        if self.data_path is None:
            raise ConfigurationError(
                f"No genepred or refgene database specified (set ${ENV_DATA_PATH} or pass a path)"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration.
        """
        return attrs.asdict(self)
