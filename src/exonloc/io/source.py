"""Line sources backing a genePred database.

A line source hands raw text lines to the retrieval engine. Two
implementations share one small interface:

- TextLineSource: plain or gzip-compressed text, sequential access only
- TabixLineSource: bgzip-compressed text with a tabix/CSI index, which
  additionally supports region queries through pysam

Every call to ``lines()`` starts again from the beginning of the file, so
rewinding is implicit. Each iterator owns its own file handle.

Example:
    >>> from exonloc.io.source import open_line_source
    >>> source = open_line_source("refGene.txt.gz")
    >>> for line in source.lines():
    ...     print(line.split("\\t")[1])
    >>> for line in source.fetch("chr1", 10000, 20000):
    ...     print(line)
"""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Any, Generator

import pysam

from exonloc.errors import ConfigurationError, SourceIOError

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Lines starting with these characters carry no record
COMMENT_CHARS = ("#", "/")

GZIP_MAGIC = b"\x1f\x8b"

# Index suffixes searched next to the data file, in order
INDEX_SUFFIXES = (".tbi", ".csi")


# =============================================================================
# Helpers
# =============================================================================


def is_comment(line: str) -> bool:
    """Return True for blank lines and comment lines."""
    return not line or line.startswith(COMMENT_CHARS)


def is_gzipped(path: Path | str) -> bool:
    """Check the gzip magic bytes of a file."""
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def open_text(path: Path | str):
    """Open a plain or gzip-compressed text file for reading.

    Args:
        path: File path.

    Returns:
        A text-mode file object.

    Raises:
        SourceIOError: If the file cannot be opened.
    """
    try:
        if is_gzipped(path):
            return gzip.open(path, "rt", encoding="utf-8")
        return open(path, encoding="utf-8")
    except OSError as e:
        raise SourceIOError(f"{path} : {e.strerror or e}") from e


def find_index(path: Path | str) -> Path | None:
    """Locate a tabix or CSI index next to a data file.

    Args:
        path: Data file path.

    Returns:
        Index path, or None if no index exists.
    """
    for suffix in INDEX_SUFFIXES:
        candidate = Path(str(path) + suffix)
        if candidate.exists():
            return candidate
    return None


# =============================================================================
# Sources
# =============================================================================


class TextLineSource:
    """Sequential line source over a plain or gzipped text file.

    Attributes:
        path: Path to the data file.
    """

    has_index = False

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def lines(self) -> Generator[str, None, None]:
        """Yield every line from the start of the file, newline stripped."""
        handle = open_text(self.path)
        try:
            with handle:
                for line in handle:
                    yield line.rstrip("\r\n")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceIOError(f"{self.path} : {e}") from e

    @property
    def contigs(self) -> list[str]:
        """Contigs are only known for indexed sources."""
        raise ConfigurationError(f"No tabix index found for {self.path}")

    def fetch(self, chrom: str, start: int, end: int) -> Generator[str, None, None]:
        """Region queries need an index."""
        raise ConfigurationError(
            f"Region query requires a tabix index for {self.path}. "
            f"Please run: tabix -s <chrom col> -b <start col> -e <end col> -0 {self.path}"
        )

    def close(self) -> None:
        """Nothing to release; every iterator closes its own handle."""
        pass


class TabixLineSource:
    """Line source over a bgzip-compressed, tabix-indexed file.

    Attributes:
        path: Path to the data file.
        index_path: Path to the .tbi/.csi index.
    """

    has_index = True

    def __init__(self, path: Path | str, index_path: Path | str | None = None) -> None:
        self.path = Path(path)
        self.index_path = Path(index_path) if index_path is not None else find_index(path)

        try:
            self._tbx: pysam.TabixFile | None = pysam.TabixFile(
                str(self.path),
                index=str(self.index_path) if self.index_path is not None else None,
            )
        except (OSError, ValueError) as e:
            raise SourceIOError(f"Failed to load index of {self.path}: {e}") from e

        logger.info(f"Opened indexed database: {self.path.name}")

    def __enter__(self) -> TabixLineSource:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _require_open(self) -> pysam.TabixFile:
        if self._tbx is None:
            raise SourceIOError(f"Tabix file is closed: {self.path}")
        return self._tbx

    @property
    def contigs(self) -> list[str]:
        """Contig names present in the index."""
        return list(self._require_open().contigs)

    def lines(self) -> Generator[str, None, None]:
        """Yield every indexed record from the start of the file."""
        tbx = self._require_open()
        try:
            yield from tbx.fetch(multiple_iterators=True)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceIOError(f"{self.path} : {e}") from e

    def fetch(self, chrom: str, start: int, end: int) -> Generator[str, None, None]:
        """Yield lines overlapping a region.

        Args:
            chrom: Contig name; must be present in ``contigs``.
            start: Start position (0-based, inclusive).
            end: End position (0-based, exclusive).
        """
        tbx = self._require_open()
        try:
            yield from tbx.fetch(chrom, start, end, multiple_iterators=True)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceIOError(f"{self.path} : {e}") from e

    def close(self) -> None:
        """Close the tabix file."""
        if self._tbx is not None:
            self._tbx.close()
            self._tbx = None


def open_line_source(
    path: Path | str,
    require_index: bool = False,
) -> TextLineSource | TabixLineSource:
    """Open the best available line source for a data file.

    Args:
        path: Data file path.
        require_index: Fail instead of falling back to sequential access
            when no index is present.

    Returns:
        TabixLineSource if an index exists, otherwise TextLineSource.

    Raises:
        ConfigurationError: If the file is missing, or the index is
            required but absent.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Database file not found: {path}")

    index_path = find_index(path)
    if index_path is not None:
        return TabixLineSource(path, index_path)

    if require_index:
        raise ConfigurationError(f"Failed to load index of {path}")

    logger.info(f"No index for {path.name}; region queries are unavailable")
    return TextLineSource(path)
