"""Genomic region parsing utilities.

Coordinate conventions:
    - CLI input: 1-based inclusive (standard genomic convention)
    - Region queries: 0-based half-open (tabix convention)
    - GenePredRecord: 1-based inclusive

Example:
    >>> from exonloc.utils.regions import parse_region
    >>> region = parse_region("chr1:1000-2000")
    >>> region.seqid, region.start, region.end
    ('chr1', 999, 2000)
"""

from __future__ import annotations

import re
from typing import NamedTuple


class GenomicRegion(NamedTuple):
    """Parsed genomic region with 0-based half-open coordinates.

    Attributes:
        seqid: Scaffold/chromosome name.
        start: Start position (0-based, inclusive).
        end: End position (0-based, exclusive).
    """

    seqid: str
    start: int  # 0-based, inclusive
    end: int  # 0-based, exclusive

    def __str__(self) -> str:
        """Return string representation in 1-based inclusive format."""
        return f"{self.seqid}:{self.start + 1}-{self.end}"

    @property
    def length(self) -> int:
        """Get region length in base pairs."""
        return self.end - self.start


# Handles: chr1:1000-2000, chr1:1,000-2,000, chr1:1000..2000, scaffold_1:100-200
_REGION_PATTERN = re.compile(r"^(.+):([\d,]+)(?:-|\.\.)([\d,]+)$")
# Whole-contig form: chr1
_CONTIG_PATTERN = re.compile(r"^[^:\s]+$")

# Upper bound used for whole-contig queries (tabix max coordinate)
MAX_POSITION = 2**29


def parse_region(region_str: str) -> GenomicRegion:
    """Parse region string into GenomicRegion.

    Supported formats:
        chr1:1000-2000      (1-based, inclusive - standard)
        chr1:1,000-2,000    (thousands separators)
        chr1:1000..2000     (1-based, inclusive - GFF style)
        chr1                (whole contig)

    Args:
        region_str: Region string.

    Returns:
        GenomicRegion with 0-based, half-open coordinates.

    Raises:
        ValueError: If format is invalid or coordinates are invalid.
    """
    region_str = region_str.strip()

    if _CONTIG_PATTERN.match(region_str):
        return GenomicRegion(region_str, 0, MAX_POSITION)

    match = _REGION_PATTERN.match(region_str)
    if not match:
        raise ValueError(
            f"Invalid region format: '{region_str}'. "
            "Expected format: seqid:start-end (e.g., chr1:1000-2000)"
        )

    seqid = match.group(1)
    start = int(match.group(2).replace(",", ""))
    end = int(match.group(3).replace(",", ""))

    # Validate 1-based input coordinates
    if start < 1:
        raise ValueError(f"Start position must be >= 1, got {start}")
    if end < start:
        raise ValueError(f"End must be >= start: {start}-{end}")

    # Convert to 0-based half-open
    return GenomicRegion(seqid, start - 1, end)


_POSITION_PATTERN = re.compile(r"^(.+):([\d,]+)$")


def parse_position(position_str: str) -> tuple[str, int]:
    """Parse a single-base position such as ``chr17:7,675,088``.

    Args:
        position_str: Position string, 1-based.

    Returns:
        (seqid, position) with the position kept 1-based.

    Raises:
        ValueError: If the format is invalid or the position is < 1.
    """
    match = _POSITION_PATTERN.match(position_str.strip())
    if not match:
        raise ValueError(
            f"Invalid position format: '{position_str}'. "
            "Expected format: seqid:pos (e.g., chr1:1000)"
        )

    position = int(match.group(2).replace(",", ""))
    if position < 1:
        raise ValueError(f"Position must be >= 1, got {position}")
    return match.group(1), position
