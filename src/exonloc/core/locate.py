"""Transcript and CDS coordinate locating.

This module enriches a parsed ``GenePredRecord`` with the coordinates used
for annotation:

- p. positions: 1-based positions along the spliced transcript, counted
  from the 5' end in transcript orientation
- c./n. offsets: each exon boundary classified as 5' UTR, coding, 3' UTR
  or noncoding, with its distance from the nearest edge of that region

Offsets render as ``-N`` (N bases upstream of the start codon), ``c.N``
(N-th coding base), ``*N`` (N bases past the stop codon) and ``n.N``
(N-th base of a non-coding transcript).

Coordinate conventions:
    - Genomic coordinates: 1-based, inclusive
    - Transcript positions: 1..reference_length, 5' to 3'
    - Exon order in records: ascending genomic order, on both strands

Example:
    >>> from exonloc.core.locate import locate
    >>> locate(record)
    >>> record.transcript_positions[0]
    (1, 100)
    >>> [str(o) for o in record.offsets[0]]
    ['-10', '*10']
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from exonloc.errors import LogicError

if TYPE_CHECKING:
    from exonloc.io.genepred import GenePredRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Region Offsets
# =============================================================================


class Region(Enum):
    """Transcript region an offset belongs to."""

    UTR5 = "5'UTR"
    UTR3 = "3'UTR"
    CODING = "coding"
    NONCODING = "noncoding"

    @property
    def prefix(self) -> str:
        """Prefix used when rendering an offset in this region."""
        return REGION_PREFIXES[self]


REGION_PREFIXES = {
    Region.UTR5: "-",
    Region.UTR3: "*",
    Region.CODING: "c.",
    Region.NONCODING: "n.",
}


class RegionOffset(NamedTuple):
    """A region tag with a 1-based distance from the region's edge.

    Attributes:
        region: Region the position falls in.
        magnitude: Distance in bases, counted from 1.
    """

    region: Region
    magnitude: int

    def __str__(self) -> str:
        return f"{self.region.prefix}{self.magnitude}"


# =============================================================================
# Locating
# =============================================================================


def _check_locatable(record: GenePredRecord) -> None:
    if record.located:
        raise LogicError(f"Record {record.name} has already been located")
    if not record.chrom or record.strand not in ("+", "-"):
        raise LogicError("Record has not been parsed")
    if record.exon_count == 0:
        raise LogicError(f"Record {record.name} has no exons")


def utr_lengths(record: GenePredRecord) -> tuple[int, int]:
    """UTR lengths in genomic orientation.

    Args:
        record: Parsed record.

    Returns:
        (upstream, downstream): exonic bases before cds_start and after
        cds_end. Both are 0 for non-coding transcripts.
    """
    if not record.is_coding:
        return 0, 0

    upstream = 0
    downstream = 0
    for start, end in record.exons:
        if end < record.cds_start:
            upstream += end - start + 1
        elif start < record.cds_start:
            # Exon holds the UTR/CDS boundary
            upstream += record.cds_start - start

        if start > record.cds_end:
            downstream += end - start + 1
        elif end > record.cds_end:
            downstream += end - record.cds_end

    return upstream, downstream


def _classify(record: GenePredRecord, position: int) -> RegionOffset:
    if not record.is_coding:
        return RegionOffset(Region.NONCODING, position)

    if position <= record.forward_length:
        return RegionOffset(Region.UTR5, record.forward_length - position + 1)

    coding_end = record.forward_length + record.coding_length
    if position > coding_end:
        return RegionOffset(Region.UTR3, position - coding_end)

    return RegionOffset(Region.CODING, position - record.forward_length)


def locate(record: GenePredRecord) -> GenePredRecord:
    """Compute transcript positions and annotated offsets in place.

    Steps:
        1. Assign each exon a contiguous transcript interval in genomic
           order and sum the exon lengths into ``reference_length``.
        2. Measure the UTR bases before cds_start and after cds_end.
        3. Orient the UTR lengths: on the minus strand the genomic
           downstream UTR is the 5' UTR.
        4. Mirror positions on the minus strand so position 1 is the 5' end.
        5. Classify each exon boundary. 5' UTR offsets count down towards
           the start codon, coding offsets count up from it, and 3' UTR
           offsets count up from the stop codon.

    Args:
        record: Parsed, not yet located record.

    Returns:
        The same record, for chaining.

    Raises:
        LogicError: If the record was already located, was never parsed,
            or has no exons.
    """
    _check_locatable(record)

    positions = []
    cursor = 0
    for length in record.exon_lengths:
        positions.append((cursor + 1, cursor + length))
        cursor += length
    reference_length = cursor

    upstream, downstream = utr_lengths(record)
    if record.is_plus:
        record.forward_length, record.backward_length = upstream, downstream
    else:
        record.forward_length, record.backward_length = downstream, upstream
        positions = [
            (reference_length - start + 1, reference_length - end + 1)
            for start, end in positions
        ]

    record.reference_length = reference_length
    record.transcript_positions = positions
    record.offsets = [(_classify(record, start), _classify(record, end)) for start, end in positions]
    record.located = True

    logger.debug(
        f"Located {record.name}: length={reference_length} "
        f"utr5={record.forward_length} utr3={record.backward_length}"
    )
    return record


# =============================================================================
# Position Queries
# =============================================================================


def _require_located(record: GenePredRecord) -> None:
    if not record.located:
        raise LogicError(f"Record {record.name} must be located first")


def offset_at(record: GenePredRecord, position: int) -> RegionOffset:
    """Annotated offset of any transcript position.

    Args:
        record: Located record.
        position: Transcript position (1..reference_length).

    Returns:
        RegionOffset of that base.

    Raises:
        LogicError: If the record has not been located.
        ValueError: If the position is outside the transcript.
    """
    _require_located(record)
    if not 1 <= position <= record.reference_length:
        raise ValueError(
            f"Position {position} outside transcript {record.name} "
            f"(1-{record.reference_length})"
        )
    return _classify(record, position)


def genomic_to_transcript(record: GenePredRecord, position: int) -> int | None:
    """Convert a genomic position to a transcript position.

    Args:
        record: Located record.
        position: 1-based genomic position.

    Returns:
        Transcript position, or None if the base is not exonic.

    Raises:
        LogicError: If the record has not been located.
    """
    _require_located(record)
    index = record.exon_index(position)
    if index is None:
        return None

    distance = position - record.exons[index][0]
    p_start = record.transcript_positions[index][0]
    return p_start + distance if record.is_plus else p_start - distance


def annotate_genomic(record: GenePredRecord, position: int) -> RegionOffset | None:
    """Annotated offset of a genomic position, or None if intronic/outside."""
    transcript_position = genomic_to_transcript(record, position)
    if transcript_position is None:
        return None
    return _classify(record, transcript_position)
