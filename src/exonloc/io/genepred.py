"""genePred line parsing.

This module turns one line of a genePred-style table into a
``GenePredRecord``. Coordinates are converted on read: the file stores
0-based starts and exclusive ends, records hold 1-based inclusive
intervals (starts + 1, ends unchanged).

Features:
    - Three column layouts (genepred, refgene, refflat)
    - Configurable single-character delimiter
    - Strict validation of chromosome, end, strand and exon columns
    - Fresh record per line; records compare equal field by field

Example:
    >>> from exonloc.io.genepred import GenePredParser
    >>> parser = GenePredParser("refgene")
    >>> record = parser.parse(line)
    >>> record.name, record.exons[0]
    ('NM_000546.6', (7668402, 7669690))
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Iterable, Literal

import attrs

from exonloc.errors import ConfigurationError, MalformedLineError
from exonloc.io.formats import DEFAULT_FORMAT, GenePredFormat, select_format
from exonloc.io.source import is_comment

if TYPE_CHECKING:
    from exonloc.core.locate import RegionOffset

logger = logging.getLogger(__name__)

Strand = Literal["+", "-"]

VALID_STRANDS = ("+", "-")

DEFAULT_DELIMITER = "\t"


# =============================================================================
# Data Model
# =============================================================================


@attrs.define(slots=True)
class GenePredRecord:
    """One transcript model and, once located, its derived coordinates.

    All genomic coordinates are 1-based and inclusive.

    Attributes:
        chrom: Chromosome name.
        name: Transcript identifier (e.g. RefSeq accession).
        name2: Gene symbol, None when the layout has no such column.
        strand: Strand (+ or -).
        tx_start: Transcript start.
        tx_end: Transcript end.
        cds_start: First coding base.
        cds_end: Last coding base.
        exons: (start, end) pairs in ascending genomic order.
        raw_line: The line the record was parsed from.
        reference_length: Spliced transcript length (after locate).
        forward_length: 5' UTR length in transcript orientation (after locate).
        backward_length: 3' UTR length in transcript orientation (after locate).
        transcript_positions: Per-exon (start, end) transcript positions
            for the genomic start and end of each exon (after locate).
        offsets: Per-exon (start, end) annotated offsets (after locate).
        located: Whether the coordinate locator has run.
    """

    chrom: str
    name: str | None
    strand: str
    tx_start: int
    tx_end: int
    cds_start: int = 0
    cds_end: int = 0
    exons: list[tuple[int, int]] = attrs.Factory(list)
    name2: str | None = None
    raw_line: str | None = attrs.field(default=None, eq=False, repr=False)

    # Filled in by exonloc.core.locate.locate()
    reference_length: int = 0
    forward_length: int = 0
    backward_length: int = 0
    transcript_positions: list[tuple[int, int]] = attrs.Factory(list)
    offsets: list[tuple[RegionOffset, RegionOffset]] = attrs.Factory(list)
    located: bool = False

    @property
    def exon_count(self) -> int:
        """Number of exons."""
        return len(self.exons)

    @property
    def is_coding(self) -> bool:
        """True if the transcript has a CDS.

        Non-coding transcripts store equal 0-based cdsStart and cdsEnd,
        which reads as cds_start == cds_end + 1 after conversion.
        """
        return self.cds_start < self.cds_end

    @property
    def is_plus(self) -> bool:
        """True for plus-strand transcripts."""
        return self.strand == "+"

    @property
    def coding_length(self) -> int:
        """Coding length in transcript coordinates (after locate)."""
        return self.reference_length - self.forward_length - self.backward_length

    @property
    def exon_lengths(self) -> list[int]:
        """Exon lengths in genomic order."""
        return [end - start + 1 for start, end in self.exons]

    @property
    def introns(self) -> list[tuple[int, int]]:
        """Intron intervals (1-based inclusive) in genomic order."""
        return [
            (self.exons[i][1] + 1, self.exons[i + 1][0] - 1)
            for i in range(len(self.exons) - 1)
            if self.exons[i][1] + 1 <= self.exons[i + 1][0] - 1
        ]

    def exon_index(self, position: int) -> int | None:
        """0-based index (genomic order) of the exon holding a 1-based position."""
        for i, (start, end) in enumerate(self.exons):
            if start <= position <= end:
                return i
        return None

    def exon_number(self, index: int) -> int:
        """1-based exon number, counted 5' to 3' in transcript orientation.

        Args:
            index: 0-based exon index in genomic order.
        """
        return index + 1 if self.is_plus else self.exon_count - index

    def copy(self) -> GenePredRecord:
        """Return an independent copy, including located coordinates."""
        return copy.deepcopy(self)


# =============================================================================
# Parsing
# =============================================================================


def _to_int(value: str, field: str, line: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise MalformedLineError(f"{field} is not an integer: {value!r}", line) from None


def parse_exon_list(text: str, count: int, offset: int = 0, line: str = "") -> list[int]:
    """Parse a comma-separated exon coordinate list.

    UCSC writes lists with a trailing comma (``100,300,``). Exactly
    ``count`` values are read; values beyond that are ignored.

    Args:
        text: Column text.
        count: Number of exons declared on the line.
        offset: Added to each value (1 converts 0-based starts).
        line: Original line, for error reporting.

    Returns:
        List of ``count`` integers.

    Raises:
        MalformedLineError: If the list holds fewer than ``count`` integers.
    """
    values = [v for v in text.strip().split(",") if v.strip()]
    if len(values) < count:
        raise MalformedLineError(
            f"expected {count} exon coordinates, found {len(values)}", line
        )
    return [_to_int(v.strip(), "exon coordinate", line) + offset for v in values[:count]]


def check_exons(exons: list[tuple[int, int]], line: str = "") -> None:
    """Validate that exons are non-empty, sorted and non-overlapping.

    Raises:
        MalformedLineError: On the first offending exon.
    """
    previous_end = 0
    for i, (start, end) in enumerate(exons):
        if end < start:
            raise MalformedLineError(f"exon {i + 1} ends before it starts", line)
        if start <= previous_end:
            raise MalformedLineError(f"exon {i + 1} overlaps or precedes exon {i}", line)
        previous_end = end


class GenePredParser:
    """Parse genePred-style lines under a fixed column layout.

    Attributes:
        format: Active column layout.
        delimiter: Column separator.

    Example:
        >>> parser = GenePredParser("genepred")
        >>> record = parser.parse("NM_1\\tchr1\\t+\\t100\\t200\\t110\\t190\\t1\\t100,\\t200,\\tGENE")
        >>> record.tx_start, record.cds_start
        (101, 111)
    """

    def __init__(
        self,
        fmt: str | GenePredFormat = DEFAULT_FORMAT,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        """Initialize the parser.

        Args:
            fmt: Layout name or GenePredFormat.
            delimiter: Single-character column separator.

        Raises:
            ConfigurationError: If the layout is unknown or the delimiter
                is not a single character.
        """
        self.format = select_format(fmt)
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ConfigurationError(
                f"Delimiter must be a single character, got {delimiter!r}"
            )
        self.delimiter = delimiter

    def parse(self, line: str) -> GenePredRecord:
        """Parse one line into a new record.

        Args:
            line: Raw line; a trailing newline is ignored.

        Returns:
            Parsed GenePredRecord (not yet located).

        Raises:
            MalformedLineError: If a required column is missing or invalid.
        """
        text = line.rstrip("\r\n")
        fields = text.split(self.delimiter)
        fmt = self.format

        def column(index: int) -> str | None:
            return fields[index] if index < len(fields) else None

        chrom = column(fmt.chrom)
        if not chrom:
            raise MalformedLineError("missing chromosome", line)

        tx_end = column(fmt.tx_end)
        if tx_end is None:
            raise MalformedLineError("missing transcript end", line)

        strand = column(fmt.strand)
        if strand is None:
            raise MalformedLineError("missing strand", line)
        if strand not in VALID_STRANDS:
            raise MalformedLineError(f"unknown strand type {strand!r}", line)

        exon_starts = column(fmt.exon_starts)
        exon_ends = column(fmt.exon_ends)
        if exon_starts is None or exon_ends is None:
            raise MalformedLineError(
                f"missing exon starts or ends ({len(fields)} of {fmt.n_columns} columns)", line
            )

        def number(index: int, field: str) -> int:
            value = column(index)
            if value is None or value == "":
                return 0
            return _to_int(value, field, line)

        exon_count = number(fmt.exon_count, "exonCount")
        if exon_count < 0:
            raise MalformedLineError(f"negative exon count {exon_count}", line)

        starts = parse_exon_list(exon_starts, exon_count, offset=1, line=line)
        ends = parse_exon_list(exon_ends, exon_count, line=line)
        exons = list(zip(starts, ends))
        check_exons(exons, line)

        return GenePredRecord(
            chrom=chrom,
            name=column(fmt.name),
            name2=column(fmt.name2),
            strand=strand,
            tx_start=number(fmt.tx_start, "txStart") + 1,
            tx_end=_to_int(tx_end, "txEnd", line),
            cds_start=number(fmt.cds_start, "cdsStart") + 1,
            cds_end=number(fmt.cds_end, "cdsEnd"),
            exons=exons,
            raw_line=text,
        )

    def parse_many(self, lines: Iterable[str]) -> list[GenePredRecord]:
        """Parse an iterable of lines, skipping blanks and comments."""
        return [self.parse(line) for line in lines if not is_comment(line.rstrip("\r\n"))]
