"""Exon annotation table output.

One row per exon of each located transcript:

    #Chrom  Start  End  Strand  Gene  Transcript  Exon  Start(p.)  End(p.)  Start(c.)  End(c.)

Start is 0-based and End is the 1-based inclusive end, so the pair reads
as a BED interval. Exons are listed in genomic order but numbered 5' to 3'
in transcript orientation (EX1 is the last row on the minus strand).

Example:
    >>> from exonloc.core.table import write_table
    >>> write_table(records, sys.stdout)
"""

from __future__ import annotations

import csv
import logging
from typing import IO, Iterable, Iterator

from exonloc.errors import LogicError
from exonloc.io.genepred import GenePredRecord

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "#Chrom",
    "Start",
    "End",
    "Strand",
    "Gene",
    "Transcript",
    "Exon",
    "Start(p.)",
    "End(p.)",
    "Start(c.)",
    "End(c.)",
]

TABLE_HEADER = "\t".join(TABLE_COLUMNS)


def format_header() -> str:
    """Return the tab-separated table header."""
    return TABLE_HEADER


def exon_rows(record: GenePredRecord) -> Iterator[list[str]]:
    """Yield one row of string fields per exon.

    Args:
        record: Located record.

    Raises:
        LogicError: If the record has not been located.
    """
    if not record.located:
        raise LogicError(f"Record {record.name} must be located before formatting")

    for i, ((start, end), (p_start, p_end), (c_start, c_end)) in enumerate(
        zip(record.exons, record.transcript_positions, record.offsets)
    ):
        yield [
            record.chrom,
            str(start - 1),
            str(end),
            record.strand,
            record.name2 or "",
            record.name or "",
            f"EX{record.exon_number(i)}",
            str(p_start),
            str(p_end),
            str(c_start),
            str(c_end),
        ]


def format_rows(record: GenePredRecord) -> list[str]:
    """Return the tab-joined table lines for one record."""
    return ["\t".join(row) for row in exon_rows(record)]


def write_table(
    records: Iterable[GenePredRecord],
    handle: IO[str],
    header: bool = True,
) -> int:
    """Write located records as an exon table.

    Args:
        records: Located records.
        handle: Open text handle.
        header: Write the header line first.

    Returns:
        Number of exon rows written.
    """
    writer = csv.writer(handle, delimiter="\t", lineterminator="\n")
    if header:
        writer.writerow(TABLE_COLUMNS)

    n_rows = 0
    for record in records:
        for row in exon_rows(record):
            writer.writerow(row)
            n_rows += 1

    logger.debug(f"Wrote {n_rows} exon rows")
    return n_rows
