"""Coordinate logic for exonloc.

- locate: transcript (p.) and CDS-relative (c./n.) coordinates
- table: per-exon annotation table output
"""

from exonloc.core.locate import (
    Region,
    RegionOffset,
    annotate_genomic,
    genomic_to_transcript,
    locate,
    offset_at,
)
from exonloc.core.table import format_header, format_rows, write_table

__all__ = [
    "Region",
    "RegionOffset",
    "locate",
    "offset_at",
    "genomic_to_transcript",
    "annotate_genomic",
    "format_header",
    "format_rows",
    "write_table",
]
