"""Column layouts for genePred-style tables.

UCSC distributes transcript models in several closely related tabular
formats. They carry the same fields in different column orders:

- genepred: name, chrom, strand, txStart, txEnd, cdsStart, cdsEnd,
  exonCount, exonStarts, exonEnds, name2 (extended genePred without bin)
- refgene: bin, name, chrom, ... , score, name2, ...
- refflat: geneName, name, chrom, ... (gene symbol first)

Example:
    >>> from exonloc.io.formats import select_format
    >>> fmt = select_format("refgene")
    >>> fmt.chrom
    2
"""

from __future__ import annotations

import attrs

from exonloc.errors import ConfigurationError

# =============================================================================
# Layouts
# =============================================================================


@attrs.frozen
class GenePredFormat:
    """Column indices (0-based) of each semantic field in a line.

    Attributes:
        kind: Registry name of the layout.
        name: Transcript identifier column.
        chrom: Chromosome column.
        strand: Strand column.
        tx_start: Transcript start column (0-based coordinate in file).
        tx_end: Transcript end column.
        cds_start: CDS start column (0-based coordinate in file).
        cds_end: CDS end column.
        exon_count: Exon count column.
        exon_starts: Comma-separated exon starts column.
        exon_ends: Comma-separated exon ends column.
        name2: Gene symbol column.
    """

    kind: str
    name: int
    chrom: int
    strand: int
    tx_start: int
    tx_end: int
    cds_start: int
    cds_end: int
    exon_count: int
    exon_starts: int
    exon_ends: int
    name2: int

    @property
    def n_columns(self) -> int:
        """Minimum number of columns a complete line has."""
        return max(attrs.astuple(self)[1:]) + 1


GENEPRED = GenePredFormat(
    kind="genepred",
    name=0,
    chrom=1,
    strand=2,
    tx_start=3,
    tx_end=4,
    cds_start=5,
    cds_end=6,
    exon_count=7,
    exon_starts=8,
    exon_ends=9,
    name2=10,
)

REFGENE = GenePredFormat(
    kind="refgene",
    name=1,
    chrom=2,
    strand=3,
    tx_start=4,
    tx_end=5,
    cds_start=6,
    cds_end=7,
    exon_count=8,
    exon_starts=9,
    exon_ends=10,
    name2=12,
)

REFFLAT = GenePredFormat(
    kind="refflat",
    name2=0,
    name=1,
    chrom=2,
    strand=3,
    tx_start=4,
    tx_end=5,
    cds_start=6,
    cds_end=7,
    exon_count=8,
    exon_starts=9,
    exon_ends=10,
)

FORMATS: dict[str, GenePredFormat] = {
    fmt.kind: fmt for fmt in (GENEPRED, REFGENE, REFFLAT)
}

DEFAULT_FORMAT = "genepred"


# =============================================================================
# Registry
# =============================================================================


def select_format(kind: str | GenePredFormat) -> GenePredFormat:
    """Resolve a layout by name.

    Args:
        kind: One of "genepred", "refgene" or "refflat" (any case), or an
            already resolved layout which is returned unchanged.

    Returns:
        The matching GenePredFormat.

    Raises:
        ConfigurationError: If the kind is not registered.
    """
    if isinstance(kind, GenePredFormat):
        return kind

    fmt = FORMATS.get(str(kind).lower())
    if fmt is None:
        raise ConfigurationError(
            f"Unknown format '{kind}'. Expected one of: {', '.join(FORMATS)}"
        )
    return fmt
