"""Pytest configuration and shared fixtures for exonloc tests.

This module contains fixtures that are shared across multiple test modules.
Fixtures are organized by category:

- Line fixtures: Raw genePred-style lines in each layout
- File fixtures: Plain, gzipped and tabix-indexed data files
- Name list fixtures: Gene and transcript whitelists
- Record fixtures: Parsed records ready for locating
"""

import gzip
from pathlib import Path

import pysam
import pytest

from exonloc.io.genepred import GenePredParser, GenePredRecord


# =============================================================================
# Test Data
# =============================================================================

# genepred layout: name chrom strand txStart txEnd cdsStart cdsEnd
#                  exonCount exonStarts exonEnds name2
# Sorted by chrom and txStart so the file can be tabix indexed.
GENEPRED_ROWS = [
    ["NM_000001.1", "chr1", "+", "100", "200", "110", "190", "1", "100,", "200,", "GENEA"],
    ["NM_000002.3", "chr1", "+", "100", "400", "150", "350", "2", "100,300,", "200,400,", "GENEB"],
    ["NM_000022.1", "chr1", "+", "120", "400", "150", "350", "2", "120,300,", "200,400,", "GENEB"],
    ["NR_000003.1", "chr1", "-", "1000", "1400", "1200", "1200", "2", "1000,1300,", "1100,1400,", "GENEC"],
    ["NM_000004.2", "chr2", "-", "100", "400", "150", "350", "2", "100,300,", "200,400,", "GENED"],
    ["NM_000040.1", "chr2", "+", "500", "600", "510", "590", "1", "500,", "600,", "GENEE"],
]


def genepred_line(row: list[str]) -> str:
    """Join a genepred row with tabs."""
    return "\t".join(row)


def refgene_line(row: list[str], bin_value: str = "585") -> str:
    """Rearrange a genepred row into the refGene layout."""
    return "\t".join(
        [bin_value] + row[:10] + ["0", row[10], "cmpl", "cmpl", "0,"]
    )


def refflat_line(row: list[str]) -> str:
    """Rearrange a genepred row into the refFlat layout."""
    return "\t".join([row[10]] + row[:10])


# =============================================================================
# Line Fixtures
# =============================================================================


@pytest.fixture
def genepred_rows() -> list[list[str]]:
    """All test transcripts as genepred column lists."""
    return [list(row) for row in GENEPRED_ROWS]


@pytest.fixture
def single_exon_line() -> str:
    """Single-exon coding transcript on the plus strand.

    txStart=100, txEnd=200, cdsStart=110, cdsEnd=190 (file coordinates),
    giving 10 bases of UTR on each side of an 80 base CDS.
    """
    return genepred_line(GENEPRED_ROWS[0])


@pytest.fixture
def two_exon_line() -> str:
    """Two-exon coding transcript on the plus strand.

    Exons 101-200 and 301-400 (1-based), CDS 151-350.
    """
    return genepred_line(GENEPRED_ROWS[1])


@pytest.fixture
def noncoding_minus_line() -> str:
    """Two-exon non-coding transcript on the minus strand (cdsStart == cdsEnd)."""
    return genepred_line(GENEPRED_ROWS[3])


@pytest.fixture
def coding_minus_line() -> str:
    """Two-exon coding transcript on the minus strand.

    Same exon structure as two_exon_line, on chr2.
    """
    return genepred_line(GENEPRED_ROWS[4])


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def genepred_file(tmp_path: Path) -> Path:
    """Plain genepred file with a comment line."""
    path = tmp_path / "genes.genepred"
    with open(path, "w") as f:
        f.write("# name\tchrom\tstrand\n")
        for row in GENEPRED_ROWS:
            f.write(genepred_line(row) + "\n")
    return path


@pytest.fixture
def genepred_gz(tmp_path: Path) -> Path:
    """Gzip-compressed genepred file without an index."""
    path = tmp_path / "genes.genepred.gz"
    with gzip.open(path, "wt") as f:
        for row in GENEPRED_ROWS:
            f.write(genepred_line(row) + "\n")
    return path


@pytest.fixture
def refgene_file(tmp_path: Path) -> Path:
    """Plain refGene file."""
    path = tmp_path / "refGene.txt"
    with open(path, "w") as f:
        for row in GENEPRED_ROWS:
            f.write(refgene_line(row) + "\n")
    return path


@pytest.fixture
def refflat_file(tmp_path: Path) -> Path:
    """Plain refFlat file."""
    path = tmp_path / "refFlat.txt"
    with open(path, "w") as f:
        for row in GENEPRED_ROWS:
            f.write(refflat_line(row) + "\n")
    return path


@pytest.fixture
def indexed_genepred(tmp_path: Path) -> Path:
    """bgzip-compressed genepred file with a tabix index.

    Returns:
        Path to the .gz data file; the .tbi sits next to it.
    """
    path = tmp_path / "indexed.genepred"
    with open(path, "w") as f:
        for row in GENEPRED_ROWS:
            f.write(genepred_line(row) + "\n")

    compressed = pysam.tabix_index(
        str(path),
        seq_col=1,
        start_col=3,
        end_col=4,
        zerobased=True,
        force=True,
    )
    return Path(compressed)


@pytest.fixture
def malformed_file(tmp_path: Path) -> Path:
    """genepred file whose second record has an invalid strand."""
    path = tmp_path / "broken.genepred"
    bad = list(GENEPRED_ROWS[1])
    bad[2] = "x"
    with open(path, "w") as f:
        f.write(genepred_line(GENEPRED_ROWS[0]) + "\n")
        f.write(genepred_line(bad) + "\n")
    return path


# =============================================================================
# Name List Fixtures
# =============================================================================


@pytest.fixture
def gene_list(tmp_path: Path) -> Path:
    """Gene list holding GENEB and GENED."""
    path = tmp_path / "genes.txt"
    path.write_text("# wanted genes\nGENEB\n\nGENED\n")
    return path


@pytest.fixture
def transcript_list(tmp_path: Path) -> Path:
    """Transcript list with one unversioned and one versioned entry.

    NM_000002 matches NM_000002.3; NM_000004.9 does not match NM_000004.2.
    """
    path = tmp_path / "transcripts.txt"
    path.write_text("NM_000002\nNM_000004.9\n")
    return path


@pytest.fixture
def empty_list(tmp_path: Path) -> Path:
    """Name list with only a comment."""
    path = tmp_path / "empty.txt"
    path.write_text("# nothing\n")
    return path


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def parser() -> GenePredParser:
    """Parser for the genepred layout."""
    return GenePredParser("genepred")


@pytest.fixture
def single_exon_record(parser: GenePredParser, single_exon_line: str) -> GenePredRecord:
    """Parsed single-exon coding record."""
    return parser.parse(single_exon_line)


@pytest.fixture
def two_exon_record(parser: GenePredParser, two_exon_line: str) -> GenePredRecord:
    """Parsed two-exon plus-strand coding record."""
    return parser.parse(two_exon_line)


@pytest.fixture
def minus_record(parser: GenePredParser, coding_minus_line: str) -> GenePredRecord:
    """Parsed two-exon minus-strand coding record."""
    return parser.parse(coding_minus_line)


@pytest.fixture
def noncoding_record(parser: GenePredParser, noncoding_minus_line: str) -> GenePredRecord:
    """Parsed two-exon minus-strand non-coding record."""
    return parser.parse(noncoding_minus_line)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that read real files end to end"
    )
