"""Tests for region and position parsing utilities.

Tests the genomic region parsing used by region queries and the
position parsing used by the position command.
"""

import pytest

from exonloc.utils.regions import (
    MAX_POSITION,
    GenomicRegion,
    parse_position,
    parse_region,
)


# =============================================================================
# Test GenomicRegion
# =============================================================================


class TestGenomicRegion:
    """Tests for GenomicRegion NamedTuple."""

    def test_creation(self):
        """Create a GenomicRegion."""
        region = GenomicRegion("chr1", 100, 200)
        assert region.seqid == "chr1"
        assert region.start == 100
        assert region.end == 200

    def test_length(self):
        """Test length property."""
        assert GenomicRegion("chr1", 100, 200).length == 100

    def test_str_representation(self):
        """Test string representation (1-based)."""
        region = GenomicRegion("chr1", 999, 2000)
        assert str(region) == "chr1:1000-2000"


# =============================================================================
# Test parse_region
# =============================================================================


class TestParseRegion:
    """Tests for parse_region function."""

    def test_standard_format(self):
        """Parse standard chr:start-end format."""
        region = parse_region("chr1:1000-2000")
        assert region == GenomicRegion("chr1", 999, 2000)

    def test_with_commas(self):
        """Parse format with thousands separators."""
        region = parse_region("chr17:7,661,779-7,687,538")
        assert region == GenomicRegion("chr17", 7661778, 7687538)

    def test_gff_style(self):
        """Parse GFF-style double-dot format."""
        assert parse_region("chr1:1000..2000") == GenomicRegion("chr1", 999, 2000)

    def test_whole_contig(self):
        """A bare contig name covers the whole contig."""
        assert parse_region("chrX") == GenomicRegion("chrX", 0, MAX_POSITION)

    def test_single_base(self):
        """Start equal to end is a single base."""
        assert parse_region("chr1:5-5").length == 1

    def test_strips_whitespace(self):
        """Surrounding whitespace is ignored."""
        assert parse_region("  chr1:1-10 ").seqid == "chr1"

    def test_invalid_format(self):
        """Malformed strings are rejected."""
        with pytest.raises(ValueError, match="Invalid region format"):
            parse_region("chr1:abc-def")

    def test_start_zero(self):
        """1-based input cannot start at 0."""
        with pytest.raises(ValueError, match=">= 1"):
            parse_region("chr1:0-100")

    def test_end_before_start(self):
        """Inverted ranges are rejected."""
        with pytest.raises(ValueError, match="End must be"):
            parse_region("chr1:200-100")


# =============================================================================
# Test parse_position
# =============================================================================


class TestParsePosition:
    """Tests for parse_position function."""

    def test_position(self):
        """Positions stay 1-based."""
        assert parse_position("chr17:7675088") == ("chr17", 7675088)

    def test_with_commas(self):
        """Thousands separators are removed."""
        assert parse_position("chr17:7,675,088") == ("chr17", 7675088)

    def test_invalid(self):
        """Ranges are not positions."""
        with pytest.raises(ValueError, match="Invalid position format"):
            parse_position("chr1:100-200")

    def test_zero(self):
        """Position 0 does not exist in 1-based coordinates."""
        with pytest.raises(ValueError, match=">= 1"):
            parse_position("chr1:0")
