"""Utility functions for exonloc.

- Logging configuration
- Genomic region and position parsing

Example:
    >>> from exonloc.utils.regions import parse_region
    >>> region = parse_region("chr1:1000-2000")
"""

from exonloc.utils.regions import GenomicRegion, parse_position, parse_region

__all__ = [
    "GenomicRegion",
    "parse_region",
    "parse_position",
]
