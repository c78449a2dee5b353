"""Input handlers for exonloc.

- formats: genepred / refgene / refflat column layouts
- genepred: line parser and GenePredRecord
- namelist: gene and transcript whitelists
- source: plain, gzipped and tabix-indexed line sources
- database: retrieval by filtered scan, gene, transcript or region

Example:
    >>> from exonloc.io import GenePredParser, GenePredDatabase
    >>> parser = GenePredParser("refflat")
"""

from exonloc.io.database import GenePredDatabase
from exonloc.io.formats import FORMATS, GenePredFormat, select_format
from exonloc.io.genepred import GenePredParser, GenePredRecord
from exonloc.io.namelist import NameSet

__all__ = [
    "FORMATS",
    "GenePredFormat",
    "select_format",
    "GenePredParser",
    "GenePredRecord",
    "NameSet",
    "GenePredDatabase",
]
