"""exonloc: per-exon coordinate systems for genePred transcript models.

exonloc reads UCSC genepred, refGene and refFlat tables and works out,
for every exon of a transcript, its genomic interval, its position on the
spliced transcript (p.) and its offset relative to the coding sequence
(c./n., with 5' and 3' UTR offsets). Records can be retrieved by gene
symbol, by transcript accession, or by region through a tabix index.

Example:
    >>> from exonloc import GenePredDatabase, locate
    >>> with GenePredDatabase("refGene.txt.gz", fmt="refgene") as db:
    ...     for record in db.retrieve_gene("TP53"):
    ...         locate(record)
    ...         print(record.name, [str(o) for o in record.offsets[0]])

Modules:
    io: Column layouts, line parsing, name lists and the database
    core: Coordinate locating and table output
    utils: Logging and region parsing
"""

__version__ = "0.1.0"

from exonloc.core.locate import Region, RegionOffset, locate
from exonloc.errors import (
    ConfigurationError,
    ExonlocError,
    LogicError,
    MalformedLineError,
    SourceIOError,
)
from exonloc.io.database import GenePredDatabase
from exonloc.io.genepred import GenePredParser, GenePredRecord

__all__ = [
    "__version__",
    "GenePredDatabase",
    "GenePredParser",
    "GenePredRecord",
    "Region",
    "RegionOffset",
    "locate",
    "ExonlocError",
    "ConfigurationError",
    "SourceIOError",
    "MalformedLineError",
    "LogicError",
]
