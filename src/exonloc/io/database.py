"""Retrieval of transcript records from a genePred database.

A ``GenePredDatabase`` owns one data file, an optional tabix index and up
to two name lists. It offers four query modes:

- Filtered scan: ``read_record()`` / ``iter_records()`` stream records
  accepted by the gene and transcript lists
- By gene: ``retrieve_gene()`` scans the whole file for a gene symbol
- By transcript: ``retrieve_transcript()`` scans for an accession,
  optionally ignoring the version suffix
- By region: ``retrieve_region()`` uses the tabix index

Records are returned parsed but not located; call
``exonloc.core.locate.locate`` when transcript or CDS coordinates are
needed. There is no caching: every by-name query rescans the file.

A database keeps a read cursor for ``read_record()``, so one instance
must not be shared between threads.

Example:
    >>> from exonloc.io.database import GenePredDatabase
    >>> with GenePredDatabase("refGene.txt.gz", fmt="refgene") as db:
    ...     for record in db.retrieve_gene("TP53"):
    ...         print(record.name, record.exon_count)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Generator, Iterator

from exonloc.config import ENV_DATA_PATH, Config
from exonloc.errors import ConfigurationError, LogicError
from exonloc.io.formats import DEFAULT_FORMAT, GenePredFormat
from exonloc.io.genepred import DEFAULT_DELIMITER, GenePredParser, GenePredRecord
from exonloc.io.namelist import NameSet, name_in, transcript_in
from exonloc.io.source import TabixLineSource, TextLineSource, is_comment, open_line_source

logger = logging.getLogger(__name__)


class GenePredDatabase:
    """Query interface over a genePred-style table.

    Attributes:
        path: Path to the data file.
        parser: Line parser for the file's layout.
        genes: Gene symbol filter for the sequential scan (None = all).
        transcripts: Transcript filter for the sequential scan (None = all).
    """

    def __init__(
        self,
        path: Path | str | None = None,
        fmt: str | GenePredFormat = DEFAULT_FORMAT,
        genes: NameSet | Path | str | None = None,
        transcripts: NameSet | Path | str | None = None,
        delimiter: str = DEFAULT_DELIMITER,
        require_index: bool = False,
    ) -> None:
        """Open a database.

        Args:
            path: Data file. Falls back to the REFGENE environment variable.
            fmt: Column layout name or GenePredFormat.
            genes: Gene name list (NameSet or path to a list file).
            transcripts: Transcript name list (NameSet or path).
            delimiter: Column separator.
            require_index: Fail if no tabix index is present.

        Raises:
            ConfigurationError: If no data file is given or found, the
                layout is unknown, or a required index is missing.
            FilterFileError: If a name list cannot be read.
        """
        if path is None:
            path = os.environ.get(ENV_DATA_PATH)
        if not path:
            raise ConfigurationError(
                f"No genepred or refgene database specified (set ${ENV_DATA_PATH} or pass a path)"
            )

        self.path = Path(path)
        self.parser = GenePredParser(fmt, delimiter)
        self.genes = genes if isinstance(genes, NameSet) or genes is None else NameSet.load(genes)
        self.transcripts = (
            transcripts
            if isinstance(transcripts, NameSet) or transcripts is None
            else NameSet.load(transcripts)
        )

        self._source: TextLineSource | TabixLineSource | None = open_line_source(
            self.path, require_index=require_index
        )
        self._cursor: Generator[str, None, None] | None = None

        logger.info(f"Opened {self.parser.format.kind} database: {self.path.name}")

    @classmethod
    def from_config(cls, config: Config) -> GenePredDatabase:
        """Open a database described by a Config."""
        config.validate()
        return cls(
            config.data_path,
            fmt=config.format,
            genes=config.genes_path,
            transcripts=config.transcripts_path,
            delimiter=config.delimiter,
            require_index=config.require_index,
        )

    def __enter__(self) -> GenePredDatabase:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Release the data source and cursor."""
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None
        if self._source is not None:
            self._source.close()
            self._source = None

    @property
    def source(self) -> TextLineSource | TabixLineSource:
        """The open line source."""
        if self._source is None:
            raise LogicError("Database is closed")
        return self._source

    @property
    def has_index(self) -> bool:
        """Whether region queries are available."""
        return self.source.has_index

    # =========================================================================
    # Line access
    # =========================================================================

    def _records(self) -> Iterator[GenePredRecord]:
        """Parse every data line from the start of the file."""
        for line in self.source.lines():
            if is_comment(line):
                continue
            yield self.parser.parse(line)

    def _collect(self, predicate: Callable[[GenePredRecord], bool]) -> list[GenePredRecord]:
        return [record for record in self._records() if predicate(record)]

    def accepts(self, record: GenePredRecord) -> bool:
        """Check a record against the gene and transcript lists."""
        return name_in(self.genes, record.name2) and transcript_in(self.transcripts, record.name)

    # =========================================================================
    # Filtered scan
    # =========================================================================

    def rewind(self) -> None:
        """Restart the sequential scan from the beginning of the file."""
        if self._cursor is not None:
            self._cursor.close()
        self._cursor = None

    def read_record(self) -> GenePredRecord | None:
        """Return the next record accepted by the name lists.

        Returns:
            Next accepted record, or None at end of data.

        Raises:
            MalformedLineError: If a data line cannot be parsed.
        """
        if self._cursor is None:
            self._cursor = self.source.lines()

        for line in self._cursor:
            if is_comment(line):
                continue
            record = self.parser.parse(line)
            if self.accepts(record):
                return record
        return None

    def iter_records(self) -> Iterator[GenePredRecord]:
        """Yield every accepted record from the start of the file."""
        self.rewind()
        while True:
            record = self.read_record()
            if record is None:
                return
            yield record

    def __iter__(self) -> Iterator[GenePredRecord]:
        return self.iter_records()

    # =========================================================================
    # Lookups
    # =========================================================================

    def retrieve_gene(self, name: str) -> list[GenePredRecord]:
        """All transcripts of a gene symbol (case-insensitive), in file order.

        Name lists are not applied.
        """
        query = name.lower()
        records = self._collect(lambda r: r.name2 is not None and r.name2.lower() == query)
        logger.debug(f"Gene {name}: {len(records)} transcript(s)")
        return records

    def retrieve_transcript(self, name: str) -> list[GenePredRecord]:
        """All records of a transcript identifier, in file order.

        A versioned query (``NM_000546.6``) matches exactly, ignoring case.
        An unversioned query (``NM_000546``) matches any stored version.
        Name lists are not applied.
        """
        query = name.lower()
        if "." in query:
            def matches(record: GenePredRecord) -> bool:
                return record.name is not None and record.name.lower() == query
        else:
            def matches(record: GenePredRecord) -> bool:
                return record.name is not None and record.name.split(".", 1)[0].lower() == query

        records = self._collect(matches)
        logger.debug(f"Transcript {name}: {len(records)} record(s)")
        return records

    def lookup(self, name: str) -> list[GenePredRecord]:
        """Look a name up as a gene symbol, then as a transcript identifier."""
        records = self.retrieve_gene(name)
        if not records:
            records = self.retrieve_transcript(name)
        return records

    def retrieve_region(self, chrom: str, start: int, end: int) -> list[GenePredRecord]:
        """Records overlapping a genomic region.

        Args:
            chrom: Contig name.
            start: Start position (0-based, inclusive).
            end: End position (0-based, exclusive).

        Returns:
            Overlapping records in index order; empty if the contig is
            not in the index.

        Raises:
            ConfigurationError: If the database has no index.
            ValueError: If the region is inverted or negative.
        """
        if start < 0 or end < start:
            raise ValueError(f"Invalid region {chrom}:{start}-{end}")

        source = self.source
        if not source.has_index:
            raise ConfigurationError(f"Region query requires a tabix index for {self.path}")

        if chrom not in source.contigs:
            logger.debug(f"Contig {chrom} not in index of {self.path.name}")
            return []

        records = [
            self.parser.parse(line)
            for line in source.fetch(chrom, start, end)
            if not is_comment(line)
        ]
        logger.debug(f"Region {chrom}:{start}-{end}: {len(records)} record(s)")
        return records
