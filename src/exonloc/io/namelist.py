"""Gene and transcript name lists.

A name list restricts a sequential scan to a whitelist of gene symbols or
transcript identifiers, one name per line. Lines starting with ``#`` or
``/`` are comments.

Two states must not be confused:

- no list at all (``None``): every name is accepted
- a list that was loaded but holds no names: every name is rejected

Example:
    >>> from exonloc.io.namelist import NameSet, name_in
    >>> genes = NameSet.load("genes.txt")
    >>> name_in(genes, "BRCA1")
    True
    >>> name_in(None, "anything")
    True
"""

from __future__ import annotations

import logging
from pathlib import Path

import attrs

from exonloc.errors import FilterFileError, SourceIOError
from exonloc.io.source import is_comment, open_text

logger = logging.getLogger(__name__)


@attrs.frozen
class NameSet:
    """Immutable set of accepted names.

    Attributes:
        names: The accepted names.
        source: File the names were read from, if any.
    """

    names: frozenset[str] = attrs.field(converter=frozenset, factory=frozenset)
    source: Path | None = None

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def contains(self, name: str | None) -> bool:
        """Exact, case-sensitive membership test."""
        return name is not None and name in self.names

    def members(self) -> frozenset[str]:
        """All accepted names."""
        return self.names

    @classmethod
    def load(cls, path: Path | str | None) -> NameSet | None:
        """Build a name set from a newline-delimited file.

        Args:
            path: Name list file (plain or gzipped). None disables filtering.

        Returns:
            Loaded NameSet, or None when path is None.

        Raises:
            FilterFileError: If the file cannot be read.
        """
        if path is None:
            return None

        path = Path(path)
        names = set()
        try:
            with open_text(path) as f:
                for line in f:
                    name = line.strip()
                    if is_comment(name):
                        continue
                    names.add(name)
        except (OSError, UnicodeDecodeError, SourceIOError) as e:
            raise FilterFileError(f"{path} : {e}") from e

        if not names:
            logger.warning(f"Name list {path} is empty; every record will be rejected")
        logger.debug(f"Loaded {len(names)} names from {path}")
        return cls(names, source=path)


def name_in(names: NameSet | None, name: str | None) -> bool:
    """Check a name against an optional name set.

    Args:
        names: Name set, or None for "no filter".
        name: Name to check.

    Returns:
        True if there is no filter or the name is a member.
    """
    if names is None:
        return True
    return names.contains(name)


def strip_version(name: str) -> str:
    """Remove a trailing ``.N`` version suffix from an identifier."""
    return name.rsplit(".", 1)[0]


def transcript_in(names: NameSet | None, name: str | None) -> bool:
    """Check a transcript identifier against an optional name set.

    A versioned list entry (``NM_000546.6``) only matches that exact
    version. An unversioned entry (``NM_000546``) matches the record with
    any version suffix.

    Args:
        names: Name set, or None for "no filter".
        name: Transcript identifier from the record.

    Returns:
        True if the transcript passes the filter.
    """
    if names is None:
        return True
    if name is None:
        return False
    if names.contains(name):
        return True
    unversioned = strip_version(name)
    return unversioned != name and names.contains(unversioned)
