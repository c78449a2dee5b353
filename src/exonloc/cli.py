"""Command-line interface for exonloc.

This module provides the main entry point for the exonloc CLI tool.
It uses Click to define commands and rich for diagnostics on stderr;
tables go to stdout (or --output).

Commands:
    table: Exon coordinate table for selected transcripts
    position: Transcript and CDS coordinates of genomic positions

Example:
    $ exonloc table refGene.txt.gz -f refgene --name TP53
    $ exonloc table refGene.txt.gz -f refgene --genes genes.txt --no-header
    $ exonloc table refGene.txt.gz -f refgene --region chr17:7661779-7687538
    $ exonloc position refGene.txt.gz -f refgene --name NM_000546 -p chr17:7675088
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

import click
from rich.console import Console

from exonloc import __version__
from exonloc.config import Config
from exonloc.core.locate import annotate_genomic, genomic_to_transcript, locate
from exonloc.core.table import write_table
from exonloc.errors import ExonlocError
from exonloc.io.database import GenePredDatabase
from exonloc.io.formats import FORMATS
from exonloc.io.genepred import GenePredRecord
from exonloc.utils.logging import Timer, setup_logging
from exonloc.utils.regions import parse_position, parse_region

logger = logging.getLogger(__name__)

# Diagnostics go to stderr so stdout stays a clean table
console = Console(stderr=True)

POSITION_COLUMNS = ["#Chrom", "Position", "Strand", "Gene", "Transcript", "Exon", "p.", "c."]


def _fail(message: str, verbose: bool = False) -> None:
    console.print(f"[red]Error:[/red] {message}")
    if verbose:
        console.print_exception()
    raise SystemExit(1)


def _located(records: Iterable[GenePredRecord]) -> Iterator[GenePredRecord]:
    for record in records:
        yield locate(record)


@click.group()
@click.version_option(version=__version__, prog_name="exonloc")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """exonloc: per-exon transcript and CDS coordinates from genePred tables.

    Reads UCSC genepred, refGene and refFlat tables (plain, gzipped, or
    bgzipped with a tabix index) and reports where every exon sits on the
    genome, on the spliced transcript (p.) and relative to the CDS (c./n.).
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    setup_logging(verbosity=0 if quiet else (2 if verbose else 1))


# =============================================================================
# table command
# =============================================================================


@main.command("table")
@click.argument("data", required=False, type=click.Path(path_type=Path))
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(sorted(FORMATS), case_sensitive=False),
    default=None,
    help="Column layout of DATA. [default: $EXONLOC_FORMAT or genepred]",
)
@click.option(
    "--genes",
    type=click.Path(path_type=Path),
    help="File of gene symbols to report (one per line).",
)
@click.option(
    "--transcripts",
    type=click.Path(path_type=Path),
    help="File of transcript IDs to report (one per line). Unversioned IDs match any version.",
)
@click.option(
    "-n",
    "--name",
    type=str,
    default=None,
    help="Single gene symbol or transcript ID (case-insensitive). Ignores --genes/--transcripts.",
)
@click.option(
    "-r",
    "--region",
    type=str,
    default=None,
    help="Report transcripts overlapping seqid:start-end (1-based inclusive). Needs a tabix index.",
)
@click.option("--all", "dump_all", is_flag=True, help="Report every transcript in DATA.")
@click.option("--no-header", is_flag=True, help="Omit the header line.")
@click.option(
    "-d",
    "--delimiter",
    type=str,
    default="\t",
    show_default=False,
    help="Column separator of DATA. [default: tab]",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file. [default: stdout]",
)
@click.pass_context
def table(
    ctx: click.Context,
    data: Optional[Path],
    fmt: Optional[str],
    genes: Optional[Path],
    transcripts: Optional[Path],
    name: Optional[str],
    region: Optional[str],
    dump_all: bool,
    no_header: bool,
    delimiter: str,
    output: Optional[Path],
) -> None:
    """Write the exon coordinate table for selected transcripts.

    DATA is a genePred-style table; defaults to $REFGENE.

    Select transcripts with --name, --region, the --genes/--transcripts
    lists (both must match when both are given), or --all.
    """
    verbose = ctx.obj.get("verbose", False)

    if not (genes or transcripts or name or region or dump_all):
        raise click.UsageError("Specify --name, --region, --genes, --transcripts or --all.")
    if name and region:
        raise click.UsageError("--name and --region cannot be combined.")

    config = Config.from_env(
        data_path=data,
        format=fmt,
        genes_path=None if name else genes,
        transcripts_path=None if name else transcripts,
        delimiter=delimiter,
        header=not no_header,
        require_index=region is not None,
    )

    try:
        target = parse_region(region) if region else None
    except ValueError as e:
        _fail(str(e))

    try:
        with GenePredDatabase.from_config(config) as db:
            if name:
                with Timer(f"Lookup of {name}", logger):
                    records: Iterable[GenePredRecord] = db.lookup(name)
                if not records:
                    console.print(f"[yellow]No gene or transcript named[/yellow] {name}")
            elif target is not None:
                with Timer(f"Region query {target}", logger):
                    records = [
                        r
                        for r in db.retrieve_region(target.seqid, target.start, target.end)
                        if db.accepts(r)
                    ]
            else:
                records = db.iter_records()

            with click.open_file(str(output) if output else "-", "w") as handle:
                n_rows = write_table(_located(records), handle, header=config.header)

        if output and not ctx.obj.get("quiet", False):
            console.print(f"[green]Wrote {n_rows:,} exon rows:[/green] {output}")

    except ExonlocError as e:
        _fail(str(e), verbose)


# =============================================================================
# position command
# =============================================================================


@main.command("position")
@click.argument("data", required=False, type=click.Path(path_type=Path))
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(sorted(FORMATS), case_sensitive=False),
    default=None,
    help="Column layout of DATA. [default: $EXONLOC_FORMAT or genepred]",
)
@click.option(
    "-n",
    "--name",
    type=str,
    required=True,
    help="Gene symbol or transcript ID (case-insensitive).",
)
@click.option(
    "-p",
    "--position",
    "positions",
    type=str,
    multiple=True,
    required=True,
    help="Genomic position seqid:pos (1-based). Repeatable.",
)
@click.pass_context
def position(
    ctx: click.Context,
    data: Optional[Path],
    fmt: Optional[str],
    name: str,
    positions: tuple[str, ...],
) -> None:
    """Report p. and c. coordinates of genomic positions.

    Every transcript of NAME is reported; positions outside its exons
    print "." in the p. and c. columns.
    """
    verbose = ctx.obj.get("verbose", False)

    targets = []
    for text in positions:
        try:
            targets.append(parse_position(text))
        except ValueError as e:
            _fail(str(e))

    config = Config.from_env(data_path=data, format=fmt)

    try:
        with GenePredDatabase.from_config(config) as db:
            records = [locate(r) for r in db.lookup(name)]
    except ExonlocError as e:
        _fail(str(e), verbose)

    if not records:
        console.print(f"[yellow]No gene or transcript named[/yellow] {name}")

    click.echo("\t".join(POSITION_COLUMNS))
    for record in records:
        for chrom, pos in targets:
            if chrom != record.chrom:
                continue
            p = genomic_to_transcript(record, pos)
            offset = annotate_genomic(record, pos)
            index = record.exon_index(pos)
            click.echo(
                "\t".join(
                    [
                        chrom,
                        str(pos),
                        record.strand,
                        record.name2 or "",
                        record.name or "",
                        f"EX{record.exon_number(index)}" if index is not None else ".",
                        str(p) if p is not None else ".",
                        str(offset) if offset is not None else ".",
                    ]
                )
            )
