"""CLI entry point.

Usage:
    svmerge merge -F a.baf.txt -F b.baf.txt.gz -O merged.baf.txt.gz --reference hg38.fa
    svmerge dictionary -F a.baf.txt -F b.baf.txt
    svmerge kinds
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from svmerge.config import config
from svmerge.exceptions import SVMergeError

app = typer.Typer(
    name="svmerge",
    help="svmerge -- merge sorted structural-variant evidence files",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or config.debug else getattr(logging, config.logging.level, logging.INFO)
    logging.basicConfig(level=level, format=config.logging.format)


def _read_sample_list(path: Path) -> list[str]:
    """One sample name per line; blank lines and # comments are skipped."""
    names = []
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            names.append(line)
    return names


@app.command("merge")
def merge_cmd(
    inputs: List[Path] = typer.Option(..., "--evidence-file", "-F", help="Sorted input evidence file (repeatable)"),
    output: Path = typer.Option(..., "--output", "-O", help="Output file; its suffix sets the evidence kind"),
    sample_name: Optional[List[str]] = typer.Option(None, "--sample-name", help="Sample to keep (repeatable)"),
    sample_names_file: Optional[Path] = typer.Option(None, "--sample-names", help="File listing samples to keep"),
    sequence_dictionary: Optional[Path] = typer.Option(None, "--sequence-dictionary", help=".dict file"),
    reference: Optional[Path] = typer.Option(None, "--reference", "-R", help="FASTA reference"),
    compression_level: int = typer.Option(
        config.merge.compression_level, "--compression-level", min=0, max=9, help="gzip compression level",
    ),
    no_resolve: bool = typer.Option(False, "--no-resolve", help="Skip same-locus ordering and deduplication"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Merge sorted evidence files into one sorted, deduplicated file."""
    from svmerge.pipeline.walker import merge_evidence

    _setup_logging(verbose)

    samples = list(sample_name or [])
    if sample_names_file is not None:
        samples.extend(_read_sample_list(sample_names_file))

    try:
        with console.status("Merging evidence..."):
            summary = merge_evidence(
                inputs,
                output,
                sample_names=samples or None,
                dictionary_path=sequence_dictionary,
                reference_path=reference,
                compression_level=compression_level,
                resolve_same_locus=not no_resolve,
            )
    except SVMergeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]Merged {summary.records_read} {summary.kind} records from "
        f"{summary.inputs} inputs into {summary.records_written} records[/green]"
    )
    if summary.records_dropped:
        console.print(f"  {summary.records_dropped} records dropped by sample selection")
    console.print(f"  Output: {summary.output}")


@app.command("dictionary")
def dictionary_cmd(
    inputs: List[Path] = typer.Option(..., "--evidence-file", "-F", help="Input evidence file (repeatable)"),
    sequence_dictionary: Optional[Path] = typer.Option(None, "--sequence-dictionary", help=".dict file"),
    reference: Optional[Path] = typer.Option(None, "--reference", "-R", help="FASTA reference"),
) -> None:
    """Show the dictionary and samples the inputs reconcile to."""
    from svmerge.pipeline.walker import inspect_inputs

    try:
        dictionary, samples = inspect_inputs(
            inputs, dictionary_path=sequence_dictionary, reference_path=reference,
        )
    except SVMergeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Sequence dictionary ({len(dictionary)} contigs)")
    table.add_column("#", justify="right")
    table.add_column("Contig", style="cyan")
    table.add_column("Length", justify="right")
    for idx, rec in enumerate(dictionary):
        table.add_row(str(idx), rec.name, str(rec.length))
    console.print(table)
    console.print(f"Samples ({len(samples)}): {', '.join(samples) if samples else '-'}")


@app.command("kinds")
def kinds_cmd() -> None:
    """List the evidence kinds and their file suffixes."""
    from svmerge.registry import list_registered_kinds

    table = Table(title="Evidence kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Suffix")
    table.add_column("Same-locus rule")
    table.add_column("Description")
    for name, kind in sorted(list_registered_kinds().items()):
        table.add_row(name, kind.suffix, type(kind.resolution).__name__, kind.description)
    console.print(table)


if __name__ == "__main__":
    app()
