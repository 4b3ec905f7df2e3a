"""CLI entry point for spell-notes."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table as RichTable

from spell_notes import DEFAULT_OUT_DIR, DEFAULT_SPELLS_DIR, __version__
from spell_notes.io import LoadError, WriteError, load_spell_records, write_json
from spell_notes.models import RunManifest, SpellRecord
from spell_notes.pipeline import group_counts
from spell_notes.report import ALL_AXES, group_for_axis, write_reports
from spell_notes.utils import utcnow_iso

app = typer.Typer(
    name="spellnotes",
    help="spell-notes — Render spell data files into Markdown design notes.",
    add_completion=False,
)
console = Console()


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def _printer(quiet: bool) -> Callable[..., None]:
    return _noop if quiet else console.print


def _err(msg: str) -> None:
    console.print(f"[red]x[/red] {msg}")


# ── Helpers ──────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"spell-notes v{__version__}")
        raise typer.Exit()


def _load_or_exit(spells_dir: Path) -> list[SpellRecord]:
    try:
        return load_spell_records(spells_dir)
    except LoadError as exc:
        _err(str(exc))
        raise typer.Exit(code=2) from exc


def _write_manifest(
    out_dir: Path,
    spells_dir: Path,
    records: list[SpellRecord],
    reports: dict[str, Path],
    created_at: str,
) -> Path:
    manifest = RunManifest(
        version=__version__,
        spells_dir=str(spells_dir.resolve()),
        output_dir=str(out_dir.resolve()),
        created_at_utc=created_at,
        spell_count=len(records),
        reports={slug: str(path) for slug, path in reports.items()},
        group_counts={
            axis.slug: group_counts(group_for_axis(records, axis)) for axis in ALL_AXES
        },
    )
    return write_json(out_dir / "run_manifest.json", manifest.to_dict())


def _generate(spells_dir: Path, out_dir: Path, *, manifest: bool, quiet: bool) -> None:
    echo = _printer(quiet)
    created_at = utcnow_iso()

    if not quiet:
        console.print(Panel(
            f"[bold]spell-notes[/bold] v{__version__}\n"
            f"Spells: {spells_dir}\nOutput: {out_dir}",
            title="Generate", border_style="blue",
        ))

    # ── Load ─────────────────────────────────────────────────────
    echo("[blue]>[/blue] Loading spell files …")
    records = _load_or_exit(spells_dir)
    echo(f"  {len(records)} spells loaded")

    # ── Render + write ───────────────────────────────────────────
    echo("[blue]>[/blue] Writing design notes …")
    try:
        reports = write_reports(out_dir, records)
        for path in reports.values():
            echo(f"  Notes    -> {path}")
        if manifest:
            manifest_path = _write_manifest(out_dir, spells_dir, records, reports, created_at)
            echo(f"  Manifest -> {manifest_path}")
    except WriteError as exc:
        _err(str(exc))
        raise typer.Exit(code=1) from exc

    if not quiet:
        console.print(Panel(
            f"[green]Done[/green] — {len(records)} spells -> {out_dir}",
            title="Generate Complete", border_style="green",
        ))


# ── Callbacks ────────────────────────────────────────────────────


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """spell-notes CLI. With no command, generates notes from the default paths."""
    if ctx.invoked_subcommand is None:
        _generate(DEFAULT_SPELLS_DIR, DEFAULT_OUT_DIR, manifest=False, quiet=False)


# ── generate command ─────────────────────────────────────────────


@app.command()
def generate(
    spells_dir: Path = typer.Option(
        DEFAULT_SPELLS_DIR, "--spells-dir", "-s",
        help="Directory of spell data files (one YAML spell per file).",
    ),
    out_dir: Path = typer.Option(
        DEFAULT_OUT_DIR, "--out-dir", "-o",
        help="Output directory for the Markdown notes.",
    ),
    manifest: bool = typer.Option(
        False, "--manifest/--no-manifest",
        help="Also write run_manifest.json into the output directory.",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Suppress informational output; still writes all notes.",
    ),
) -> None:
    """Write spells.md, spells_by_tier.md and spells_by_mana_cost.md."""
    _generate(spells_dir, out_dir, manifest=manifest, quiet=quiet)


# ── check command ────────────────────────────────────────────────


@app.command()
def check(
    spells_dir: Path = typer.Option(
        DEFAULT_SPELLS_DIR, "--spells-dir", "-s",
        help="Directory of spell data files (one YAML spell per file).",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Suppress the summary table.",
    ),
) -> None:
    """Load and group spells without writing anything.

    Exit 0 = all files loaded, exit 2 = a file failed to load.
    """
    records = _load_or_exit(spells_dir)
    if quiet:
        return

    tbl = RichTable(title="Spell Groups", show_lines=True)
    tbl.add_column("Axis", style="bold")
    tbl.add_column("Group")
    tbl.add_column("Spells", justify="right")

    for axis in ALL_AXES:
        for group in group_for_axis(records, axis):
            tbl.add_row(axis.slug, group.label or "[dim](none)[/dim]", str(group.count))

    tbl.add_row("Total", "", str(len(records)))
    console.print(tbl)
