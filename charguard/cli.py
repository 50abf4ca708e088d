"""CLI entry point: charguard.

Subcommands:
    charguard scan [ROOT]          # Text profile, report only (exit 1 on findings)
    charguard binary-scan [ROOT]   # Byte-level scan of every file under the size ceiling
    charguard repair [ROOT]        # Strip invisible/control characters in place
"""

from __future__ import annotations

import json
import sys

import click

from charguard.config import load_config
from charguard.core.logging import setup_logging
from charguard.exceptions import ConfigError
from charguard.models import ScanRun
from charguard.report import render_json, render_text
from charguard.scanner import exit_code, run_scan

_root_argument = click.argument(
    "root",
    default=".",
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
)
_exclude_option = click.option(
    "--exclude",
    multiple=True,
    help="Directory name to skip, in addition to the defaults (repeatable)",
)
_max_findings_option = click.option(
    "--max-findings",
    type=click.IntRange(min=1),
    default=None,
    help="Per-file finding cap (default: 40)",
)
_json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """charguard: find and strip invisible/control characters in a source tree."""
    setup_logging("DEBUG" if verbose else None)


def _execute(profile: str, mode: str, root: str, as_json: bool, **overrides) -> ScanRun:
    try:
        config = load_config(root, profile=profile, mode=mode, **overrides)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    run = run_scan(config)
    if as_json:
        click.echo(json.dumps(render_json(run), indent=2))
    else:
        click.echo(render_text(run))
    return run


@main.command("scan")
@_root_argument
@_exclude_option
@click.option("--ext", multiple=True, help="Extension to scan, replacing the defaults (repeatable)")
@_max_findings_option
@_json_option
def scan(
    root: str,
    exclude: tuple[str, ...],
    ext: tuple[str, ...],
    max_findings: int | None,
    as_json: bool,
) -> None:
    """Report control and invisible characters in text files. Exits 1 if any are found."""
    run = _execute(
        "text",
        "report",
        root,
        as_json,
        extra_excluded_dirs=exclude,
        extensions=frozenset(ext) if ext else None,
        max_findings=max_findings,
    )
    sys.exit(exit_code(run))


@main.command("binary-scan")
@_root_argument
@_exclude_option
@click.option(
    "--max-file-size",
    type=click.IntRange(min=0),
    default=None,
    help="Skip files larger than this many bytes (default: 5 MiB)",
)
@_max_findings_option
@_json_option
def binary_scan(
    root: str,
    exclude: tuple[str, ...],
    max_file_size: int | None,
    max_findings: int | None,
    as_json: bool,
) -> None:
    """Report control bytes in every file below the size ceiling. Exits 1 if any are found."""
    run = _execute(
        "binary",
        "report",
        root,
        as_json,
        extra_excluded_dirs=exclude,
        max_file_size=max_file_size,
        max_findings=max_findings,
    )
    sys.exit(exit_code(run))


@main.command("repair")
@_root_argument
@_exclude_option
@click.option("--ext", multiple=True, help="Extension to repair, replacing the defaults (repeatable)")
@_max_findings_option
@_json_option
@click.option("--strict", is_flag=True, help="Exit 2 if any file could not be processed")
def repair(
    root: str,
    exclude: tuple[str, ...],
    ext: tuple[str, ...],
    max_findings: int | None,
    as_json: bool,
    strict: bool,
) -> None:
    """Remove invisible/control characters in place. Best-effort: exits 0 unless --strict."""
    run = _execute(
        "text",
        "repair",
        root,
        as_json,
        extra_excluded_dirs=exclude,
        extensions=frozenset(ext) if ext else None,
        max_findings=max_findings,
    )
    if strict and run.failures:
        sys.exit(2)
    sys.exit(exit_code(run))


if __name__ == "__main__":
    main()
