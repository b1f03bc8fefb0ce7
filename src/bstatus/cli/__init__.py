"""bstatus CLI -- ``git bstatus`` terminal interface.

This module is NEVER imported from bstatus/__init__.py.
It is only loaded via the ``git-bstatus`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

import click

from bstatus._version import __version__
from bstatus.cli.formatting import format_error, format_report, get_console

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from bstatus.report import BranchReport


@contextmanager
def _report_session(repo_path: str | None) -> Iterator[tuple[BranchReport, Console]]:
    """Open a BranchReport, yield (report, console), and handle cleanup.

    Any error raised inside the ``with`` block is printed once, on stderr,
    and turned into exit status 1.
    """
    from bstatus.report import BranchReport

    console = get_console()
    try:
        r = BranchReport.open(repo_path)
        try:
            yield r, console
        finally:
            r.close()
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), get_console(stderr=True))
        raise SystemExit(1) from None


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(levelname)s] %(name)s: %(message)s",
        )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("branches", metavar="[BRANCH]...", nargs=-1)
@click.option(
    "--repo",
    "repo_path",
    default=None,
    envvar="BSTATUS_REPO",
    help="Git repo to target.",
)
@click.option("-v", "--verbose", is_flag=True, help="List added commits.")
@click.option("-a", "--all", "all_branches", is_flag=True, help="List all branches.")
@click.option("-m", "--merged", is_flag=True, help="List only merged branches.")
@click.option("-u", "--unmerged", is_flag=True, help="List only unmerged branches.")
@click.option("-r", "--reverse", is_flag=True, help="Reverse listing order.")
@click.option("-n", "--name-only", is_flag=True, help="Print branch names only.")
@click.option("--debug", is_flag=True, envvar="BSTATUS_DEBUG", hidden=True, help="Log debug output to stderr.")
@click.version_option(__version__, prog_name="git-bstatus")
def cli(
    branches: tuple[str, ...],
    repo_path: str | None,
    verbose: bool,
    all_branches: bool,
    merged: bool,
    unmerged: bool,
    reverse: bool,
    name_only: bool,
    debug: bool,
) -> None:
    """Summarize local branches: age, merge status, and commits ahead.

    BRANCH arguments keep only branches whose names contain one of them.
    """
    from bstatus.models.config import ReportOptions

    _configure_logging(debug)
    options = ReportOptions.from_flags(
        repo_path=repo_path,
        patterns=branches,
        verbose=verbose,
        all_branches=all_branches,
        merged=merged,
        unmerged=unmerged,
        reverse=reverse,
        name_only=name_only,
    )

    with _report_session(options.repo_path) as (r, console):
        report = r.generate(options)
        format_report(report, console, window=r.config.recent_window)
