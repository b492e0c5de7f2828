"""Command-line interface for zox."""

import time

import structlog
import typer

from zox.app import bootstrap
from zox.config import HomeDirectoryError
from zox.container import Container
from zox.models import SortMode
from zox.search.ranking import sort_key
from zox.storage.history import format_record

log = structlog.get_logger()

# Width of the score column in list mode
SCORE_WIDTH = 11

_cli = typer.Typer(
    name="zox",
    help="Jump to frecently visited directories.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _sort_mode(by_rank: bool, by_time: bool) -> SortMode:
    if by_time:
        return SortMode.TIME
    if by_rank:
        return SortMode.RANK
    return SortMode.FRECENT


def format_score(score: float) -> str:
    """Render a score as a left-aligned column, integral values without ``.0``.

    At least one space always separates the score from what follows.
    """
    text = str(int(score)) if score.is_integer() else repr(score)
    return f"{text:<{SCORE_WIDTH - 1}} "


def _record_visits(container: Container, paths: list[str], now: int) -> None:
    service = container.create_visit_service()
    try:
        service.record(paths, now)
    except OSError as e:
        log.error("history_write_failed", path=str(container.data_file), error=str(e))
        raise typer.Exit(1) from e


def _lookup(
    container: Container,
    patterns: list[str],
    sort_mode: SortMode,
    want_list: bool,
    now: int,
) -> None:
    service = container.create_query_service()

    if not patterns:
        for record in service.list_all():
            typer.echo(format_record(record))
        return

    if want_list:
        for record in service.search(patterns, now, sort_mode):
            score = sort_key(record, sort_mode, now)
            typer.echo(f"{format_score(score)}{record.path}")
        return

    best = service.best(patterns, now, sort_mode)
    if best is None:
        # Non-zero so a shell wrapper does not cd anywhere
        raise typer.Exit(1)
    typer.echo(best.path)


@_cli.command()
def run(
    args: list[str] | None = typer.Argument(
        None, help="Query fragments, or paths to record with --add", show_default=False
    ),
    add: bool = typer.Option(False, "--add", help="Record ARGS as visited directories"),
    list_matches: bool = typer.Option(False, "-l", help="List all matches with their scores"),
    by_rank: bool = typer.Option(False, "-r", help="Sort by rank"),
    by_time: bool = typer.Option(False, "-t", help="Sort by last visit time"),
) -> None:
    """Print the most frecent directory matching ARGS.

    Without ARGS the whole history is printed as path|rank|time, highest
    rank first. Exits 1 when nothing matches.
    """
    container = bootstrap()
    now = int(time.time())
    args = args or []

    try:
        if add:
            _record_visits(container, args, now)
        else:
            _lookup(container, args, _sort_mode(by_rank, by_time), list_matches, now)
    except HomeDirectoryError as e:
        log.error("home_directory_unknown", error=str(e))
        raise typer.Exit(1) from e


def main() -> None:
    """Entry point for the zox command."""
    _cli()
