"""go-ext-cover CLI - function-level coverage for Go coverage profiles."""

from pathlib import Path
from typing import Any, NoReturn

import click

from extcover import __version__
from extcover.config.loader import load_config
from extcover.core.errors import ExtCoverError, InternalError
from extcover.core.logging import (
    clear_run_id,
    configure_logging,
    get_log_file_path,
    get_logger,
    set_run_id,
)
from extcover.core.progress import pluralize, spinner, status, suppress_console_logs
from extcover.coverage.pipeline import run
from extcover.coverage.report import build_text_summary

log = get_logger("cli")


def _overrides(
    profile: str | None,
    output_file: str | None,
    output_dir: str | None,
    workers: int | None,
    module_root: Path | None,
    search_paths: tuple[str, ...],
) -> dict[str, Any]:
    """Config kwargs for the options actually given on the command line."""
    report: dict[str, Any] = {}
    source: dict[str, Any] = {}
    if profile is not None:
        report["profile_path"] = profile
    if output_file is not None:
        report["output_file"] = output_file
    if output_dir is not None:
        report["output_dir"] = output_dir
    if workers is not None:
        report["workers"] = workers
    if module_root is not None:
        source["module_root"] = str(module_root)
    if search_paths:
        source["search_paths"] = list(search_paths)

    overrides: dict[str, Any] = {}
    if report:
        overrides["report"] = report
    if source:
        overrides["source"] = source
    return overrides


def _fail(error: ExtCoverError) -> NoReturn:
    """Log the failure to configured files and exit through click.

    The terminal gets a single ``Error:`` line from click; structlog console
    output is muted so the failure is not echoed twice.
    """
    with suppress_console_logs():
        log.error("run_failed", **error.to_dict())
    if log_path := get_log_file_path():
        status(f"Details in {log_path}", style="info")
    raise click.ClickException(error.message)


@click.command()
@click.version_option(version=__version__, prog_name="go-ext-cover")
@click.option(
    "-f", "--file", "profile", default=None, help="Coverage profile  [default: coverage.out]"
)
@click.option(
    "-o",
    "--outputFile",
    "output_file",
    default=None,
    help="Output file name  [default: coverage.json]",
)
@click.option(
    "-d",
    "--outputDir",
    "output_dir",
    default=None,
    help="Output directory, created if absent  [default: working directory]",
)
@click.option(
    "-m",
    "--module-root",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory containing go.mod  [default: nearest above working directory]",
)
@click.option(
    "-s",
    "--search-path",
    "search_paths",
    multiple=True,
    help="Extra root searched for profiled files (repeatable)",
)
@click.option(
    "-j", "--workers", type=click.IntRange(min=1), default=None, help="Parallel matching workers"
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    profile: str | None,
    output_file: str | None,
    output_dir: str | None,
    module_root: Path | None,
    search_paths: tuple[str, ...],
    workers: int | None,
    verbose: bool,
) -> None:
    """Go extension coverage tool.

    Reads a Go coverage profile, finds every function declared in the
    profiled source files, and writes line and method coverage counts as
    JSON.
    """
    configure_logging(level="DEBUG" if verbose else "WARNING")
    run_id = set_run_id()

    try:
        config = load_config(
            **_overrides(profile, output_file, output_dir, workers, module_root, search_paths)
        )
        if verbose:
            config.logging.level = "DEBUG"
        configure_logging(config=config.logging)

        log.info("run_started", run_id=run_id, profile=config.report.profile_path)
        with spinner(f"Matching functions in {config.report.profile_path}"):
            result = run(config)
    except ExtCoverError as e:
        _fail(e)
    except Exception as e:
        _fail(InternalError.unexpected(str(e), type=type(e).__name__))
    finally:
        clear_run_id()

    status(build_text_summary(result.coverage), style="success")
    status(
        f"Wrote {result.report_path} ({pluralize(len(result.files), 'file')}, "
        f"{pluralize(len(result.functions), 'function')})",
        style="info",
    )


if __name__ == "__main__":
    cli()
