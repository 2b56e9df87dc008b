"""Coverage report output.

Output schema (write_report):
{
  "lineMissed": int,
  "lineCovered": int,
  "methodMissed": int,
  "methodCovered": int
}

Rendering is deterministic: the same Coverage always produces the same bytes.
"""

import json
from pathlib import Path

from extcover.config.models import DEFAULT_OUTPUT_FILE
from extcover.core.errors import OutputWriteError
from extcover.core.logging import get_logger
from extcover.coverage.models import Coverage

log = get_logger("coverage.report")


def render_report(coverage: Coverage) -> str:
    """Serialize coverage as two-space indented JSON without a trailing newline."""
    return json.dumps(coverage.to_dict(), indent=2)


def report_path(output_dir: str | Path | None, output_file: str | None = None) -> Path:
    """Destination path; the directory defaults to the working directory."""
    directory = Path(output_dir) if output_dir else Path.cwd()
    return directory / (output_file or DEFAULT_OUTPUT_FILE)


def write_report(
    coverage: Coverage,
    output_dir: str | Path | None = None,
    output_file: str | None = None,
) -> Path:
    """Write the JSON report, creating the output directory if absent.

    Returns:
        Path of the written report.

    Raises:
        OutputWriteError: If the directory or file cannot be written.
    """
    path = report_path(output_dir, output_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_report(coverage))
    except OSError as e:
        raise OutputWriteError.write_failed(str(path), str(e)) from e

    log.info("report_written", path=str(path), **coverage.to_dict())
    return path


def build_text_summary(coverage: Coverage) -> str:
    """Build a concise text summary for console output."""
    if coverage.lines_total == 0 and coverage.methods_total == 0:
        return "No coverage data"

    return (
        f"Coverage: {coverage.line_rate * 100.0:.1f}% of statements "
        f"({coverage.line_covered}/{coverage.lines_total}), "
        f"{coverage.method_rate * 100.0:.1f}% of functions "
        f"({coverage.method_covered}/{coverage.methods_total})"
    )
