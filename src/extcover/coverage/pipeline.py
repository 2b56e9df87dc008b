"""Report pipeline: profile -> locate -> extract -> match -> aggregate -> write.

Every stage failure is fatal and propagates unchanged; the report file is
written only after all profiles were matched, so a failed run leaves no
output behind.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from extcover.config.models import ExtCoverConfig
from extcover.core.logging import get_logger
from extcover.coverage.aggregate import aggregate, merge_partials
from extcover.coverage.extractor import GoFuncParser
from extcover.coverage.locator import SourceLocator
from extcover.coverage.matcher import match_profile
from extcover.coverage.models import Coverage, FunctionInfo, Profile
from extcover.coverage.profile import parse_profiles
from extcover.coverage.report import write_report

log = get_logger("coverage.pipeline")


@dataclass(frozen=True, slots=True)
class FileResult:
    """Matching output for one profile."""

    profile: Profile
    path: Path
    functions: list[FunctionInfo]

    @property
    def coverage(self) -> Coverage:
        """Partial Coverage contributed by this file alone."""
        return aggregate([self.profile], self.functions)


@dataclass(slots=True)
class RunResult:
    """Outcome of a complete pipeline run."""

    coverage: Coverage
    files: list[FileResult] = field(default_factory=list)
    report_path: Path | None = None

    @property
    def functions(self) -> list[FunctionInfo]:
        return [info for result in self.files for info in result.functions]


def match_file(profile: Profile, locator: SourceLocator, parser: GoFuncParser) -> FileResult:
    """Locate, parse and match one profile's source file."""
    path = locator.find_file(profile.file_name)
    extents = parser.find_funcs(path)
    functions = match_profile(profile, extents, str(path))
    log.debug(
        "file_matched",
        file=profile.file_name,
        functions=len(functions),
        covered=sum(1 for f in functions if f.is_covered),
    )
    return FileResult(profile=profile, path=path, functions=functions)


def collect_file_results(
    profiles: Sequence[Profile],
    locator: SourceLocator,
    *,
    workers: int = 1,
) -> list[FileResult]:
    """Match every profile, keeping profile order regardless of workers."""
    if workers <= 1 or len(profiles) <= 1:
        parser = GoFuncParser()
        return [match_file(profile, locator, parser) for profile in profiles]

    # Tree-sitter parsers are not shareable across threads: one per task.
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(match_file, profile, locator, GoFuncParser()) for profile in profiles
        ]
        try:
            return [future.result() for future in futures]
        except BaseException:
            for future in futures:
                future.cancel()
            raise


def collect_function_infos(
    profiles: Sequence[Profile],
    locator: SourceLocator,
    parser: GoFuncParser | None = None,
) -> list[FunctionInfo]:
    """FunctionInfo for every function of every profile, in profile then declaration order."""
    parser = parser or GoFuncParser()
    return [
        info for profile in profiles for info in match_file(profile, locator, parser).functions
    ]


def build_coverage(
    profiles: Sequence[Profile],
    locator: SourceLocator,
    *,
    workers: int = 1,
) -> RunResult:
    """Compute the Coverage record without writing anything."""
    files = collect_file_results(profiles, locator, workers=workers)
    coverage = merge_partials(result.coverage for result in files)
    return RunResult(coverage=coverage, files=files)


def run(config: ExtCoverConfig, *, cwd: Path | None = None) -> RunResult:
    """Run the whole pipeline and write the report.

    Raises:
        ProfileParseError: Malformed or missing profile.
        SourceResolutionError: A profiled file cannot be located.
        SourceParseError: A located file is not valid Go.
        OutputWriteError: The report cannot be written.
    """
    cwd = cwd or Path.cwd()
    profile_path = Path(config.report.profile_path)
    if not profile_path.is_absolute():
        profile_path = cwd / profile_path

    profiles = parse_profiles(profile_path)
    locator = SourceLocator.from_config(config.source, cwd=cwd)

    result = build_coverage(profiles, locator, workers=config.report.workers)

    output_dir = config.report.output_dir
    if output_dir is None:
        output_dir = str(cwd)
    elif not Path(output_dir).is_absolute():
        output_dir = str(cwd / output_dir)

    result.report_path = write_report(result.coverage, output_dir, config.report.output_file)
    log.info("run_complete", files=len(result.files), **result.coverage.to_dict())
    return result
