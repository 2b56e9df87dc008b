"""Function-level coverage for Go coverage profiles.

This package provides:
- Go coverage profile parsing
- Function extent extraction from Go source (Tree-sitter)
- Block/function interval matching
- Line and method coverage aggregation
- JSON report output

Usage:
    from extcover.coverage import parse_profiles, SourceLocator, build_coverage

    profiles = parse_profiles(Path("coverage.out"))
    locator = SourceLocator.from_config(config.source)
    result = build_coverage(profiles, locator)
    write_report(result.coverage, "build")
"""

from extcover.coverage.aggregate import (
    aggregate,
    line_coverage,
    merge,
    merge_partials,
    method_coverage,
)
from extcover.coverage.extractor import FuncVisitor, GoFuncParser, find_funcs
from extcover.coverage.locator import SourceLocator, find_module_root, read_module_path
from extcover.coverage.matcher import function_coverage, match_profile, sorted_blocks
from extcover.coverage.models import (
    Block,
    Coverage,
    FunctionExtent,
    FunctionInfo,
    Profile,
    SourcePosition,
)
from extcover.coverage.pipeline import (
    FileResult,
    RunResult,
    build_coverage,
    collect_file_results,
    collect_function_infos,
    match_file,
    run,
)
from extcover.coverage.profile import GoProfileParser, parse_profile_lines, parse_profiles
from extcover.coverage.report import (
    build_text_summary,
    render_report,
    report_path,
    write_report,
)

__all__ = [
    # Models
    "Block",
    "Coverage",
    "FunctionExtent",
    "FunctionInfo",
    "Profile",
    "SourcePosition",
    # Profile loading
    "GoProfileParser",
    "parse_profile_lines",
    "parse_profiles",
    # Source
    "SourceLocator",
    "find_module_root",
    "read_module_path",
    "FuncVisitor",
    "GoFuncParser",
    "find_funcs",
    # Matching / aggregation
    "function_coverage",
    "match_profile",
    "sorted_blocks",
    "aggregate",
    "line_coverage",
    "method_coverage",
    "merge",
    "merge_partials",
    # Pipeline
    "FileResult",
    "RunResult",
    "build_coverage",
    "collect_file_results",
    "collect_function_infos",
    "match_file",
    "run",
    # Report
    "build_text_summary",
    "render_report",
    "report_path",
    "write_report",
]
