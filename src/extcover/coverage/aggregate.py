"""Reduce blocks and function decisions to the Coverage record.

Line coverage comes straight from the profile blocks and does not depend on
function matching, so files without any declared function still count.
Partial results from independent workers combine with ``merge``; addition
is the only operation, so merge order never changes the totals.
"""

from collections.abc import Iterable

from extcover.coverage.models import Coverage, FunctionInfo, Profile


def line_coverage(profiles: Iterable[Profile]) -> tuple[int, int]:
    """Return (covered, missed) statement counts across all profiles."""
    covered = 0
    missed = 0
    for profile in profiles:
        for block in profile.blocks:
            if block.count > 0:
                covered += block.num_stmt
            else:
                missed += block.num_stmt
    return covered, missed


def method_coverage(infos: Iterable[FunctionInfo]) -> tuple[int, int]:
    """Return (covered, missed) function counts."""
    covered = 0
    missed = 0
    for info in infos:
        if info.is_covered:
            covered += 1
        else:
            missed += 1
    return covered, missed


def aggregate(profiles: Iterable[Profile], infos: Iterable[FunctionInfo]) -> Coverage:
    """Build the Coverage record for a set of profiles and their functions."""
    line_covered, line_missed = line_coverage(profiles)
    method_covered, method_missed = method_coverage(infos)
    return Coverage(
        line_missed=line_missed,
        line_covered=line_covered,
        method_missed=method_missed,
        method_covered=method_covered,
    )


def merge_partials(partials: Iterable[Coverage]) -> Coverage:
    """Sum per-worker partial Coverage records."""
    total = Coverage()
    for partial in partials:
        total = total + partial
    return total


def merge(*partials: Coverage) -> Coverage:
    """Convenience function to merge partials as varargs."""
    return merge_partials(partials)
