"""Match function extents against coverage blocks.

A block belongs to a function when their spans overlap; a block that starts
exactly where the function ends, or ends exactly where it starts, does not.
Overlap rather than partition means a block straddling two declarations is
credited to both.
"""

from __future__ import annotations

from collections.abc import Sequence

from extcover.core.logging import get_logger
from extcover.coverage.models import Block, FunctionExtent, FunctionInfo, Profile

log = get_logger("coverage.matcher")


def function_coverage(extent: FunctionExtent, blocks: Sequence[Block]) -> int:
    """Return the number of executed statements inside extent.

    blocks must be sorted by start position: the scan stops at the first
    block past the function's end. Unsorted input silently undercounts.
    """
    covered = 0
    for block in blocks:
        if block.start >= extent.end:
            # Past the end of the function.
            break
        if block.end <= extent.start:
            # Before the beginning of the function.
            continue
        if block.count > 0:
            covered += block.num_stmt
    return covered


def sorted_blocks(profile: Profile) -> list[Block]:
    """Blocks of profile in start order, re-sorting only when needed."""
    if profile.is_sorted:
        return profile.blocks
    log.debug("blocks_resorted", file=profile.file_name, blocks=len(profile.blocks))
    return sorted(profile.blocks, key=lambda b: (b.start, b.end))


def match_profile(
    profile: Profile,
    extents: Sequence[FunctionExtent],
    file_name: str,
) -> list[FunctionInfo]:
    """Decide coverage for every extent of one file, in declaration order.

    Args:
        profile: Coverage blocks for the file the extents came from.
        extents: Function extents of that same file.
        file_name: Resolved path recorded on each FunctionInfo.
    """
    blocks = sorted_blocks(profile)
    infos = []
    for extent in extents:
        covered = function_coverage(extent, blocks)
        infos.append(
            FunctionInfo(
                file_name=file_name,
                function_name=extent.name,
                start_line=extent.start.line,
                end_line=extent.end.line,
                covered_statements=covered,
            )
        )
        log.debug(
            "function_matched",
            file=file_name,
            function=extent.name,
            covered_statements=covered,
        )
    return infos
