"""Go coverage profile parser.

Go test produces coverage profiles with format:
mode: set|count|atomic
<package>/<file>:<startline>.<startcol>,<endline>.<endcol> <numstmt> <count>

Example:
mode: set
github.com/user/pkg/main.go:10.2,12.16 3 1
github.com/user/pkg/main.go:15.2,20.16 5 0

- mode: set (0/1), count (hit count), atomic (thread-safe count)
- numstmt: number of statements in block
- count: execution count (0 = not covered)

Profiles come back sorted by file name, each with its blocks sorted by
start position and duplicate blocks folded together.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from extcover.core.errors import ProfileParseError
from extcover.core.logging import get_logger
from extcover.coverage.models import Block, Profile, SourcePosition

log = get_logger("coverage.profile")

MODES = frozenset({"set", "count", "atomic"})

_MODE_PREFIX = "mode: "
_LINE_PATTERN = re.compile(
    r"^(?P<file>.+):(?P<sl>\d+)\.(?P<sc>\d+),(?P<el>\d+)\.(?P<ec>\d+) (?P<stmt>\d+) (?P<count>\d+)$"
)


class GoProfileParser:
    """Parser for Go coverage profiles."""

    def parse(self, path: Path) -> list[Profile]:
        """Parse a Go coverage profile file.

        Raises:
            ProfileParseError: If the file is missing, unreadable or malformed.
        """
        try:
            content = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileParseError.not_found(str(path), str(e)) from e

        profiles = self.parse_lines(content.splitlines(), source=str(path))
        log.info(
            "profile_loaded",
            path=str(path),
            files=len(profiles),
            blocks=sum(len(p.blocks) for p in profiles),
        )
        return profiles

    def parse_lines(self, lines: Iterable[str], *, source: str = "<profile>") -> list[Profile]:
        """Parse profile text already split into lines."""
        mode: str | None = None
        # file name -> [(line number, block)] in input order
        raw: dict[str, list[tuple[int, Block]]] = {}

        for line_no, line in enumerate(lines, 1):
            line = line.strip()
            if not line:
                continue

            if line.startswith("mode:"):
                line_mode = self._parse_mode(line, source, line_no)
                if mode is not None and line_mode != mode:
                    raise ProfileParseError.bad_line(
                        source, line_no, f"mode {line_mode!r} conflicts with {mode!r}"
                    )
                mode = line_mode
                continue

            if mode is None:
                raise ProfileParseError.bad_line(source, line_no, "missing mode line")

            file_name, block = self._parse_block(line, source, line_no)
            raw.setdefault(file_name, []).append((line_no, block))

        if mode is None:
            raise ProfileParseError.bad_line(source, 1, "missing mode line")

        return [
            Profile(file_name=name, mode=mode, blocks=self._fold(name, entries, mode, source))
            for name, entries in sorted(raw.items())
        ]

    @staticmethod
    def _parse_mode(line: str, source: str, line_no: int) -> str:
        if not line.startswith(_MODE_PREFIX):
            raise ProfileParseError.bad_line(source, line_no, f"bad mode line: {line!r}")
        mode = line[len(_MODE_PREFIX) :].strip()
        if mode not in MODES:
            raise ProfileParseError.bad_line(source, line_no, f"unknown mode {mode!r}")
        return mode

    @staticmethod
    def _parse_block(line: str, source: str, line_no: int) -> tuple[str, Block]:
        match = _LINE_PATTERN.match(line)
        if not match:
            raise ProfileParseError.bad_line(
                source, line_no, f"line {line!r} doesn't match expected format"
            )
        block = Block(
            start=SourcePosition(int(match["sl"]), int(match["sc"])),
            end=SourcePosition(int(match["el"]), int(match["ec"])),
            num_stmt=int(match["stmt"]),
            count=int(match["count"]),
        )
        return match["file"], block

    @staticmethod
    def _fold(
        file_name: str,
        entries: list[tuple[int, Block]],
        mode: str,
        source: str,
    ) -> list[Block]:
        """Sort blocks by start position and merge exact duplicates.

        Duplicates show up when several test binaries append to one profile.
        In set mode counts are OR-ed, otherwise summed.
        """
        entries = sorted(entries, key=lambda e: (e[1].start, e[1].end))
        blocks: list[Block] = []
        for line_no, block in entries:
            if blocks and blocks[-1].start == block.start and blocks[-1].end == block.end:
                last = blocks[-1]
                if last.num_stmt != block.num_stmt:
                    raise ProfileParseError.inconsistent_block(source, line_no, file_name)
                count = last.count | block.count if mode == "set" else last.count + block.count
                blocks[-1] = Block(last.start, last.end, last.num_stmt, count)
                continue
            blocks.append(block)
        return blocks


def parse_profiles(path: Path) -> list[Profile]:
    """Parse a Go coverage profile into per-file Profiles.

    Raises:
        ProfileParseError: If the file is missing, unreadable or malformed.
    """
    return GoProfileParser().parse(path)


def parse_profile_lines(lines: Iterable[str], *, source: str = "<profile>") -> list[Profile]:
    """Parse profile text already split into lines."""
    return GoProfileParser().parse_lines(lines, source=source)
