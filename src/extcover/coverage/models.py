"""Coverage data model.

Two positional data sets meet here: statement blocks read from a Go coverage
profile, and function extents read from the Go source. Both use the same
position convention (1-based line, 1-based byte column) so they compare
directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple


class SourcePosition(NamedTuple):
    """A (line, column) location in one source file.

    Tuple ordering gives the lexicographic (line, then column) comparison
    used throughout matching.
    """

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}.{self.column}"


@dataclass(frozen=True, slots=True)
class Block:
    """A statement region of one file with its execution count."""

    start: SourcePosition
    end: SourcePosition
    num_stmt: int
    count: int

    @property
    def covered(self) -> bool:
        return self.count > 0


@dataclass(slots=True)
class Profile:
    """Coverage blocks of one source file, ordered by start position."""

    file_name: str  # import-path style identifier, e.g. example.com/pkg/main.go
    mode: str = "set"
    blocks: list[Block] = field(default_factory=list)

    @property
    def is_sorted(self) -> bool:
        return all(a.start <= b.start for a, b in zip(self.blocks, self.blocks[1:]))

    @property
    def num_stmt(self) -> int:
        """Total statements across all blocks."""
        return sum(b.num_stmt for b in self.blocks)


@dataclass(frozen=True, slots=True)
class FunctionExtent:
    """Lexical span of one function declaration."""

    name: str
    start: SourcePosition
    end: SourcePosition  # just past the closing brace


@dataclass(frozen=True, slots=True)
class FunctionInfo:
    """Per-function coverage decision."""

    file_name: str
    function_name: str
    start_line: int
    end_line: int
    covered_statements: int

    @property
    def is_covered(self) -> bool:
        return self.covered_statements > 0


@dataclass(frozen=True, slots=True)
class Coverage:
    """Aggregate report record. The only persisted artifact."""

    line_missed: int = 0
    line_covered: int = 0
    method_missed: int = 0
    method_covered: int = 0

    @property
    def lines_total(self) -> int:
        return self.line_missed + self.line_covered

    @property
    def methods_total(self) -> int:
        return self.method_missed + self.method_covered

    @property
    def line_rate(self) -> float:
        """Fraction of statements covered (0.0 to 1.0)."""
        if self.lines_total == 0:
            return 0.0
        return self.line_covered / self.lines_total

    @property
    def method_rate(self) -> float:
        """Fraction of functions covered (0.0 to 1.0)."""
        if self.methods_total == 0:
            return 0.0
        return self.method_covered / self.methods_total

    def __add__(self, other: object) -> Coverage:
        if not isinstance(other, Coverage):
            return NotImplemented
        return Coverage(
            line_missed=self.line_missed + other.line_missed,
            line_covered=self.line_covered + other.line_covered,
            method_missed=self.method_missed + other.method_missed,
            method_covered=self.method_covered + other.method_covered,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire shape of the JSON report. Key order is part of the format."""
        return {
            "lineMissed": self.line_missed,
            "lineCovered": self.line_covered,
            "methodMissed": self.method_missed,
            "methodCovered": self.method_covered,
        }
