"""Tests for line/method coverage aggregation."""

from extcover.coverage.aggregate import (
    aggregate,
    line_coverage,
    merge,
    merge_partials,
    method_coverage,
)
from extcover.coverage.models import Block, Coverage, FunctionInfo, Profile, SourcePosition


def _block(line: int, num_stmt: int, count: int) -> Block:
    return Block(
        start=SourcePosition(line, 1),
        end=SourcePosition(line, 20),
        num_stmt=num_stmt,
        count=count,
    )


def _info(name: str, covered: int) -> FunctionInfo:
    return FunctionInfo(
        file_name="main.go",
        function_name=name,
        start_line=1,
        end_line=2,
        covered_statements=covered,
    )


class TestLineCoverage:
    """Tests for line_coverage."""

    def test_split_by_execution_count(self) -> None:
        """Two blocks of 3 and 2 statements, only the first executed."""
        profile = Profile(file_name="a.go", blocks=[_block(1, 3, 1), _block(2, 2, 0)])

        assert line_coverage([profile]) == (3, 2)

    def test_sums_across_profiles(self) -> None:
        profiles = [
            Profile(file_name="a.go", blocks=[_block(1, 3, 5)]),
            Profile(file_name="b.go", blocks=[_block(1, 4, 0), _block(2, 1, 1)]),
        ]

        covered, missed = line_coverage(profiles)

        assert (covered, missed) == (4, 4)
        assert covered + missed == sum(p.num_stmt for p in profiles)

    def test_no_profiles(self) -> None:
        assert line_coverage([]) == (0, 0)

    def test_zero_statement_block_counts_nothing(self) -> None:
        profile = Profile(file_name="a.go", blocks=[_block(1, 0, 1)])

        assert line_coverage([profile]) == (0, 0)


class TestMethodCoverage:
    """Tests for method_coverage."""

    def test_counts_by_decision(self) -> None:
        infos = [_info("a", 2), _info("b", 0), _info("c", 1), _info("d", 0)]

        assert method_coverage(infos) == (2, 2)

    def test_empty(self) -> None:
        assert method_coverage([]) == (0, 0)


class TestAggregate:
    """Tests for aggregate."""

    def test_builds_coverage_record(self) -> None:
        profile = Profile(file_name="a.go", blocks=[_block(1, 3, 1), _block(2, 2, 0)])
        infos = [_info("a", 3), _info("b", 0), _info("c", 0)]

        result = aggregate([profile], infos)

        assert result == Coverage(line_missed=2, line_covered=3, method_missed=2, method_covered=1)

    def test_file_without_functions_still_has_line_coverage(self) -> None:
        profile = Profile(file_name="vars.go", blocks=[_block(1, 4, 1)])

        result = aggregate([profile], [])

        assert result.line_covered == 4
        assert result.methods_total == 0


class TestMerge:
    """Tests for merging partial aggregates."""

    def test_merge_sums_fields(self) -> None:
        a = Coverage(line_missed=1, line_covered=2, method_missed=3, method_covered=4)
        b = Coverage(line_missed=10, line_covered=20, method_missed=30, method_covered=40)

        assert merge(a, b) == Coverage(
            line_missed=11, line_covered=22, method_missed=33, method_covered=44
        )

    def test_merge_is_order_independent(self) -> None:
        parts = [
            Coverage(line_missed=1, line_covered=0, method_missed=0, method_covered=2),
            Coverage(line_missed=0, line_covered=5, method_missed=1, method_covered=0),
            Coverage(line_missed=2, line_covered=2, method_missed=2, method_covered=2),
        ]

        assert merge_partials(parts) == merge_partials(reversed(parts))

    def test_merge_nothing(self) -> None:
        assert merge() == Coverage()

    def test_per_file_partials_equal_whole(self) -> None:
        a = Profile(file_name="a.go", blocks=[_block(1, 3, 1)])
        b = Profile(file_name="b.go", blocks=[_block(1, 2, 0)])
        a_infos = [_info("x", 3)]
        b_infos = [_info("y", 0), _info("z", 0)]

        whole = aggregate([a, b], a_infos + b_infos)
        parts = merge(aggregate([a], a_infos), aggregate([b], b_infos))

        assert parts == whole
