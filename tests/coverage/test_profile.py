"""Tests for Go coverage profile parsing."""

from pathlib import Path

import pytest

from extcover.core.errors import ErrorCode, ProfileParseError
from extcover.coverage.models import Block, SourcePosition
from extcover.coverage.profile import GoProfileParser, parse_profile_lines, parse_profiles


@pytest.fixture
def parser() -> GoProfileParser:
    return GoProfileParser()


class TestParseLines:
    """Tests for GoProfileParser.parse_lines."""

    def test_parses_blocks_per_file(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(
            [
                "mode: set",
                "github.com/user/pkg/main.go:10.2,12.16 3 1",
                "github.com/user/pkg/main.go:15.2,20.16 5 0",
                "github.com/user/pkg/utils.go:5.2,8.16 4 1",
            ]
        )

        assert [p.file_name for p in profiles] == [
            "github.com/user/pkg/main.go",
            "github.com/user/pkg/utils.go",
        ]
        assert profiles[0].mode == "set"
        assert profiles[0].blocks[0] == Block(
            start=SourcePosition(10, 2),
            end=SourcePosition(12, 16),
            num_stmt=3,
            count=1,
        )
        assert len(profiles[0].blocks) == 2

    def test_profiles_sorted_by_file_name(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(["mode: count", "z/b.go:1.1,2.2 1 1", "a/a.go:1.1,2.2 1 1"])

        assert [p.file_name for p in profiles] == ["a/a.go", "z/b.go"]

    def test_blocks_sorted_by_start(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(
            ["mode: set", "a.go:20.1,21.2 1 0", "a.go:3.5,4.2 1 1", "a.go:3.1,3.5 1 1"]
        )

        starts = [b.start for b in profiles[0].blocks]
        assert starts == [SourcePosition(3, 1), SourcePosition(3, 5), SourcePosition(20, 1)]
        assert profiles[0].is_sorted

    def test_duplicate_blocks_or_in_set_mode(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(["mode: set", "a.go:1.1,2.2 3 0", "a.go:1.1,2.2 3 1"])

        assert len(profiles[0].blocks) == 1
        assert profiles[0].blocks[0].count == 1

    def test_duplicate_blocks_summed_in_count_mode(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(["mode: count", "a.go:1.1,2.2 3 4", "a.go:1.1,2.2 3 5"])

        assert profiles[0].blocks[0].count == 9

    def test_duplicate_with_different_num_stmt(self, parser: GoProfileParser) -> None:
        with pytest.raises(ProfileParseError) as exc_info:
            parser.parse_lines(["mode: atomic", "a.go:1.1,2.2 3 4", "a.go:1.1,2.2 2 5"])

        assert exc_info.value.code == ErrorCode.PROFILE_INCONSISTENT_BLOCK

    def test_blank_lines_skipped(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(["", "mode: set", "", "a.go:1.1,2.2 1 1", ""])

        assert len(profiles) == 1

    def test_repeated_matching_mode_line_accepted(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(
            ["mode: set", "a.go:1.1,2.2 1 1", "mode: set", "b.go:1.1,2.2 1 0"]
        )

        assert len(profiles) == 2

    def test_conflicting_mode_line(self, parser: GoProfileParser) -> None:
        with pytest.raises(ProfileParseError, match="conflicts"):
            parser.parse_lines(["mode: set", "a.go:1.1,2.2 1 1", "mode: count"])

    def test_missing_mode_line(self, parser: GoProfileParser) -> None:
        with pytest.raises(ProfileParseError, match="missing mode line"):
            parser.parse_lines(["a.go:1.1,2.2 1 1"])

    def test_empty_input(self, parser: GoProfileParser) -> None:
        with pytest.raises(ProfileParseError):
            parser.parse_lines([])

    def test_mode_only(self, parser: GoProfileParser) -> None:
        assert parser.parse_lines(["mode: set"]) == []

    @pytest.mark.parametrize("mode_line", ["mode:", "mode: ", "mode: sometimes", "mode:set"])
    def test_bad_mode_line(self, parser: GoProfileParser, mode_line: str) -> None:
        with pytest.raises(ProfileParseError):
            parser.parse_lines([mode_line])

    @pytest.mark.parametrize(
        "line",
        [
            "a.go:1.1,2.2 1",
            "a.go:1.1-2.2 1 1",
            "a.go 1.1,2.2 1 1",
            "a.go:1.1,2.2 1 -1",
            "a.go:x.1,2.2 1 1",
        ],
    )
    def test_malformed_block_line(self, parser: GoProfileParser, line: str) -> None:
        with pytest.raises(ProfileParseError) as exc_info:
            parser.parse_lines(["mode: set", line], source="cover.out")

        assert exc_info.value.details["line"] == 2
        assert "cover.out:2" in exc_info.value.message

    def test_file_name_with_colon(self, parser: GoProfileParser) -> None:
        profiles = parser.parse_lines(["mode: set", "C:/src/a.go:1.1,2.2 1 1"])

        assert profiles[0].file_name == "C:/src/a.go"


class TestParseFile:
    """Tests for parsing profile files from disk."""

    def test_parse_profiles(self, tmp_path: Path) -> None:
        path = tmp_path / "coverage.out"
        path.write_text("mode: set\nexample.com/m/a.go:3.14,5.2 2 1\n")

        profiles = parse_profiles(path)

        assert len(profiles) == 1
        assert profiles[0].blocks[0].num_stmt == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ProfileParseError) as exc_info:
            parse_profiles(tmp_path / "nope.out")

        assert exc_info.value.code == ErrorCode.PROFILE_NOT_FOUND

    def test_parse_profile_lines(self) -> None:
        profiles = parse_profile_lines(["mode: count", "m/a.go:1.1,2.2 1 3"])

        assert profiles[0].mode == "count"
        assert profiles[0].blocks[0].count == 3
