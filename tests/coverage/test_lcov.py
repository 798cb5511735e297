"""Tests for the LCOV codec.

Covers:
- write/writefile byte-exact output
- read/readfile/readfolder reconstruction
- write -> read round trip
- merging traces read back from disk
"""

import io
from pathlib import Path

from jlcov.coverage import lcov
from jlcov.coverage.merge import merge_file_coverages
from jlcov.coverage.models import FileCoverage

SAMPLE = FileCoverage(
    "src/Sample.jl",
    "module Sample\n...",
    [None, 3, 0, None, 1, None, None],
)

SAMPLE_TRACE = (
    "SF:src/Sample.jl\n"
    "DA:2,3\n"
    "DA:3,0\n"
    "DA:5,1\n"
    "LH:2\n"
    "LF:3\n"
    "end_of_record\n"
)


class TestWrite:
    """Tests for lcov.write and lcov.writefile."""

    def test_single_record_exact_output(self) -> None:
        out = io.StringIO()
        lcov.write(out, [SAMPLE])
        assert out.getvalue() == SAMPLE_TRACE

    def test_records_follow_input_order(self) -> None:
        out = io.StringIO()
        lcov.write(
            out,
            [FileCoverage("b.jl", "", [1]), FileCoverage("a.jl", "", [None, 0])],
        )
        assert out.getvalue() == (
            "SF:b.jl\nDA:1,1\nLH:1\nLF:1\nend_of_record\n"
            "SF:a.jl\nDA:2,0\nLH:0\nLF:1\nend_of_record\n"
        )

    def test_record_without_counts(self) -> None:
        out = io.StringIO()
        lcov.write(out, [FileCoverage("empty.jl", "x", [None, None])])
        assert out.getvalue() == "SF:empty.jl\nLH:0\nLF:0\nend_of_record\n"

    def test_empty_collection_writes_nothing(self) -> None:
        out = io.StringIO()
        lcov.write(out, [])
        assert out.getvalue() == ""

    def test_source_is_never_written(self) -> None:
        out = io.StringIO()
        lcov.write(out, [SAMPLE])
        assert "module Sample" not in out.getvalue()

    def test_writefile_matches_write(self, tmp_path: Path) -> None:
        path = tmp_path / "lcov.info"
        lcov.writefile(path, [SAMPLE])
        assert path.read_bytes() == SAMPLE_TRACE.encode()


class TestRead:
    """Tests for lcov.read, lcov.readfile and lcov.readfolder."""

    def test_reconstructs_record(self) -> None:
        records = lcov.read(io.StringIO(SAMPLE_TRACE))
        assert records == [FileCoverage("src/Sample.jl", "", [None, 3, 0, None, 1])]

    def test_unknown_record_types_are_ignored(self) -> None:
        text = (
            "TN:\n"
            "SF:a.jl\n"
            "FN:1,f\n"
            "FNDA:1,f\n"
            "DA:1,4\n"
            "BRDA:1,0,0,1\n"
            "DA:3,0,checksum\n"
            "end_of_record\n"
        )
        records = lcov.read(text.splitlines())
        assert records == [FileCoverage("a.jl", "", [4, None, 0])]

    def test_da_before_sf_is_skipped(self) -> None:
        text = "DA:1,1\nSF:a.jl\nDA:2,2\nend_of_record\n"
        assert lcov.read(text.splitlines()) == [FileCoverage("a.jl", "", [None, 2])]

    def test_malformed_da_entries_are_skipped(self) -> None:
        text = "SF:a.jl\nDA:x,1\nDA:2\nDA:0,5\nDA:3,1\nend_of_record\n"
        assert lcov.read(text.splitlines()) == [FileCoverage("a.jl", "", [None, None, 1])]

    def test_missing_end_of_record(self) -> None:
        text = "SF:a.jl\nDA:1,1\nSF:b.jl\nDA:2,0\n"
        assert lcov.read(text.splitlines()) == [
            FileCoverage("a.jl", "", [1]),
            FileCoverage("b.jl", "", [None, 0]),
        ]

    def test_same_file_twice_is_not_merged(self) -> None:
        text = "SF:a.jl\nDA:1,1\nend_of_record\nSF:a.jl\nDA:1,2\nend_of_record\n"
        records = lcov.read(text.splitlines())
        assert [fc.coverage for fc in records] == [[1], [2]]

    def test_readfile(self, tmp_path: Path) -> None:
        path = tmp_path / "trace.info"
        path.write_text(SAMPLE_TRACE)
        assert lcov.readfile(path)[0].coverage == [None, 3, 0, None, 1]

    def test_readfolder_concatenates_all_traces(self, tmp_path: Path) -> None:
        (tmp_path / "nested").mkdir()
        (tmp_path / "a.info").write_text("SF:a.jl\nDA:1,1\nend_of_record\n")
        (tmp_path / "nested" / "b.info").write_text("SF:a.jl\nDA:1,2\nend_of_record\n")
        (tmp_path / "notes.txt").write_text("SF:ignored.jl\nend_of_record\n")

        records = lcov.readfolder(tmp_path)

        assert [fc.filename for fc in records] == ["a.jl", "a.jl"]
        assert sorted(fc.coverage[0] for fc in records) == [1, 2]

    def test_readfolder_custom_suffix(self, tmp_path: Path) -> None:
        (tmp_path / "a.lcov").write_text("SF:a.jl\nDA:1,1\nend_of_record\n")
        assert lcov.readfolder(tmp_path) == []
        assert len(lcov.readfolder(tmp_path, suffix=".lcov")) == 1


class TestRoundTrip:
    """write -> read keeps everything up to the last concrete count."""

    def test_round_trip_drops_trailing_none_and_source(self, tmp_path: Path) -> None:
        path = tmp_path / "lcov.info"
        lcov.writefile(path, [SAMPLE])

        (back,) = lcov.readfile(path)

        assert back.filename == SAMPLE.filename
        assert back.source == ""
        assert back.coverage == SAMPLE.coverage[: len(back.coverage)]
        assert all(c is None for c in SAMPLE.coverage[len(back.coverage) :])

    def test_round_trip_many_records(self) -> None:
        records = [
            FileCoverage("a.jl", "", [0, None, 7]),
            FileCoverage("b.jl", "", [None, None]),
            FileCoverage("c.jl", "", [1]),
        ]
        out = io.StringIO()
        lcov.write(out, records)
        back = lcov.read(io.StringIO(out.getvalue()))
        assert [fc.filename for fc in back] == ["a.jl", "b.jl", "c.jl"]
        assert [fc.coverage for fc in back] == [[0, None, 7], [], [1]]


class TestMergeTraces:
    """Merging traces read back from disk with fresh results."""

    def test_merge_with_fresh_results(self, tmp_path: Path) -> None:
        lcov.writefile(tmp_path / "saved.info", [SAMPLE])
        saved = lcov.readfolder(tmp_path)
        fresh = [
            FileCoverage(SAMPLE.filename, "sourcecode", [None, 1, 0, None, 3]),
            FileCoverage("file2.jl", "moresource2", [1, None, 0, None, 2]),
        ]

        merged = merge_file_coverages(saved, fresh, saved)

        assert len(merged) == 2
        assert merged[0].filename == SAMPLE.filename
        assert merged[0].source == "sourcecode"
        assert merged[0].coverage == [None, 7, 0, None, 5]
        assert merged[1].filename == "file2.jl"
        assert merged[1].source == "moresource2"
        assert merged[1].coverage == [1, None, 0, None, 2]
