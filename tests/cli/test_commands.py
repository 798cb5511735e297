"""Tests for the jlcov commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from jlcov.amend.syntax import LineMarker, SyntaxNode
from jlcov.cli.main import cli
from jlcov.config.loader import REPO_CONFIG_NAME

runner = CliRunner()

FUNC_SRC = "function f()\n    g()\n    h()\nend\n"


def cov_lines(*counts: int | None) -> str:
    return "".join(f"{'-' if c is None else c:>9} line\n" for c in counts)


class BodyParser:
    """Whole text is one function whose body is lines 2..n-1."""

    def parse_statement(self, text: str, pos: int, version: str) -> tuple[Any, int]:
        body: list[Any] = []
        for line in range(2, text.count("\n")):
            body.extend([LineMarker(line), SyntaxNode("call", ["g"])])
        return SyntaxNode("function", [SyntaxNode("call", ["f"]), SyntaxNode("block", body)]), len(
            text
        )


class BrokenParser:
    def parse_statement(self, text: str, pos: int, version: str) -> tuple[Any, int]:
        return SyntaxNode("error", ["invalid syntax"]), pos + 1


@pytest.fixture
def src_tree(isolated_cli: Path) -> Path:
    src = isolated_cli / "src"
    src.mkdir()
    (src / "Pkg.jl").write_text(FUNC_SRC)
    (src / "Pkg.jl.11.cov").write_text(cov_lines(None, 2, None, None))
    (src / "Pkg.jl.22.cov").write_text(cov_lines(None, 1, None, None))
    return src


class TestRoot:
    def test_version(self) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("process", "merge", "summary", "clean", "malloc"):
            assert name in result.output

    def test_invalid_config_fails(self, isolated_cli: Path) -> None:
        (isolated_cli / REPO_CONFIG_NAME).write_text("amend:\n  default_syntax_version: x\n")

        result = runner.invoke(cli, ["summary", "missing.info"])

        assert result.exit_code != 0
        assert "CONFIG_INVALID_VALUE" in result.output


class TestProcessCommand:
    """jlcov process."""

    def test_writes_trace_file(self, src_tree: Path, isolated_cli: Path) -> None:
        result = runner.invoke(cli, ["process", "--no-amend", "-o", "lcov.info"])

        assert result.exit_code == 0, result.output
        assert (isolated_cli / "lcov.info").read_text() == (
            "SF:src/Pkg.jl\nDA:2,3\nLH:1\nLF:1\nend_of_record\n"
        )
        assert "Covered 1/1 lines (100.00%)" in result.output

    def test_writes_to_stdout(self, src_tree: Path) -> None:
        result = runner.invoke(cli, ["process", "--no-amend", "src"])

        assert result.exit_code == 0, result.output
        assert "SF:src/Pkg.jl\nDA:2,3\n" in result.output

    def test_amends_with_default_parser(
        self, src_tree: Path, isolated_cli: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("jlcov.amend.engine._default_parser", BodyParser())

        result = runner.invoke(cli, ["process", "-o", "lcov.info"])

        assert result.exit_code == 0, result.output
        assert (isolated_cli / "lcov.info").read_text() == (
            "SF:src/Pkg.jl\nDA:2,3\nDA:3,0\nLH:1\nLF:2\nend_of_record\n"
        )

    def test_amendment_disabled_by_config(
        self, src_tree: Path, isolated_cli: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("jlcov.amend.engine._default_parser", BrokenParser())
        (isolated_cli / REPO_CONFIG_NAME).write_text("amend:\n  enabled: false\n")

        result = runner.invoke(cli, ["process", "-o", "lcov.info"])

        assert result.exit_code == 0, result.output

    def test_parse_error_is_reported(
        self, src_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("jlcov.amend.engine._default_parser", BrokenParser())

        result = runner.invoke(cli, ["process", "-o", "lcov.info"])

        assert result.exit_code == 1
        assert "parsing error in src/Pkg.jl:1" in result.output

    def test_missing_folder(self) -> None:
        result = runner.invoke(cli, ["process", "nowhere"])
        assert result.exit_code == 2


class TestMergeCommand:
    def test_sums_traces(self, isolated_cli: Path) -> None:
        (isolated_cli / "a.info").write_text("SF:x.jl\nDA:1,1\nDA:3,0\nend_of_record\n")
        (isolated_cli / "b.info").write_text(
            "SF:x.jl\nDA:1,2\nend_of_record\nSF:y.jl\nDA:1,0\nend_of_record\n"
        )

        result = runner.invoke(cli, ["merge", "out.info", "a.info", "b.info"])

        assert result.exit_code == 0, result.output
        assert (isolated_cli / "out.info").read_text() == (
            "SF:x.jl\nDA:1,3\nDA:3,0\nLH:1\nLF:2\nend_of_record\n"
            "SF:y.jl\nDA:1,0\nLH:0\nLF:1\nend_of_record\n"
        )
        assert "Merged 2 files" in result.output
        assert "Covered 1/3 lines" in result.output

    def test_reads_folders(self, isolated_cli: Path) -> None:
        traces = isolated_cli / "traces"
        (traces / "job1").mkdir(parents=True)
        (traces / "job1" / "lcov.info").write_text("SF:x.jl\nDA:1,1\nend_of_record\n")
        (traces / "job2.info").write_text("SF:x.jl\nDA:1,4\nend_of_record\n")

        result = runner.invoke(cli, ["merge", "out.info", "traces"])

        assert result.exit_code == 0, result.output
        assert "DA:1,5\n" in (isolated_cli / "out.info").read_text()

    def test_requires_traces(self) -> None:
        result = runner.invoke(cli, ["merge", "out.info"])
        assert result.exit_code == 2


class TestSummaryCommand:
    @pytest.fixture
    def trace(self, isolated_cli: Path) -> Path:
        path = isolated_cli / "lcov.info"
        path.write_text(
            "SF:a.jl\nDA:1,1\nDA:2,0\nend_of_record\nSF:b.jl\nDA:1,3\nDA:4,2\nend_of_record\n"
        )
        return path

    def test_totals(self, trace: Path) -> None:
        result = runner.invoke(cli, ["summary", "lcov.info"])

        assert result.exit_code == 0, result.output
        assert "Covered 3/4 lines (75.00%)" in result.output

    def test_per_file_table(self, trace: Path) -> None:
        result = runner.invoke(cli, ["summary", "--files", "lcov.info"])

        assert result.exit_code == 0, result.output
        assert "a.jl" in result.output
        assert "50.00%" in result.output
        assert "100.00%" in result.output

    def test_json(self, trace: Path) -> None:
        result = runner.invoke(cli, ["summary", "--json", "--files", "lcov.info"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "covered_lines": 3,
            "total_lines": 4,
            "files": [
                {"path": "a.jl", "covered_lines": 1, "total_lines": 2},
                {"path": "b.jl", "covered_lines": 2, "total_lines": 2},
            ],
        }

    def test_json_totals_only(self, trace: Path) -> None:
        result = runner.invoke(cli, ["summary", "--json", "lcov.info"])
        assert json.loads(result.output) == {"covered_lines": 3, "total_lines": 4}


class TestCleanCommand:
    def test_removes_cov_files(self, src_tree: Path) -> None:
        (src_tree / "Pkg.jl.11.mem").write_text(cov_lines(None, 16, None, None))

        result = runner.invoke(cli, ["clean", "src"])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in src_tree.iterdir()) == ["Pkg.jl", "Pkg.jl.11.mem"]

    def test_mem_flag(self, src_tree: Path) -> None:
        (src_tree / "Pkg.jl.11.mem").write_text(cov_lines(None, 16, None, None))

        result = runner.invoke(cli, ["clean", "--mem", "src"])

        assert result.exit_code == 0, result.output
        assert [p.name for p in src_tree.iterdir()] == ["Pkg.jl"]


class TestMallocCommand:
    def test_lists_heaviest_first(self, isolated_cli: Path) -> None:
        mem = isolated_cli / "mem"
        mem.mkdir()
        (mem / "a.jl.1.mem").write_text(cov_lines(None, 100, 7000, None))
        (mem / "b.jl.1.mem").write_text(cov_lines(300))

        result = runner.invoke(cli, ["malloc", "-n", "2", "mem"])

        assert result.exit_code == 0, result.output
        assert "7000" in result.output
        assert "300" in result.output
        assert "100" not in result.output
        assert result.output.index("7000") < result.output.index("300")

    def test_no_data(self, isolated_cli: Path) -> None:
        (isolated_cli / "empty").mkdir()

        result = runner.invoke(cli, ["malloc", "empty"])

        assert result.exit_code == 0
        assert "No allocation data found." in result.output
