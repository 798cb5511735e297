"""Amend runtime coverage using the source text.

Julia only instruments code it compiles. Functions that were never called are
never compiled, so their lines come back as ``None`` ("cannot run") instead of
``0`` ("could run, never did"). The engine parses the file statement by
statement, finds every line inside a function body and upgrades ``None`` to
``0`` there. Exclusion markers in comments are applied last and always win.
"""

from __future__ import annotations

from pathlib import Path

from jlcov.amend.body_lines import function_body_lines
from jlcov.amend.lineindex import LineIndex
from jlcov.amend.parser import PREMATURE_EOF, StatementParser, TreeSitterJuliaParser
from jlcov.amend.syntax import (
    ERROR_KIND,
    INCOMPLETE_KIND,
    SyntaxNode,
    find_error_line,
    has_embedded_errors,
)
from jlcov.amend.version import detect_syntax_version
from jlcov.config.models import ExclusionMarkers
from jlcov.core.errors import ParseError
from jlcov.core.logging import get_logger
from jlcov.coverage.models import CovCount, FileCoverage

log = get_logger(__name__)

_default_parser: StatementParser | None = None


def default_parser() -> StatementParser:
    """Shared tree-sitter Julia parser, created on first use."""
    global _default_parser
    if _default_parser is None:
        _default_parser = TreeSitterJuliaParser()
    return _default_parser


def _error_message(node: SyntaxNode) -> str:
    if node.args and isinstance(node.args[0], str):
        return node.args[0]
    return ""


def amend_coverage_from_src(
    fc: FileCoverage,
    *,
    parser: StatementParser | None = None,
    syntax_version: str | None = None,
    markers: ExclusionMarkers | None = None,
) -> None:
    """Upgrade ``None`` to ``0`` for lines inside function bodies, in place.

    Concrete counts are never lowered by the amendment itself; only the
    exclusion pass that follows can reset lines to ``None``.

    Args:
        fc: Record with the source text to analyze; its coverage is mutated.
        parser: Statement parser, the shared tree-sitter parser by default.
        syntax_version: Version tag for the parser; detected from the
            file's project when omitted.
        markers: Exclusion marker spellings; the defaults when omitted.

    Raises:
        ParseError: The source is malformed or truncated, or the parser
            stopped advancing. Carries the filename and line.
    """
    parser = parser or default_parser()
    version = syntax_version or detect_syntax_version(fc.filename)
    content = fc.source
    index = LineIndex(content)

    pos = 0
    while pos < len(content):
        current_line = index.line_at(pos)
        # Shifts fragment-relative line numbers to file line numbers
        lineoffset = current_line - 1

        node, newpos = parser.parse_statement(content, pos, version)
        if newpos <= pos:
            raise ParseError.no_progress(fc.filename, current_line)
        pos = newpos

        if not isinstance(node, SyntaxNode):
            continue

        if node.kind == ERROR_KIND:
            message = _error_message(node)
            if pos >= len(content) and (not message or PREMATURE_EOF in message):
                break
            raise ParseError.at(fc.filename, current_line, message)

        if has_embedded_errors(node):
            error_line = find_error_line(node)
            if error_line is not None:
                raise ParseError.at(fc.filename, lineoffset + error_line)
            raise ParseError.at(fc.filename, current_line)

        if node.kind == INCOMPLETE_KIND:
            raise ParseError.incomplete(fc.filename, current_line)

        for line in function_body_lines(node):
            line += lineoffset
            fc.ensure_length(line)
            if fc.coverage[line - 1] is None:
                fc.coverage[line - 1] = 0

    apply_exclusions(fc.coverage, index, markers or ExclusionMarkers())


def apply_exclusions(
    coverage: list[CovCount], index: LineIndex, markers: ExclusionMarkers
) -> None:
    """Force lines covered by exclusion markers to ``None``.

    A start marker opens a region including its own line; a stop marker
    closes it, its own line still excluded. A line marker excludes just its
    line. Lines past the end of the vector already read as ``None``.
    """
    excluded = False
    for line_num, line in enumerate(index.lines(), start=1):
        closing = False
        if markers.start in line:
            excluded = True
        elif markers.stop in line:
            closing = excluded
            excluded = False

        if (excluded or closing or markers.line in line) and line_num <= len(coverage):
            coverage[line_num - 1] = None


def amend_coverage(
    coverage: list[CovCount],
    filename: str | Path,
    *,
    parser: StatementParser | None = None,
    markers: ExclusionMarkers | None = None,
) -> None:
    """Amend a bare coverage vector in place, reading the source from disk."""
    fc = FileCoverage(str(filename), Path(filename).read_text(encoding="utf-8"), coverage)
    amend_coverage_from_src(fc, parser=parser, markers=markers)
