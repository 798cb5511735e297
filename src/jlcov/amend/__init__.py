"""Static amendment of runtime coverage from source text."""

from jlcov.amend.body_lines import function_body_lines
from jlcov.amend.engine import amend_coverage, amend_coverage_from_src, apply_exclusions
from jlcov.amend.lineindex import LineIndex
from jlcov.amend.parser import StatementParser, TreeSitterJuliaParser
from jlcov.amend.syntax import (
    LineMarker,
    SyntaxNode,
    find_error_line,
    has_embedded_errors,
    is_function_expression,
)
from jlcov.amend.version import detect_syntax_version

__all__ = [
    "LineIndex",
    "LineMarker",
    "StatementParser",
    "SyntaxNode",
    "TreeSitterJuliaParser",
    "amend_coverage",
    "amend_coverage_from_src",
    "apply_exclusions",
    "detect_syntax_version",
    "find_error_line",
    "function_body_lines",
    "has_embedded_errors",
    "is_function_expression",
]
