"""jlcov - Julia line coverage amendment, merging and LCOV export."""

from jlcov.amend import amend_coverage, amend_coverage_from_src, detect_syntax_version
from jlcov.core.errors import ParseError
from jlcov.coverage import (
    CovCount,
    FileCoverage,
    MallocInfo,
    analyze_malloc,
    get_summary,
    lcov,
    merge_coverage_counts,
    merge_file_coverages,
    process_cov,
)
from jlcov.process import clean_file, clean_folder, process_file, process_folder

__version__ = "0.1.0"

__all__ = [
    "CovCount",
    "FileCoverage",
    "MallocInfo",
    "ParseError",
    "amend_coverage",
    "amend_coverage_from_src",
    "analyze_malloc",
    "clean_file",
    "clean_folder",
    "detect_syntax_version",
    "get_summary",
    "lcov",
    "merge_coverage_counts",
    "merge_file_coverages",
    "process_cov",
    "process_file",
    "process_folder",
]
