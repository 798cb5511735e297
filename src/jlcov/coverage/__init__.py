"""Coverage records, merging and serialization.

This package provides:
- The per-line data model (``FileCoverage``, ``get_summary``)
- Sum merge across processes and saved traces
- Readers for the runtime's ``.cov``/``.mem`` count files
- The LCOV codec (``jlcov.coverage.lcov``)

Usage:
    from jlcov.coverage import lcov, merge_file_coverages

    merged = merge_file_coverages(lcov.readfolder("traces"), fresh_results)
    lcov.writefile("lcov.info", merged)
"""

from jlcov.coverage import lcov
from jlcov.coverage.counts import (
    iscovfile,
    ismemfile,
    parse_cov_line,
    process_cov,
)
from jlcov.coverage.memalloc import (
    MallocInfo,
    analyze_malloc,
    analyze_malloc_files,
    find_malloc_files,
)
from jlcov.coverage.merge import merge_coverage_counts, merge_file_coverages
from jlcov.coverage.models import CovCount, FileCoverage, get_summary

__all__ = [
    # Models
    "CovCount",
    "FileCoverage",
    "get_summary",
    # Merge
    "merge_coverage_counts",
    "merge_file_coverages",
    # Count files
    "iscovfile",
    "ismemfile",
    "parse_cov_line",
    "process_cov",
    # Allocations
    "MallocInfo",
    "analyze_malloc",
    "analyze_malloc_files",
    "find_malloc_files",
    # LCOV
    "lcov",
]
