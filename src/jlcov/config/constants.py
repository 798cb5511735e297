"""Configuration constants.

Fixed format values of the Julia coverage toolchain. Values that users may
reasonably override (exclusion marker spellings, default syntax version) are
mirrored as defaults in models.py.
"""

# =============================================================================
# Exclusion markers
# =============================================================================
# Comment tokens recognised anywhere on a source line.

EXCLUDE_START_MARKER = "COV_EXCL_START"
"""Starts an excluded region (the marker line itself is excluded)."""

EXCLUDE_STOP_MARKER = "COV_EXCL_STOP"
"""Ends an excluded region (the marker line itself is still excluded)."""

EXCLUDE_LINE_MARKER = "COV_EXCL_LINE"
"""Excludes the single line it appears on."""

# =============================================================================
# Raw count files
# =============================================================================

COUNT_FIELD_WIDTH = 9
"""Width of the right-aligned count column in ``.cov``/``.mem`` files."""

NOT_APPLICABLE_MARK = "-"
"""Final column of the count field when the line has no count."""

SOURCE_SUFFIX = ".jl"
"""Suffix of the source files processed by ``process_folder``."""

# =============================================================================
# Syntax versions
# =============================================================================

DEFAULT_SYNTAX_VERSION = "1.14"
"""Used when no project file or VERSION file pins a syntax version."""

PROJECT_FILENAMES = ("JuliaProject.toml", "Project.toml")
"""Project descriptors, in lookup priority order."""

# =============================================================================
# LCOV
# =============================================================================

LCOV_TRACE_SUFFIX = ".info"
"""Suffix of the trace files picked up by ``readfolder``."""
