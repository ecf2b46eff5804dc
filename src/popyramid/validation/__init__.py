"""src/popyramid/validation/__init__.py"""

from __future__ import annotations

from .checks import (
    CheckResult,
    ValidationIssue,
    validate_age_groups,
)
from .schemas import (
    COLUMN_ALIASES,
    FORMAT_SPECS,
    FormatSpec,
    GENDERED,
    TOTAL_ONLY,
)

__all__ = [
    # checks
    "CheckResult",
    "ValidationIssue",
    "validate_age_groups",
    # schemas
    "COLUMN_ALIASES",
    "FORMAT_SPECS",
    "FormatSpec",
    "GENDERED",
    "TOTAL_ONLY",
]
