"""src/popyramid/validation/checks.py"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from popyramid.common.types import AgeRangeConfig

IssueKind = Literal["empty", "invalid_range", "negative_age", "overlap"]


@dataclass(frozen=True)
class ValidationIssue:
    kind: IssueKind
    message: str
    range_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class CheckResult:
    ok: bool
    errors: tuple[ValidationIssue, ...]

    @property
    def valid(self) -> bool:
        return self.ok

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(e.message for e in self.errors)

    def raise_if_failed(self) -> None:
        if not self.ok:
            msg = "\n".join(self.messages) if self.errors else "Validation failed."
            raise ValueError(msg)


def check_range_bounds(r: AgeRangeConfig) -> list[ValidationIssue]:
    errs: list[ValidationIssue] = []
    if r.end is not None and r.start > r.end:
        errs.append(ValidationIssue("invalid_range", f'Group "{r.label}": start is greater than end', (r.id,)))
    if r.start < 0:
        errs.append(ValidationIssue("negative_age", f'Group "{r.label}": age cannot be negative', (r.id,)))
    return errs


def check_overlap(prev: AgeRangeConfig, cur: AgeRangeConfig, *, max_age: int) -> list[ValidationIssue]:
    prev_end = prev.end if prev.end is not None else max_age
    if cur.start <= prev_end:
        return [ValidationIssue("overlap", f'Groups "{prev.label}" and "{cur.label}" overlap', (prev.id, cur.id))]
    return []


def validate_age_groups(ranges: Sequence[AgeRangeConfig], max_age: int = 100) -> CheckResult:
    """
    Validate a set of aggregation ranges, collecting every problem found.

    Ranges are checked in ascending `start` order:
    - start > end (bounded ranges only)
    - negative start
    - start <= previous end (previous open range ends at max_age)

    Gaps are allowed: a partial age window is a legitimate choice.
    """
    if not ranges:
        return CheckResult(ok=False, errors=(ValidationIssue("empty", "Add at least one age group"),))

    errors: list[ValidationIssue] = []
    ordered = sorted(ranges, key=lambda r: r.start)
    for i, r in enumerate(ordered):
        errors.extend(check_range_bounds(r))
        if i > 0:
            errors.extend(check_overlap(ordered[i - 1], r, max_age=max_age))

    return CheckResult(ok=(len(errors) == 0), errors=tuple(errors))
