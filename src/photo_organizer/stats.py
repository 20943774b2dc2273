# ABOUTME: Run statistics for the photo organizer: per-outcome counters and a date histogram.
# ABOUTME: Statistics accumulates during a run; RunReport is the frozen result.

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class RunReport:
    """Final, read-only statistics of one organize run."""

    organized: int = 0
    unsorted: int = 0
    skipped: int = 0
    errors: int = 0
    date_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    failures: tuple = ()

    @property
    def total(self) -> int:
        return self.organized + self.unsorted + self.skipped + self.errors

    def sorted_dates(self) -> list[tuple[str, int]]:
        return sorted(self.date_counts.items())


@dataclass
class Statistics:
    """Counters for one run. Every processed file lands in exactly one bucket."""

    organized: int = 0
    unsorted: int = 0
    skipped: int = 0
    errors: int = 0
    date_counts: dict = field(default_factory=dict)
    failures: list = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.organized + self.unsorted + self.skipped + self.errors

    def record_organized(self, date_key: str) -> None:
        self.organized += 1
        self.date_counts[date_key] = self.date_counts.get(date_key, 0) + 1

    def record_unsorted(self) -> None:
        self.unsorted += 1

    def record_skipped(self) -> None:
        self.skipped += 1

    def record_error(self, path: Path, exc: Exception) -> None:
        self.errors += 1
        self.failures.append((path, str(exc)))

    def report(self) -> RunReport:
        return RunReport(
            organized=self.organized,
            unsorted=self.unsorted,
            skipped=self.skipped,
            errors=self.errors,
            date_counts=MappingProxyType(dict(self.date_counts)),
            failures=tuple(self.failures),
        )


def format_summary(report: RunReport, include_dates: bool = True) -> str:
    """Render the end-of-run summary.

    The per-date histogram is sorted by date and can be left out; failed files are
    always listed.
    """
    lines = [
        f"Organized: {report.organized}  Unsorted: {report.unsorted}  "
        f"Skipped: {report.skipped}  Errors: {report.errors}"
    ]
    if include_dates and report.date_counts:
        lines.append("Files per date:")
        for date_key, count in report.sorted_dates():
            lines.append(f"  {date_key}: {count}")
    if report.failures:
        lines.append("Failed files:")
        for path, message in report.failures:
            lines.append(f"  {path}: {message}")
    return "\n".join(lines)
