"""Types for the scanner module.

A FileReport holds the findings for one source file. A ScanResult
aggregates the reports for everything scanned in one run.
"""

from dataclasses import dataclass, field
from typing import Optional

from prefer_bind.rule.types import Finding


@dataclass
class FileReport:
    """Findings for one file.

    parse_error is set when the file could not be parsed cleanly; such
    files are reported but not linted.
    """

    path: str
    findings: list[Finding] = field(default_factory=list)
    parse_error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "findings": [f.to_dict() for f in self.findings],
            "parse_error": self.parse_error,
        }


@dataclass
class ScanResult:
    """Complete scanner output for a run."""

    reports: list[FileReport] = field(default_factory=list)
    files_scanned: int = 0
    scan_duration_seconds: float = 0.0

    @property
    def findings(self) -> list[Finding]:
        return [f for report in self.reports for f in report.findings]

    @property
    def finding_count(self) -> int:
        return sum(len(report.findings) for report in self.reports)

    def to_dict(self) -> dict:
        return {
            "reports": [r.to_dict() for r in self.reports if r.findings or r.parse_error],
            "finding_count": self.finding_count,
            "files_scanned": self.files_scanned,
            "scan_duration_seconds": round(self.scan_duration_seconds, 3),
        }
