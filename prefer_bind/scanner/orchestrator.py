"""Scanner orchestrator: collects files, runs the rule, merges results.

This is the public entry point for scanning. It:
1. Collects JS/TS files from the given files and directories
2. Resolves the rule options once for the whole run
3. Runs the AST scanner on each file
4. Returns a ScanResult with one FileReport per scanned file
"""

import logging
import time
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional

from prefer_bind.core.config import Settings, get_settings
from prefer_bind.rule.options import RuleOptions
from prefer_bind.rule.prefer_bind import PreferBindRule
from prefer_bind.scanner.ast_scanner import SCANNABLE_EXTENSIONS, SourceParseError, scan_ast
from prefer_bind.scanner.types import FileReport, ScanResult

logger = logging.getLogger(__name__)

# Directories to skip during file collection
SKIP_DIRS = {
    "node_modules", ".git", "dist", "build", ".next",
    "coverage", ".nyc_output", "__pycache__", ".venv",
}


def scan(
    paths: Iterable[Path] | Path,
    options: Optional[Mapping[str, Any] | RuleOptions] = None,
    settings: Optional[Settings] = None,
) -> ScanResult:
    """Run the prefer-bind rule over files and directories.

    Raises ConfigError before touching any file if the options are invalid.
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]
    settings = settings or get_settings()
    rule = PreferBindRule(options)
    start = time.monotonic()

    files = collect_files([Path(p) for p in paths], max_file_size=settings.max_file_size)
    logger.info("Collected %d scannable files", len(files))

    reports: list[FileReport] = []
    for file_path in files:
        report = scan_file(file_path, rule)
        if report is not None:
            reports.append(report)

    duration = time.monotonic() - start
    result = ScanResult(
        reports=reports,
        files_scanned=len(reports),
        scan_duration_seconds=duration,
    )
    logger.info(
        "Scan complete: %d findings from %d files in %.2fs",
        result.finding_count, result.files_scanned, duration,
    )
    return result


def read_source(file_path: Path) -> str:
    """Read a source file as UTF-8 without translating line endings.

    Byte offsets in findings refer to this text, so CRLF files must keep
    their carriage returns.
    """
    return file_path.read_bytes().decode("utf-8")


def scan_file(file_path: Path, rule: PreferBindRule) -> Optional[FileReport]:
    """Lint one file. Returns None if the file cannot be read."""
    try:
        content = read_source(file_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s: %s", file_path, exc)
        return None

    try:
        findings = scan_ast(file_path, content, rule)
    except SourceParseError as exc:
        logger.warning("Skipping %s: %s", file_path, exc)
        return FileReport(path=str(file_path), parse_error=str(exc))

    return FileReport(path=str(file_path), findings=findings)


def collect_files(paths: list[Path], max_file_size: int) -> list[Path]:
    """Collect all scannable JS/TS files under the given paths.

    Explicit file arguments are kept when their extension is supported;
    directories are walked recursively.
    """
    files: set[Path] = set()

    for root in paths:
        if root.is_file():
            if root.suffix in SCANNABLE_EXTENSIONS:
                files.add(root)
            else:
                logger.debug("Skipping unsupported file: %s", root)
            continue

        if not root.is_dir():
            logger.warning("Path does not exist: %s", root)
            continue

        for path in root.rglob("*"):
            # Skip ignored directories
            if any(part in SKIP_DIRS for part in path.relative_to(root).parts):
                continue

            if path.suffix not in SCANNABLE_EXTENSIONS or not path.is_file():
                continue

            # Skip very large files
            try:
                if path.stat().st_size > max_file_size:
                    logger.debug("Skipping large file: %s", path)
                    continue
            except OSError:
                continue

            files.add(path)

    return sorted(files)
