"""Scanner module: runs the prefer-bind rule over JS/TS sources.

Public API:
    scan(paths, options) -> ScanResult
    scan_ast(file_path, content, rule) -> list[Finding]
"""

from prefer_bind.scanner.ast_scanner import SourceParseError, scan_ast
from prefer_bind.scanner.orchestrator import scan
from prefer_bind.scanner.types import FileReport, ScanResult

__all__ = ["scan", "scan_ast", "SourceParseError", "FileReport", "ScanResult"]
