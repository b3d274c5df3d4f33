#!/usr/bin/env python3
"""
YAMLET ENGINE - File Orchestrator
---------------------------------
Drives the parser over files on disk: reads them (BOM aware), parses
them, optionally cross-checks the result against ruamel.yaml, and turns
every outcome into a plain report dictionary. A failure in one file never
stops a directory scan.

Author: Yamlet Team
Date: 2026-10-19
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from yamlet.core.config import DEFAULT_OPTIONS, ParserOptions
from yamlet.core.errors import YamletError, YamlStructureError
from yamlet.parsing.pipeline import ParsePipeline
from yamlet.validator.validator import YamlValidator

logger = logging.getLogger("yamlet.engine")


class ParseEngine:
    """
    Principal orchestrator for parsing a workspace of YAML files.
    """

    def __init__(self, workspace_path: str, options: Optional[ParserOptions] = None):
        self.workspace = Path(workspace_path).resolve()
        self.options = options or DEFAULT_OPTIONS
        self.pipeline = ParsePipeline(self.options)
        self.validator = YamlValidator()

    def parse_file(self, relative_path: str, cross_check: bool = False) -> Dict[str, Any]:
        """
        Parses a single file relative to the workspace.
        """
        full_path = (self.workspace / relative_path).resolve()

        if not full_path.is_file():
            return self._file_error(relative_path, "FILE_NOT_FOUND", f"Path missing: {full_path}")

        try:
            raw_text = full_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Unable to read {relative_path}: {str(e)}")
            return self._file_error(relative_path, "READ_ERROR", str(e))

        try:
            context = self.pipeline.run(raw_text)
        except YamletError as e:
            logger.info(f"Structural error in {relative_path}: {str(e)}")
            line = e.line_no if isinstance(e, YamlStructureError) else None
            return self._file_error(relative_path, "STRUCTURE_ERROR", str(e), line=line)

        result = {
            "file_path": str(relative_path),
            "success": True,
            "status": "PARSED",
            "doc_type": context.doc_type,
            "line_count": context.line_count,
            "value": context.root,
            "error": None,
            "line": None,
            "cross_check": None,
            "timestamp": time.time(),
        }

        if cross_check:
            agrees, message = self.validator.cross_check(raw_text, context.root)
            result["cross_check"] = message
            if not agrees:
                result["success"] = False
                result["status"] = "MISMATCH"

        return result

    def scan_directory(self, extension: str = ".yaml", max_depth: int = 10,
                       cross_check: bool = False,
                       progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """
        Recursively discovers and parses all files with the given extension.
        """
        try:
            max_depth = int(max_depth)
        except (ValueError, TypeError):
            logger.warning(f"Invalid max_depth '{max_depth}'. Falling back to default: 10")
            max_depth = 10

        # Exclude symlinks to prevent loops
        patterns = {f"*{extension.lower()}", f"*{extension.upper()}"}
        all_files = sorted({
            f for p in patterns for f in self.workspace.rglob(p)
            if f.is_file() and not f.is_symlink()
        })

        reports = []
        total_files = len(all_files)
        processed = 0

        for file_path in all_files:
            rel_parts = file_path.relative_to(self.workspace).parts
            if len(rel_parts) > max_depth:
                logger.debug(f"Skipping {file_path}: deeper than {max_depth}")
                continue

            rel_path = str(file_path.relative_to(self.workspace))
            try:
                reports.append(self.parse_file(rel_path, cross_check=cross_check))
            except Exception as e:
                logger.error(f"Critical error in scan loop for {file_path}: {str(e)}")
                reports.append(self._file_error(rel_path, "INTERNAL_ERROR", str(e)))

            processed += 1
            if progress_callback:
                progress_callback(processed, total_files)

        return reports

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Aggregates per-file reports into totals."""
        if not reports:
            return {
                "total_files": 0, "success_rate": 0, "successful": 0,
                "structure_errors": 0, "mismatches": 0, "system_errors": 0
            }

        total = len(reports)
        successful = sum(1 for r in reports if r.get('success', False))
        structure_errors = sum(1 for r in reports if r.get('status') == "STRUCTURE_ERROR")
        mismatches = sum(1 for r in reports if r.get('status') == "MISMATCH")
        system_errors = sum(1 for r in reports if r.get('status') in ("READ_ERROR", "FILE_NOT_FOUND", "INTERNAL_ERROR"))

        return {
            "total_files": total,
            "success_rate": successful / total,
            "successful": successful,
            "structure_errors": structure_errors,
            "mismatches": mismatches,
            "system_errors": system_errors,
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S")
        }

    def _file_error(self, path: str, status: str, error: str,
                    line: Optional[int] = None) -> Dict[str, Any]:
        return {
            "file_path": str(path), "status": status, "error": error,
            "line": line, "success": False, "doc_type": None, "value": None,
            "cross_check": None,
        }
