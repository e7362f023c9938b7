#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dapper/cli/processors.py
"""File collection and processing for the dapper CLI.

Formatting runs in two halves. :func:`format_path` reads and formats one
file and is safe to run in a worker process. :func:`emit_outcome` writes or
prints the result in the main process, so output stays in sorted path order
even when files are formatted in parallel.
"""

from __future__ import annotations

import json
import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

from dapper.api import format_file
from dapper.cli.ignore import IgnoreRules
from dapper.constants import FORMATTABLE_EXTENSIONS, IGNORED_DIRECTORIES, OutputMode
from dapper.exceptions import DapperError
from dapper.options import FormatOptions

logger = logging.getLogger(__name__)


class ProcessResult(Enum):
    """Outcome of processing a file or a set of files."""

    UNCHANGED = "unchanged"
    CHANGED = "changed"
    ERROR = "error"

    def merge(self, other: "ProcessResult") -> "ProcessResult":
        """Return the more severe of two results (error > changed > unchanged).

        Examples
        --------
            >>> ProcessResult.CHANGED.merge(ProcessResult.UNCHANGED)
            <ProcessResult.CHANGED: 'changed'>

        """
        if ProcessResult.ERROR in (self, other):
            return ProcessResult.ERROR
        if ProcessResult.CHANGED in (self, other):
            return ProcessResult.CHANGED
        return ProcessResult.UNCHANGED


@dataclass(frozen=True)
class FileOutcome:
    """Result of formatting one file, before any output is produced.

    Parameters
    ----------
    path : Path
        The file
    result : ProcessResult
        Whether the file changed or failed
    formatted : str or None
        Formatted content, None on error
    error : str or None
        Error message on failure

    """

    path: Path
    result: ProcessResult
    formatted: Optional[str] = None
    error: Optional[str] = None


@dataclass
class RunSummary:
    """Aggregate of every file processed in one run."""

    result: ProcessResult = ProcessResult.UNCHANGED
    total_files: int = 0
    changed_files: int = 0
    failed_files: int = 0

    def add(self, result: ProcessResult, counted: bool = True) -> None:
        """Fold one file's result into the summary."""
        self.result = self.result.merge(result)
        if not counted:
            return
        self.total_files += 1
        if result is ProcessResult.CHANGED:
            self.changed_files += 1
        elif result is ProcessResult.ERROR:
            self.failed_files += 1


def is_formattable(path: Path) -> bool:
    """Return True for Markdown and YAML file names (case-insensitive)."""
    return path.suffix.lower() in FORMATTABLE_EXTENSIONS


def _walk_directory(directory: Path, rules: IgnoreRules) -> Iterable[Path]:
    for current, dirnames, filenames in os.walk(directory):
        current_path = Path(current)
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in IGNORED_DIRECTORIES and not rules.is_ignored(current_path / name, is_dir=True)
        )
        for name in filenames:
            file_path = current_path / name
            if is_formattable(file_path) and not rules.is_ignored(file_path, is_dir=False):
                yield file_path


def collect_files(paths: Iterable[Union[str, Path]], ignore_rules: Optional[IgnoreRules] = None) -> List[Path]:
    """Expand paths into the sorted list of files to format.

    Parameters
    ----------
    paths : iterable of str or Path
        Files and directories named on the command line. Paths that do not
        exist are skipped.
    ignore_rules : IgnoreRules, optional
        Rules applied inside directories. When omitted, rules are loaded
        from ``.gitignore`` and ``.dapperignore`` in each directory argument.

    Returns
    -------
    list of Path
        Sorted, de-duplicated files. Explicitly named files are included
        whenever they have a Markdown or YAML extension, even if an ignore
        rule matches them.

    """
    found: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            rules = ignore_rules if ignore_rules is not None else IgnoreRules.load(path)
            found.update(_walk_directory(path, rules))
        elif path.is_file():
            if is_formattable(path):
                found.add(path)
            else:
                logger.debug("Skipping %s: not a Markdown or YAML file", path)
    return sorted(found)


def format_path(path: Path, options: FormatOptions) -> FileOutcome:
    """Format one file without writing anything.

    Errors are captured in the returned outcome rather than raised, so this
    can run in a worker process.
    """
    try:
        result = format_file(path, options)
    except DapperError as e:
        return FileOutcome(path=path, result=ProcessResult.ERROR, error=str(e))
    except Exception as e:
        return FileOutcome(path=path, result=ProcessResult.ERROR, error=f"{type(e).__name__}: {e}")

    status = ProcessResult.CHANGED if result.changed else ProcessResult.UNCHANGED
    return FileOutcome(path=path, result=status, formatted=result.formatted)


def emit_outcome(outcome: FileOutcome, mode: OutputMode, stdout: TextIO) -> ProcessResult:
    """Write or print a formatted file according to the output mode.

    Parameters
    ----------
    outcome : FileOutcome
        Result of :func:`format_path`
    mode : {'write', 'show', 'json', 'none'}
        ``write`` rewrites changed files in place, ``show`` prints the
        formatted content, ``json`` prints one JSON object per file and
        ``none`` only reports
    stdout : TextIO
        Stream for ``show``/``json`` output and ``write`` notices

    Returns
    -------
    ProcessResult
        The outcome's result, or ERROR if writing the file failed

    """
    if outcome.result is ProcessResult.ERROR or outcome.formatted is None:
        logger.error('Error formatting "%s": %s', outcome.path, outcome.error)
        return ProcessResult.ERROR

    if mode == "write":
        if outcome.result is ProcessResult.CHANGED:
            try:
                with open(outcome.path, "w", encoding="utf-8", newline="") as handle:
                    handle.write(outcome.formatted)
            except OSError as e:
                logger.error('Error writing "%s": %s', outcome.path, e)
                return ProcessResult.ERROR
            print(f"Formatted {outcome.path}", file=stdout)
    elif mode == "show":
        stdout.write(outcome.formatted)
    elif mode == "json":
        print(json.dumps({"path": str(outcome.path), "source": outcome.formatted}), file=stdout)
    else:
        logger.debug("%s: %s", outcome.path, outcome.result.value)

    return outcome.result


def process_file(path: Path, options: FormatOptions, mode: OutputMode, stdout: TextIO) -> ProcessResult:
    """Format one file and produce its output."""
    return emit_outcome(format_path(path, options), mode, stdout)


def _format_all(files: List[Path], options: FormatOptions, parallel: int) -> List[FileOutcome]:
    if parallel == 1 or len(files) <= 1:
        return [format_path(path, options) for path in files]

    max_workers = parallel if parallel > 0 else os.cpu_count()
    logger.debug("Formatting %d files with %s workers", len(files), max_workers)
    outcomes: dict[Path, FileOutcome] = {}
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(format_path, path, options): path for path in files}
        for future in as_completed(futures):
            outcomes[futures[future]] = future.result()
    return [outcomes[path] for path in files]


def process_paths(
    paths: Iterable[Union[str, Path]],
    options: FormatOptions,
    mode: OutputMode,
    stdout: TextIO,
    parallel: int = 1,
) -> RunSummary:
    """Format every file under ``paths`` and produce its output.

    Parameters
    ----------
    paths : iterable of str or Path
        Files and directories named on the command line
    options : FormatOptions
        Formatting options
    mode : {'write', 'show', 'json', 'none'}
        Output mode, see :func:`emit_outcome`
    stdout : TextIO
        Stream for formatted output
    parallel : int, default 1
        Number of worker processes; 1 formats in this process and 0 uses
        one worker per CPU

    Returns
    -------
    RunSummary
        Merged result and file counts. A path that does not exist makes the
        run an error.

    """
    summary = RunSummary()
    existing = []
    for raw in paths:
        if os.path.exists(raw):
            existing.append(raw)
        else:
            logger.error('"%s" not found.', raw)
            summary.add(ProcessResult.ERROR, counted=False)

    files = collect_files(existing)
    logger.info("Found %d file(s) to format", len(files))

    for outcome in _format_all(files, options, parallel):
        summary.add(emit_outcome(outcome, mode, stdout))

    return summary


__all__ = [
    "FileOutcome",
    "ProcessResult",
    "RunSummary",
    "collect_files",
    "emit_outcome",
    "format_path",
    "is_formattable",
    "process_file",
    "process_paths",
]
