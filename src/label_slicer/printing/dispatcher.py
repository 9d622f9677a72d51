"""
Module: printing.dispatcher

Purpose:
    Sends slice PDFs to a printer. Each file is dispatched once and the
    outcome is recorded per file, so one failed job never stops the rest.

Key Functions:
    - print_file(): Dispatch one PDF, returning (success, error)
    - print_files(): Dispatch a batch and collect a PrintReport

Key Classes:
    - PrintOutcome: Result for one file
    - PrintReport: Results for a batch

Dependencies:
    - subprocess: ``lp`` on macOS and Linux
    - os.startfile: Shell ``printto`` verb on Windows

Used By:
    - label_slicer.cli: Prints accepted slices
"""

from __future__ import annotations

import logging
import os
import platform
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PRINT_TIMEOUT = 10.0


@dataclass(frozen=True)
class PrintOutcome:
    """
    Outcome of dispatching one file.

    Attributes:
        path: File that was sent.
        success: True if the print command was accepted.
        error: Error message when success is False.
    """
    path: Path
    success: bool
    error: Optional[str] = None


@dataclass
class PrintReport:
    """Per-file outcomes for a batch of print jobs, in dispatch order."""
    printer: str
    outcomes: List[PrintOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[PrintOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> List[PrintOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


def print_file(
    path: Path,
    printer: str,
    *,
    timeout: float = DEFAULT_PRINT_TIMEOUT,
) -> Tuple[bool, Optional[str]]:
    """
    Send a PDF to the named printer.

    Windows hands the file to the shell ``printto`` verb of the default
    PDF handler. macOS and Linux submit it with ``lp -d <printer>``.

    Args:
        path: PDF to print.
        printer: Printer name as reported by the print dialog.
        timeout: Seconds to wait for ``lp`` to accept the job. Not applied
            on Windows: ``os.startfile`` returns as soon as the handler is
            launched and gives no completion status.

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    if not path.exists():
        return False, f"File does not exist: {path}"

    system = platform.system()
    try:
        if system == "Windows":
            os.startfile(str(path), "printto", f'"{printer}"')
        else:
            subprocess.run(
                ["lp", "-d", printer, str(path)],
                check=True,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        return True, None
    except FileNotFoundError:
        return False, f"Print command not found for {system}"
    except subprocess.TimeoutExpired:
        return False, f"Printer did not accept job within {timeout:g}s"
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        return False, f"lp failed: {detail}"
    except OSError as e:
        return False, f"Failed to print: {e}"


def print_files(
    paths: Iterable[Path],
    printer: str,
    *,
    timeout: float = DEFAULT_PRINT_TIMEOUT,
) -> PrintReport:
    """
    Print each file in order, collecting one outcome per file.

    Failures are logged and recorded; they never raise or stop later
    files from being attempted.

    Example:
        >>> report = print_files(result.paths, "Zebra_ZD420")
        >>> report.all_succeeded
        True
    """
    report = PrintReport(printer=printer)
    for path in paths:
        logger.info(f"Printing {path.name} to printer: {printer}")
        success, error = print_file(path, printer, timeout=timeout)
        if not success:
            logger.error(
                f"Error printing file {path}: {error}",
                extra={"file_path": str(path), "printer": printer, "error": error},
            )
        report.outcomes.append(PrintOutcome(path=path, success=success, error=error))
    return report
