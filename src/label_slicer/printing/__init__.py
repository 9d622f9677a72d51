"""Printer and input-file collaborators for the slicer.

Dialogs are imported lazily so the dispatcher works without a display.
"""

from __future__ import annotations

from .dispatcher import (
    DEFAULT_PRINT_TIMEOUT,
    PrintOutcome,
    PrintReport,
    print_file,
    print_files,
)

__all__ = [
    "DEFAULT_PRINT_TIMEOUT",
    "PrintOutcome",
    "PrintReport",
    "print_file",
    "print_files",
]
