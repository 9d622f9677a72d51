"""
Module: printing.dialogs

Purpose:
    Native dialogs for choosing the input PDF and the target printer.
    Both return None when the user cancels; the slicer never depends on
    them directly.

Key Functions:
    - select_input_file(): Open-file dialog filtered to PDFs
    - select_printer(): Print dialog, returns the chosen printer name
    - available_printers(): Names of installed printers

Dependencies:
    - PySide6.QtWidgets: QApplication, QFileDialog
    - PySide6.QtPrintSupport: QPrintDialog, QPrinter, QPrinterInfo

Used By:
    - label_slicer.cli: Interactive input and printer selection
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

PDF_FILTER = "PDF files (*.pdf)"
INPUT_DIALOG_TITLE = "Select PDF Document"


def _ensure_app():
    """Return the running QApplication, creating one if needed."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv[:1])
    return app


def select_input_file(parent=None, start_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Ask the user for one PDF file.

    Args:
        parent: Optional parent widget.
        start_dir: Directory the dialog opens in.

    Returns:
        Selected path, or None if the dialog was cancelled.
    """
    from PySide6.QtWidgets import QFileDialog

    _ensure_app()
    filename, _ = QFileDialog.getOpenFileName(
        parent,
        INPUT_DIALOG_TITLE,
        str(start_dir) if start_dir else "",
        PDF_FILTER,
    )
    if not filename:
        logger.debug("Input selection cancelled")
        return None
    return Path(filename)


def select_printer(parent=None) -> Optional[str]:
    """
    Show the system print dialog and return the chosen printer.

    Page-range and print-to-file options are disabled; only the printer
    choice is used.

    Returns:
        Printer name, or None if the dialog was cancelled.
    """
    from PySide6.QtPrintSupport import QAbstractPrintDialog, QPrintDialog, QPrinter
    from PySide6.QtWidgets import QDialog

    _ensure_app()
    printer = QPrinter()
    dialog = QPrintDialog(printer, parent)
    dialog.setOption(QAbstractPrintDialog.PrintDialogOption.PrintPageRange, False)
    dialog.setOption(QAbstractPrintDialog.PrintDialogOption.PrintToFile, False)

    if dialog.exec() != QDialog.DialogCode.Accepted:
        logger.debug("Printer selection cancelled")
        return None

    name = printer.printerName()
    return name or None


def available_printers() -> List[str]:
    """Names of the printers known to the system."""
    from PySide6.QtPrintSupport import QPrinterInfo

    _ensure_app()
    return list(QPrinterInfo.availablePrinterNames())
