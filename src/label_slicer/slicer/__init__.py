"""
Module: slicer

Purpose:
    Slicing pipeline for multi-page shipping-label PDFs. Cuts pages into
    fixed-height bands, keeps the bands whose text layer carries a label
    code not seen earlier in the run, and writes one PDF per kept band.

Key Functions:
    - split_label_pdf(): Main entry point for slicing
    - slice_rects(): Band geometry for one page
    - detect_label(): Keep/reject decision for one slice file

Key Classes:
    - SliceConfig: Configuration for slicing settings
    - SliceResult: Container for slicing output
    - SeenLabels: Label codes accepted so far in a run

Dependencies:
    - fitz (PyMuPDF): Page copying, page boxes and text extraction

Used By:
    - label_slicer.cli: Command-line entry point
"""

from .config import SliceConfig, load_config
from .detection import detect_label, detect_new_label, find_label_codes
from .errors import (
    ConfigError,
    InputNotFoundError,
    InputUnreadableError,
    SliceExtractionError,
    SlicerError,
)
from .geometry import CropRectangle, slice_rects
from .ledger import SeenLabels
from .pipeline import OutputRecord, SliceResult, split_label_pdf

__all__ = [
    "split_label_pdf",
    "slice_rects",
    "detect_label",
    "detect_new_label",
    "find_label_codes",
    "load_config",
    "SliceConfig",
    "SliceResult",
    "OutputRecord",
    "CropRectangle",
    "SeenLabels",
    "SlicerError",
    "ConfigError",
    "InputNotFoundError",
    "InputUnreadableError",
    "SliceExtractionError",
]
