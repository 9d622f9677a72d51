"""
Module: slicer.errors

Purpose:
    Exception hierarchy for the slicing pipeline. Input errors are fatal
    and raised before any output is written; slice errors are scoped to
    a single band.

Key Classes:
    - SlicerError: Base class for all slicer errors
    - InputNotFoundError: Input path does not exist
    - InputUnreadableError: Input exists but is not a usable PDF
    - SliceExtractionError: One band could not be cropped or saved
    - ConfigError: Invalid slicing configuration

Used By:
    - slicer.pipeline: Raises input and slice errors
    - slicer.config: Raises ConfigError
    - label_slicer.cli: Maps errors to exit codes
"""

from __future__ import annotations

from typing import Optional


class SlicerError(Exception):
    """Base class for errors raised by the slicer."""
    pass


class InputNotFoundError(SlicerError, FileNotFoundError):
    """The input PDF path does not exist."""
    pass


class InputUnreadableError(SlicerError, ValueError):
    """The input path exists but cannot be opened as a PDF with pages."""
    pass


class ConfigError(SlicerError, ValueError):
    """Slicing configuration is invalid or could not be loaded."""
    pass


class SliceExtractionError(SlicerError):
    """
    A single candidate slice could not be cropped or persisted.

    Attributes:
        page_index: 0-indexed source page of the failed slice.
        index: Candidate slice sequence number (1-based).
    """

    def __init__(self, message: str, *, page_index: int, index: int, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.page_index = page_index
        self.index = index
        self.cause = cause
