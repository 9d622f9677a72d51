"""
Module: slicer.detection

Purpose:
    Label detection for persisted slice documents. Reads the text layer
    of a slice, finds label codes and decides whether the slice carries
    a label not seen before in this run.

Key Functions:
    - find_label_codes(): All label codes in a text, left to right
    - claim_new_label(): First code not yet in the ledger (records it)
    - read_slice_text(): Visible text of a persisted slice
    - detect_new_label(): Novel code of a slice file, or None
    - detect_label(): Keep/reject decision for a slice file

Dependencies:
    - fitz (PyMuPDF): Text extraction
    - re: Label pattern matching

Used By:
    - slicer.pipeline: One detection per candidate slice
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Union

import fitz

from .config import DEFAULT_LABEL_PATTERN
from .ledger import SeenLabels

logger = logging.getLogger(__name__)

LABEL_PATTERN = re.compile(DEFAULT_LABEL_PATTERN)


def find_label_codes(text: str, pattern: Union[str, Pattern[str]] = LABEL_PATTERN) -> List[str]:
    """
    Find all non-overlapping label codes in ``text``, in order.

    Example:
        >>> find_label_codes("to: *ST123R4TABCD 5678* ref")
        ['*ST123R4TABCD 5678*']
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return [m.group(0) for m in pattern.finditer(text)]


def claim_new_label(codes: Iterable[str], seen: SeenLabels) -> Optional[str]:
    """
    Return the first code not already in ``seen``, adding it.

    Stops at the first novel code; later codes in ``codes`` are not
    recorded even if they are also new. Returns None and leaves
    ``seen`` unchanged if every code was seen before.
    """
    for code in codes:
        if seen.add(code):
            return code
    return None


def read_slice_text(path: Path) -> str:
    """
    Extract the visible text of a persisted slice PDF.

    Text is limited to each page's rectangle, which is derived from the
    slice's page boxes, so content outside the crop window is ignored.

    Args:
        path: Path to a slice PDF.

    Returns:
        Concatenated page text, empty string if the file cannot be read.
    """
    try:
        with fitz.open(path) as doc:
            return "".join(page.get_text("text", clip=page.rect) or "" for page in doc)
    except (RuntimeError, ValueError, OSError) as e:
        # fitz.FileDataError subclasses RuntimeError
        logger.warning(
            f"Failed to read text from {path.name}: {e}",
            extra={"slice_path": str(path), "error": str(e)},
        )
        return ""


def detect_new_label(
    path: Path,
    seen: SeenLabels,
    pattern: Union[str, Pattern[str]] = LABEL_PATTERN,
) -> Optional[str]:
    """
    Find the label code that makes a slice worth keeping.

    Args:
        path: Persisted slice PDF.
        seen: Ledger for this run. The returned code is added to it.
        pattern: Label-code regex.

    Returns:
        The first code on the slice not yet in ``seen``, or None for a
        blank, unreadable, unlabelled or duplicate slice.

    Example:
        >>> seen = SeenLabels()
        >>> detect_new_label(Path("TEMP_Part_1.pdf"), seen)
        '*ST123R4TABCD 5678*'
        >>> detect_new_label(Path("TEMP_Part_1.pdf"), seen) is None
        True
    """
    text = read_slice_text(path)
    if not text.strip():
        logger.debug(f"{path.name}: no text")
        return None

    codes = find_label_codes(text, pattern)
    if not codes:
        logger.debug(f"{path.name}: text found but no label code")
        return None

    code = claim_new_label(codes, seen)
    if code is None:
        logger.debug(f"{path.name}: duplicate label(s) {', '.join(codes)}")
    return code


def detect_label(
    path: Path,
    seen: SeenLabels,
    pattern: Union[str, Pattern[str]] = LABEL_PATTERN,
) -> bool:
    """True if the slice at ``path`` carries a label not yet in ``seen``."""
    return detect_new_label(path, seen, pattern) is not None
