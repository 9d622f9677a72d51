"""
Module: slicer.extractor

Purpose:
    Builds a standalone single-page PDF for one candidate slice. The
    source page's content stream is copied whole; only the page boxes
    change, so the visible and printable area is exactly the crop
    rectangle.

Key Functions:
    - extract_slice(): Single-page document cropped to a rectangle
    - page_size(): Unrotated width and height of a source page

Dependencies:
    - fitz (PyMuPDF): Page copying and page-box editing

Used By:
    - slicer.pipeline: One call per candidate slice
"""

from __future__ import annotations

import logging
from typing import Tuple

import fitz

from .geometry import CropRectangle

logger = logging.getLogger(__name__)

# Boxes that together define what a viewer shows and a printer prints
PAGE_BOXES = ("MediaBox", "CropBox", "TrimBox")


def page_size(page: fitz.Page) -> Tuple[float, float]:
    """
    Get the unrotated (width, height) of a page in points.

    Uses the MediaBox because crop rectangles are written in the same
    unrotated coordinate space.
    """
    box = page.mediabox
    return box.width, box.height


def extract_slice(
    source: fitz.Document,
    page_index: int,
    rect: CropRectangle,
) -> fitz.Document:
    """
    Create an in-memory single-page document showing only ``rect``.

    The page is imported from ``source`` and its MediaBox, CropBox and
    TrimBox are all set to ``rect``. Text outside the rectangle is still
    present in the content stream but lies outside the page.

    Args:
        source: Open source document.
        page_index: 0-indexed page to copy.
        rect: Visible region in PDF user-space coordinates.

    Returns:
        New fitz.Document with exactly one page. The caller owns it and
        must close it.

    Raises:
        ValueError: If page_index is out of range or rect is empty.

    Example:
        >>> with fitz.open("labels.pdf") as src:
        ...     rect = CropRectangle(x=0, y=390.9, width=612, height=209.1)
        ...     doc = extract_slice(src, 0, rect)
        ...     doc[0].rect.height
        209.1
    """
    if not 0 <= page_index < source.page_count:
        raise ValueError(f"Page index {page_index} out of range (0..{source.page_count - 1})")
    if rect.width <= 0 or rect.height <= 0:
        raise ValueError(f"Invalid crop rectangle: {rect}")

    doc = fitz.open()
    try:
        doc.insert_pdf(source, from_page=page_index, to_page=page_index)
        xref = doc[0].xref
        box = _pdf_array(rect.as_pdf_box())
        for key in PAGE_BOXES:
            doc.xref_set_key(xref, key, box)
    except Exception:
        doc.close()
        raise

    logger.debug(f"Extracted page {page_index} band y={rect.y:.2f} h={rect.height:.2f}")
    return doc


def _pdf_array(values: Tuple[float, ...]) -> str:
    """Format numbers as a PDF array string like ``[0 390.9 612 600]``."""
    parts = []
    for v in values:
        text = f"{v:.4f}".rstrip("0").rstrip(".")
        parts.append(text if text not in ("", "-0") else "0")
    return "[" + " ".join(parts) + "]"
