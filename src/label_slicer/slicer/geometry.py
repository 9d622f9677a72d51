"""
Module: slicer.geometry

Purpose:
    Band geometry for a page. Splits a page into fixed-height crop
    rectangles, top band first, in PDF user-space coordinates (origin
    at the bottom-left corner).

Key Functions:
    - slice_rects(): Crop rectangles covering one page

Key Classes:
    - CropRectangle: Immutable visible region of one slice

Used By:
    - slicer.pipeline: Per-page candidate slices
    - slicer.extractor: Page boxes of a slice document
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

# Remainders smaller than this are float residue, not a band
_EPSILON = 1e-6


@dataclass(frozen=True)
class CropRectangle:
    """
    Visible region of a slice in PDF points.

    ``y`` is measured from the bottom edge of the page, so the top band
    of a page has the largest ``y``.

    Attributes:
        x: Left edge (always 0 for bands).
        y: Bottom edge.
        width: Band width (the page width).
        height: Band height; the last band on a page may be shorter.

    Example:
        >>> rect = CropRectangle(x=0, y=390.9, width=612, height=209.1)
        >>> rect.top
        600.0
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.y + self.height

    def as_pdf_box(self) -> Tuple[float, float, float, float]:
        """(x0, y0, x1, y1) as written to a MediaBox array."""
        return (self.x, self.y, self.x + self.width, self.top)

    def overlaps(self, other: "CropRectangle") -> bool:
        """True if the two rectangles share a region of positive area."""
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.top
            and other.y < self.top
        )


def slice_rects(page_height: float, page_width: float, band_height: float) -> List[CropRectangle]:
    """
    Compute the crop rectangles covering a page, top band first.

    Walks down from the top of the page in steps of ``band_height``.
    The final band is clipped at the page bottom and may be shorter.

    Args:
        page_height: Page height in points.
        page_width: Page width in points.
        band_height: Nominal band height in points.

    Returns:
        Rectangles ordered top to bottom. Empty if page_height <= 0.

    Raises:
        ValueError: If band_height is not positive.

    Example:
        >>> [round(r.height, 1) for r in slice_rects(600, 612, 209.1)]
        [209.1, 209.1, 181.8]
    """
    if band_height <= 0:
        raise ValueError(f"band_height must be positive, got {band_height}")

    rects: List[CropRectangle] = []
    remaining = page_height
    while remaining > _EPSILON:
        this_height = min(band_height, remaining)
        crop_y = remaining - this_height
        rects.append(CropRectangle(x=0, y=crop_y, width=page_width, height=this_height))
        remaining -= band_height
    return rects
