"""
Module: slicer.pipeline

Purpose:
    Main pipeline orchestrator for label slicing. Cuts every page of a
    shipping-label PDF into fixed-height bands, keeps each band that
    carries a label code not seen earlier in the run, and writes one PDF
    per kept band.

Key Functions:
    - split_label_pdf(): Main entry point for slicing

Key Classes:
    - OutputRecord: One accepted slice
    - SliceResult: Container for pipeline output

Dependencies:
    - fitz (PyMuPDF): PDF access
    - slicer.geometry: Band rectangles
    - slicer.extractor: Slice documents
    - slicer.detection: Label detection

Used By:
    - label_slicer.cli: Command-line slicing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import fitz

from .config import SliceConfig
from .detection import detect_new_label
from .errors import InputNotFoundError, InputUnreadableError, SliceExtractionError
from .extractor import extract_slice, page_size
from .geometry import CropRectangle, slice_rects
from .ledger import SeenLabels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputRecord:
    """
    One accepted slice written to disk.

    Attributes:
        path: Final path of the slice PDF.
        index: Candidate slice sequence number (1-based, counts rejected
            slices too).
        page_index: 0-indexed source page.
        rect: Visible region on the source page.
        label: Label code that caused the slice to be kept.
    """
    path: Path
    index: int
    page_index: int
    rect: CropRectangle
    label: str


@dataclass
class SliceResult:
    """
    Result of slicing a PDF.

    Attributes:
        records: Accepted slices in page order, then top to bottom.
        candidate_count: Number of candidate slices examined.
        warnings: Messages for slices skipped because of errors.
        output_dir: Directory where slices were written.
    """
    records: List[OutputRecord]
    candidate_count: int
    output_dir: Path
    warnings: List[str] = field(default_factory=list)

    @property
    def paths(self) -> List[Path]:
        return [record.path for record in self.records]

    @property
    def accepted_count(self) -> int:
        return len(self.records)

    @property
    def rejected_count(self) -> int:
        return self.candidate_count - len(self.records)


def split_label_pdf(
    pdf_path: Path,
    output_dir: Path,
    *,
    config: Optional[SliceConfig] = None,
    seen_labels: Optional[SeenLabels] = None,
) -> SliceResult:
    """
    Split a label PDF into one PDF per unique label.

    Pipeline, for each page in order and each band top to bottom:
    1. Build a single-page slice document cropped to the band
    2. Save it as a temporary file in ``output_dir``
    3. Detect a label code not seen earlier in the run
    4. Rename the temporary file to its final name, or delete it

    Candidate numbering runs across the whole document and counts
    rejected bands, so final names have gaps.

    Args:
        pdf_path: Path to the input PDF.
        output_dir: Directory for output (created if needed).
        config: Optional slicing configuration.
        seen_labels: Optional ledger to use for this run. A fresh one is
            created if omitted.

    Returns:
        SliceResult with the accepted records in encounter order.

    Raises:
        InputNotFoundError: If pdf_path doesn't exist.
        InputUnreadableError: If the PDF can't be opened or has no pages.
        SliceExtractionError: If a band fails and
            ``config.skip_failed_slices`` is False.

    Example:
        >>> result = split_label_pdf(Path("labels.pdf"), Path("out"))
        >>> [r.path.name for r in result.records]
        ['TextLabel_Part_1.pdf', 'TextLabel_Part_4.pdf']
    """
    config = config or SliceConfig()
    seen = seen_labels if seen_labels is not None else SeenLabels()
    records: List[OutputRecord] = []
    warnings: List[str] = []
    index = 1

    doc = _open_input(pdf_path)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        for page_index in range(doc.page_count):
            width, height = page_size(doc[page_index])
            rects = slice_rects(height, width, config.band_height)
            logger.debug(f"Page {page_index + 1}: {width:.1f}x{height:.1f}pt, {len(rects)} bands")

            for rect in rects:
                try:
                    record = _process_slice(doc, page_index, rect, index, output_dir, config, seen)
                except SliceExtractionError as e:
                    if not config.skip_failed_slices:
                        raise
                    msg = f"Skipped slice {index} on page {page_index + 1}: {e}"
                    logger.warning(
                        msg,
                        extra={
                            "pdf_name": pdf_path.name,
                            "page_number": page_index + 1,
                            "slice_index": index,
                            "error": str(e.cause or e),
                        },
                    )
                    warnings.append(msg)
                    record = None

                if record is not None:
                    records.append(record)
                index += 1
    finally:
        doc.close()

    candidate_count = index - 1
    logger.info(
        f"Completed slicing {pdf_path.name}: {len(records)} of {candidate_count} slices kept",
        extra={
            "pdf_name": pdf_path.name,
            "candidate_count": candidate_count,
            "accepted_count": len(records),
        },
    )

    return SliceResult(
        records=records,
        candidate_count=candidate_count,
        output_dir=output_dir,
        warnings=warnings,
    )


def _open_input(pdf_path: Path) -> fitz.Document:
    """Open the input PDF, mapping failures to input errors."""
    if not pdf_path.exists():
        raise InputNotFoundError(f"PDF not found: {pdf_path}")
    if not pdf_path.is_file():
        raise InputUnreadableError(f"Not a file: {pdf_path}")

    try:
        doc = fitz.open(pdf_path)
    except (RuntimeError, ValueError, OSError) as e:
        raise InputUnreadableError(f"Cannot open {pdf_path.name}: {e}") from e

    if not doc.is_pdf or doc.page_count == 0:
        reason = "not a PDF" if not doc.is_pdf else "no pages"
        doc.close()
        raise InputUnreadableError(f"Cannot slice {pdf_path.name}: {reason}")
    return doc


def _process_slice(
    doc: fitz.Document,
    page_index: int,
    rect: CropRectangle,
    index: int,
    output_dir: Path,
    config: SliceConfig,
    seen: SeenLabels,
) -> Optional[OutputRecord]:
    """
    Write, detect and keep or discard one candidate slice.

    Returns:
        OutputRecord if the slice was kept, None if it was discarded.

    Raises:
        SliceExtractionError: If the slice can't be built, saved or
            moved to its final name. A label claimed before a failed
            move stays in the ledger.
    """
    temp_path = output_dir / config.temp_name(index)

    try:
        slice_doc = extract_slice(doc, page_index, rect)
        try:
            slice_doc.save(temp_path)
        finally:
            slice_doc.close()
    except (RuntimeError, ValueError, OSError) as e:
        temp_path.unlink(missing_ok=True)
        raise SliceExtractionError(
            f"Failed to extract slice {index}: {e}",
            page_index=page_index,
            index=index,
            cause=e,
        ) from e

    label = detect_new_label(temp_path, seen, config.label_pattern)
    if label is None:
        temp_path.unlink(missing_ok=True)
        return None

    final_path = output_dir / config.final_name(index)
    try:
        # replace() overwrites an existing file from an earlier run
        temp_path.replace(final_path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise SliceExtractionError(
            f"Failed to save slice {index} as {final_path.name}: {e}",
            page_index=page_index,
            index=index,
            cause=e,
        ) from e
    logger.info(f"Saved: {final_path}")

    return OutputRecord(
        path=final_path,
        index=index,
        page_index=page_index,
        rect=rect,
        label=label,
    )
