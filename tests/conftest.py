import pytest
import sys
from pathlib import Path
from typing import Optional, Sequence

import fitz

# Add src to sys.path so we can import label_slicer
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

PAGE_WIDTH = 612
PAGE_HEIGHT = 600
BAND_HEIGHT = 209.1


def write_label_pdf(
    path: Path,
    pages: Sequence[Sequence[Optional[str]]],
    *,
    width: float = PAGE_WIDTH,
    height: float = PAGE_HEIGHT,
    band_height: float = BAND_HEIGHT,
) -> Path:
    """
    Write a PDF where each page holds one text line per band.

    ``pages`` lists, per page, the text for each band top to bottom;
    None leaves the band blank. Text sits 40pt below the band's top edge.
    """
    doc = fitz.open()
    for bands in pages:
        page = doc.new_page(width=width, height=height)
        for i, text in enumerate(bands):
            if text:
                page.insert_text((40, i * band_height + 40), text, fontsize=11)
    doc.save(path)
    doc.close()
    return path


@pytest.fixture
def label_pdf_factory(tmp_path: Path):
    """Build label PDFs inside tmp_path."""
    def _factory(pages: Sequence[Sequence[Optional[str]]], name: str = "labels.pdf", **kwargs) -> Path:
        return write_label_pdf(tmp_path / name, pages, **kwargs)
    return _factory


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output directory that does not exist yet."""
    return tmp_path / "out"
