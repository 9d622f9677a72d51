"""
Module: slicer.ledger

Purpose:
    Set of label codes already accepted during one pipeline run. Codes
    can only be added, so acceptance decisions are monotone in
    processing order.

Key Classes:
    - SeenLabels: Grow-only set of label codes

Used By:
    - slicer.detection: Checks and records codes
    - slicer.pipeline: One instance per run
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Set


class SeenLabels:
    """
    Grow-only set of accepted label codes.

    There is no removal operation. A new instance starts empty and
    nothing is persisted between runs.

    Example:
        >>> seen = SeenLabels()
        >>> seen.add("*ST123R4TABCD 5678*")
        True
        >>> seen.add("*ST123R4TABCD 5678*")
        False
        >>> "*ST123R4TABCD 5678*" in seen
        True
    """

    def __init__(self, codes: Optional[Iterable[str]] = None) -> None:
        self._codes: Set[str] = set(codes) if codes is not None else set()

    def __contains__(self, code: object) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __repr__(self) -> str:
        return f"SeenLabels({sorted(self._codes)!r})"

    def add(self, code: str) -> bool:
        """Insert ``code``. Returns True if it was not already present."""
        if code in self._codes:
            return False
        self._codes.add(code)
        return True

    def copy(self) -> "SeenLabels":
        """Independent snapshot with the same codes."""
        return SeenLabels(self._codes)
