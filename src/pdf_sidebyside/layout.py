"""Geometry for placing two pages side by side on one canvas."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in PDF points."""

    width: float
    height: float


@dataclass(frozen=True)
class Placement:
    """Where an embedded page is drawn on the output page."""

    x: float
    y: float
    width: float
    height: float

    @property
    def rect(self) -> tuple[float, float, float, float]:
        """Return ``(llx, lly, urx, ury)``."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class PairLayout:
    """Output page size plus the placement of each source page."""

    width: float
    height: float
    left: Placement
    right: Placement


def compute_pair_layout(size_a: PageSize, size_b: PageSize) -> PairLayout:
    """Lay out page A on the left and page B on the right.

    Both pages keep their native size and are top-aligned, so the shorter
    page leaves a gap at the bottom of its column.
    """
    height = max(size_a.height, size_b.height)
    width = size_a.width + size_b.width

    left = Placement(
        x=0.0,
        y=height - size_a.height,
        width=size_a.width,
        height=size_a.height,
    )
    right = Placement(
        x=size_a.width,
        y=height - size_b.height,
        width=size_b.width,
        height=size_b.height,
    )
    return PairLayout(width=width, height=height, left=left, right=right)
