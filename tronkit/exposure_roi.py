"""Finding the largest fully clipped rectangle in an IR frame for exposure control."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from tronkit.types import Frame, PixelFormat, Rect, RoiResult, Size


@dataclass(frozen=True)
class ClippedExposureRoiConfig:
    threshold: int = 250
    min_pixels: int = 16
    padding: int = 0


def _area(rect: Rect) -> int:
    return rect.size.width * rect.size.height


def largest_histogram_rect(heights: Sequence[int], bottom_y: int) -> Optional[Rect]:
    """Largest rectangle under a histogram whose bars end on row ``bottom_y``.

    The x coordinate is the column index into ``heights``.
    """
    best: Optional[Rect] = None
    stack: List[int] = []
    for i in range(len(heights) + 1):
        current = heights[i] if i < len(heights) else 0
        while stack and current < heights[stack[-1]]:
            top = stack.pop()
            height = heights[top]
            left = stack[-1] + 1 if stack else 0
            candidate = Rect(
                x=left,
                y=max(0, bottom_y + 1 - height),
                size=Size(max(0, i - left), height),
            )
            if best is None or _area(best) < _area(candidate):
                best = candidate
        stack.append(i)
    return best


def clamp_rect(rect: Rect, bounds: Size) -> Rect:
    """Intersect ``rect`` with the area ``bounds`` anchored at the origin."""
    x = min(rect.x, bounds.width)
    y = min(rect.y, bounds.height)
    width = min(rect.size.width, max(0, bounds.width - x))
    height = min(rect.size.height, max(0, bounds.height - y))
    return Rect(x, y, Size(width, height))


def padded_rect(rect: Rect, padding: int, bounds: Size) -> Rect:
    """Grow ``rect`` by ``padding`` on every side, staying within ``bounds``."""
    x0 = max(0, rect.x - padding)
    y0 = max(0, rect.y - padding)
    x1 = min(rect.x + rect.size.width + padding, bounds.width)
    y1 = min(rect.y + rect.size.height + padding, bounds.height)
    return Rect(x0, y0, Size(max(0, x1 - x0), max(0, y1 - y0)))


class ClippedExposureRoiDetector:
    """Locates the largest solid block of saturated pixels, optionally within a candidate."""

    def __init__(self, config: ClippedExposureRoiConfig = ClippedExposureRoiConfig()) -> None:
        self.config = config

    def detect(self, frame: Frame, candidate: Optional[RoiResult]) -> Optional[RoiResult]:
        if frame.format is not PixelFormat.GRAY8:
            raise ValueError(
                f"clipped exposure ROI requires Gray8 input, got {frame.format.name}"
            )
        bounds = frame.meta.size
        search = (
            clamp_rect(candidate.rect, bounds)
            if candidate is not None
            else Rect(0, 0, bounds)
        )

        rows = list(frame.rows())
        heights = [0] * search.size.width
        clipped = 0
        best: Optional[Rect] = None
        for y in range(search.y, search.y + search.size.height):
            row = rows[y]
            for xi, x in enumerate(range(search.x, search.x + search.size.width)):
                if row[x] >= self.config.threshold:
                    clipped += 1
                    heights[xi] += 1
                else:
                    heights[xi] = 0
            row_best = largest_histogram_rect(heights, y)
            if row_best is not None and (best is None or _area(best) < _area(row_best)):
                best = row_best

        if clipped < self.config.min_pixels or best is None:
            return None

        return RoiResult(
            rect=padded_rect(
                Rect(search.x + best.x, best.y, best.size),
                self.config.padding,
                bounds,
            ),
            oriented_box=None,
        )