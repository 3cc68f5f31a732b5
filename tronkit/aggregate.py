"""The synchronized RGB/IR result produced by the collector for each frame pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from tronkit.types import Frame, Rect, RoiResult


@dataclass
class Aggregate:
    """A synchronized RGB/IR pair with everything derived from it."""

    rgb: Frame
    ir: Frame
    sync_delta_us: int
    palm_roi: Optional[RoiResult] = None
    landmark_input_roi: Optional[RoiResult] = None
    landmarks: Any = None
    rgb_roi: Optional[RoiResult] = None
    camera_roi: Optional[Rect] = None
    depth_sample: Any = None
    projection: Any = None

    def pair_id(self) -> Tuple[int, int]:
        """Ids of the RGB and IR frames, identifying this pair."""
        return (self.rgb.meta.id, self.ir.meta.id)