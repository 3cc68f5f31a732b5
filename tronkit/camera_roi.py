"""Driving a camera's exposure ROI from detected regions, with de-duplication and throttling."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from tronkit.exposure_roi import clamp_rect
from tronkit.types import Rect, RoiResult, Size


class CameraRoiControl(Protocol):
    def set_roi_rect(self, rect: Rect) -> None: ...

    def roi_rect(self) -> Rect: ...


class RoiFollower(Protocol):
    def process(
        self,
        roi: Optional[RoiResult],
        allowed_bounds: Optional[Rect],
        source_size: Size,
        target_size: Size,
    ) -> Optional[Rect]: ...


@dataclass(frozen=True)
class CameraRoiConfig:
    """Minimum ROI edge and minimum seconds between updates (None: no throttling)."""

    min_edge: int
    update_interval: Optional[float] = None


def clamp_to_frame(rect: Rect, frame_size: Size) -> Rect:
    """Restrict ``rect`` to the frame area."""
    return clamp_rect(rect, frame_size)


class CameraRoiDriver:
    """Turns ROIs into camera exposure rectangles and pushes them to the camera.

    ``follow_factory`` builds the ROI-following processor from the configured
    minimum edge.
    """

    def __init__(
        self,
        config: CameraRoiConfig,
        control: CameraRoiControl,
        follow_factory: Callable[[int], RoiFollower],
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.control = control
        self._follow = follow_factory(config.min_edge)
        self._clock = clock
        self._actual_rect: Optional[Rect] = None
        self._last_requested_rect: Optional[Rect] = None
        self._last_update: Optional[float] = None

    def current_rect(self) -> Optional[Rect]:
        """The rectangle the camera reported after the last update."""
        return self._actual_rect

    def update(
        self,
        roi: Optional[RoiResult],
        allowed_bounds: Optional[Rect],
        frame_size: Size,
    ) -> None:
        if roi is None:
            return
        bounds = (
            clamp_to_frame(allowed_bounds, frame_size)
            if allowed_bounds is not None
            else Rect(0, 0, frame_size)
        )
        rect = self._follow.process(roi, bounds, frame_size, frame_size)
        if rect is None or rect == self._last_requested_rect:
            return
        if (
            self.config.update_interval is not None
            and self._last_update is not None
            and self._clock() - self._last_update < self.config.update_interval
        ):
            return

        self.control.set_roi_rect(rect)
        self._actual_rect = self.control.roi_rect()
        self._last_requested_rect = rect
        self._last_update = self._clock()