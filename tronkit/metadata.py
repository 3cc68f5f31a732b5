"""Per-camera frame statistics and the playground's metadata record."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from tronkit.types import OwnedFrame, SensorKind


def _micros(seconds: float) -> int:
    """Whole microseconds in a non-negative span of seconds."""
    return int(round(seconds * 1e9)) // 1000


@dataclass(frozen=True)
class CameraMetadata:
    """What is known about the latest frame of one camera."""

    sensor: Optional[SensorKind] = None
    frame_id: Optional[int] = None
    sequence: Optional[int] = None
    fps: Optional[float] = None
    frame_delta_us: Optional[int] = None
    age_us: Optional[int] = None
    camera_monotonic_us: Optional[int] = None


@dataclass(frozen=True)
class PlaygroundMetadata:
    """Statistics of both cameras and the offset between their timestamps."""

    rgb: CameraMetadata = field(default_factory=CameraMetadata)
    ir: CameraMetadata = field(default_factory=CameraMetadata)
    rgb_ir_delta_us: Optional[int] = None


@dataclass
class PlaygroundPipelineConfig:
    """Tunables of the playground processing pipeline."""

    roi_threshold: int = 32
    exposure_roi_threshold: int = 250
    rgb_mediapipe_model: Optional[str] = None
    rgb_mediapipe_min_score: float = 0.75
    rgb_mediapipe_box_scale: float = 2.6


class CameraStatsProcessor:
    """Tracks frame-to-frame interval and a once-a-second frame rate for a camera.

    Times are monotonic seconds, as in ``FrameTimestamp.received_at``.
    """

    def __init__(self, started_at: Optional[float] = None) -> None:
        self._last_frame_id: Optional[int] = None
        self._last_camera_monotonic_us: Optional[int] = None
        self._last_received_at: Optional[float] = None
        self._frame_delta_us: Optional[int] = None
        self._fps: Optional[float] = None
        self._fps_window_started_at = time.monotonic() if started_at is None else started_at
        self._fps_window_frames = 0

    def _frame_delta(self, frame: OwnedFrame) -> Optional[int]:
        timestamp = frame.meta.timestamp
        if self._last_camera_monotonic_us is not None and timestamp.camera_monotonic_us is not None:
            return timestamp.camera_monotonic_us - self._last_camera_monotonic_us
        if self._last_received_at is None:
            return None
        elapsed = timestamp.received_at - self._last_received_at
        if elapsed < 0:
            return None
        return _micros(elapsed)

    def process(self, frame: Optional[OwnedFrame], now: float) -> CameraMetadata:
        """Update the statistics with ``frame`` (possibly None) as seen at ``now``."""
        if frame is None:
            return CameraMetadata(fps=self._fps, frame_delta_us=self._frame_delta_us)

        meta = frame.meta
        if self._last_frame_id != meta.id:
            self._frame_delta_us = self._frame_delta(frame)
            self._last_frame_id = meta.id
            self._last_camera_monotonic_us = meta.timestamp.camera_monotonic_us
            self._last_received_at = meta.timestamp.received_at
            self._fps_window_frames += 1

        window_elapsed = max(0.0, now - self._fps_window_started_at)
        if window_elapsed >= 1.0:
            self._fps = self._fps_window_frames / window_elapsed
            self._fps_window_started_at = now
            self._fps_window_frames = 0

        return CameraMetadata(
            sensor=meta.sensor,
            frame_id=meta.id,
            sequence=meta.sequence,
            fps=self._fps,
            frame_delta_us=self._frame_delta_us,
            age_us=_micros(max(0.0, now - meta.timestamp.received_at)),
            camera_monotonic_us=meta.timestamp.camera_monotonic_us,
        )


def camera_delta_us(rgb: Optional[OwnedFrame], ir: Optional[OwnedFrame]) -> Optional[int]:
    """RGB minus IR camera timestamp, when both frames carry one."""
    if rgb is None or ir is None:
        return None
    rgb_us = rgb.meta.timestamp.camera_monotonic_us
    ir_us = ir.meta.timestamp.camera_monotonic_us
    if rgb_us is None or ir_us is None:
        return None
    return rgb_us - ir_us