"""Frame tickers of the hand-tracking controller: live, replay and pinch tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from tronkit.types import Frame, RoiResult


@dataclass
class ControllerFrame:
    """One processed RGB frame with everything the controller derived from it."""

    rgb: Frame
    palm_roi: Optional[RoiResult] = None
    landmark_input_roi: Optional[RoiResult] = None
    landmarks: Any = None
    landmark_motion: Any = None
    output_roi: Optional[RoiResult] = None
    gesture: Any = None


class Tick(Protocol):
    def tick(self) -> Optional[ControllerFrame]: ...

    def next_frame(self) -> bool: ...

    def prev_frame(self) -> bool: ...


class PinchTransitionTracker:
    """Reports when the pinch state of a continuously visible hand flips."""

    def __init__(self) -> None:
        self.last_pinch_state: Optional[bool] = None

    def update(self, hand_present: bool, pinch: bool) -> bool:
        if not hand_present:
            self.last_pinch_state = None
            return False
        changed = self.last_pinch_state is not None and self.last_pinch_state != pinch
        self.last_pinch_state = pinch
        return changed


class ReplayPipeline:
    """Processes one replayed frame per step, on demand.

    ``pipeline`` provides ``tick()`` and a ``source`` with ``prev_frame()``.
    """

    def __init__(self, pipeline) -> None:
        self.pipeline = pipeline
        self.pending_frame = True

    def tick(self) -> Optional[ControllerFrame]:
        if not self.pending_frame:
            return None
        self.pending_frame = False
        return self.pipeline.tick()

    def next_frame(self) -> bool:
        self.pending_frame = True
        return True

    def prev_frame(self) -> bool:
        moved = bool(self.pipeline.source.prev_frame())
        if moved:
            self.pending_frame = True
        return moved


class ControllerTicker:
    """Either a live pipeline, which cannot step, or a replay pipeline."""

    def __init__(self, pipeline, *, replay: bool = False) -> None:
        self.pipeline = pipeline
        self.is_replay = replay

    @classmethod
    def live(cls, pipeline) -> "ControllerTicker":
        return cls(pipeline, replay=False)

    @classmethod
    def replay(cls, pipeline: ReplayPipeline) -> "ControllerTicker":
        return cls(pipeline, replay=True)

    def tick(self) -> Optional[ControllerFrame]:
        return self.pipeline.tick()

    def next_frame(self) -> bool:
        return self.pipeline.next_frame() if self.is_replay else False

    def prev_frame(self) -> bool:
        return self.pipeline.prev_frame() if self.is_replay else False