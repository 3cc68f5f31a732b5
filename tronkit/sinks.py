"""Composable sinks: fan-out, on/off switch and camera exposure ROI control."""

from __future__ import annotations

import time
from typing import Callable, Iterable, List, Optional, Protocol

from tronkit.types import Rect


class Sink(Protocol):
    def consume(self, item) -> object: ...


class CameraRoiControl(Protocol):
    def set_roi_rect(self, rect: Rect) -> None: ...

    def roi_rect(self) -> Rect: ...


class ComboSink:
    """Hands every item to each contained sink in the order they were added."""

    def __init__(self, sinks: Iterable[Sink] = ()) -> None:
        self._sinks: List[Sink] = list(sinks)

    def __len__(self) -> int:
        return len(self._sinks)

    def push(self, sink: Sink) -> None:
        self._sinks.append(sink)

    def consume(self, item) -> None:
        for sink in self._sinks:
            sink.consume(item)


class ToggleSink:
    """Forwards items to an inner sink only while enabled."""

    def __init__(self, inner: Sink, enabled: bool = False) -> None:
        self.inner = inner
        self.enabled = enabled

    def toggle_enabled(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def consume(self, item) -> None:
        if self.enabled:
            self.inner.consume(item)


class CameraRoiSink:
    """Pushes an aggregate's camera ROI to the camera, skipping repeats and throttling."""

    def __init__(
        self,
        control: CameraRoiControl,
        update_interval: Optional[float] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.control = control
        self.update_interval = update_interval
        self._clock = clock
        self.last_requested_rect: Optional[Rect] = None
        self.actual_rect: Optional[Rect] = None
        self.last_update: Optional[float] = None

    def consume(self, aggregate) -> None:
        rect = aggregate.camera_roi
        if rect is None or rect == self.last_requested_rect:
            return
        if (
            self.update_interval is not None
            and self.last_update is not None
            and self._clock() - self.last_update < self.update_interval
        ):
            return

        self.control.set_roi_rect(rect)
        self.actual_rect = self.control.roi_rect()
        self.last_requested_rect = rect
        self.last_update = self._clock()