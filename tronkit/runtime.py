"""The controller's main loop: ticking frames, feeding the pointer producer and sinks."""

from __future__ import annotations

import logging
import queue
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from tronkit.sinks import ComboSink

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointerInput:
    """What the pointer producer receives for each processed frame."""

    gesture: Any


class ControllerRuntime:
    """Couples a frame ticker with the pointer producer's queues and the sinks."""

    def __init__(
        self,
        ticker,
        pointer_input: "queue.Queue[PointerInput]",
        pointer_output: "queue.Queue[Any]",
        sinks: Optional[ComboSink] = None,
        pointer_sinks: Optional[ComboSink] = None,
    ) -> None:
        self.ticker = ticker
        self.pointer_input = pointer_input
        self.pointer_output = pointer_output
        self.sinks = sinks if sinks is not None else ComboSink()
        self.pointer_sinks = pointer_sinks if pointer_sinks is not None else ComboSink()

    def drain_pointer_output(self, preview_sink=None) -> bool:
        """Deliver every pending pointer output; True when there was any."""
        drained = False
        while True:
            try:
                output = self.pointer_output.get_nowait()
            except queue.Empty:
                return drained
            drained = True
            if preview_sink is not None:
                preview_sink.consume(output)
            self.pointer_sinks.consume(output)

    def process_next_frame(self, preview_sink=None) -> bool:
        """Tick once; True when a frame was processed and delivered."""
        frame = self.ticker.tick()
        if frame is None:
            return False
        try:
            self.pointer_input.put_nowait(PointerInput(gesture=frame.gesture))
        except queue.Full:
            _log.debug("controller pointer input dropped: queue full")
        if preview_sink is not None:
            preview_sink.consume(frame)
        self.sinks.consume(frame)
        return True

    def next_frame(self) -> bool:
        return self.ticker.next_frame()

    def prev_frame(self) -> bool:
        return self.ticker.prev_frame()


def run(
    runtime: ControllerRuntime,
    *,
    stop: Callable[[], bool] = lambda: False,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Drain pointer output and process frames until ``stop()`` is true."""
    while not stop():
        runtime.drain_pointer_output()
        if not runtime.process_next_frame():
            sleep(0.001)