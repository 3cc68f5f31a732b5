import queue

from tronkit.runtime import ControllerRuntime, PointerInput, run
from tronkit.sinks import ComboSink


class Recorder:
    def __init__(self):
        self.items = []

    def consume(self, item):
        self.items.append(item)


class FakeFrame:
    def __init__(self, gesture):
        self.gesture = gesture


class FakeTicker:
    def __init__(self, frames):
        self.frames = list(frames)
        self.steps = []

    def tick(self):
        return self.frames.pop(0) if self.frames else None

    def next_frame(self):
        self.steps.append("next")
        return True

    def prev_frame(self):
        self.steps.append("prev")
        return False


def make_runtime(frames, input_size=8):
    sink, pointer_sink = Recorder(), Recorder()
    runtime = ControllerRuntime(
        FakeTicker(frames),
        queue.Queue(maxsize=input_size),
        queue.Queue(),
        ComboSink([sink]),
        ComboSink([pointer_sink]),
    )
    return runtime, sink, pointer_sink


def test_drain_delivers_outputs_in_order():
    runtime, _, pointer_sink = make_runtime([])
    preview = Recorder()
    for output in ("a", "b", "c"):
        runtime.pointer_output.put(output)
    assert runtime.drain_pointer_output(preview) is True
    assert preview.items == ["a", "b", "c"]
    assert pointer_sink.items == ["a", "b", "c"]
    assert runtime.drain_pointer_output(preview) is False


def test_process_without_frame():
    runtime, sink, _ = make_runtime([])
    assert runtime.process_next_frame() is False
    assert runtime.pointer_input.empty()
    assert sink.items == []


def test_process_frame_feeds_pointer_and_sinks():
    frame = FakeFrame("pinch")
    runtime, sink, _ = make_runtime([frame])
    preview = Recorder()
    assert runtime.process_next_frame(preview) is True
    assert runtime.pointer_input.get_nowait() == PointerInput(gesture="pinch")
    assert preview.items == [frame]
    assert sink.items == [frame]


def test_full_pointer_input_drops_but_still_delivers():
    frame = FakeFrame("open")
    runtime, sink, _ = make_runtime([frame], input_size=1)
    runtime.pointer_input.put(PointerInput(gesture="old"))
    assert runtime.process_next_frame() is True
    assert runtime.pointer_input.get_nowait() == PointerInput(gesture="old")
    assert runtime.pointer_input.empty()
    assert sink.items == [frame]


def test_stepping_delegates_to_ticker():
    runtime, _, _ = make_runtime([])
    assert runtime.next_frame() is True
    assert runtime.prev_frame() is False
    assert runtime.ticker.steps == ["next", "prev"]


def test_run_loops_until_stopped():
    frames = [FakeFrame(i) for i in range(2)]
    runtime, sink, pointer_sink = make_runtime(frames)
    runtime.pointer_output.put("move")
    checks = iter([False, False, False, True])
    sleeps = []
    run(runtime, stop=lambda: next(checks), sleep=sleeps.append)
    assert sink.items == frames
    assert pointer_sink.items == ["move"]
    assert len(sleeps) == 1