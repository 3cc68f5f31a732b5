"""Pointer events, their on-screen overlay geometry and a Linux uinput virtual mouse."""

from __future__ import annotations

import enum
import math
import os
import struct
from dataclasses import dataclass
from typing import Callable, ClassVar, Iterable, List, NamedTuple, Optional, Tuple

JOYSTICK_DEADZONE_SEGMENTS = 48
JOYSTICK_MAX_LINE_COUNT = JOYSTICK_DEADZONE_SEGMENTS + 5

Color = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Point2d:
    """A 2-D point or vector in normalized frame coordinates."""

    x: float
    y: float

    ZERO: ClassVar["Point2d"]
    ONE: ClassVar["Point2d"]

    @classmethod
    def splat(cls, value: float) -> "Point2d":
        return cls(value, value)

    def __add__(self, other: "Point2d") -> "Point2d":
        return Point2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point2d") -> "Point2d":
        return Point2d(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> "Point2d":
        return Point2d(self.x * scale, self.y * scale)

    def clamp(self, low: "Point2d", high: "Point2d") -> "Point2d":
        """Component-wise clamp into [low, high]."""
        return Point2d(
            min(max(self.x, low.x), high.x),
            min(max(self.y, low.y), high.y),
        )


Point2d.ZERO = Point2d(0.0, 0.0)
Point2d.ONE = Point2d(1.0, 1.0)


class PointerEventKind(enum.Enum):
    MOVE = "move"
    DOWN = "down"
    UP = "up"
    CLICK = "click"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event; moves carry a delta and optionally an absolute position."""

    kind: PointerEventKind
    position: Optional[Point2d] = None
    delta: Point2d = Point2d.ZERO


@dataclass(frozen=True)
class PointerJoystickVisualization:
    """State of a joystick-style pointer producer, for drawing."""

    anchor: Optional[Point2d] = None
    current: Optional[Point2d] = None
    deadzone_radius: float = 0.0
    engaged: bool = False


@dataclass(frozen=True)
class ThickLine:
    """A line segment in normalized device coordinates with a pixel width and RGBA color."""

    start: Tuple[float, float]
    end: Tuple[float, float]
    width_px: float
    color: Color


def ndc(position: Point2d) -> Tuple[float, float]:
    """Map normalized frame coordinates (y down) to device coordinates (y up)."""
    return (position.x * 2.0 - 1.0, 1.0 - position.y * 2.0)


def circle_point(center: Point2d, radius: float, index: int) -> Point2d:
    """Point ``index`` of the deadzone circle's polygon."""
    angle = (index / JOYSTICK_DEADZONE_SEGMENTS) * math.tau
    return center + Point2d(math.cos(angle) * radius, math.sin(angle) * radius)


def _line(start: Point2d, end: Point2d, width_px: float, color: Color) -> ThickLine:
    return ThickLine(start=ndc(start), end=ndc(end), width_px=width_px, color=color)


def _cross(center: Point2d, radius: float, width_px: float, color: Color) -> List[ThickLine]:
    return [
        _line(center + Point2d(-radius, 0.0), center + Point2d(radius, 0.0), width_px, color),
        _line(center + Point2d(0.0, -radius), center + Point2d(0.0, radius), width_px, color),
    ]


def _pointer_cross(position: Point2d, down: bool) -> List[ThickLine]:
    if down:
        return _cross(position, 0.055, 9.0, (1.0, 0.25, 0.12, 1.0))
    return _cross(position, 0.038, 7.0, (0.1, 1.0, 0.9, 1.0))


def _joystick_lines(visualization: PointerJoystickVisualization) -> List[ThickLine]:
    lines: List[ThickLine] = []
    anchor, current = visualization.anchor, visualization.current
    if anchor is not None:
        color = (1.0, 1.0, 1.0, 0.34)
        radius = visualization.deadzone_radius
        lines.extend(
            _line(circle_point(anchor, radius, i), circle_point(anchor, radius, i + 1), 5.0, color)
            for i in range(JOYSTICK_DEADZONE_SEGMENTS)
        )
        lines.extend(_cross(anchor, 0.018, 6.0, (1.0, 0.85, 0.1, 0.95)))
    if anchor is not None and current is not None:
        lines.append(_line(anchor, current, 5.0, (1.0, 1.0, 1.0, 0.65)))
    if current is not None:
        color = (0.2, 0.75, 1.0, 0.95) if visualization.engaged else (0.65, 0.65, 0.65, 0.65)
        lines.extend(_cross(current, 0.014, 5.0, color))
    return lines


class PointerOverlay:
    """Tracks pointer state from events and produces the lines that draw it."""

    def __init__(self) -> None:
        self.position = Point2d.splat(0.5)
        self.down = False
        self.joystick: Optional[PointerJoystickVisualization] = None

    def consume_event(self, event: PointerEvent) -> None:
        kind = event.kind
        if kind is PointerEventKind.MOVE:
            if event.position is not None:
                self.position = event.position
            else:
                self.position = (self.position + event.delta).clamp(Point2d.ZERO, Point2d.ONE)
        elif kind is PointerEventKind.DOWN:
            self.down = True
        elif kind is PointerEventKind.UP:
            self.down = False
        elif kind is PointerEventKind.CANCEL:
            self.down = False
            self.joystick = None

    def set_joystick(self, visualization: PointerJoystickVisualization) -> None:
        """Show the joystick only while it has an anchor or a current point."""
        if visualization.anchor is not None or visualization.current is not None:
            self.joystick = visualization
        else:
            self.joystick = None

    def consume(self, output) -> None:
        """Accept either a pointer event or a joystick visualization."""
        if isinstance(output, PointerJoystickVisualization):
            self.set_joystick(output)
        else:
            self.consume_event(output)

    def lines(self) -> List[ThickLine]:
        lines = _joystick_lines(self.joystick) if self.joystick is not None else []
        lines.extend(_pointer_cross(self.position, self.down))
        return lines


EV_SYN = 0x00
EV_KEY = 0x01
EV_REL = 0x02
SYN_REPORT = 0
REL_X = 0x00
REL_Y = 0x01
BTN_LEFT = 0x110
BUS_VIRTUAL = 0x06


class InputEvent(NamedTuple):
    type: int
    code: int
    value: int


_INPUT_EVENT = struct.Struct("@llHHi")
_UINPUT_SETUP = struct.Struct("@HHHH80sI")


def _ioc(direction: int, number: int, size: int) -> int:
    return (direction << 30) | (size << 16) | (ord("U") << 8) | number


UI_DEV_CREATE = _ioc(0, 1, 0)
UI_DEV_DESTROY = _ioc(0, 2, 0)
UI_DEV_SETUP = _ioc(1, 3, _UINPUT_SETUP.size)
UI_SET_EVBIT = _ioc(1, 100, 4)
UI_SET_KEYBIT = _ioc(1, 101, 4)
UI_SET_RELBIT = _ioc(1, 102, 4)

Ioctl = Callable[[int, int, object], object]


def _system_ioctl(fd: int, request: int, arg: object) -> object:
    import fcntl

    return fcntl.ioctl(fd, request, arg)


class UinputPointerDevice:
    """A virtual relative mouse with a left button, created through uinput."""

    def __init__(
        self,
        path="/dev/uinput",
        name: str = "tron pointer",
        *,
        ioctl: Optional[Ioctl] = None,
    ) -> None:
        self._ioctl = ioctl or _system_ioctl
        path = os.fspath(path)
        try:
            self._fd: Optional[int] = os.open(path, os.O_WRONLY | os.O_NONBLOCK)
        except OSError as err:
            raise OSError(err.errno, f"open {path} for tron pointer: {err.strerror}") from err
        try:
            self._ioctl(self._fd, UI_SET_EVBIT, EV_KEY)
            self._ioctl(self._fd, UI_SET_KEYBIT, BTN_LEFT)
            self._ioctl(self._fd, UI_SET_EVBIT, EV_REL)
            self._ioctl(self._fd, UI_SET_RELBIT, REL_X)
            self._ioctl(self._fd, UI_SET_RELBIT, REL_Y)
            setup = _UINPUT_SETUP.pack(BUS_VIRTUAL, 0, 0, 0, name.encode()[:79], 0)
            self._ioctl(self._fd, UI_DEV_SETUP, setup)
            self._ioctl(self._fd, UI_DEV_CREATE, 0)
        except OSError as err:
            os.close(self._fd)
            self._fd = None
            raise OSError(err.errno, f"create tron pointer uinput device: {err}") from err

    def __enter__(self) -> "UinputPointerDevice":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def emit(self, events: Iterable[InputEvent]) -> None:
        """Write a batch of events terminated by a SYN_REPORT."""
        if self._fd is None:
            raise OSError("tron pointer device is closed")
        batch = list(events) + [InputEvent(EV_SYN, SYN_REPORT, 0)]
        data = b"".join(_INPUT_EVENT.pack(0, 0, e.type, e.code, e.value) for e in batch)
        os.write(self._fd, data)

    def close(self) -> None:
        if self._fd is None:
            return
        try:
            self._ioctl(self._fd, UI_DEV_DESTROY, 0)
        except OSError:
            pass
        finally:
            os.close(self._fd)
            self._fd = None


@dataclass(frozen=True)
class LinuxPointerConfig:
    units_per_delta: float = 1400.0


class LinuxPointerSink:
    """Turns pointer events into relative mouse motion and left-button presses."""

    def __init__(self, config: LinuxPointerConfig = LinuxPointerConfig(), device=None) -> None:
        self.config = config
        self.device = device if device is not None else UinputPointerDevice()
        self.remainder = Point2d.ZERO
        self.left_down = False

    def consume(self, output) -> None:
        """Forward pointer events; visualizations are ignored."""
        if isinstance(output, PointerEvent):
            self.consume_event(output)

    def consume_event(self, event: PointerEvent) -> None:
        kind = event.kind
        if kind is PointerEventKind.MOVE:
            self._emit_move(event.delta)
        elif kind is PointerEventKind.DOWN:
            self._emit_left_button(True)
        elif kind in (PointerEventKind.UP, PointerEventKind.CANCEL):
            self._emit_left_button(False)
            self.remainder = Point2d.ZERO
        elif kind is PointerEventKind.CLICK:
            self._emit_left_button(True)
            self._emit_left_button(False)

    def _emit_move(self, delta: Point2d) -> None:
        scaled = self.remainder + delta * self.config.units_per_delta
        dx, dy = int(scaled.x), int(scaled.y)
        self.remainder = Point2d(scaled.x - dx, scaled.y - dy)
        events = []
        if dx:
            events.append(InputEvent(EV_REL, REL_X, dx))
        if dy:
            events.append(InputEvent(EV_REL, REL_Y, dy))
        if events:
            self.device.emit(events)

    def _emit_left_button(self, down: bool) -> None:
        if self.left_down == down:
            return
        self.device.emit([InputEvent(EV_KEY, BTN_LEFT, 1 if down else 0)])
        self.left_down = down