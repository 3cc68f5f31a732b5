"""Core value types shared across capture, processing and sinks."""

from __future__ import annotations

import dataclasses
import enum
import time
from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class Size:
    """Pixel dimensions of a frame or rectangle."""

    width: int
    height: int


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in pixel coordinates."""

    x: int
    y: int
    size: Size


@dataclass(frozen=True)
class RoiResult:
    """A region of interest, optionally carrying an oriented box."""

    rect: Rect
    oriented_box: object = None


class PixelFormat(enum.Enum):
    """In-memory pixel layout of decoded frames."""

    GRAY8 = "gray8"
    BGRA8 = "bgra8"

    def channels(self) -> int:
        """Number of bytes per pixel."""
        return 1 if self is PixelFormat.GRAY8 else 4


class SensorKind(enum.Enum):
    """Which sensor produced a frame."""

    RGB = "rgb"
    IR = "ir"


class CaptureFormat(enum.Enum):
    """Format a camera is asked to deliver."""

    MJPEG = "mjpeg"
    GRAY8 = "gray8"


class TimestampSource(enum.Enum):
    """Origin of a frame's camera timestamp."""

    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FrameTimestamp:
    """Timing information attached to a frame; received_at is monotonic seconds."""

    camera_monotonic_us: Optional[int] = None
    source: TimestampSource = TimestampSource.UNKNOWN
    received_at: float = field(default_factory=time.monotonic)


@dataclass(frozen=True)
class FrameMeta:
    """Identity, size and timing of a frame."""

    id: int
    sensor: SensorKind
    size: Size
    timestamp: FrameTimestamp = field(default_factory=FrameTimestamp)
    sequence: Optional[int] = None


def row_bytes(pixel_format: PixelFormat, width: int) -> int:
    """Tightly packed byte length of one row."""
    if width < 0:
        raise ValueError(f"invalid frame width {width}")
    return width * pixel_format.channels()


@dataclass(frozen=True)
class Frame:
    """A read-only view of pixel storage with optional logical mirroring."""

    meta: FrameMeta
    format: PixelFormat
    stride: int
    data: bytes
    horizontally_mirrored: bool = False
    vertically_mirrored: bool = False

    def __post_init__(self) -> None:
        row_len = row_bytes(self.format, self.meta.size.width)
        if self.stride < row_len:
            raise ValueError(
                f"frame stride {self.stride} shorter than row length {row_len}"
            )
        height = self.meta.size.height
        required = self.stride * (height - 1) + row_len if height > 0 else 0
        if len(self.data) < required:
            raise ValueError(
                f"frame data length {len(self.data)} shorter than required {required}"
            )

    @property
    def row_len(self) -> int:
        return row_bytes(self.format, self.meta.size.width)

    def mirrored(self, horizontal: bool, vertical: bool) -> "Frame":
        """Return a view mirrored along the requested axes."""
        return dataclasses.replace(
            self,
            horizontally_mirrored=self.horizontally_mirrored != horizontal,
            vertically_mirrored=self.vertically_mirrored != vertical,
        )

    def _physical_row(self, y: int) -> int:
        return self.meta.size.height - 1 - y if self.vertically_mirrored else y

    def pixel(self, x: int, y: int, channel: int) -> int:
        """Value of one channel at logical coordinates."""
        width, height = self.meta.size.width, self.meta.size.height
        channels = self.format.channels()
        if not (0 <= x < width and 0 <= y < height and 0 <= channel < channels):
            raise IndexError(f"pixel ({x}, {y}, {channel}) out of range")
        px = width - 1 - x if self.horizontally_mirrored else x
        py = self._physical_row(y)
        return self.data[py * self.stride + px * channels + channel]

    def rows(self) -> Iterator[bytes]:
        """Yield logical rows as tightly packed bytes."""
        channels = self.format.channels()
        row_len = self.row_len
        for y in range(self.meta.size.height):
            start = self._physical_row(y) * self.stride
            row = bytes(self.data[start : start + row_len])
            if self.horizontally_mirrored:
                row = b"".join(
                    row[offset : offset + channels]
                    for offset in reversed(range(0, row_len, channels))
                )
            yield row

    def raw(self) -> bytes:
        """Physical storage, ignoring mirroring."""
        return bytes(self.data)


@dataclass
class OwnedFrame:
    """A frame that owns a tightly packed, mutable copy of its pixels."""

    meta: FrameMeta
    format: PixelFormat
    stride: int
    data: bytearray = field(default_factory=bytearray)

    def as_frame(self) -> Frame:
        return Frame(self.meta, self.format, self.stride, bytes(self.data))


@dataclass
class CameraSelector:
    """How to pick a camera."""

    id: Optional[str] = None
    name: Optional[str] = None
    sensor: SensorKind = SensorKind.RGB


@dataclass
class CameraOpenRequest:
    """Everything a backend needs to open a camera stream."""

    selector: CameraSelector = field(default_factory=CameraSelector)
    format: Optional[CaptureFormat] = None
    size: Optional[Size] = None
    fps: Optional[int] = None
    buffers: Optional[int] = None