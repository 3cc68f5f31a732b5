"""Command-line camera selection shared by the tools."""

from __future__ import annotations

import argparse
import enum
import re
from dataclasses import dataclass
from typing import Callable, Optional

from tronkit.types import (
    CameraOpenRequest,
    CameraSelector,
    CaptureFormat,
    PixelFormat,
    SensorKind,
    Size,
)

_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


class SensorArg(str, enum.Enum):
    RGB = "rgb"
    IR = "ir"

    def to_sensor_kind(self) -> SensorKind:
        return SensorKind.RGB if self is SensorArg.RGB else SensorKind.IR


class CaptureFormatArg(str, enum.Enum):
    MJPG = "mjpg"
    GRAY8 = "gray8"

    def to_capture_format(self) -> CaptureFormat:
        return CaptureFormat.MJPEG if self is CaptureFormatArg.MJPG else CaptureFormat.GRAY8


_CAPTURE_FORMAT_NAMES = {
    "mjpg": CaptureFormatArg.MJPG,
    "mjpeg": CaptureFormatArg.MJPG,
    "gray8": CaptureFormatArg.GRAY8,
    "gray": CaptureFormatArg.GRAY8,
    "grey": CaptureFormatArg.GRAY8,
}


class PixelFormatArg(str, enum.Enum):
    GRAY8 = "gray8"
    BGRA8 = "bgra8"

    def to_pixel_format(self) -> PixelFormat:
        return PixelFormat.GRAY8 if self is PixelFormatArg.GRAY8 else PixelFormat.BGRA8


@dataclass(frozen=True)
class SizeArg:
    width: int
    height: int

    def to_size(self) -> Size:
        return Size(self.width, self.height)


@dataclass
class CameraArgs:
    """Camera options as given on the command line."""

    camera: Optional[str] = None
    camera_id: Optional[str] = None
    sensor: SensorArg = SensorArg.RGB
    format: Optional[CaptureFormatArg] = None
    size: Optional[SizeArg] = None
    fps: Optional[int] = None
    buffers: Optional[int] = None

    def open_request(self) -> CameraOpenRequest:
        return CameraOpenRequest(
            selector=CameraSelector(
                id=self.camera_id,
                name=self.camera,
                sensor=self.sensor.to_sensor_kind(),
            ),
            format=self.requested_format(),
            size=self.size.to_size() if self.size is not None else None,
            fps=self.fps,
            buffers=self.buffers,
        )

    def requested_format(self) -> Optional[CaptureFormat]:
        return self.format.to_capture_format() if self.format is not None else None


def parse_positive_u32(value: str) -> int:
    """Parse a positive 32-bit unsigned integer."""
    if _UNSIGNED.fullmatch(value):
        number = int(value)
        if 0 < number <= _U32_MAX:
            return number
    raise ValueError(f"invalid value {value!r}; expected a positive integer")


def parse_size(value: str) -> SizeArg:
    """Parse WIDTHxHEIGHT."""
    if "x" not in value:
        raise ValueError(f"invalid size {value!r}; expected WIDTHxHEIGHT")
    width, height = value.split("x", 1)
    return SizeArg(parse_positive_u32(width), parse_positive_u32(height))


def parse_capture_format(value: str) -> CaptureFormatArg:
    """Parse a capture format name or one of its aliases."""
    try:
        return _CAPTURE_FORMAT_NAMES[value]
    except KeyError:
        raise ValueError(
            f"invalid capture format {value!r}; expected one of "
            + ", ".join(_CAPTURE_FORMAT_NAMES)
        ) from None


def _parse_sensor(value: str) -> SensorArg:
    try:
        return SensorArg(value)
    except ValueError:
        raise ValueError(f"invalid sensor {value!r}; expected rgb or ir") from None


def _argument_type(parse: Callable[[str], object]) -> Callable[[str], object]:
    def convert(value: str) -> object:
        try:
            return parse(value)
        except ValueError as err:
            raise argparse.ArgumentTypeError(str(err)) from err

    convert.__name__ = parse.__name__
    return convert


def add_camera_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register the shared camera options on a parser."""
    parser.add_argument(
        "--camera",
        help="Human-oriented camera selector matched by the camera backend.",
    )
    parser.add_argument(
        "--camera-id",
        "--device",
        dest="camera_id",
        help="Backend-native camera identifier, such as /dev/video51.",
    )
    parser.add_argument(
        "--sensor",
        type=_argument_type(_parse_sensor),
        default=SensorArg.RGB,
        metavar="{rgb,ir}",
        help="Sensor label attached to captured frame metadata.",
    )
    parser.add_argument(
        "--format",
        type=_argument_type(parse_capture_format),
        metavar="{mjpg,gray8}",
        help="Requested capture format.",
    )
    parser.add_argument(
        "--size",
        type=_argument_type(parse_size),
        metavar="WIDTHxHEIGHT",
        help="Requested capture size.",
    )
    parser.add_argument(
        "--fps", type=_argument_type(parse_positive_u32), help="Requested frame rate."
    )
    parser.add_argument(
        "--buffers",
        type=_argument_type(parse_positive_u32),
        help="Requested capture buffer count.",
    )
    return parser


def camera_args_from_namespace(namespace: argparse.Namespace) -> CameraArgs:
    return CameraArgs(
        camera=namespace.camera,
        camera_id=namespace.camera_id,
        sensor=namespace.sensor,
        format=namespace.format,
        size=namespace.size,
        fps=namespace.fps,
        buffers=namespace.buffers,
    )