"""Command-line options of the RGB hand-tracking controller."""

from __future__ import annotations

import argparse
import enum
from pathlib import Path
from typing import Optional, Sequence

from tronkit.config import PixelFormatArg, add_camera_arguments, camera_args_from_namespace
from tronkit.pointer import LinuxPointerConfig
from tronkit.types import CameraOpenRequest, CaptureFormat, SensorKind, Size

DEFAULT_PALM_MODEL = Path("models/google_hand_detector/model.onnx")
DEFAULT_LANDMARK_MODEL = Path("models/google_hand_landmark/hand_landmark.onnx")


class PointerMode(str, enum.Enum):
    """Which pointer producer turns gestures into pointer events."""

    ABSOLUTE = "absolute"
    JOYSTICK = "joystick"
    RELATIVE = "relative"


def _choice(enum_type, label: str):
    def parse(value: str):
        try:
            return enum_type(value)
        except ValueError:
            choices = ", ".join(member.value for member in enum_type)
            raise argparse.ArgumentTypeError(
                f"invalid {label} {value!r}; expected one of {choices}"
            ) from None

    parse.__name__ = label
    return parse


def build_parser() -> argparse.ArgumentParser:
    """The controller's argument parser."""
    parser = argparse.ArgumentParser(
        prog="controller", description="RGB hand tracking controller prototype"
    )
    add_camera_arguments(parser)
    parser.add_argument(
        "--decode-format",
        type=_choice(PixelFormatArg, "pixel format"),
        default=PixelFormatArg.BGRA8,
        metavar="{gray8,bgra8}",
        help="Pixel format produced when decoding MJPEG.",
    )
    parser.add_argument(
        "--input",
        type=Path,
        help="Replay RGB frames from an image file or directory instead of a camera.",
    )
    parser.add_argument("--rgb-mediapipe-model", type=Path, default=DEFAULT_PALM_MODEL)
    parser.add_argument(
        "--rgb-mediapipe-landmark-model", type=Path, default=DEFAULT_LANDMARK_MODEL
    )
    parser.add_argument("--rgb-mediapipe-min-score", type=float, default=0.75)
    parser.add_argument("--rgb-mediapipe-landmark-min-presence", type=float, default=0.9)
    parser.add_argument("--rgb-mediapipe-box-scale", type=float, default=2.6)
    parser.add_argument("--rgb-mediapipe-landmark-roi-scale", type=float, default=1.2)
    parser.add_argument(
        "--pointer-mode",
        type=_choice(PointerMode, "pointer mode"),
        default=PointerMode.ABSOLUTE,
        metavar="{absolute,joystick,relative}",
        help="Pointer producer used by the controller.",
    )
    parser.add_argument(
        "--linux-pointer",
        action="store_true",
        help="Emit pointer events through a Linux uinput virtual mouse.",
    )
    parser.add_argument(
        "--preview", action="store_true", help="Show the preview/debug window."
    )
    parser.add_argument(
        "--linux-pointer-units-per-delta",
        type=float,
        default=1400.0,
        help="Scale normalized pointer delta to Linux relative pointer units.",
    )
    parser.add_argument(
        "--max-fps", type=float, help="Limit controller frame processing to this FPS."
    )
    parser.add_argument(
        "--capture-dir",
        type=Path,
        help="Directory for RGB captures when the pinch state of a hand changes.",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line; ``camera_args`` holds the shared camera options."""
    namespace = build_parser().parse_args(argv)
    namespace.camera_args = camera_args_from_namespace(namespace)
    return namespace


def rgb_request(args: argparse.Namespace) -> CameraOpenRequest:
    """Open request for the RGB stream: MJPEG at 640x480 unless asked otherwise."""
    request = args.camera_args.open_request()
    request.selector.sensor = SensorKind.RGB
    if request.format is None:
        request.format = CaptureFormat.MJPEG
    if request.size is None:
        request.size = Size(640, 480)
    return request


def linux_pointer_config(args: argparse.Namespace) -> LinuxPointerConfig:
    return LinuxPointerConfig(units_per_delta=args.linux_pointer_units_per_delta)