"""Command-line options of the RGB/IR data collector."""

from __future__ import annotations

import argparse
import math
import re
from pathlib import Path
from typing import Optional, Sequence

from tronkit.config import PixelFormatArg, add_camera_arguments, camera_args_from_namespace
from tronkit.types import CameraOpenRequest, CaptureFormat, SensorKind, Size

_UNSIGNED = re.compile(r"\+?[0-9]+")

DEFAULT_PALM_MODEL = Path("models/google_hand_detector/model.onnx")
DEFAULT_LANDMARK_MODEL = Path("models/google_hand_landmark/hand_landmark.onnx")


def _unsigned(bits: int):
    limit = 2**bits - 1

    def parse(value: str) -> int:
        if _UNSIGNED.fullmatch(value):
            number = int(value)
            if number <= limit:
                return number
        raise argparse.ArgumentTypeError(
            f"invalid value {value!r}; expected an unsigned {bits}-bit integer"
        )

    parse.__name__ = f"u{bits}"
    return parse


def _pixel_format(value: str) -> PixelFormatArg:
    try:
        return PixelFormatArg(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid pixel format {value!r}; expected gray8 or bgra8"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    """The collector's argument parser."""
    parser = argparse.ArgumentParser(
        prog="collector",
        description="RGB/IR data collection view with RGB MediaPipe ROI",
    )
    add_camera_arguments(parser)
    parser.add_argument(
        "--decode-format",
        type=_pixel_format,
        default=PixelFormatArg.BGRA8,
        metavar="{gray8,bgra8}",
        help="Pixel format produced when decoding MJPEG.",
    )
    parser.add_argument("--ir-camera-id", help="Backend-native IR camera identifier.")
    parser.add_argument(
        "--ir-metadata-id",
        help="Backend-native IR metadata node; defaults to the node after the IR node.",
    )
    parser.add_argument(
        "--max-sync-delta-us",
        type=_unsigned(64),
        default=20_000,
        help="Maximum allowed RGB/IR timestamp delta for a synchronized pair.",
    )
    parser.add_argument(
        "--rgb-mediapipe-model",
        type=Path,
        default=DEFAULT_PALM_MODEL,
        help="ONNX model path for RGB MediaPipe ROI detection.",
    )
    parser.add_argument(
        "--rgb-mediapipe-landmark-model",
        type=Path,
        default=DEFAULT_LANDMARK_MODEL,
        help="ONNX model path for RGB MediaPipe hand landmark extraction.",
    )
    parser.add_argument("--rgb-mediapipe-min-score", type=float, default=0.75)
    parser.add_argument("--rgb-mediapipe-landmark-min-presence", type=float, default=0.9)
    parser.add_argument("--rgb-mediapipe-box-scale", type=float, default=2.6)
    parser.add_argument("--rgb-mediapipe-landmark-roi-scale", type=float, default=1.2)
    parser.add_argument(
        "--stereo-calibration",
        type=Path,
        help="Stereo calibration JSON used to project the RGB ROI onto the IR frame.",
    )
    parser.add_argument(
        "--roi-projection-depth-mm",
        type=float,
        default=700.0,
        help="Assumed RGB-camera hand depth for RGB-to-IR ROI projection.",
    )
    parser.add_argument(
        "--landmark-z-scale-mm",
        type=float,
        default=1000.0,
        help="Millimeters per MediaPipe relative-z unit.",
    )
    parser.add_argument(
        "--tof-serial", type=Path, help="VL53L5CX serial port used as live ROI depth."
    )
    parser.add_argument("--tof-baud", type=_unsigned(32), default=115200)
    parser.add_argument("--tof-timeout-ms", type=_unsigned(64), default=1)
    parser.add_argument(
        "--camera-roi-from-palm",
        action="store_true",
        help="Drive the IR camera exposure ROI from the RGB palm detection.",
    )
    parser.add_argument("--camera-roi-min-edge", type=_unsigned(32), default=40)
    parser.add_argument(
        "--camera-roi-update-ms",
        type=_unsigned(64),
        default=100,
        help="Minimum interval between exposure ROI updates; 0 disables throttling.",
    )
    parser.add_argument(
        "--no-camera-roi-throttle",
        action="store_true",
        help="Disable exposure ROI update throttling.",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line; ``camera_args`` holds the shared camera options."""
    namespace = build_parser().parse_args(argv)
    namespace.camera_args = camera_args_from_namespace(namespace)
    return namespace


def validate(args: argparse.Namespace) -> argparse.Namespace:
    """Check option combinations the parser cannot; raise ValueError on bad ones."""
    if not args.roi_projection_depth_mm >= 0.0 or math.isnan(args.roi_projection_depth_mm):
        raise ValueError("--roi-projection-depth-mm must be non-negative")
    if not args.landmark_z_scale_mm >= 0.0 or math.isnan(args.landmark_z_scale_mm):
        raise ValueError("--landmark-z-scale-mm must be non-negative")
    if args.tof_serial is not None and args.stereo_calibration is None:
        raise ValueError("--tof-serial requires --stereo-calibration")
    return args


def camera_roi_update_interval(args: argparse.Namespace) -> Optional[float]:
    """Seconds between camera ROI updates, or None when throttling is off."""
    if args.no_camera_roi_throttle or args.camera_roi_update_ms == 0:
        return None
    return args.camera_roi_update_ms / 1000.0


def rgb_request(args: argparse.Namespace) -> CameraOpenRequest:
    """Open request for the RGB stream: MJPEG at 640x480 unless asked otherwise."""
    request = args.camera_args.open_request()
    request.selector.sensor = SensorKind.RGB
    if request.format is None:
        request.format = CaptureFormat.MJPEG
    if request.size is None:
        request.size = Size(640, 480)
    return request


def ir_request(args: argparse.Namespace) -> CameraOpenRequest:
    """Open request for the IR stream, leaving format and size to the backend."""
    request = args.camera_args.open_request()
    request.selector.sensor = SensorKind.IR
    request.selector.id = args.ir_camera_id
    request.format = None
    request.size = None
    return request