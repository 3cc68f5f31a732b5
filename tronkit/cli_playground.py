"""Command-line options of the capture/decode/process/render playground."""

from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import Optional, Sequence

from tronkit.camera_roi import CameraRoiConfig
from tronkit.config import PixelFormatArg, add_camera_arguments, camera_args_from_namespace
from tronkit.metadata import PlaygroundPipelineConfig
from tronkit.types import CameraOpenRequest, CaptureFormat, SensorKind

_UNSIGNED = re.compile(r"\+?[0-9]+")

DEFAULT_PALM_MODEL = Path("models/google_hand_detector/model.onnx")


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
    """The playground's argument parser."""
    parser = argparse.ArgumentParser(
        prog="tron-playground",
        description="Composable playground for capture/decode/process/render experiments",
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
        "--metadata-port",
        type=_unsigned(16),
        default=8787,
        help="Local HTTP port for live metadata.",
    )
    parser.add_argument(
        "--no-metadata-http",
        action="store_true",
        help="Disable the local HTTP metadata endpoint.",
    )
    parser.add_argument(
        "--roi-threshold",
        type=_unsigned(8),
        default=32,
        help="Binary threshold for ROI detection on the ambient-rejected IR frame.",
    )
    parser.add_argument(
        "--exposure-roi-threshold",
        type=_unsigned(8),
        default=250,
        help="Raw IR pixel threshold used to find clipped regions for exposure ROI.",
    )
    parser.add_argument(
        "--camera-roi-from-detection",
        action="store_true",
        help="Drive the camera exposure ROI from the detected IR ROI.",
    )
    parser.add_argument(
        "--camera-roi-min-edge",
        type=_unsigned(32),
        default=40,
        help="Minimum edge size for the camera exposure ROI rectangle.",
    )
    parser.add_argument(
        "--camera-roi-update-ms",
        type=_unsigned(64),
        default=100,
        help="Minimum interval between exposure ROI updates; 0 disables throttling.",
    )
    parser.add_argument(
        "--no-camera-roi-throttle",
        action="store_true",
        help="Disable camera exposure ROI update throttling.",
    )
    parser.add_argument(
        "--rgb-mediapipe-roi",
        action="store_true",
        help="Run the palm detector on the RGB frame and render its ROI.",
    )
    parser.add_argument(
        "--rgb-mediapipe-model",
        type=Path,
        default=DEFAULT_PALM_MODEL,
        help="ONNX model path for RGB MediaPipe ROI detection.",
    )
    parser.add_argument(
        "--rgb-mediapipe-min-score",
        type=float,
        default=0.75,
        help="Minimum MediaPipe palm detector confidence for RGB ROI.",
    )
    parser.add_argument(
        "--rgb-mediapipe-box-scale",
        type=float,
        default=1.0,
        help="Fingertip-direction scale applied to the oriented palm ROI.",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the command line; ``camera_args`` holds the shared camera options."""
    namespace = build_parser().parse_args(argv)
    namespace.camera_args = camera_args_from_namespace(namespace)
    return namespace


def camera_roi_update_interval(args: argparse.Namespace) -> Optional[float]:
    """Seconds between camera ROI updates, or None when throttling is off."""
    if args.no_camera_roi_throttle or args.camera_roi_update_ms == 0:
        return None
    return args.camera_roi_update_ms / 1000.0


def rgb_request(args: argparse.Namespace) -> CameraOpenRequest:
    """Open request for the RGB stream: MJPEG unless asked otherwise."""
    request = args.camera_args.open_request()
    request.selector.sensor = SensorKind.RGB
    if request.format is None:
        request.format = CaptureFormat.MJPEG
    return request


def ir_request(args: argparse.Namespace) -> CameraOpenRequest:
    """Open request for the IR stream, leaving format and size to the backend."""
    request = args.camera_args.open_request()
    request.selector.sensor = SensorKind.IR
    request.selector.id = args.ir_camera_id
    request.format = None
    request.size = None
    return request


def pipeline_config(args: argparse.Namespace) -> PlaygroundPipelineConfig:
    """Pipeline settings; the RGB palm model is used only with --rgb-mediapipe-roi."""
    return PlaygroundPipelineConfig(
        roi_threshold=args.roi_threshold,
        exposure_roi_threshold=args.exposure_roi_threshold,
        rgb_mediapipe_model=str(args.rgb_mediapipe_model) if args.rgb_mediapipe_roi else None,
        rgb_mediapipe_min_score=args.rgb_mediapipe_min_score,
        rgb_mediapipe_box_scale=args.rgb_mediapipe_box_scale,
    )


def camera_roi_config(args: argparse.Namespace) -> Optional[CameraRoiConfig]:
    """Exposure ROI settings, or None unless --camera-roi-from-detection is given."""
    if not args.camera_roi_from_detection:
        return None
    return CameraRoiConfig(
        min_edge=args.camera_roi_min_edge,
        update_interval=camera_roi_update_interval(args),
    )