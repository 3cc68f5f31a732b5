from pathlib import Path

import pytest

from tronkit.cli_collector import (
    camera_roi_update_interval,
    ir_request,
    parse_args,
    rgb_request,
    validate,
)
from tronkit.config import PixelFormatArg
from tronkit.types import CaptureFormat, SensorKind, Size


def test_defaults():
    args = parse_args([])
    assert args.max_sync_delta_us == 20_000
    assert args.tof_baud == 115200
    assert args.decode_format is PixelFormatArg.BGRA8
    assert args.rgb_mediapipe_model == Path("models/google_hand_detector/model.onnx")
    assert args.rgb_mediapipe_min_score == 0.75
    assert args.roi_projection_depth_mm == 700.0
    assert args.camera_roi_min_edge == 40
    assert args.camera_roi_from_palm is False


def test_rgb_request_defaults_to_mjpeg_640x480():
    request = rgb_request(parse_args(["--sensor", "ir"]))
    assert request.selector.sensor is SensorKind.RGB
    assert request.format is CaptureFormat.MJPEG
    assert request.size == Size(640, 480)


def test_rgb_request_keeps_explicit_format_and_size():
    request = rgb_request(parse_args(["--format", "gray", "--size", "320x240"]))
    assert request.format is CaptureFormat.GRAY8
    assert request.size == Size(320, 240)


def test_ir_request_uses_ir_camera_id_and_backend_defaults():
    args = parse_args(
        [
            "--camera",
            "Integrated",
            "--camera-id",
            "/dev/video0",
            "--ir-camera-id",
            "/dev/video51",
            "--format",
            "mjpg",
            "--size",
            "320x240",
        ]
    )
    request = ir_request(args)
    assert request.selector.sensor is SensorKind.IR
    assert request.selector.id == "/dev/video51"
    assert request.selector.name == "Integrated"
    assert request.format is None
    assert request.size is None
    assert rgb_request(args).selector.id == "/dev/video0"


@pytest.mark.parametrize("update_ms", ["100", "250", "1"])
def test_update_interval_matches_milliseconds(update_ms):
    args = parse_args(["--camera-roi-update-ms", update_ms])
    assert camera_roi_update_interval(args) * 1000 == pytest.approx(int(update_ms))


def test_update_interval_disabled():
    assert camera_roi_update_interval(parse_args(["--camera-roi-update-ms", "0"])) is None
    assert camera_roi_update_interval(parse_args(["--no-camera-roi-throttle"])) is None


def test_validate_rejects_negative_depth():
    with pytest.raises(ValueError, match="roi-projection-depth-mm"):
        validate(parse_args(["--roi-projection-depth-mm=-1"]))


def test_validate_rejects_negative_z_scale():
    with pytest.raises(ValueError, match="landmark-z-scale-mm"):
        validate(parse_args(["--landmark-z-scale-mm=-5"]))


def test_validate_requires_calibration_for_tof():
    with pytest.raises(ValueError, match="requires --stereo-calibration"):
        validate(parse_args(["--tof-serial", "/dev/ttyACM0"]))


def test_validate_accepts_tof_with_calibration():
    args = parse_args(["--tof-serial", "/dev/ttyACM0", "--stereo-calibration", "cal.json"])
    assert validate(args) is args
    assert args.tof_serial == Path("/dev/ttyACM0")


def test_negative_sync_delta_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--max-sync-delta-us=-1"])