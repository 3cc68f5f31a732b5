import argparse

import pytest

from tronkit.config import (
    CameraArgs,
    CaptureFormatArg,
    PixelFormatArg,
    SensorArg,
    SizeArg,
    add_camera_arguments,
    camera_args_from_namespace,
    parse_capture_format,
    parse_positive_u32,
    parse_size,
)
from tronkit.types import CaptureFormat, PixelFormat, SensorKind, Size


def test_parse_size():
    assert parse_size("640x480") == SizeArg(640, 480)


@pytest.mark.parametrize("value", ["640", "0x480", "640x", "1x2x3", "ax4"])
def test_parse_size_rejects(value):
    with pytest.raises(ValueError):
        parse_size(value)


def test_parse_size_message_names_format():
    with pytest.raises(ValueError, match="expected WIDTHxHEIGHT"):
        parse_size("640")


def test_parse_positive_u32_accepts():
    assert parse_positive_u32("30") == 30
    assert parse_positive_u32(str(2**32 - 1)) == 2**32 - 1


@pytest.mark.parametrize("value", ["0", "-1", "abc", "", " 5", str(2**32), "1_0"])
def test_parse_positive_u32_rejects(value):
    with pytest.raises(ValueError, match="expected a positive integer"):
        parse_positive_u32(value)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("mjpg", CaptureFormatArg.MJPG),
        ("mjpeg", CaptureFormatArg.MJPG),
        ("gray8", CaptureFormatArg.GRAY8),
        ("gray", CaptureFormatArg.GRAY8),
        ("grey", CaptureFormatArg.GRAY8),
    ],
)
def test_parse_capture_format_aliases(name, expected):
    assert parse_capture_format(name) is expected


def test_parse_capture_format_rejects_unknown():
    with pytest.raises(ValueError):
        parse_capture_format("yuyv")


def test_enum_conversions():
    assert SensorArg.IR.to_sensor_kind() is SensorKind.IR
    assert CaptureFormatArg.MJPG.to_capture_format() is CaptureFormat.MJPEG
    assert PixelFormatArg.BGRA8.to_pixel_format() is PixelFormat.BGRA8
    assert SizeArg(4, 3).to_size() == Size(4, 3)


def test_open_request_maps_fields():
    args = CameraArgs(
        camera="front",
        camera_id="/dev/video51",
        sensor=SensorArg.IR,
        format=CaptureFormatArg.GRAY8,
        size=SizeArg(640, 360),
        fps=15,
        buffers=4,
    )
    request = args.open_request()
    assert request.selector.id == "/dev/video51"
    assert request.selector.name == "front"
    assert request.selector.sensor is SensorKind.IR
    assert request.format is CaptureFormat.GRAY8
    assert request.size == Size(640, 360)
    assert (request.fps, request.buffers) == (15, 4)


def test_requested_format_absent():
    assert CameraArgs().requested_format() is None
    assert CameraArgs().open_request().size is None


def test_arguments_from_command_line():
    parser = add_camera_arguments(argparse.ArgumentParser())
    namespace = parser.parse_args(
        ["--device", "/dev/video51", "--format", "mjpeg", "--size", "640x480", "--fps", "30"]
    )
    args = camera_args_from_namespace(namespace)
    assert args.camera_id == "/dev/video51"
    assert args.format is CaptureFormatArg.MJPG
    assert args.size == SizeArg(640, 480)
    assert args.fps == 30
    assert args.sensor is SensorArg.RGB


def test_arguments_reject_bad_size():
    parser = add_camera_arguments(argparse.ArgumentParser())
    with pytest.raises(SystemExit):
        parser.parse_args(["--size", "big"])


def test_arguments_reject_bad_sensor():
    parser = add_camera_arguments(argparse.ArgumentParser())
    with pytest.raises(SystemExit):
        parser.parse_args(["--sensor", "depth"])