import pytest

from tronkit.types import (
    CameraOpenRequest,
    Frame,
    FrameMeta,
    OwnedFrame,
    PixelFormat,
    SensorKind,
    Size,
    row_bytes,
)


def meta(width, height):
    return FrameMeta(id=7, sensor=SensorKind.IR, size=Size(width, height))


def test_channels_per_format():
    assert PixelFormat.GRAY8.channels() == 1
    assert PixelFormat.BGRA8.channels() == 4


def test_row_bytes_scales_with_channels():
    assert row_bytes(PixelFormat.GRAY8, 3) == 3
    assert row_bytes(PixelFormat.BGRA8, 3) == 4 * row_bytes(PixelFormat.GRAY8, 3)


def test_row_bytes_rejects_negative_width():
    with pytest.raises(ValueError):
        row_bytes(PixelFormat.GRAY8, -1)


def test_rows_skip_stride_padding():
    frame = Frame(meta(3, 2), PixelFormat.GRAY8, 4, bytes([1, 2, 3, 99, 4, 5, 6, 99]))
    assert list(frame.rows()) == [bytes([1, 2, 3]), bytes([4, 5, 6])]


def test_horizontal_mirror_reverses_pixels():
    frame = Frame(meta(3, 2), PixelFormat.GRAY8, 3, bytes([1, 2, 3, 4, 5, 6]))
    mirrored = frame.mirrored(True, False)
    assert b"".join(mirrored.rows()) == bytes([3, 2, 1, 6, 5, 4])
    assert mirrored.raw() == bytes([1, 2, 3, 4, 5, 6])


def test_horizontal_mirror_keeps_channel_order():
    frame = Frame(meta(2, 1), PixelFormat.BGRA8, 8, bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    mirrored = frame.mirrored(True, False)
    assert list(mirrored.rows()) == [bytes([5, 6, 7, 8, 1, 2, 3, 4])]
    assert mirrored.pixel(0, 0, 1) == 6


def test_vertical_mirror_swaps_rows():
    frame = Frame(meta(2, 2), PixelFormat.GRAY8, 2, bytes([1, 2, 3, 4]))
    mirrored = frame.mirrored(False, True)
    assert list(mirrored.rows()) == [bytes([3, 4]), bytes([1, 2])]
    assert mirrored.pixel(0, 0, 0) == 3


def test_mirroring_twice_restores_order():
    frame = Frame(meta(3, 2), PixelFormat.GRAY8, 3, bytes([1, 2, 3, 4, 5, 6]))
    twice = frame.mirrored(True, True).mirrored(True, True)
    assert list(twice.rows()) == list(frame.rows())
    assert not twice.horizontally_mirrored and not twice.vertically_mirrored


def test_short_data_is_rejected():
    with pytest.raises(ValueError):
        Frame(meta(3, 2), PixelFormat.GRAY8, 3, bytes([1, 2, 3, 4, 5]))


def test_stride_shorter_than_row_is_rejected():
    with pytest.raises(ValueError):
        Frame(meta(3, 1), PixelFormat.BGRA8, 4, bytes(12))


def test_pixel_out_of_range():
    frame = Frame(meta(1, 1), PixelFormat.GRAY8, 1, bytes([9]))
    assert frame.pixel(0, 0, 0) == 9
    with pytest.raises(IndexError):
        frame.pixel(1, 0, 0)


def test_owned_frame_as_frame_round_trip():
    owned = OwnedFrame(meta(2, 1), PixelFormat.GRAY8, 2, bytearray([10, 20]))
    frame = owned.as_frame()
    assert list(frame.rows()) == [bytes([10, 20])]
    assert frame.meta == owned.meta


def test_open_request_defaults():
    request = CameraOpenRequest()
    assert request.format is None and request.size is None
    assert request.selector.sensor is SensorKind.RGB