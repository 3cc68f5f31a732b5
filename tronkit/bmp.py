"""Uncompressed Windows bitmap encoding of frames."""

from __future__ import annotations

import os
import struct

from tronkit.types import Frame, PixelFormat

_I32_MAX = 2**31 - 1
_I32_MIN = -(2**31)
_U32_MAX = 2**32 - 1

_FILE_HEADER_SIZE = 14
_INFO_HEADER_SIZE = 40


def _checked_i32(value: int) -> int:
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError(f"bitmap dimension {value} exceeds i32")
    return value


def _checked_u32(value: int, what: str) -> int:
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"BMP {what} overflow")
    return value


def padded_row_bytes(width: int) -> int:
    """Row length of an 8-bit bitmap, rounded up to a multiple of four bytes."""
    if width < 0:
        raise ValueError(f"invalid bitmap width {width}")
    return (width + 3) & ~3


def bmp_header(
    width: int,
    height: int,
    bits_per_pixel: int,
    palette_entries: int,
    image_size: int,
) -> bytes:
    """File and info headers; a negative height marks a top-down bitmap."""
    _checked_i32(width)
    _checked_i32(height)
    palette_bytes = _checked_u32(palette_entries * 4, "palette byte count")
    pixel_offset = _checked_u32(
        _FILE_HEADER_SIZE + _INFO_HEADER_SIZE + palette_bytes, "pixel offset"
    )
    image_size = _checked_u32(image_size, "image size")
    file_size = _checked_u32(pixel_offset + image_size, "file size")

    file_header = struct.pack("<2sIHHI", b"BM", file_size, 0, 0, pixel_offset)
    info_header = struct.pack(
        "<IiiHHIIiiII",
        _INFO_HEADER_SIZE,
        width,
        height,
        1,
        bits_per_pixel,
        0,
        image_size,
        0,
        0,
        palette_entries,
        0,
    )
    return file_header + info_header


def _encode_bgra(frame: Frame) -> bytes:
    width = _checked_i32(frame.meta.size.width)
    height = _checked_i32(frame.meta.size.height)
    image_size = width * 4 * height
    header = bmp_header(width, -height, 32, 0, image_size)
    return header + b"".join(frame.rows())


def _encode_gray(frame: Frame) -> bytes:
    width = _checked_i32(frame.meta.size.width)
    height = _checked_i32(frame.meta.size.height)
    row_len = padded_row_bytes(width)
    image_size = row_len * height
    header = bmp_header(width, -height, 8, 256, image_size)
    palette = b"".join(bytes((value, value, value, 0)) for value in range(256))
    pad = bytes(row_len - width)
    pixels = b"".join(row + pad for row in frame.rows())
    return header + palette + pixels


def encode_bmp(frame: Frame) -> bytes:
    """Encode a frame as a top-down bitmap in logical pixel order."""
    if frame.format is PixelFormat.BGRA8:
        return _encode_bgra(frame)
    return _encode_gray(frame)


def write_bmp(frame: Frame, path) -> None:
    """Write ``frame`` as a bitmap file at ``path``."""
    data = encode_bmp(frame)
    with open(os.fspath(path), "wb") as file:
        file.write(data)