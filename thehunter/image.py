"""Loading of uncompressed 24- and 32-bit BMP images into RGB(A) pixel data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from typing import Union

_FILE_HEADER = struct.Struct("<HIHHI")
_INFO_HEADER = struct.Struct("<IIIHHIIiiII")
_HEADER_SIZE = _FILE_HEADER.size + _INFO_HEADER.size


class BitmapError(ValueError):
    """Raised when bitmap data cannot be decoded."""


@dataclass
class Image:
    """Image dimensions with pixel data stored as RGB or RGBA bytes."""

    width: int
    height: int
    pixels: bytes = b""
    channels: int = 3

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        if self.channels not in (3, 4):
            raise ValueError("an image has 3 or 4 channels")
        if len(self.pixels) != self.width * self.height * self.channels:
            raise ValueError("pixel data does not match the image dimensions")


def new_image(width: int, height: int) -> Image:
    """Return a blank RGB image of the given size."""
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    return Image(width, height, bytes(3 * width * height))


def parse_image(data: bytes) -> Image:
    """Decode BMP bytes; pixels follow the headers directly, rows unpadded."""
    if len(data) < _HEADER_SIZE:
        raise BitmapError("bitmap headers are truncated")
    info = _INFO_HEADER.unpack_from(data, _FILE_HEADER.size)
    width, height, bitcount = info[1], info[2], info[4]
    if bitcount not in (24, 32):
        raise BitmapError("only images with 24 or 32 bits per pixel are supported")

    channels = bitcount // 8
    needed = width * height * channels
    body = data[_HEADER_SIZE:_HEADER_SIZE + needed]
    if len(body) < needed:
        raise BitmapError("bitmap pixel data is truncated")

    pixels = bytearray(body)
    pixels[0::channels] = body[2::channels]
    pixels[2::channels] = body[0::channels]
    return Image(width, height, bytes(pixels), channels)


def read_image(path: Union[str, PathLike]) -> Image:
    """Read and decode the BMP file at ``path``."""
    with open(path, "rb") as handle:
        return parse_image(handle.read())