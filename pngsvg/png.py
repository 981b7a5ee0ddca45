#!/usr/bin/env python3
"""PNG header tools.

Only the minimum needed to know the intrinsic size of an image is parsed:
the 8-byte file signature and the width and height fields of the IHDR chunk,
which in valid PNG files is always the first chunk. Format specification:
https://www.w3.org/TR/png/#5PNG-file-signature
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import dataclasses
import numpy as np

from . import dataurl

# Fixed 8 bytes at the beginning of all PNG files
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
# Signature (8) + IHDR chunk length (4) + IHDR chunk type (4) + width (4) + height (4)
HEADER_LENGTH = 24
# Offset of the width field. Height follows immediately.
DIMENSIONS_OFFSET = 16


class NotAPngError(ValueError):
    """Raised when data cannot be interpreted as a PNG header.
    """
    pass


@dataclasses.dataclass(frozen=True)
class ImageDimensions:
    """Intrinsic size of an image, in pixels.
    Values are unsigned 32-bit integers as stored in the PNG header.
    """
    width: int
    height: int

    def __iter__(self):
        return iter((self.width, self.height))


def is_png(png_bytes):
    """Return True if and only if png_bytes starts with the PNG signature.
    """
    return bytes(png_bytes[:len(PNG_SIGNATURE)]) == PNG_SIGNATURE


def parse_dimensions(png_bytes):
    """Return the ImageDimensions stored in the header of a PNG file.

    :param png_bytes: bytes-like object with (at least) the first 24 bytes of a PNG file.
    :raises NotAPngError: if png_bytes is too short or does not start with the PNG signature.
    """
    if len(png_bytes) < HEADER_LENGTH:
        raise NotAPngError(f"At least {HEADER_LENGTH} bytes are needed to read a PNG header, "
                           f"but only {len(png_bytes)} were provided")
    if not is_png(png_bytes):
        raise NotAPngError(f"Invalid PNG signature {bytes(png_bytes[:len(PNG_SIGNATURE)])!r}")

    # Big endian, unsigned 32-bit fields. Python ints are produced so that
    # no fixed-width arithmetic is applied afterwards.
    width, height = np.frombuffer(png_bytes, dtype=">u4", count=2, offset=DIMENSIONS_OFFSET)
    return ImageDimensions(width=int(width), height=int(height))


def dimensions_from_base64(encoded):
    """Return the ImageDimensions of a base64 encoded PNG file, with or without
    data URL prefix.

    :raises NotAPngError: if encoded is not valid base64 or does not contain a PNG header.
    """
    try:
        png_bytes = dataurl.decode(encoded)
    except ValueError as ex:
        raise NotAPngError(f"Cannot decode image data: {ex}") from ex
    return parse_dimensions(png_bytes)
