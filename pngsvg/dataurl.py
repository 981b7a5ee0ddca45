#!/usr/bin/env python3
"""Tools to handle base64 encoded images and data URLs.

An encoded image is a base64 string, optionally prefixed with a
`data:<mime-type>;base64,` marker. Both forms are equivalent, and
:func:`strip_prefix` and :func:`ensure_prefix` convert between them.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import re
import base64
import binascii
import collections.abc
import numpy as np

PNG_MIME_TYPE = "image/png"
SVG_MIME_TYPE = "image/svg+xml"

# Fields that may carry the payload in structured read results, by priority
payload_field_names = ("data", "base64", "content", "bytes")

_data_url_prefix_regex = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)
_data_url_scheme_regex = re.compile(r"^data:", re.IGNORECASE)


def prefix_for(mime_type):
    """Return the data URL prefix for the given mime type, e.g.,
    `data:image/png;base64,`.
    """
    return f"data:{mime_type};base64,"


def strip_prefix(encoded):
    """Return the bare base64 payload of an encoded image, i.e., without any
    leading `data:...;base64,` marker.
    """
    return _data_url_prefix_regex.sub("", encoded, count=1)


def ensure_prefix(encoded, mime_type=PNG_MIME_TYPE):
    """Return encoded with a data URL prefix. Strings already starting with
    the `data:` scheme (in any case) are returned unchanged.
    """
    if _data_url_scheme_regex.match(encoded):
        return encoded
    return prefix_for(mime_type) + encoded


def encode(data):
    """Return the base64 text of a bytes-like object.
    """
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(encoded):
    """Return the bytes represented by an encoded image (prefixed or bare).

    Whitespace is ignored.

    :raises ValueError: if the payload is not valid base64.
    """
    payload = "".join(strip_prefix(encoded).split())
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as ex:
        raise ValueError(f"Invalid base64 payload ({ex})") from ex


def to_data_url(data, mime_type):
    """Return a data URL with the contents of data.

    :param data: bytes-like object, or str (encoded as UTF-8).
    :param mime_type: mime type declared in the URL.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return prefix_for(mime_type) + encode(data)


def is_bytes_like(value):
    return isinstance(value, (bytes, bytearray, memoryview))


def as_bytes(value):
    """Return the bytes held by value, or None if value is not a byte sequence.

    Objects exposing a buffer of single-byte items (bytes, bytearray,
    memoryview, uint8 numpy arrays, etc.) are used directly. Other sequences
    and arrays are accepted if all their elements are integers in [0, 255].
    """
    if value is None or isinstance(value, str):
        return None
    try:
        view = memoryview(value)
    except TypeError:
        view = None
    if view is not None and view.itemsize == 1:
        return view.tobytes()
    if view is None and not isinstance(value, collections.abc.Sequence):
        return None

    try:
        array = np.asarray(value)
    except ValueError:
        # Ragged sequences
        return None
    if array.ndim != 1:
        return None
    if array.size == 0:
        return b""
    if not np.issubdtype(array.dtype, np.integer) or array.min() < 0 or array.max() > 255:
        return None
    return array.astype(np.uint8).tobytes()


def payload_from_read_result(result):
    """Normalize the value returned by a read capability into an encoded image.

    Accepted shapes:

    - str: a (possibly prefixed) base64 string, used as is.
    - byte sequences (see :func:`as_bytes`): raw file contents, base64 encoded.
    - mapping or object with one of the fields in `payload_field_names`,
      checked in that order. String values are used as is, and byte sequences
      are base64 encoded.

    Empty payloads are skipped.

    :return: the encoded image, or None if result carries no usable payload.
    """
    if result is None:
        return None
    if isinstance(result, str):
        return result or None
    data = as_bytes(result)
    if data is not None:
        return encode(data) if data else None

    for field_name in payload_field_names:
        if isinstance(result, collections.abc.Mapping):
            value = result.get(field_name)
        else:
            value = getattr(result, field_name, None)
        if isinstance(value, str):
            if value:
                return value
            continue
        data = as_bytes(value)
        if data:
            return encode(data)
    return None
