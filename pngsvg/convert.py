#!/usr/bin/env python3
"""Conversion of PNG images into SVG documents.

A conversion is a linear sequence of steps:

1. Obtain the encoded image, either passed directly or read through a
   :class:`pngsvg.files.FileAPI`.
2. Make sure it carries a `data:image/png;base64,` prefix.
3. Parse the image dimensions. Failing to do so is not fatal: the document
   is then produced with unknown dimensions.
4. Build the SVG document.
5. Write the document, or return it as a data URL if it cannot be written.

Only failing to obtain the image data aborts a conversion. That case is also
reported as a result (:class:`ReadUnavailable`), not raised, so that hosts can
show it directly to their users.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import asyncio
import dataclasses

from . import log
from . import dataurl
from . import png
from . import svg
from .config import options
from .files import ReadUnavailableError, WriteFailedError

# Suffix of written documents
svg_suffix = ".svg"


@dataclasses.dataclass(frozen=True)
class ConversionResult:
    """Abstract base class of all conversion outcomes. Only its subclasses
    (:class:`WrittenAs`, :class:`InlineDataUrl` and :class:`ReadUnavailable`)
    can be instantiated.
    """
    # Was an SVG document produced?
    ok = True

    def __post_init__(self):
        if type(self) is ConversionResult:
            raise TypeError(f"{ConversionResult.__name__} is abstract. Use one of its subclasses.")

    def as_text(self):
        """Return the string reported to hosts for this result.
        """
        raise NotImplementedError()


@dataclasses.dataclass(frozen=True)
class WrittenAs(ConversionResult):
    """The document was written with the given name.
    """
    name: str

    def as_text(self):
        return self.name


@dataclasses.dataclass(frozen=True)
class InlineDataUrl(ConversionResult):
    """The document could not be written, and is returned as a
    `data:image/svg+xml;base64,...` URL.
    """
    data_url: str

    @property
    def svg(self):
        """The SVG document contained in the data URL.
        """
        return dataurl.decode(self.data_url).decode("utf-8")

    def as_text(self):
        return self.data_url


@dataclasses.dataclass(frozen=True)
class ReadUnavailable(ConversionResult):
    """The input image could not be obtained, and no document was produced.
    """
    ok = False
    input_name: str
    reason: str = "no data"

    @property
    def message(self):
        return f"could not read file {self.input_name!r} with the available files API ({self.reason})"

    def as_text(self):
        return f"ERROR: {self.message}."


def output_file_name(name=None):
    """Return the name with which a document is written: name itself if it
    already ends in .svg, or name with the .svg suffix otherwise.

    :param name: requested name. If None or empty,
      `pngsvg.config.options.default_output_name` is used.
    """
    name = name or options.default_output_name
    return name if name.endswith(svg_suffix) else name + svg_suffix


async def read_encoded_image(input_name, file_api):
    """Read input_name with file_api and return it as an encoded image.

    The files mapping of file_api is used if reading fails or produces
    no usable payload.

    :raises ReadUnavailableError: if no data can be obtained.
    """
    if file_api is None or not file_api.can_read:
        raise ReadUnavailableError("no files API with read capability is available")

    encoded_image = None
    try:
        encoded_image = dataurl.payload_from_read_result(await file_api.read(input_name))
    except ReadUnavailableError as ex:
        log.debug(f"Read failed ({ex}), trying the files mapping")
    if not encoded_image:
        encoded_image = dataurl.payload_from_read_result(file_api.read_from_files(input_name))
    if not encoded_image:
        raise ReadUnavailableError("no recognizable data was returned")
    return encoded_image


def get_dimensions(encoded_image):
    """Return the ImageDimensions of the encoded image, or None if they cannot
    be obtained.
    """
    try:
        return png.dimensions_from_base64(encoded_image)
    except png.NotAPngError as ex:
        log.warn(f"Image dimensions could not be read ({ex}). "
                 f"The document is produced with unknown dimensions.")
        return None


async def convert_image(image, output_name=None, file_api=None):
    """Convert an image into an SVG document, and write it if possible.

    :param image: the PNG image, as a bytes-like object or as an encoded image
      (base64 string with or without data URL prefix).
    :param output_name: name of the written document (the .svg suffix is added
      if missing). If None, `pngsvg.config.options.default_output_name` is used.
    :param file_api: FileAPI used to write the document. If None or without
      write capability, the document is returned as a data URL.
    :return: a :class:`WrittenAs` or :class:`InlineDataUrl` instance.
    """
    if dataurl.is_bytes_like(image):
        image = dataurl.encode(image)
    encoded_image = dataurl.ensure_prefix(image, mime_type=dataurl.PNG_MIME_TYPE)

    with log.logger.debug_context("Building SVG document"):
        dimensions = get_dimensions(encoded_image)
        svg_document = svg.build_svg(encoded_image, dimensions)
    log.info(f"Built SVG document of {len(svg_document)} characters "
             f"({'unknown dimensions' if dimensions is None else f'{dimensions.width}x{dimensions.height}'})")

    if file_api is not None and file_api.can_write:
        output_name = output_file_name(output_name)
        try:
            await file_api.write(output_name, svg_document)
            log.verbose(f"SVG document written to {output_name!r}")
            return WrittenAs(name=output_name)
        except WriteFailedError as ex:
            log.warn(f"{ex}. The document is returned as a data URL instead.")

    return InlineDataUrl(data_url=svg.svg_to_data_url(svg_document))


async def convert_file(input_name, output_name=None, file_api=None):
    """Read input_name through file_api, convert it into an SVG document,
    and write it with output_name if possible.

    :param input_name: name of the PNG file, as understood by file_api.
    :param output_name: name of the written document. See :func:`convert_image`.
    :param file_api: FileAPI used to read the image and write the document.
    :return: a :class:`WrittenAs`, :class:`InlineDataUrl` or :class:`ReadUnavailable` instance.
    """
    with log.logger.verbose_context(f"Converting {input_name!r} into SVG"):
        try:
            encoded_image = await read_encoded_image(input_name, file_api)
        except ReadUnavailableError as ex:
            log.error(f"Cannot convert {input_name!r}: {ex}")
            return ReadUnavailable(input_name=input_name, reason=str(ex))
        return await convert_image(encoded_image, output_name=output_name, file_api=file_api)


def convert_sync(input_name, output_name=None, file_api=None):
    """Blocking version of :func:`convert_file`, for callers without an event loop.
    """
    return asyncio.run(convert_file(input_name=input_name, output_name=output_name, file_api=file_api))
