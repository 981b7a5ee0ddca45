#!/usr/bin/env python3
"""Generation of SVG documents that embed PNG images.

The raster data is not vectorized: the PNG file is referenced, unchanged, as a
base64 data URL from a single `<image>` element. The `<image>` element is
stretched to the box declared by the `<svg>` root (preserveAspectRatio="none"),
so that the declared size is authoritative.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import functools
import jinja2

from . import dataurl

# Name of the template in pngsvg/templates used to produce documents
template_name = "embedded_png.svg"
# Size used when the image dimensions are not known
unknown_size = "100%"
# viewBox extent used when the image dimensions are not known
unknown_viewbox_size = 100


@functools.lru_cache(maxsize=None)
def get_template():
    """Return the jinja2 template used to produce SVG documents.
    """
    jinja_env = jinja2.Environment(
        loader=jinja2.PackageLoader("pngsvg", "templates"),
        autoescape=jinja2.select_autoescape(enabled_extensions=("svg", "xml")))
    return jinja_env.get_template(template_name)


def build_svg(encoded_image, dimensions=None):
    """Return an SVG document that embeds a PNG image.

    :param encoded_image: the PNG image, either base64-encoded (with or without
      `data:...;base64,` prefix) or as a bytes-like object.
    :param dimensions: ImageDimensions of the image, or None if unknown.
      If None, the document is 100% wide and tall, with a 100x100 viewBox.
    :return: the SVG document as a string.
    """
    if dataurl.is_bytes_like(encoded_image):
        payload = dataurl.encode(encoded_image)
    else:
        payload = dataurl.strip_prefix(encoded_image)

    if dimensions is not None:
        width, height = dimensions.width, dimensions.height
        viewbox_width, viewbox_height = width, height
    else:
        width = height = unknown_size
        viewbox_width = viewbox_height = unknown_viewbox_size

    return get_template().render(
        payload=payload,
        width=width, height=height,
        viewbox_width=viewbox_width, viewbox_height=viewbox_height)


def svg_to_data_url(svg):
    """Return a self-contained `data:image/svg+xml;base64,...` URL for an SVG document.
    """
    return dataurl.to_data_url(svg, mime_type=dataurl.SVG_MIME_TYPE)
