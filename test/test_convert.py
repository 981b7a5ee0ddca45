#!/usr/bin/env python3
"""Unit tests for convert.py, including the end-to-end conversion scenarios.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import asyncio
import base64
import unittest
import xml.etree.ElementTree as ET
import numpy as np

from pngsvg import convert
from pngsvg import dataurl
from pngsvg.config import options
from pngsvg.files import FileAPI
from test_png import get_png_bytes


class RecordingWriter:
    def __init__(self):
        self.written = {}

    async def __call__(self, name, content):
        self.written[name] = content


def get_root(document):
    return ET.fromstring(document.encode("utf-8"))


class TestScenarios(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.png_bytes = get_png_bytes(width=10, height=20)
        self.encoded = base64.b64encode(self.png_bytes).decode("ascii")

    async def test_bare_base64_without_writer(self):
        api = FileAPI(read=lambda name: self.encoded)
        result = await convert.convert_file("image.png", "out", file_api=api)
        assert isinstance(result, convert.InlineDataUrl), result
        assert result.ok
        assert result.as_text().startswith("data:image/svg+xml;base64,")
        assert get_root(result.svg).attrib["viewBox"] == "0 0 10 20"

    async def test_structured_result_with_writer(self):
        writer = RecordingWriter()

        async def read(name):
            return {"data": "data:image/png;base64," + self.encoded}

        result = await convert.convert_file("image.png", "out", file_api=FileAPI(read=read, write=writer))
        assert result == convert.WrittenAs(name="out.svg"), result
        assert result.as_text() == "out.svg"
        assert list(writer.written) == ["out.svg"]
        root = get_root(writer.written["out.svg"])
        assert (root.attrib["width"], root.attrib["height"]) == ("10", "20")

    async def test_short_input_has_unknown_dimensions(self):
        short_bytes = self.png_bytes[:20]
        api = FileAPI(read=lambda name: short_bytes)
        result = await convert.convert_file("image.png", file_api=api)
        assert isinstance(result, convert.InlineDataUrl), result
        root = get_root(result.svg)
        assert root.attrib["width"] == root.attrib["height"] == "100%"
        assert root.attrib["viewBox"] == "0 0 100 100"
        href = root.find("{http://www.w3.org/2000/svg}image").attrib["href"]
        assert dataurl.decode(href) == short_bytes

    async def test_unrecognized_payload(self):
        writer = RecordingWriter()
        api = FileAPI(read=lambda name: {"unexpected": 123}, write=writer)
        result = await convert.convert_file("image.png", "out", file_api=api)
        assert isinstance(result, convert.ReadUnavailable), result
        assert not result.ok
        assert result.input_name == "image.png"
        assert result.as_text().startswith("ERROR:")
        assert "image.png" in result.as_text()
        assert not writer.written


class TestConvertFile(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.png_bytes = get_png_bytes(width=4, height=3)
        self.encoded = base64.b64encode(self.png_bytes).decode("ascii")

    async def test_missing_read_capability(self):
        for api in (None, FileAPI(write=RecordingWriter())):
            result = await convert.convert_file("image.png", file_api=api)
            assert isinstance(result, convert.ReadUnavailable), result

    async def test_failed_read_uses_files_mapping(self):
        def failing_read(name):
            raise FileNotFoundError(name)

        api = FileAPI(read=failing_read, files={"image.png": self.encoded})
        result = await convert.convert_file("image.png", file_api=api)
        assert isinstance(result, convert.InlineDataUrl), result
        assert get_root(result.svg).attrib["viewBox"] == "0 0 4 3"

        api = FileAPI(read=failing_read, files={})
        result = await convert.convert_file("image.png", file_api=api)
        assert isinstance(result, convert.ReadUnavailable), result

    async def test_empty_read_uses_files_mapping(self):
        api = FileAPI(read=lambda name: None, files={"image.png": self.png_bytes})
        result = await convert.convert_file("image.png", file_api=api)
        assert isinstance(result, convert.InlineDataUrl), result

    async def test_numpy_read_result(self):
        png_array = np.frombuffer(self.png_bytes, dtype=np.uint8)
        for read_result in (png_array, {"bytes": png_array}):
            api = FileAPI(read=lambda name, r=read_result: r)
            result = await convert.convert_file("image.png", file_api=api)
            assert isinstance(result, convert.InlineDataUrl), result
            href = get_root(result.svg).find("{http://www.w3.org/2000/svg}image").attrib["href"]
            assert dataurl.decode(href) == self.png_bytes

    async def test_failed_write_returns_data_url(self):
        def failing_write(name, content):
            raise PermissionError(name)

        api = FileAPI(read=lambda name: self.encoded, write=failing_write)
        result = await convert.convert_file("image.png", "out.svg", file_api=api)
        assert isinstance(result, convert.InlineDataUrl), result
        assert get_root(result.svg).attrib["width"] == "4"

    async def test_default_output_name(self):
        writer = RecordingWriter()
        api = FileAPI(read=lambda name: self.encoded, write=writer)
        result = await convert.convert_file("image.png", file_api=api)
        assert result == convert.WrittenAs(name=options.default_output_name + ".svg"), result

    async def test_concurrent_conversions(self):
        writer = RecordingWriter()
        api = FileAPI(read=lambda name: self.encoded, write=writer)
        results = await asyncio.gather(*(
            convert.convert_file("image.png", f"out{i}", file_api=api) for i in range(5)))
        assert [r.as_text() for r in results] == [f"out{i}.svg" for i in range(5)]
        assert len(set(writer.written.values())) == 1


class TestConvertImage(unittest.IsolatedAsyncioTestCase):
    async def test_bytes_and_encoded_inputs(self):
        png_bytes = get_png_bytes(width=5, height=6)
        encoded = base64.b64encode(png_bytes).decode("ascii")
        results = [await convert.convert_image(image)
                   for image in (png_bytes, encoded, "data:image/png;base64," + encoded)]
        assert all(isinstance(r, convert.InlineDataUrl) for r in results), results
        assert len({r.data_url for r in results}) == 1
        assert get_root(results[0].svg).attrib["viewBox"] == "0 0 5 6"

    async def test_uppercase_scheme(self):
        png_bytes = get_png_bytes(width=5, height=6)
        encoded = base64.b64encode(png_bytes).decode("ascii")
        result = await convert.convert_image("DATA:image/png;base64," + encoded)
        root = get_root(result.svg)
        assert root.attrib["viewBox"] == "0 0 5 6"
        href = root.find("{http://www.w3.org/2000/svg}image").attrib["href"]
        assert href == "data:image/png;base64," + encoded
        assert result.svg.count("base64,") == 1

    async def test_invalid_base64_degrades(self):
        result = await convert.convert_image("this is not base64!")
        assert isinstance(result, convert.InlineDataUrl), result
        assert get_root(result.svg).attrib["viewBox"] == "0 0 100 100"


class TestHelpers(unittest.TestCase):
    def test_output_file_name(self):
        assert convert.output_file_name("out") == "out.svg"
        assert convert.output_file_name("out.svg") == "out.svg"
        assert convert.output_file_name("out.png") == "out.png.svg"
        assert convert.output_file_name(None) == options.default_output_name + ".svg"
        assert convert.output_file_name("") == options.default_output_name + ".svg"

    def test_results_are_tagged(self):
        with self.assertRaises(TypeError):
            convert.ConversionResult()
        written = convert.WrittenAs(name="out.svg")
        inline = convert.InlineDataUrl(data_url="data:image/svg+xml;base64,PHN2Zy8+")
        unavailable = convert.ReadUnavailable(input_name="image.png")
        assert (written.ok, inline.ok, unavailable.ok) == (True, True, False)
        assert written.as_text() == "out.svg"
        assert inline.as_text() == inline.data_url and inline.svg == "<svg/>"
        assert unavailable.as_text().startswith("ERROR:")

    def test_convert_sync(self):
        encoded = base64.b64encode(get_png_bytes(width=2, height=2)).decode("ascii")
        result = convert.convert_sync("image.png", file_api=FileAPI(read=lambda name: encoded))
        assert isinstance(result, convert.InlineDataUrl), result


if __name__ == '__main__':
    unittest.main()
