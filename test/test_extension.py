#!/usr/bin/env python3
"""Unit tests for extension.py
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import base64
import types
import unittest

from pngsvg import extension
from pngsvg import dataurl
from pngsvg.config import options
from test_png import get_png_bytes


class FilesExtension:
    def __init__(self, stored=None):
        self.stored = dict(stored or {})

    async def readFile(self, name):
        return self.stored.get(name)

    async def writeFile(self, name, content):
        self.stored[name] = content


class ExtensionManager:
    def __init__(self):
        self.registered = {}

    def register_extension(self, extension_id, instance):
        self.registered[extension_id] = instance

    def unregister_extension(self, extension_id):
        del self.registered[extension_id]


class TestPNGtoSVGExtension(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.encoded = base64.b64encode(get_png_bytes(width=8, height=2)).decode("ascii")

    def test_get_info(self):
        info = extension.PNGtoSVGExtension(runtime=None).get_info()
        assert info["id"] == "pngToSvg"
        assert info["name"] == extension.PNGtoSVGExtension.extension_name
        assert len(info["blocks"]) == 1
        block = info["blocks"][0]
        assert block["opcode"] == "convertPNG"
        assert block["blockType"] == "reporter"
        assert "[INFILE]" in block["text"] and "[OUTNAME]" in block["text"]
        assert block["arguments"]["INFILE"]["defaultValue"] == options.default_input_name
        assert block["arguments"]["OUTNAME"]["defaultValue"] == options.default_output_name

    async def test_convert_png_writes_file(self):
        files_extension = FilesExtension({"in.png": self.encoded})
        runtime = types.SimpleNamespace(extensions={"files": files_extension})
        instance = extension.PNGtoSVGExtension(runtime=runtime)
        text = await instance.convert_png({"INFILE": "in.png", "OUTNAME": "out"})
        assert text == "out.svg"
        assert 'viewBox="0 0 8 2"' in files_extension.stored["out.svg"]

    async def test_block_called_by_opcode(self):
        files_extension = FilesExtension({options.default_input_name: self.encoded})
        runtime = types.SimpleNamespace(extensions={"files": files_extension})
        instance = extension.PNGtoSVGExtension(runtime=runtime)
        text = await getattr(instance, instance.block_opcode)({})
        assert text == options.default_output_name + ".svg"
        with self.assertRaises(AttributeError):
            getattr(instance, "missingBlock")

    async def test_fallback_files(self):
        instance = extension.PNGtoSVGExtension(
            runtime=types.SimpleNamespace(extensions={}),
            fallback_files={"in.png": "data:image/png;base64," + self.encoded})
        text = await instance.convert_png({"INFILE": "in.png", "OUTNAME": "out"})
        assert text.startswith("data:image/svg+xml;base64,")
        assert 'width="8"' in dataurl.decode(text).decode("utf-8")

    async def test_error_text(self):
        instance = extension.PNGtoSVGExtension(runtime=types.SimpleNamespace(extensions={}))
        text = await instance.convert_png({"INFILE": "missing.png", "OUTNAME": "out"})
        assert text.startswith("ERROR:"), text
        assert "missing.png" in text


class TestExtensionLifecycle(unittest.TestCase):
    def setUp(self):
        self.registry = extension.ExtensionRegistry()
        self.manager = ExtensionManager()
        self.runtime = types.SimpleNamespace(extensions={}, extension_manager=self.manager)
        extension.unload_extension(registry=self.registry)

    def tearDown(self):
        extension.unload_extension(registry=self.registry)

    def test_registry_is_singleton(self):
        assert extension.ExtensionRegistry() is self.registry

    def test_load_is_idempotent(self):
        first = extension.load_extension(self.runtime, registry=self.registry)
        second = extension.load_extension(self.runtime, registry=self.registry)
        assert first is second
        assert "pngToSvg" in self.registry
        assert self.registry.get("pngToSvg") is first
        assert self.manager.registered == {"pngToSvg": first}

    def test_unload(self):
        loaded = extension.load_extension(self.runtime, registry=self.registry)
        assert extension.unload_extension(registry=self.registry, runtime=self.runtime) is loaded
        assert "pngToSvg" not in self.registry
        assert self.manager.registered == {}
        assert extension.unload_extension(registry=self.registry, runtime=self.runtime) is None

    def test_failed_host_registration_can_be_retried(self):
        calls = []

        def flaky_register(extension_id, instance):
            calls.append(extension_id)
            if len(calls) == 1:
                raise RuntimeError("host busy")
            self.manager.registered[extension_id] = instance

        self.manager.register_extension = flaky_register
        with self.assertRaises(RuntimeError):
            extension.load_extension(self.runtime, registry=self.registry)
        assert "pngToSvg" not in self.registry
        assert self.manager.registered == {}

        loaded = extension.load_extension(self.runtime, registry=self.registry)
        assert calls == ["pngToSvg", "pngToSvg"]
        assert self.registry.get("pngToSvg") is loaded
        assert self.manager.registered == {"pngToSvg": loaded}

    def test_runtime_without_manager(self):
        loaded = extension.load_extension(types.SimpleNamespace(), registry=self.registry)
        assert self.registry.get("pngToSvg") is loaded
        assert extension.unload_extension(registry=self.registry) is loaded

    def test_duplicate_ids(self):
        self.registry.register("duplicated", object())
        try:
            with self.assertRaises(ValueError):
                self.registry.register("duplicated", object())
        finally:
            self.registry.unregister("duplicated")
        assert "duplicated" not in self.registry


if __name__ == '__main__':
    unittest.main()
