#!/usr/bin/env python3
"""Host extension exposing the PNG to SVG conversion as a reporter block.

Visual-programming hosts (e.g., Scratch-like runtimes) load extensions that
describe their blocks with `get_info()` and implement each block as a method
receiving a dict of arguments. :class:`PNGtoSVGExtension` follows that
convention, and :func:`load_extension` / :func:`unload_extension` handle its
registration lifecycle.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

from . import log
from . import convert
from .config import options
from .config.aini import managed_attributes
from .files import find_files_api
from .misc import Singleton, get_callable


@managed_attributes
class PNGtoSVGExtension:
    """Extension with a single reporter block that converts a PNG file
    into an SVG file, reporting the written file name (or the document
    as a data URL when it cannot be written).
    """
    # Unique id of the extension in the host
    extension_id = "pngToSvg"
    # Human-friendly name of the extension
    extension_name = "PNG → SVG"
    # Name of the method implementing the conversion block
    block_opcode = "convertPNG"
    # Text of the block, with argument placeholders
    block_text = "convert PNG file [INFILE] to SVG named [OUTNAME]"

    def __init__(self, runtime, fallback_files=None):
        """
        :param runtime: host runtime, where the files API is looked for
          (see :func:`pngsvg.files.find_files_api`).
        :param fallback_files: optional mapping of names to contents used as last
          resort source of input files.
        """
        self.runtime = runtime
        self.fallback_files = fallback_files

    def get_info(self):
        """Return the description of the extension and its blocks.
        """
        return {
            "id": self.extension_id,
            "name": self.extension_name,
            "blocks": [
                {
                    "opcode": self.block_opcode,
                    "blockType": "reporter",
                    "text": self.block_text,
                    "arguments": {
                        "INFILE": {"type": "string", "defaultValue": options.default_input_name},
                        "OUTNAME": {"type": "string", "defaultValue": options.default_output_name},
                    },
                },
            ],
        }

    async def convert_png(self, args):
        """Implementation of the conversion block.

        :param args: dict with the INFILE and OUTNAME block arguments.
        :return: the written file name, the document as a data URL,
          or an error message starting with "ERROR:".
        """
        input_name = args.get("INFILE") or options.default_input_name
        output_name = args.get("OUTNAME") or options.default_output_name
        file_api = find_files_api(self.runtime, fallback_files=self.fallback_files)
        result = await convert.convert_file(
            input_name=input_name, output_name=output_name, file_api=file_api)
        return result.as_text()

    def __getattr__(self, item):
        # Hosts call blocks by their opcode
        if item == object.__getattribute__(self, "block_opcode"):
            return self.convert_png
        raise AttributeError(item)


class ExtensionRegistry(metaclass=Singleton):
    """Registry of the extension instances loaded by this process.
    """

    def __init__(self):
        self.id_to_extension = {}

    def register(self, extension_id, extension):
        """Register an extension with a unique id.

        :raises ValueError: if another extension is registered with the same id.
        """
        if extension_id in self.id_to_extension:
            raise ValueError(f"An extension with id {extension_id!r} is already registered")
        self.id_to_extension[extension_id] = extension
        log.debug(f"Registered extension {extension_id!r}")

    def unregister(self, extension_id):
        """Remove an extension from the registry and return it, or return None
        if it was not registered.
        """
        extension = self.id_to_extension.pop(extension_id, None)
        if extension is not None:
            log.debug(f"Unregistered extension {extension_id!r}")
        return extension

    def get(self, extension_id, default=None):
        return self.id_to_extension.get(extension_id, default)

    def __contains__(self, extension_id):
        return extension_id in self.id_to_extension

    def __len__(self):
        return len(self.id_to_extension)

    def __repr__(self):
        return f"{self.__class__.__name__}({sorted(self.id_to_extension)})"


def load_extension(runtime, registry=None, fallback_files=None):
    """Create and register the PNG to SVG extension, once.

    If runtime has an `extension_manager` with a `register_extension` method
    (or `_register_extension`), the extension is also registered there.

    :param runtime: host runtime passed to the extension.
    :param registry: ExtensionRegistry to be used. If None, the global registry is used.
    :param fallback_files: see :class:`PNGtoSVGExtension`.
    :return: the registered extension instance. If it had already been loaded,
      the existing instance is returned.
    :raises: any exception raised by the host register call. The extension is
      then not registered, and loading can be attempted again.
    """
    registry = registry if registry is not None else ExtensionRegistry()
    extension = registry.get(PNGtoSVGExtension.extension_id)
    if extension is not None:
        return extension

    extension = PNGtoSVGExtension(runtime=runtime, fallback_files=fallback_files)
    registry.register(extension.extension_id, extension)

    host_register = get_callable(getattr(runtime, "extension_manager", None),
                                 "register_extension", "_register_extension")
    if host_register is not None:
        try:
            host_register(extension.extension_id, extension)
        except Exception:
            # Only kept in the registry once the host accepts it
            registry.unregister(extension.extension_id)
            raise
        log.verbose(f"Extension {extension.extension_id!r} registered in the host runtime")
    return extension


def unload_extension(registry=None, runtime=None):
    """Unregister the PNG to SVG extension, from the host runtime's extension
    manager too if it has an `unregister_extension` method.

    :return: the unregistered extension, or None if it was not loaded.
    """
    registry = registry if registry is not None else ExtensionRegistry()
    extension = registry.unregister(PNGtoSVGExtension.extension_id)

    host_unregister = get_callable(getattr(runtime, "extension_manager", None),
                                   "unregister_extension", "_unregister_extension")
    if extension is not None and host_unregister is not None:
        host_unregister(extension.extension_id)
    return extension
