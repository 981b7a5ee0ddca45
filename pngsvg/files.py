#!/usr/bin/env python3
"""Access to the files used and produced by conversions.

Conversions need exactly two capabilities, reading a source image and writing
the produced document, both exposed by :class:`FileAPI`. Host runtimes name
these operations in several ways; :meth:`FileAPI.from_object` and
:func:`find_files_api` map a host object onto the FileAPI interface, so that
method-name probing does not go beyond this module.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import os
import collections
import collections.abc

from . import log
from .config import options
from .misc import get_callable, resolve

# Method names probed in host objects, by priority
read_method_names = ("read", "read_file", "readFile", "get", "get_file", "getFile")
write_method_names = ("write", "write_file", "writeFile", "save", "save_file", "saveFile", "set")
save_method_names = ("save", "save_file", "saveFile")


class FileAPIError(Exception):
    """Base class for errors accessing files through a FileAPI.
    """
    pass


class ReadUnavailableError(FileAPIError):
    """No read capability is available, or it failed.
    """
    pass


class WriteFailedError(FileAPIError):
    """No write capability is available, or it failed.
    """
    pass


class FileAPI:
    """Narrow interface with the read and write capabilities used by conversions.

    Any of the capabilities may be missing. Callables may be regular functions
    or return awaitables.
    """

    def __init__(self, read=None, write=None, save=None, files=None):
        """
        :param read: callable `read(name)` returning the file contents as
          bytes, a base64 string or a structured object (see
          :func:`pngsvg.dataurl.payload_from_read_result`).
        :param write: callable `write(name, content)` that stores content (a str).
        :param save: callable following the alternate `save(name, {"data": content})`
          convention. It is only used if write fails.
        :param files: mapping of names to file contents, used when read is not
          available or does not return data.
        """
        self._read = read
        self._write = write
        self._save = save
        self.files = files

    @classmethod
    def from_object(cls, obj):
        """Build a FileAPI from the methods found in obj, or return None
        if obj provides neither read nor write capabilities.
        """
        if obj is None:
            return None
        read = get_callable(obj, *read_method_names)
        write = get_callable(obj, *write_method_names)
        save = get_callable(obj, *save_method_names)
        files = getattr(obj, "files", None)
        if not isinstance(files, collections.abc.Mapping):
            files = None
        if read is None and write is None and files is None:
            return None
        return cls(read=read, write=write, save=save, files=files)

    @property
    def can_read(self):
        return self._read is not None or self.files is not None

    @property
    def can_write(self):
        return self._write is not None

    async def read(self, name):
        """Return the raw result of reading name.

        :raises ReadUnavailableError: if there is no read capability or it fails.
        """
        if self._read is None:
            if self.files is None:
                raise ReadUnavailableError("No read capability is available")
            return self.read_from_files(name)
        try:
            return await resolve(self._read(name))
        except Exception as ex:
            raise ReadUnavailableError(f"Cannot read {name!r}: {ex!r}") from ex

    def read_from_files(self, name):
        """Return the contents stored for name in the files mapping, or None
        if not available.
        """
        if self.files is None:
            return None
        return self.files.get(name)

    async def write(self, name, content):
        """Store content with the given name.

        :raises WriteFailedError: if there is no write capability or it fails.
        """
        if self._write is None:
            raise WriteFailedError("No write capability is available")
        try:
            await resolve(self._write(name, content))
        except Exception as ex:
            if self._save is None:
                raise WriteFailedError(f"Cannot write {name!r}: {ex!r}") from ex
            log.debug(f"Writing {name!r} failed ({ex!r}), trying the save(name, {{data}}) convention")
            try:
                await resolve(self._save(name, {"data": content}))
            except Exception as save_ex:
                raise WriteFailedError(f"Cannot write {name!r}: {save_ex!r}") from save_ex

    def __repr__(self):
        return f"{self.__class__.__name__}(can_read={self.can_read}, can_write={self.can_write})"


class DirectoryFileAPI(FileAPI):
    """FileAPI over a directory in the local file system.

    Files are read as bytes and written as UTF-8 text. Names must be relative
    to the base dir and cannot point outside it.
    """

    def __init__(self, base_dir):
        self.base_dir = os.path.abspath(base_dir)
        super().__init__(read=self.read_bytes, write=self.write_text)

    def get_path(self, name):
        path = os.path.abspath(os.path.join(self.base_dir, name))
        if os.path.commonpath([self.base_dir, path]) != self.base_dir:
            raise ValueError(f"Name {name!r} points outside {self.base_dir!r}")
        return path

    def read_bytes(self, name):
        with open(self.get_path(name), "rb") as input_file:
            return input_file.read()

    def write_text(self, name, content):
        path = self.get_path(name)
        if os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as output_file:
            output_file.write(content)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.base_dir!r})"


def find_files_api(runtime, extension_ids=None, fallback_files=None):
    """Find a usable FileAPI among the extensions loaded by a host runtime.

    :param runtime: host object with an `extensions` mapping of ids to extension objects.
      It can be None.
    :param extension_ids: ids of the extensions to be probed first, before all others.
      If None, `pngsvg.config.options.files_extension_ids` is used.
    :param fallback_files: optional mapping of names to contents (e.g., a
      host-global files object) used when the found API cannot read a file.
      It is also consulted for names missing from the extension's own files mapping.
    :return: the first FileAPI found, or None if none is available.
    """
    extension_ids = extension_ids if extension_ids is not None else options.files_extension_ids
    extensions = getattr(runtime, "extensions", None)
    if not isinstance(extensions, collections.abc.Mapping):
        extensions = {}

    candidate_ids = [i for i in extension_ids if i in extensions]
    candidate_ids += [i for i in extensions if i not in candidate_ids]

    api = None
    for extension_id in candidate_ids:
        api = FileAPI.from_object(extensions[extension_id])
        if api is not None:
            log.debug(f"Using the files API of extension {extension_id!r}: {api}")
            break

    if fallback_files is not None:
        if api is None:
            api = FileAPI(files=fallback_files)
        elif api.files is None:
            api.files = fallback_files
        else:
            api.files = collections.ChainMap(api.files, fallback_files)

    if api is None:
        log.debug("No files API could be found in the runtime")
    return api
