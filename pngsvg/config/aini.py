#!/usr/bin/env python3
"""
Automatic file-based configuration based on the INI format.

The pngsvg library supports configuration files with `.ini` extension and format
compatible with python's configparser (https://docs.python.org/3/library/configparser.html#module-configparser).

File-based configuration is used to determine the default value of pngsvg.config.options,
and the class attributes of classes decorated with :func:`managed_attributes`.

When pngsvg is imported, the following configuration files are read, in the given order.
Order is important because read properties overwrite any previously set values.

1. The `pngsvg.ini` file provided with the pngsvg library installation.

2. The `pngsvg.ini` at the user's pngsvg configuration dir. This path is determined using the appdirs library,
   and depends on the OS. In many linux boxes, this dir is `~/.config/pngsvg`.

3. The `pngsvg.ini` file in the same folder as the calling script, if any.

Hosts may merge further files afterwards with `pngsvg.config.ini.update_from_path`.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import os
import ast
import configparser
import textwrap

from .. import calling_script_dir, pngsvg_installation_dir, user_config_dir
from ..misc import Singleton as _Singleton, class_to_fqn, BootstrapLogger


class Ini(metaclass=_Singleton):
    """Class of the pngsvg.config.ini object, that exposes file-defined configurations.
    """
    global_ini_path = os.path.join(pngsvg_installation_dir, "config", "pngsvg.ini")
    user_ini_path = os.path.join(user_config_dir, "pngsvg.ini")
    local_ini_path = os.path.join(calling_script_dir, "pngsvg.ini")

    def __init__(self):
        super().__init__()
        # Keep track of what config files have been used to get the final result
        self.used_config_paths = []

        # Parse configuration files with the specified prioritization
        self.config_parser = configparser.ConfigParser()
        self.update_from_path(self.global_ini_path)
        for ini_path in (self.user_ini_path, self.local_ini_path):
            if os.path.isfile(ini_path) and ini_path not in self.used_config_paths:
                self.update_from_path(ini_path)

    def update_from_path(self, ini_path):
        """Update the current configuration by reading the contents of ini_path.
        """
        try:
            self.config_parser.read(ini_path, encoding="utf-8")
            self.used_config_paths.append(ini_path)
        except configparser.Error as ex:
            BootstrapLogger().warn(
                f"Found invalid ini path {ini_path} ({repr(ex).strip()}). "
                f"Any configuration in this file will be ignored.")

    def get_key(self, section, name):
        """Return a read key value in the given section (if existing),
        after applying ast.literal_eval on the value to recognize any
        valid python literals (essentially numbers, lists, dicts, tuples, booleans and None).

        :raises KeyError: if the section or the key are not defined.
        """
        try:
            # Attempt to interpret the string as a literal
            return ast.literal_eval(self.config_parser[section][name])
        except (SyntaxError, ValueError):
            # The key could not be parsed as a literal, it is returned as a string
            # (this is configparser's default)
            return self.config_parser[section][name]

    @property
    def sections_by_name(self):
        """Get a dict of all configparser.Section instances, including the default section.
        """
        return dict(self.config_parser.items())

    def __repr__(self):
        s = "File-based configuration for pngsvg, originally read in this order:\n  - "
        s += "\n  - ".join(self.used_config_paths)
        s = textwrap.indent(s, "# ")
        for section_name, section in sorted(self.sections_by_name.items()):
            if not section:
                continue
            s += "\n\n"
            s += f"[{section_name}]\n\n"
            for k, v in sorted(section.items()):
                s += f"{k} = {v}\n"
        return s


# Export the ini object
ini = Ini()
assert ini is Ini(), "Singleton not working for pngsvg.config.ini"


def managed_attributes(cls):
    """Decorator for classes so that their (class) attributes are set
    based on the `.ini` files found. Attributes starting with `_` are not considered.

    Values are read from the section titled as the classes fully qualified name
    (e.g., using the `[pngsvg.extension.PNGtoSVGExtension]` header in one of the .ini files).

    Note that adding keys to that section corresponding to attributes not present
    in the definition of cls are ignored, i.e., new attributes are not added to cls.
    """
    try:
        # This import will work once the log module is finished loading
        from ..log import logger
    except ImportError:
        # Allow displaying messages while the logger itself is being defined
        logger = BootstrapLogger()

    cls_fqn = class_to_fqn(cls)

    for attribute, old_value in [(k, v) for k, v in cls.__dict__.items()
                                 if not k.startswith("_")
                                    and not callable(v)
                                    and not isinstance(v, (classmethod, staticmethod, property))]:
        try:
            setattr(cls, attribute, ini.get_key(cls_fqn, attribute))
            if str(getattr(cls, attribute)) != str(old_value):
                logger.debug(
                    f"Updating {cls_fqn}.{attribute} = {getattr(cls, attribute)} based on .ini files "
                    f"(it was {old_value})")
        except KeyError:
            # Not configured: the value in the class definition is kept
            pass

    for k in ini.sections_by_name.get(cls_fqn, {}):
        if k not in cls.__dict__:
            logger.warn(
                f"In the .ini configuration files, managed attribute {repr(k)} is defined for {cls_fqn}, "
                f"but {cls.__name__} itself does not define that class attribute. The attribute is NOT added "
                f"to {cls.__name__}.")

    return cls
