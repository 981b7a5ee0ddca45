#!/usr/bin/env python3
"""PNG to SVG embedding (pngsvg) library.

A PNG image is wrapped, unchanged, into a minimal SVG document that references
it as a base64 data URL and declares the PNG's intrinsic size.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import os as _os
import sys as _sys
import appdirs as _appdirs

# Current installation dir of pngsvg
pngsvg_installation_dir = _os.path.dirname(_os.path.abspath(__file__))

# User configuration dir (e.g., ~/.config/pngsvg in many linux distributions).
# It is not created by pngsvg, only read if present.
user_config_dir = _os.path.join(
    _os.path.abspath(_os.path.expanduser(_appdirs.user_config_dir())), "pngsvg")

# Absolute, real path to the calling script's dir.
# A pngsvg.ini file present here overwrites the user's configuration.
calling_script_dir = _os.path.realpath(
    _os.path.dirname(_os.path.abspath(_sys.argv[0]))) \
    if _sys.argv and _sys.argv[0] else _os.getcwd()

# pylint: disable=wrong-import-position
# Basic tools among core modules
from . import misc
# Global configuration modules
from . import config
# Logging tools
from . import log
from .log import logger

# Setup logging so that it is used from here on. Done here to avoid circular dependencies.
logger.selected_log_level = log.get_level(
    name=config.options.selected_log_level,
    lower_priority=config.options.verbose)
logger.show_prefixes = config.options.log_level_prefix
logger.show_prefix_level = logger.get_level(
    name=config.options.show_prefix_level)

# Conversion pipeline
from . import dataurl
from . import png
from . import svg
from . import files
from . import convert
# Host integration
from . import extension

from .png import ImageDimensions, NotAPngError, parse_dimensions
from .svg import build_svg
from .files import FileAPI, DirectoryFileAPI, ReadUnavailableError, WriteFailedError
from .convert import (ConversionResult, WrittenAs, InlineDataUrl, ReadUnavailable,
                      convert_file, convert_image, convert_sync)

# Run the setter functions on the default values too, allowing validation and normalization
config.options.update(config.options, trigger_events=True)

if config.ini.used_config_paths[1:]:
    logger.info(f"Additional .ini files employed: "
                f"{', '.join(repr(p) for p in config.ini.used_config_paths[1:])}.")
