#!/usr/bin/env python3
"""
# The config module

The config module deals with two main aspects:

    1. It provides the pngsvg.config.options object with global configurations shared among pngsvg
       modules and accessible to hosts using pngsvg.
       These options can be accessed and set programmatically (e.g., `pngsvg.config.options.verbose += 1`).

    2. It provides the pngsvg.config.ini object to access properties defined in `.ini` files.
       These set the default option values and the class attributes of
       classes decorated with `pngsvg.config.aini.managed_attributes`.

## Effective parameter values

The values in `pngsvg.config.options` are given by the first of these options:

1. Programmatically set properties, e.g., `pngsvg.config.options.verbose += 2`.
   The last set value is used.
2. A `pngsvg.ini` file in the same folder as the invoked script.
3. The `pngsvg.ini` file in the user's configuration dir (e.g., `~/.config/pngsvg/pngsvg.ini`).
4. The `pngsvg.ini` file shipped with pngsvg.

From there on, pngsvg functions adhere to the following principle:

1. If a parameter is set to a non-None value, that value is used.
2. If a parameter with default value None is set to None or not specified,
   its value is set based on the properties in `pngsvg.config.options`.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

# pngsvg.config.ini : file-based config management
from .aini import ini, managed_attributes
# pngsvg.config.options : programmatic config management, defaulting to pngsvg.config.ini
from . import aoptions

options = aoptions.Options()
assert options is aoptions.Options(), "Singleton not working"


def report_configuration():
    """Return a string describing the current configuration status.
    """
    from .. import log

    return "\n".join((
        "Combined ini file configurations:",
        repr(ini),
        "",
        "Parameters of pngsvg.config.options (after any programmatic changes):",
        "\n".join((f"{k} = {v}" for k, v in options.items())),
        "",
        "Logging status:",
        log.report_level_status()
    ))
