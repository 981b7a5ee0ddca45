#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Logging utilities for `pngsvg`.

Conversions report their progress and degradations (unreadable headers,
failed writes, missing input) through the shared :data:`logger`. Messages are
written to stderr so they never mix with documents produced on stdout.

It uses only symbols from .misc and .config, but no other module in pngsvg.
"""
__author__ = "The pngsvg developers"
__date__ = "2024/05/02"

import contextlib
import sys
import time
import rich.console

from .misc import ExposedProperty
from .misc import Singleton
from . import config


class LogLevel:
    """Named type of message. Lower priority values are more important.
    """

    # pylint: disable=too-few-public-methods

    def __init__(self, name, priority=0, style=None, help_message=None):
        """
        :param name: unique name for the level.
        :param priority: position of the level, 0 being the most important.
        :param style: rich style for messages of this level, or None for the default one.
        :param help_message: optional help explaining the purpose of the level.
        """
        self.name = name
        self.priority = priority
        self.style = style
        self.help = help_message
        self.prefix = f"[{name[0].upper()}] "

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name}:{self.priority})"


@config.aini.managed_attributes
class Logger(metaclass=Singleton):
    """Message hub for `pngsvg`.

    A message is shown only if its level is at least as important as
    `selected_log_level`, which follows the `selected_log_level` and `verbose`
    entries of `pngsvg.config.options`.
    """

    # Styles of each level, overwritten by the [pngsvg.log.Logger] ini section
    style_core = "#28c9ff"
    style_error = "bold #ff5255"
    style_warn = "#ffca4f"
    style_message = "#28c9ff"
    style_verbose = "#a5d3a5"
    style_info = "#9b5ccb"
    style_debug = "#909090"

    # Level names, from most to least important, and their purpose
    level_descriptions = (
        ("core", "Always shown"),
        ("error", "A conversion could not produce a document"),
        ("warn", "A conversion degraded, e.g., unknown dimensions or inline output"),
        ("message", "Regular console messages"),
        ("verbose", "Conversion progress"),
        ("info", "Details of each conversion step"),
        ("debug", "Host probing and fallback traces"),
    )

    def __init__(self):
        self.levels = [LogLevel(name, priority=i, style=getattr(self, f"style_{name}"), help_message=help_message)
                       for i, (name, help_message) in enumerate(self.level_descriptions)]
        self.name_to_level = {level.name: level for level in self.levels}
        for level in self.levels:
            setattr(self, f"level_{level.name}", level)

        # Only core messages are shown until pngsvg/__init__.py applies the configuration
        self.selected_log_level = self.levels[0]
        self.show_prefixes = False
        self.show_prefix_level = self.level_info

        # Level and end string of the last shown message, used to join messages in one line
        self._last_end = None
        self._last_level = None

    def levels_by_priority(self):
        """Return the available levels, most important first.
        """
        return sorted(self.levels, key=lambda level: level.priority)

    def log(self, msg, level, end="\n", file=None, markup=False, highlight=False, style=None):
        """Show msg if level is active.

        :param msg: message to be logged.
        :param level: LogLevel of the message.
        :param end: string appended after the message.
        :param file: where to write the message. If None, sys.stderr is used.
        :param markup: should rich markup be interpreted within the message?
        :param highlight: should rich highlight numbers, strings, etc., in the message?
        :param style: if not None, it replaces the level's style.
        """
        # pylint: disable=too-many-arguments
        if not self.level_active(level):
            return

        continues_line = self._last_end is not None and not self._last_end.endswith("\n")
        separator = "\n" if continues_line and self._last_level is not level else ""
        show_prefix = self.show_prefixes \
                      and not (continues_line and self._last_level is level) \
                      and self.selected_log_level.priority > self.show_prefix_level.priority

        console = rich.console.Console(file=file or sys.stderr, markup=markup, highlight=highlight)
        console.print(f"{separator}{level.prefix if show_prefix else ''}{msg}{end}",
                      end="", style=style or level.style, highlight=highlight, markup=markup)

        self._last_end = end
        self._last_level = level

    def core(self, msg, **kwargs):
        self.log(msg=msg, level=self.level_core, **kwargs)

    def error(self, msg, **kwargs):
        self.log(msg=msg, level=self.level_error, **kwargs)

    def warn(self, msg, **kwargs):
        self.log(msg=msg, level=self.level_warn, **kwargs)

    def message(self, msg, **kwargs):
        self.log(msg=msg, level=self.level_message, **kwargs)

    def verbose(self, msg, **kwargs):
        self.log(msg=msg, level=self.level_verbose, **kwargs)

    def info(self, msg, **kwargs):
        self.log(msg=msg, level=self.level_info, **kwargs)

    def debug(self, msg, **kwargs):
        self.log(msg=msg, level=self.level_debug, **kwargs)

    @contextlib.contextmanager
    def log_context(self, msg, level, sep="...", show_duration=True):
        """Log msg, run the `with` block, then log its completion
        (and run time, if show_duration is True) with the same level.
        The block always runs, whether or not level is active.
        """
        self.log(msg=msg, end=sep, level=level)
        time_before = time.time()
        yield None
        run_time = time.time() - time_before

        same_line = self._last_level is level and self._last_end == sep
        msg_after = " done" if same_line else f"done ({msg.rstrip()})"
        if show_duration:
            msg_after += f" (took {run_time:.2f}s)"
        self.log(msg=msg_after + ".", level=level)

    def verbose_context(self, msg, sep="...", show_duration=True):
        return self.log_context(msg=msg, level=self.level_verbose, sep=sep, show_duration=show_duration)

    def info_context(self, msg, sep="...", show_duration=True):
        return self.log_context(msg=msg, level=self.level_info, sep=sep, show_duration=show_duration)

    def debug_context(self, msg, sep="...", show_duration=True):
        return self.log_context(msg=msg, level=self.level_debug, sep=sep, show_duration=show_duration)

    def level_active(self, name):
        """Return True if and only if messages of the level (or level name) are shown.
        """
        level = name if isinstance(name, LogLevel) else self.name_to_level[name]
        return level.priority <= self.selected_log_level.priority

    @property
    def warn_active(self):
        return self.level_active("warn")

    @property
    def verbose_active(self):
        return self.level_active("verbose")

    @property
    def debug_active(self):
        return self.level_active("debug")

    def report_level_status(self):
        """Return a table of the available levels and whether they are active.
        """
        lines = [f"{'level':8s}  {'priority':8s}  {'active':6s}"]
        lines.append("-" * len(lines[0]))
        lines.extend(f"{level.name:8s}  {str(level.priority):8s}  {self.level_active(level)}"
                     for level in self.levels_by_priority())
        return "\n".join(lines)

    def get_level(self, name, lower_priority=0):
        """Return the level with the given name, after moving lower_priority
        positions towards less important levels (clamped to the available ones).
        """
        priority = self.name_to_level[name].priority + lower_priority
        levels = self.levels_by_priority()
        return levels[max(0, min(priority, len(levels) - 1))]

    def __repr__(self):
        return f"{self.__class__.__name__}(selected={self.selected_log_level})"


# Singleton instance of the logger, shared across modules even if reinstantiated.
logger = Logger()
assert logger is Logger(), "Singleton not working for log.py"

# Expose logging functions
get_level = logger.get_level
log = logger.log
core = logger.core
error = logger.error
warn = logger.warn
message = logger.message
verbose = logger.verbose
info = logger.info
debug = logger.debug

# Expose functions to check whether a level is active or not
warn_active = ExposedProperty(instance=logger, property_name="warn_active")
verbose_active = ExposedProperty(instance=logger, property_name="verbose_active")
debug_active = ExposedProperty(instance=logger, property_name="debug_active")

report_level_status = logger.report_level_status
