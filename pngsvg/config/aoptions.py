#!/usr/bin/env python3
"""
Implementation of the class of the pngsvg.config.options object.

Option configuration in pngsvg is centralized through pngsvg.config.options:

    - Properties defined in `pngsvg.config.options` are used by pngsvg modules, and can also be used by
      hosts embedding pngsvg.

    - Functions with optional arguments with default None values
      substitute None for the corresponding value in pngsvg.config.options,
      e.g., to select the output name of a conversion.

    - Hosts may alter values in pngsvg.config.options at any time.
      Properties are accessed and modified with `pngsvg.config.options.property`
      and `pngsvg.config.options.property = value`, respectively.
      Setting a value runs the property's setter, which validates and normalizes it.

    - The default values for pngsvg.config.options are obtained through pngsvg.config.ini,
      from the `[pngsvg.config.options]` section.

There is no command line interface: options are only set programmatically.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

from .aini import ini
from ..misc import Singleton

# Section of the .ini files that contains the default option values
options_section_name = "pngsvg.config.options"

# Allowed message types, see pngsvg.log
_logging_level_names = ["core", "error", "warn", "message", "verbose", "info", "debug"]


class OptionsBase(metaclass=Singleton):
    """Singleton class that holds a set of global options.

    New properties can be defined using the :meth:`OptionsBase.property` decorator.
    Properties are defined using the decorated function's name.

    The following internal attributes control the class' behavior:

        - `_name_to_property`: a live dictionary of stored properties
        - `_name_to_setter`: a dictionary storing the decorated functions that
          play a role as setters of new variable values.
    """
    # Stored property values
    _name_to_property = {}
    # Setter functions for the properties
    _name_to_setter = {}
    # Set to True after initialization
    _custom_attribute_handler_active = False

    def __init__(self):
        """Initializer guaranteed to be called once thanks to the Singleton metaclass.
        """
        # The setter functions are activated only after all properties are defined
        self._custom_attribute_handler_active = True

    @classmethod
    def property(cls, default=None):
        """Decorator for properties that can be set programmatically.

        Functions being decorated play a role similar to
        the `@x.setter`-decorated function in the regular @property protocol:

        - Decorated functions are called whenever
          `options.property_name = value` is used.

        - If a None value is returned, the property is updated with the original value without any transformation.

        - If a non-None value is returned, that value is used instead.

        - Setters may raise ValueError to reject invalid values, in which case the property is not modified.

        :param default: default value of the property. If None, it is read from the
          `[pngsvg.config.options]` section of the .ini files.
        """

        def property_setter_wrapper(decorated_method):
            name = decorated_method.__name__
            if name in cls._name_to_setter:
                raise SyntaxError(f"Error: name redefinition for {repr(name)}.")
            try:
                value = ini.get_key(options_section_name, name) if default is None else default
            except KeyError as ex:
                raise SyntaxError(f"Could not find default value for option {repr(name)} "
                                  f"in the call nor in any of the known .ini files.") from ex
            cls._name_to_setter[name] = decorated_method
            cls._name_to_property[name] = value
            return decorated_method

        return property_setter_wrapper

    def update(self, other, trigger_events=False):
        """Update self with other, using the non-None value items from other's `items()` method.

        :param other: dict-like object with key-value pairs to be used to update self.
        :param trigger_events: if True, the setter functions are used to assign any items found.
          If False, self's attributes are updated directly without using those methods.
        """
        if trigger_events:
            for k, v in list(other.items()):
                if v is not None:
                    self.__setattr__(k, v)
        else:
            for k, v in list(other.items()):
                if v is not None:
                    self._name_to_property[k] = v

    def items(self):
        return self._name_to_property.items()

    def __getattribute__(self, item):
        """After initialization, attributes are handled as properties.
        """
        if object.__getattribute__(self, "_custom_attribute_handler_active") is False:
            return object.__getattribute__(self, item)
        try:
            return object.__getattribute__(self, "_name_to_property")[item]
        except KeyError:
            return object.__getattribute__(self, item)

    def __setattr__(self, key, value):
        """After initialization, attributes are handled as properties.
        """
        if not object.__getattribute__(self, "_custom_attribute_handler_active"):
            object.__setattr__(self, key, value)
            return
        name_to_setter = object.__getattribute__(self, "_name_to_setter")
        name_to_property = object.__getattribute__(self, "_name_to_property")
        try:
            setter = name_to_setter[key]
        except KeyError:
            # Setting an entirely new property
            name_to_property[key] = value
            name_to_setter[key] = lambda a, b: b
            return
        r = setter(self, value)
        name_to_property[key] = r if r is not None else value

    def __iter__(self):
        return self._name_to_property.__iter__()

    def __str__(self):
        s = "Summary of pngsvg.config.options:\n\t- "
        s += "\n\t- ".join(f"{k:30s} = {repr(v)}"
                           for k, v in sorted(self.items())
                           if k[0] != "_")
        return s

    def __repr__(self):
        return f"Options({repr(self._name_to_property)})"


class Options(OptionsBase):
    """Class of the `pngsvg.config.options` object.
    """

    @OptionsBase.property()
    def verbose(self, value):
        """Be verbose? Higher values show less prioritary messages.
        Change at any time to modify the logger's verbosity.
        """
        from .. import log

        value = int(value)
        log.logger.selected_log_level = log.get_level(
            name=self.selected_log_level, lower_priority=value)
        return value

    @OptionsBase.property()
    def selected_log_level(self, value):
        """Maximum log level / minimum priority required when printing messages,
        before applying `verbose`.
        """
        from .. import log

        value = str(value)
        if value not in _logging_level_names:
            raise ValueError(f"Invalid log level {repr(value)}. "
                             f"Valid names: {', '.join(_logging_level_names)}")
        log.logger.selected_log_level = log.get_level(
            name=value, lower_priority=self.verbose)
        return value

    @OptionsBase.property()
    def log_level_prefix(self, value):
        """If True, logged messages include a prefix, e.g., based on their priority.
        """
        from .. import log

        log.logger.show_prefixes = bool(value)
        return log.logger.show_prefixes

    @OptionsBase.property()
    def show_prefix_level(self, value):
        """Least prioritary level for which prefixes are shown.
        """
        from .. import log

        log.logger.show_prefix_level = log.logger.get_level(str(value))
        return str(value)

    @OptionsBase.property()
    def default_input_name(self, value):
        """Name of the input PNG file offered by default to hosts.
        """
        value = str(value).strip()
        if not value:
            raise ValueError("The default input name cannot be empty")
        return value

    @OptionsBase.property()
    def default_output_name(self, value):
        """Output name used when a conversion does not specify one.
        The .svg suffix is added when missing.
        """
        value = str(value).strip()
        if not value:
            raise ValueError("The default output name cannot be empty")
        return value

    @OptionsBase.property()
    def files_extension_ids(self, value):
        """Ids of the host extensions probed first when looking for a files API.
        A single string or a sequence of strings can be used.
        """
        if isinstance(value, str):
            value = [value]
        return tuple(str(v) for v in value)
