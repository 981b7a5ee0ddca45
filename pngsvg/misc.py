#!/usr/bin/env python3
"""Miscellaneous tools for `pngsvg`.

This module does not and should not import anything from pngsvg at definition
time, so that other modules may use misc tools while they are being defined."""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import inspect
import rich.console


class Singleton(type):
    """Classes using this as metaclass will only be instantiated once.
    """
    _instances = {}

    def __call__(cls, *args, **kwargs):
        """This method replaces the regular initializer of classes with this
        as their metaclass. `*args` and `**kwargs` are passed directly to
        their initializer and do not otherwise affect the Singleton behavior.
        """
        try:
            return cls._instances[cls]
        except KeyError:
            cls._instances[cls] = super().__call__(*args, **kwargs)
            return cls._instances[cls]


class ExposedProperty:
    """This method can be used to expose object properties as public callables
    that return what requesting that property would.
    """

    # pylint: disable=too-few-public-methods
    def __init__(self, instance, property_name):
        self.property_name = property_name
        self.instance = instance

    def __call__(self, *args, **kwargs):
        return getattr(self.instance, self.property_name)


def class_to_fqn(cls):
    """Given a class (type instance), return its fully qualified name (FQN).
    """
    return f"{str(cls.__module__) + '.' if cls.__module__ is not None else ''}" \
           f"{cls.__name__}"


def get_callable(obj, *names):
    """Return the first attribute of obj among names that is callable,
    or None if none of them is.
    """
    for name in names:
        candidate = getattr(obj, name, None)
        if callable(candidate):
            return candidate
    return None


async def resolve(value):
    """Await value if it is awaitable, otherwise return it unchanged.
    Host callables may be either regular functions or coroutine functions.
    """
    if inspect.isawaitable(value):
        return await value
    return value


class BootstrapLogger:
    """Imitate pngsvg.log.Logger's interface before it is loaded. This is needed to solve circular imports,
    i.e., when a message from the managed attributes decorator is emitted before the full logger is available
    (within the config submodule).

    Only messages of warn or higher priority are shown.
    """

    def __init__(self):
        self.console = rich.console.Console(highlight=False, markup=False, stderr=True)

    def log(self, *args, style=None, **kwargs):
        self.console.print(*args, **kwargs, style=style, highlight=False, markup=False)

    def core(self, *args, **kwargs):
        self.log(*args, **kwargs, style="#28c9ff")

    def error(self, *args, **kwargs):
        self.log(*args, **kwargs, style="#ff5255")

    def warn(self, *args, **kwargs):
        self.log(*args, **kwargs, style="#ffca4f")

    def message(self, *args, **kwargs):
        pass

    def verbose(self, *args, **kwargs):
        pass

    def info(self, *args, **kwargs):
        pass

    def debug(self, *args, **kwargs):
        pass
