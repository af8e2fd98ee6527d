# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Turning synthesized types into live instances."""
from __future__ import annotations

from .exceptions import ActivationError

__all__ = ['instantiate', 'invoke']


def instantiate(cls: type):
    """ Return a blank instance of ``cls``; ``__init__`` is not run. """
    try:
        return cls.__new__(cls)
    except Exception as e:
        raise ActivationError(f"Cannot instantiate {cls.__qualname__}: {e}") from e


def invoke(instance, routine_name: str, *args):
    """ Call the routine ``routine_name`` defined on the type of ``instance``. """
    try:
        routine = getattr(type(instance), routine_name)
    except AttributeError as e:
        raise ActivationError(f"{type(instance).__qualname__} has no routine {routine_name!r}") from e
    try:
        return routine(instance, *args)
    except Exception as e:
        raise ActivationError(f"Routine {routine_name!r} of {type(instance).__qualname__} failed: {e}") from e
