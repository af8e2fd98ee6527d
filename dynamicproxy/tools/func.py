# Part of DynamicProxy, see License file for full copyright and licensing details.

from __future__ import annotations

from decorator import decorator

__all__ = [
    'locked',
    'synchronized',
]


def synchronized(lock_attr: str = '_lock'):
    """ Return a decorator running the method while holding the lock found
        on the instance (or class, for classmethods) under ``lock_attr``.
        The wrapper keeps the signature of the decorated method.
    """
    @decorator
    def locked(func, inst, *args, **kwargs):
        with getattr(inst, lock_attr):
            return func(inst, *args, **kwargs)
    return locked
locked = synchronized()
