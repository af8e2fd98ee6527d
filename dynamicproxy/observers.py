# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Observers notified around every call going through a proxy.

An observer is any object exposing ``before_execute`` and ``after_execute``;
:class:`ProxyObserver` documents that capability and may be subclassed, but
is not required. Both hooks run synchronously on the calling thread, the
first one right before the wrapped implementation is invoked, the second one
right after it returned. ``after_execute`` is not called when the wrapped
implementation raises.
"""
from __future__ import annotations

import enum
import logging
import threading
import typing
from abc import ABC, abstractmethod

__all__ = [
    'NO_VALUE',
    'NoValue',
    'ProxyObserver',
    'LoggingObserver',
    'CallRecorder',
]

_call_logger = logging.getLogger('dynamicproxy.calls')


class NoValue(enum.Enum):
    """ Type of the marker handed to ``after_execute`` for operations that
        return nothing. It never compares equal to a real result, ``None``
        included.
    """
    NO_VALUE = 0

    def __bool__(self):
        return False

    def __repr__(self):
        return 'NO_VALUE'

    __str__ = __repr__


NO_VALUE = NoValue.NO_VALUE


class ProxyObserver(ABC):
    """ Capability notified before and after each forwarded call.

        The same observer may be shared by several proxies; proxies never
        manage its lifetime. Implementations are responsible for their own
        thread-safety.
    """

    @abstractmethod
    def before_execute(self, operation_name: str, arguments: list[typing.Any]) -> None:
        """ Called just before delegation with the values of the declared
            parameters, in declaration order.
        """

    @abstractmethod
    def after_execute(self, operation_name: str, result: typing.Any) -> None:
        """ Called just after a successful delegation with its result, or
            :data:`NO_VALUE` when the operation returns nothing.
        """


class LoggingObserver(ProxyObserver):
    """ Log every forwarded call on the ``dynamicproxy.calls`` logger. """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG):
        self.logger = logger or _call_logger
        self.level = level

    def before_execute(self, operation_name, arguments):
        if self.logger.isEnabledFor(self.level):
            self.logger.log(self.level, "before %s(%s)", operation_name, ", ".join(map(repr, arguments)))

    def after_execute(self, operation_name, result):
        if self.logger.isEnabledFor(self.level):
            self.logger.log(self.level, "after %s -> %r", operation_name, result)


class CallRecorder(ProxyObserver):
    """ Keep every notification in :attr:`calls` as ``(event, name, payload)``
        tuples, ``event`` being ``'before'`` or ``'after'``.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.calls: list[tuple[str, str, typing.Any]] = []

    def before_execute(self, operation_name, arguments):
        with self._lock:
            self.calls.append(('before', operation_name, arguments))

    def after_execute(self, operation_name, result):
        with self._lock:
            self.calls.append(('after', operation_name, result))

    def clear(self):
        with self._lock:
            self.calls.clear()
