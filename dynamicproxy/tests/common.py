# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Contracts and implementations shared by the test modules."""
import typing
from abc import ABC, abstractmethod

T = typing.TypeVar('T')


class Calculator(ABC):

    @abstractmethod
    def add(self, a: int, b: int) -> int:
        """ Return the sum of ``a`` and ``b``. """

    @abstractmethod
    def divide(self, a: int, b: int) -> float:
        pass

    @abstractmethod
    def reset(self) -> None:
        pass

    @abstractmethod
    def total(self) -> int:
        pass


class RealCalculator(Calculator):
    def __init__(self):
        self.resets = 0
        self.events = []

    def add(self, a, b):
        self.events.append(('call', 'add'))
        return a + b

    def divide(self, a, b):
        return a / b

    def reset(self):
        self.resets += 1
        return 'ignored'

    def total(self):
        return 42


@typing.runtime_checkable
class Logger(typing.Protocol):
    def log(self, msg: str) -> None:
        ...


class ListLogger:
    def __init__(self):
        self.messages = []

    def log(self, msg):
        self.messages.append(msg)


class Empty(ABC):
    pass


class Greeter(ABC):

    @abstractmethod
    def greet(self, name, greeting='Hello', *rest, punctuation='!', **extra) -> str:
        pass


class RealGreeter(Greeter):
    def greet(self, name, greeting='Hello', *rest, punctuation='!', **extra):
        suffix = ''.join(f' {key}={value}' for key, value in sorted(extra.items()))
        return f"{greeting} {name}{''.join(rest)}{punctuation}{suffix}"


class Thermostat(ABC):

    @property
    @abstractmethod
    def temperature(self) -> float:
        pass

    @temperature.setter
    @abstractmethod
    def temperature(self, value: float) -> None:
        pass


class RealThermostat:
    def __init__(self, temperature=20.0):
        self.temperature = temperature


class Repository(typing.Protocol[T]):
    def get(self, key: str) -> T:
        ...

    def put(self, key: str, value: T) -> None:
        ...


class DictRepository:
    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data[key]

    def put(self, key, value):
        self.data[key] = value


class OrderedObserver:
    """ Observer appending to an event list shared with the implementation. """
    def __init__(self, events):
        self.events = events

    def before_execute(self, operation_name, arguments):
        self.events.append(('before', operation_name))

    def after_execute(self, operation_name, result):
        self.events.append(('after', operation_name))


class Store(ABC):

    @abstractmethod
    def fetch(self, key, default=None):
        pass


class StrictStore:
    """ Raises on a missing key unless a default is actually passed. """
    _missing = object()

    def __init__(self, data):
        self.data = data
        self.calls = []

    def fetch(self, key, default=_missing):
        self.calls.append((key, default))
        if key in self.data:
            return self.data[key]
        if default is self._missing:
            raise KeyError(key)
        return default


class Formatter(ABC):

    @abstractmethod
    def format(self, template, /, **values) -> str:
        pass


class RealFormatter:
    def format(self, template, /, **values):
        return template.format(**values)


class Cache(ABC):

    @property
    @abstractmethod
    def content(self):
        pass

    @content.deleter
    @abstractmethod
    def content(self):
        pass


class RealCache:
    def __init__(self):
        self.content = 'cached'
