# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Proxy builder.

    >>> calculator = create_proxy(Calculator, RealCalculator(), CallRecorder())
    >>> calculator.add(2, 3)
    5

The proxy class of a contract is synthesized once per observation mode and
kept in a size-limited cache (see the ``proxy_cache_size`` option); a cache
size of 0 synthesizes a new class on every call.
"""
from __future__ import annotations

import logging
import threading
import typing

from .activation import instantiate, invoke
from .contract import get_operations
from .exceptions import SynthesisError
from .forwarder import add_forwarder
from .synthesizer import TypeBuilder
from .tools import config, locked
from .tools.lru import LRU
from .wiring import (
    OBSERVER_FIELD, OBSERVER_SETTER,
    TARGET_FIELD, TARGET_SETTER,
    add_state,
)

__all__ = [
    'create_proxy',
    'proxy_type',
    'synthesize',
    'is_proxy',
    'get_target',
    'get_observer',
    'ProxyTypes',
]

T = typing.TypeVar('T')

_logger = logging.getLogger(__name__)

CONTRACT_ATTR = '__proxy_contract__'
OPERATIONS_ATTR = '__proxy_operations__'
OBSERVER_HOOKS = ('before_execute', 'after_execute')
RESERVED_NAMES = frozenset([
    TARGET_FIELD, TARGET_SETTER, OBSERVER_FIELD, OBSERVER_SETTER,
    CONTRACT_ATTR, OPERATIONS_ATTR,
])


def synthesize(contract: type, observed: bool = False) -> type:
    """ Build a new proxy class for ``contract``, bypassing the cache. """
    operations = get_operations(contract)
    clashes = RESERVED_NAMES.intersection(op.name for op in operations)
    if clashes:
        raise SynthesisError(
            f"{contract.__qualname__} defines names reserved for proxies: {', '.join(sorted(clashes))}"
        )

    name = contract.__name__ + ('ObservedProxy' if observed else 'Proxy')
    builder = TypeBuilder(name, (contract,), module=__name__)
    add_state(builder, TARGET_FIELD, TARGET_SETTER)
    if observed:
        add_state(builder, OBSERVER_FIELD, OBSERVER_SETTER)
    for operation in operations:
        add_forwarder(builder, operation, observed)
    builder.add_member(CONTRACT_ATTR, contract)
    builder.add_member(OPERATIONS_ATTR, tuple(operations))

    cls = builder.materialize()
    _logger.debug("synthesized %s for %s.%s (%d operations)",
                  name, contract.__module__, contract.__qualname__, len(operations))
    return cls


class ProxyTypes:
    """ Cache of the synthesized proxy classes, keyed by contract and
        observation mode.
    """
    _lock = threading.RLock()
    _types: LRU[tuple[type, bool], type] | None = None

    @classmethod
    @locked
    def get(cls, contract: type, observed: bool) -> type:
        size = config['proxy_cache_size']
        if size <= 0:
            return synthesize(contract, observed)
        if cls._types is None or cls._types.count != size:
            cls._types = LRU(size)
        key = (contract, observed)
        try:
            proxy_cls = cls._types[key]
        except KeyError:
            proxy_cls = cls._types[key] = synthesize(contract, observed)
        else:
            _logger.debug("reusing %s", proxy_cls.__qualname__)
        return proxy_cls

    @classmethod
    @locked
    def clear(cls):
        if cls._types is not None:
            cls._types.clear()


def proxy_type(contract: type[T], observed: bool = False) -> type[T]:
    """ Return the proxy class of ``contract``, synthesizing it if needed.

        :param observed: whether the routines of the class notify an observer
        :raise SynthesisError: if the contract cannot be proxied
    """
    if not isinstance(contract, type):
        raise SynthesisError(f"Contract must be a class, got {contract!r}")
    return ProxyTypes.get(contract, bool(observed))


def create_proxy(contract: type[T], concrete_instance: T, observer=None) -> T:
    """ Return an instance of ``contract`` forwarding every operation to
        ``concrete_instance``, notifying ``observer`` around each call when
        one is given.

        :param contract: class describing the operations to forward
        :param concrete_instance: object doing the actual work
        :param observer: object with ``before_execute`` and ``after_execute``
        :raise SynthesisError: if the proxy class cannot be built
        :raise ActivationError: if the proxy cannot be instantiated or wired
    """
    if concrete_instance is None:
        raise ValueError("A concrete instance is required to build a proxy")
    if observer is not None:
        missing = [hook for hook in OBSERVER_HOOKS if not callable(getattr(observer, hook, None))]
        if missing:
            raise TypeError(f"Observer {observer!r} does not implement {', '.join(missing)}")

    cls = proxy_type(contract, observed=observer is not None)
    proxy = instantiate(cls)
    invoke(proxy, TARGET_SETTER, concrete_instance)
    if observer is not None:
        invoke(proxy, OBSERVER_SETTER, observer)
    return proxy


def is_proxy(obj) -> bool:
    return hasattr(type(obj), CONTRACT_ATTR)


def get_target(proxy):
    """ Return the implementation wrapped by ``proxy``. """
    if not is_proxy(proxy):
        raise TypeError(f"{proxy!r} is not a proxy")
    return getattr(proxy, TARGET_FIELD)


def get_observer(proxy):
    """ Return the observer of ``proxy``, or ``None``. """
    if not is_proxy(proxy):
        raise TypeError(f"{proxy!r} is not a proxy")
    return getattr(proxy, OBSERVER_FIELD, None)
