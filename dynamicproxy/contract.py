# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Contract introspection.

A contract is a class whose methods and properties describe the operations a
proxy must forward. Operations are collected from the class bodies along the
MRO, base classes first, keeping the position of the first definition of each
name when a subclass overrides it.
"""
from __future__ import annotations

import inspect
import typing
from abc import ABC
from collections.abc import Callable

from .exceptions import SynthesisError

__all__ = [
    'METHOD', 'GETTER', 'SETTER', 'DELETER',
    'Operation',
    'get_operations',
]

METHOD, GETTER, SETTER, DELETER = 'method', 'getter', 'setter', 'deleter'

# bases contributing no operation of their own
IGNORED_BASES = (object, typing.Generic, typing.Protocol, ABC)

# object lifecycle and attribute machinery, never forwarded
EXCLUDED_NAMES = frozenset([
    '__init__', '__new__', '__del__', '__init_subclass__', '__class_getitem__',
    '__subclasshook__', '__getattr__', '__getattribute__', '__setattr__',
    '__delattr__', '__dir__', '__reduce__', '__reduce_ex__', '__getstate__',
    '__setstate__', '__copy__', '__deepcopy__', '__set_name__', '__repr__',
    '__str__',
])

POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class Operation(typing.NamedTuple):
    """ One forwardable operation of a contract. """
    name: str
    kind: str
    function: Callable
    parameters: tuple[inspect.Parameter, ...]
    returns_value: bool

    @property
    def signature(self) -> str:
        """ Parameters as declared, the instance parameter excluded. """
        return ', '.join(str(param) for param in self.parameters)


def returns_nothing(annotation) -> bool:
    """ Whether a return annotation declares that nothing is returned.
        String annotations (postponed evaluation) are recognized too.
    """
    if annotation is None or annotation is type(None):
        return True
    return isinstance(annotation, str) and annotation.strip() == 'None'


def _operation(name: str, kind: str, function: Callable) -> Operation:
    try:
        signature = inspect.signature(function, follow_wrapped=False)
    except (TypeError, ValueError) as e:
        raise SynthesisError(f"Cannot read the signature of operation {name!r}: {e}") from e
    params = list(signature.parameters.values())
    if not params or params[0].kind not in POSITIONAL_KINDS:
        raise SynthesisError(f"Operation {name!r} must accept the instance as first positional parameter")
    returns_value = kind == GETTER or (
        kind == METHOD and not returns_nothing(signature.return_annotation)
    )
    return Operation(name, kind, function, tuple(params[1:]), returns_value)


def get_operations(contract: type) -> list[Operation]:
    """ Return the ordered operation table of ``contract``.

        Plain functions become ``method`` operations; properties contribute a
        ``getter`` operation and, when they have them, a ``setter`` and a
        ``deleter`` operation of the same name. Static and class methods are not
        operations of the instance and are left out.
    """
    if not isinstance(contract, type):
        raise SynthesisError(f"Contract must be a class, got {contract!r}")

    members = {}
    for klass in reversed(contract.__mro__):
        if klass in IGNORED_BASES:
            continue
        for name, member in vars(klass).items():
            if name in EXCLUDED_NAMES:
                continue
            if isinstance(member, property) or inspect.isfunction(member):
                members[name] = member
            elif name in members:
                # shadowed by a non-operation attribute
                del members[name]

    operations = []
    for name, member in members.items():
        if isinstance(member, property):
            if member.fget is not None:
                operations.append(_operation(name, GETTER, member.fget))
            if member.fset is not None:
                operations.append(_operation(name, SETTER, member.fset))
            if member.fdel is not None:
                operations.append(_operation(name, DELETER, member.fdel))
        else:
            operations.append(_operation(name, METHOD, member))
    return operations
