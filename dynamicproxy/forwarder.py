# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Forwarding routines.

Each contract operation gets a routine with the signature of the contract
function. Observed routines follow the protocol::

    observer.before_execute(name, [arguments])
    result = target.operation(arguments)
    observer.after_execute(name, result or NO_VALUE)
    return result

Unobserved routines only delegate. Nothing guards the delegated call: a
failure of the target propagates as is and ``after_execute`` never runs.

Optional arguments the caller left out are neither passed to the target nor
reported to the observer, so the target applies its own defaults.
"""
from __future__ import annotations

import inspect
import keyword

from .contract import DELETER, GETTER, METHOD, SETTER, Operation
from .exceptions import SynthesisError
from .observers import NO_VALUE
from .synthesizer import UNSET, UNSET_NAME, TypeBuilder
from .wiring import OBSERVER_FIELD, TARGET_FIELD

__all__ = ['add_forwarder', 'split_arguments']

# names the generated body relies on besides its own parameters
RESERVED_NAMES = ('_name_', '_result_', '_args_', '_kwargs_', '_value_', '_arguments_', 'NO_VALUE', UNSET_NAME)


def split_arguments(positional, keywords, variadic=(), extra=None):
    """ Rebuild the arguments of a call from ``(name, value)`` pairs,
        leaving out the values that are :data:`UNSET`.

        Positional values are passed positionally until the first omitted
        one, the following ones by keyword.
    """
    args, kwargs = [], {}
    gap = False
    for name, value in positional:
        if value is UNSET:
            gap = True
        elif gap:
            kwargs[name] = value
        else:
            args.append(value)
    args.extend(variadic)
    kwargs.update((name, value) for name, value in keywords if value is not UNSET)
    if extra:
        kwargs.update(extra)
    return args, kwargs


def _check_shape(operation: Operation):
    name = operation.name
    if not name.isidentifier() or keyword.iskeyword(name):
        raise SynthesisError(f"Operation name {name!r} is not a valid identifier")
    function = operation.function
    if inspect.iscoroutinefunction(function) or inspect.isasyncgenfunction(function):
        raise SynthesisError(f"Operation {name!r} is asynchronous, only synchronous operations can be forwarded")
    clashes = [param.name for param in operation.parameters if param.name in RESERVED_NAMES]
    if clashes:
        raise SynthesisError(f"Operation {name!r} uses reserved parameter names: {', '.join(clashes)}")


def _pairs(params) -> str:
    return '(' + ''.join(f'({param.name!r}, {param.name}), ' for param in params) + ')'


def _method_call(routine, operation: Operation, target: str) -> str:
    """ Emit what the delegated call needs and return its expression. """
    params = operation.parameters
    if all(param.default is inspect.Parameter.empty for param in params):
        return f"{target}.{operation.name}({', '.join(routine.call_arguments)})"

    P = inspect.Parameter
    positional = [param for param in params if param.kind in (P.POSITIONAL_ONLY, P.POSITIONAL_OR_KEYWORD)]
    keywords = [param for param in params if param.kind == P.KEYWORD_ONLY]
    variadic = next((param.name for param in params if param.kind == P.VAR_POSITIONAL), '()')
    extra = next((param.name for param in params if param.kind == P.VAR_KEYWORD), 'None')
    routine.bind(_arguments_=split_arguments)
    routine.emit(f'_args_, _kwargs_ = _arguments_({_pairs(positional)}, {_pairs(keywords)}, {variadic}, {extra})')
    return f'{target}.{operation.name}(*_args_, **_kwargs_)'


def _payload(operation: Operation) -> str:
    names = [param.name for param in operation.parameters]
    if operation.kind == METHOD and any(param.default is not inspect.Parameter.empty for param in operation.parameters):
        return f"[_value_ for _value_ in ({''.join(name + ', ' for name in names)}) if _value_ is not {UNSET_NAME}]"
    return f"[{', '.join(names)}]"


def add_forwarder(builder: TypeBuilder, operation: Operation, observed: bool) -> TypeBuilder:
    """ Generate the forwarding routine of ``operation`` and attach it to
        the type under construction.
    """
    _check_shape(operation)
    routine = builder.routine(operation.name, template=operation.function)
    instance, *parameters = routine.parameters
    target = f'{instance}.{TARGET_FIELD}'
    observer = f'{instance}.{OBSERVER_FIELD}'

    if operation.kind == GETTER:
        delegate = f'{target}.{operation.name}'
    elif operation.kind == SETTER:
        delegate = f'{target}.{operation.name} = {parameters[0]}'
    elif operation.kind == DELETER:
        delegate = f'del {target}.{operation.name}'
    else:
        delegate = _method_call(routine, operation, target)

    if observed:
        routine.bind(_name_=operation.name)
        routine.emit(f"{observer}.before_execute(_name_, {_payload(operation)})")
        if operation.returns_value:
            routine.emit(f'_result_ = {delegate}')
            routine.emit(f'{observer}.after_execute(_name_, _result_)')
            routine.emit('return _result_')
        else:
            routine.bind(NO_VALUE=NO_VALUE)
            routine.emit(delegate)
            routine.emit(f'{observer}.after_execute(_name_, NO_VALUE)')
    elif operation.returns_value:
        routine.emit(f'return {delegate}')
    else:
        routine.emit(delegate)

    function = routine.build()
    if operation.kind == METHOD:
        return builder.add_member(operation.name, function)
    if operation.kind == GETTER:
        return builder.add_property(operation.name, fget=function)
    if operation.kind == SETTER:
        return builder.add_property(operation.name, fset=function)
    return builder.add_property(operation.name, fdel=function)
