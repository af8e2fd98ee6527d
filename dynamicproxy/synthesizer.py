# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Type synthesis.

:class:`TypeBuilder` assembles a new class out of slots and members and
materializes it; :class:`RoutineBuilder` emits the source of one routine,
line by line, and compiles it with :class:`decorator.FunctionMaker`.

A routine built after a template function exposes the signature of the
template (parameter kinds, defaults, annotations and docstring) through
``__signature__``, while its compiled defaults are all :data:`UNSET`, so the
body can tell the arguments the caller omitted from the ones it passed.
"""
from __future__ import annotations

import enum
import inspect
import logging
import types
from collections.abc import Callable

from decorator import FunctionMaker

from .exceptions import SynthesisError

__all__ = ['UNSET', 'RoutineBuilder', 'TypeBuilder']

_logger = logging.getLogger(__name__)

ROUTINE_TEMPLATE = 'def %(name)s(%(signature)s):\n'

# global under which generated routines see UNSET
UNSET_NAME = '_unset_'


class Unset(enum.Enum):
    """ Default value of the optional parameters of generated routines. """
    UNSET = 0

    def __repr__(self):
        return 'UNSET'


UNSET = Unset.UNSET


def signature_source(signature: inspect.Signature) -> str:
    """ Parameter list of ``signature`` as source code, without annotations
        and with every default replaced by :data:`UNSET`.
    """
    P = inspect.Parameter
    entries = []
    previous = None
    for param in signature.parameters.values():
        if previous == P.POSITIONAL_ONLY and param.kind != P.POSITIONAL_ONLY:
            entries.append('/')
        if param.kind == P.KEYWORD_ONLY and previous not in (P.KEYWORD_ONLY, P.VAR_POSITIONAL):
            entries.append('*')
        if param.kind == P.VAR_POSITIONAL:
            entries.append('*' + param.name)
        elif param.kind == P.VAR_KEYWORD:
            entries.append('**' + param.name)
        elif param.default is not P.empty:
            entries.append(f'{param.name}={UNSET_NAME}')
        else:
            entries.append(param.name)
        previous = param.kind
    if previous == P.POSITIONAL_ONLY:
        entries.append('/')
    return ', '.join(entries)


class RoutineBuilder:
    """ Source emitter for a single routine.

        The signature comes either from ``template``, a function, or from
        ``signature``, a parameter list such as ``'self, value'``.
    """

    def __init__(self, name: str, template: Callable | None = None, signature: str | None = None):
        if (template is None) == (signature is None):
            raise SynthesisError(f"Routine {name!r} needs exactly one of a template or a signature")
        self.name = name
        self.lines: list[str] = []
        self.globals: dict[str, object] = {}
        self.template = template
        try:
            if template is not None:
                self.signature = inspect.signature(template, follow_wrapped=False)
                self.maker = FunctionMaker(
                    name=name, signature=signature_source(self.signature),
                    doc=template.__doc__, module=template.__module__,
                )
            else:
                self.signature = None
                self.maker = FunctionMaker(name=name, signature=signature)
        except (TypeError, ValueError) as e:
            raise SynthesisError(f"Unsupported signature for routine {name!r}: {e}") from e

        if self.signature is not None:
            P = inspect.Parameter
            params = self.signature.parameters.values()
            # FunctionMaker assigns the defaults after compiling the source
            self.maker.defaults = tuple(
                UNSET for param in params
                if param.kind in (P.POSITIONAL_ONLY, P.POSITIONAL_OR_KEYWORD) and param.default is not P.empty
            ) or None
            self.maker.kwonlydefaults = {
                param.name: UNSET for param in params
                if param.kind == P.KEYWORD_ONLY and param.default is not P.empty
            } or None
            self.maker.annotations = dict(getattr(template, '__annotations__', None) or {})
            # the routine implements the template, it must not inherit its abstractness
            funcdict = dict(getattr(template, '__dict__', {}))
            funcdict.pop('__isabstractmethod__', None)
            self.maker.dict = funcdict
            self.bind(**{UNSET_NAME: UNSET})

    @property
    def parameters(self) -> list[str]:
        """ Names of all the parameters, in declaration order. """
        if self.signature is not None:
            return list(self.signature.parameters)
        return [
            arg.split('=', 1)[0].strip(' *')
            for arg in self.maker.shortsignature.split(',')
            if arg.strip(' */')
        ]

    @property
    def call_arguments(self) -> list[str]:
        """ Expressions passing the parameters following the first one on
            to another callable in their declared calling form. Omitted
            optional arguments are passed as :data:`UNSET`.
        """
        if self.signature is None:
            return [arg.strip() for arg in self.maker.shortsignature.split(',')[1:] if arg.strip(' */')]
        P = inspect.Parameter
        forms = {
            P.VAR_POSITIONAL: '*{0}',
            P.KEYWORD_ONLY: '{0}={0}',
            P.VAR_KEYWORD: '**{0}',
        }
        return [
            forms.get(param.kind, '{0}').format(param.name)
            for param in list(self.signature.parameters.values())[1:]
        ]

    def emit(self, line: str) -> RoutineBuilder:
        self.lines.append(line)
        return self

    def bind(self, **names) -> RoutineBuilder:
        """ Make ``names`` available as globals of the routine. """
        clashes = set(names).intersection(self.parameters)
        if clashes:
            raise SynthesisError(
                f"Routine {self.name!r} has parameters clashing with reserved names: {', '.join(sorted(clashes))}"
            )
        self.globals.update(names)
        return self

    def build(self) -> types.FunctionType:
        # FunctionMaker expands the template with %, escape the body accordingly
        body = ''.join('    ' + line.replace('%', '%%') + '\n' for line in self.lines or ['pass'])
        attrs = {} if self.signature is None else {'__signature__': self.signature}
        try:
            return self.maker.make(ROUTINE_TEMPLATE + body, dict(self.globals), addsource=True, **attrs)
        except (SyntaxError, NameError, TypeError, ValueError) as e:
            raise SynthesisError(f"Cannot compile routine {self.name!r}: {e}") from e


class TypeBuilder:
    """ Fluent builder of a new class deriving from ``bases``. """

    def __init__(self, name: str, bases: tuple[type, ...], module: str | None = None):
        self.name = name
        self.bases = tuple(bases)
        self.module = module or __name__
        self.fields: list[str] = []
        self.members: dict[str, object] = {}

    def _check_free(self, name: str):
        if name in self.fields or name in self.members:
            raise SynthesisError(f"{self.name} already defines {name!r}")

    def add_field(self, name: str) -> TypeBuilder:
        """ Add an instance slot. """
        self._check_free(name)
        self.fields.append(name)
        return self

    def routine(self, name: str, template: Callable | None = None, signature: str | None = None) -> RoutineBuilder:
        return RoutineBuilder(name, template=template, signature=signature)

    def add_member(self, name: str, value) -> TypeBuilder:
        self._check_free(name)
        if isinstance(value, types.FunctionType):
            self._adopt(name, value)
        self.members[name] = value
        return self

    def add_property(self, name: str, fget: Callable | None = None, fset: Callable | None = None,
                     fdel: Callable | None = None) -> TypeBuilder:
        """ Add a property, or complete the one already added under ``name``. """
        current = self.members.get(name)
        if name in self.fields or (current is not None and not isinstance(current, property)):
            raise SynthesisError(f"{self.name} already defines {name!r}")
        current = current or property()
        if fget is not None:
            current = current.getter(self._adopt(name, fget))
        if fset is not None:
            current = current.setter(self._adopt(name, fset))
        if fdel is not None:
            current = current.deleter(self._adopt(name, fdel))
        self.members[name] = current
        return self

    def _adopt(self, name: str, function: types.FunctionType) -> types.FunctionType:
        function.__qualname__ = f"{self.name}.{name}"
        function.__module__ = self.module
        return function

    def materialize(self) -> type:
        """ Create the class. The metaclass is derived from the bases. """
        namespace = dict(self.members)
        namespace.update({
            '__slots__': tuple(self.fields),
            '__module__': self.module,
            '__qualname__': self.name,
        })
        try:
            cls = types.new_class(self.name, self.bases, exec_body=lambda ns: ns.update(namespace))
        except Exception as e:
            raise SynthesisError(f"Cannot materialize {self.name}: {e}") from e
        _logger.debug("materialized %s with %d members", self.name, len(self.members))
        return cls
