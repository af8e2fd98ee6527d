# Part of DynamicProxy, see License file for full copyright and licensing details.

import inspect
import unittest
from abc import ABC, ABCMeta, abstractmethod

from dynamicproxy.activation import instantiate, invoke
from dynamicproxy.exceptions import ActivationError, SynthesisError
from dynamicproxy.forwarder import split_arguments
from dynamicproxy.synthesizer import UNSET, RoutineBuilder, TypeBuilder, signature_source
from dynamicproxy.wiring import TARGET_FIELD, TARGET_SETTER, add_state


def template(self, a, *args, b, c=3, **kw) -> int:
    """ Template docstring. """


class Job(ABC):
    @abstractmethod
    def run(self, when):
        pass


class TestRoutineBuilder(unittest.TestCase):

    def test_signature_string(self):
        double = RoutineBuilder('double', signature='self, x').emit('return x * 2').build()

        self.assertEqual(double(None, 4), 8)
        self.assertEqual(double.__name__, 'double')
        self.assertIn('def double(self, x):', double.__source__)

    def test_percent_in_body(self):
        fmt = RoutineBuilder('fmt', signature='self, x').emit("return '%d items' % x").build()
        self.assertEqual(fmt(None, 5), '5 items')

    def test_empty_body(self):
        noop = RoutineBuilder('noop', signature='self').build()
        self.assertIsNone(noop(None))

    def test_template(self):
        routine = RoutineBuilder('renamed', template=template)

        self.assertEqual(routine.parameters, ['self', 'a', 'args', 'b', 'c', 'kw'])
        self.assertEqual(routine.call_arguments, ['a', '*args', 'b=b', 'c=c', '**kw'])

        function = routine.emit('return (a, args, b, c, kw)').build()
        self.assertEqual(function.__name__, 'renamed')
        self.assertEqual(function.__doc__, template.__doc__)
        self.assertEqual(str(inspect.signature(function)), str(inspect.signature(template)))
        self.assertEqual(function(None, 1, 2, b=4, c=5), (1, (2,), 4, 5, {}))
        self.assertIs(function(None, 1, b=4)[3], UNSET)
        self.assertEqual(function.__kwdefaults__, {'c': UNSET})
        with self.assertRaises(TypeError):
            function(None, 1)

    def test_positional_only(self):
        def split(self, text, sep=' ', /, maxsplit=-1, *, strip=False):
            pass

        self.assertEqual(
            signature_source(inspect.signature(split)),
            'self, text, sep=_unset_, /, maxsplit=_unset_, *, strip=_unset_',
        )
        routine = RoutineBuilder('split', template=split)
        self.assertEqual(routine.call_arguments, ['text', 'sep', 'maxsplit', 'strip=strip'])

        function = routine.emit("return (text, sep)").build()
        self.assertEqual(function(None, 'a b'), ('a b', UNSET))
        self.assertEqual(function(None, 'a b', ','), ('a b', ','))
        with self.assertRaises(TypeError):
            function(None, text='a b')
        self.assertEqual(str(inspect.signature(function)), str(inspect.signature(split)))

    def test_template_abstractness_dropped(self):
        function = RoutineBuilder('run', template=Job.run).emit('return when').build()

        self.assertTrue(Job.run.__isabstractmethod__)
        self.assertFalse(getattr(function, '__isabstractmethod__', False))

    def test_bind(self):
        triple = RoutineBuilder('triple', signature='self, x').bind(factor=3).emit('return x * factor').build()
        self.assertEqual(triple(None, 2), 6)

    def test_bind_clash(self):
        with self.assertRaises(SynthesisError):
            RoutineBuilder('clash', signature='self, value').bind(value=1)

    def test_compile_error(self):
        with self.assertRaises(SynthesisError):
            RoutineBuilder('broken', signature='self').emit('return )').build()

    def test_template_or_signature(self):
        with self.assertRaises(SynthesisError):
            RoutineBuilder('none')
        with self.assertRaises(SynthesisError):
            RoutineBuilder('both', template=template, signature='self')


class TestTypeBuilder(unittest.TestCase):

    def test_materialize(self):
        builder = TypeBuilder('Point', (object,), module='geometry')
        getter = builder.routine('norm', signature='self').emit('return abs(self.x) + abs(self.y)').build()
        cls = builder.add_field('x').add_field('y').add_member('norm', getter).materialize()

        self.assertEqual(cls.__slots__, ('x', 'y'))
        self.assertEqual(cls.__module__, 'geometry')
        self.assertEqual(cls.norm.__qualname__, 'Point.norm')
        point = cls()
        point.x, point.y = 3, -4
        self.assertEqual(point.norm(), 7)
        with self.assertRaises(AttributeError):
            point.z = 1

    def test_metaclass_from_bases(self):
        run = RoutineBuilder('run', template=Job.run).emit('return when').build()
        cls = TypeBuilder('ConcreteJob', (Job,)).add_member('run', run).materialize()

        self.assertIs(type(cls), ABCMeta)
        self.assertEqual(cls.__abstractmethods__, frozenset())
        self.assertEqual(cls().run('now'), 'now')

    def test_property(self):
        builder = TypeBuilder('Box', (object,)).add_field('_value')
        fget = builder.routine('value', signature='self').emit('return self._value').build()
        fset = builder.routine('value', signature='self, value').emit('self._value = value').build()
        cls = builder.add_property('value', fget=fget).add_property('value', fset=fset).materialize()

        box = cls()
        box.value = 5
        self.assertEqual(box.value, 5)
        self.assertEqual(cls.value.fget.__qualname__, 'Box.value')

    def test_duplicates(self):
        builder = TypeBuilder('Dup', (object,)).add_field('x')
        with self.assertRaises(SynthesisError):
            builder.add_field('x')
        with self.assertRaises(SynthesisError):
            builder.add_member('x', 1)
        with self.assertRaises(SynthesisError):
            builder.add_property('x')

    def test_materialize_failure(self):
        with self.assertRaises(SynthesisError):
            TypeBuilder('Flag', (bool,)).materialize()


class TestWiringAndActivation(unittest.TestCase):

    def test_add_state(self):
        builder = TypeBuilder('Holder', (object,))
        self.assertIs(add_state(builder, TARGET_FIELD, TARGET_SETTER), builder)
        cls = builder.materialize()

        self.assertEqual(cls.__slots__, (TARGET_FIELD,))
        holder = instantiate(cls)
        self.assertFalse(hasattr(holder, TARGET_FIELD))
        self.assertIsNone(invoke(holder, TARGET_SETTER, 'target'))
        self.assertEqual(getattr(holder, TARGET_FIELD), 'target')

    def test_instantiate_skips_init(self):
        class Loud:
            def __init__(self):
                raise AssertionError("__init__ must not run")

        self.assertIsInstance(instantiate(Loud), Loud)

    def test_instantiate_abstract(self):
        with self.assertRaises(ActivationError) as cm:
            instantiate(Job)
        self.assertIsInstance(cm.exception.__cause__, TypeError)

    def test_invoke_missing_routine(self):
        with self.assertRaises(ActivationError):
            invoke(object(), '__set_proxy_target__', 1)

    def test_invoke_failure(self):
        class Failing:
            def setter(self, value):
                raise ValueError(value)

        with self.assertRaises(ActivationError) as cm:
            invoke(Failing(), 'setter', 'bad')
        self.assertIsInstance(cm.exception.__cause__, ValueError)


class TestSplitArguments(unittest.TestCase):

    def test_omitted_values_are_dropped(self):
        self.assertEqual(
            split_arguments((('a', 1), ('b', UNSET), ('c', 3)), (('k', UNSET), ('m', 4))),
            ([1], {'c': 3, 'm': 4}),
        )

    def test_variadic(self):
        self.assertEqual(
            split_arguments((('a', 1), ('b', 2)), (), (3, 4), {'x': 5}),
            ([1, 2, 3, 4], {'x': 5}),
        )
