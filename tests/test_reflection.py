"""测试运行时定义方法的工具"""

import copy
import unittest

import mock

from metaprog import reflection
from metaprog.reflection import (
    class_of,
    define_method,
    define_singleton_method,
    extend,
    is_singleton_class,
    singleton_class,
    singleton_methods,
)


class Widget:
    def name(self):
        return 'widget'


class Shiny:
    def polish(self):
        return 'shiny ' + self.name()


class Loud:
    def shout(self):
        return self.name().upper()


class DefineMethodTests(unittest.TestCase):

    def test_renames_function(self):
        Thing = type('Thing', (), {})

        def body(self):
            return 'ok'
        define_method(Thing, 'computed_name', body)

        self.assertEqual(Thing().computed_name(), 'ok')
        self.assertEqual(body.__name__, 'computed_name')
        self.assertEqual(body.__qualname__, 'Thing.computed_name')

    def test_rejects_non_callable(self):
        Thing = type('Thing', (), {})
        with self.assertRaises(TypeError):
            define_method(Thing, 'broken', 42)
        self.assertFalse(hasattr(Thing, 'broken'))

    def test_builtin_types_raise(self):
        with self.assertRaises(TypeError):
            define_method(int, 'double', lambda self: self * 2)

    def test_callable_objects_keep_their_names(self):
        Thing = type('Thing', (), {})
        body = mock.Mock(return_value='called')
        define_method(Thing, 'poke', body)
        self.assertEqual(Thing.poke(), 'called')

    def test_logs_definition(self):
        Thing = type('Thing', (), {})
        with mock.patch.object(reflection.LOGGER, 'debug') as debug:
            define_method(Thing, 'noted', lambda self: None)
        debug.assert_called_once_with('defined %s.%s', 'Thing', 'noted')


class SingletonClassTests(unittest.TestCase):

    def test_created_once_per_object(self):
        widget = Widget()
        first = singleton_class(widget)
        self.assertIs(singleton_class(widget), first)
        self.assertTrue(is_singleton_class(first))
        self.assertFalse(is_singleton_class(Widget))

    def test_keeps_the_original_class_name(self):
        widget = Widget()
        self.assertEqual(singleton_class(widget).__name__, 'Widget')
        self.assertEqual(singleton_class(widget).__bases__, (Widget,))

    def test_class_of_skips_singleton(self):
        widget = Widget()
        singleton_class(widget)
        self.assertIs(class_of(widget), Widget)
        self.assertIsInstance(widget, Widget)

    def test_subclass_of_singleton_is_not_singleton(self):
        singleton = singleton_class(Widget())
        Derived = type('Derived', (singleton,), {})
        self.assertFalse(is_singleton_class(Derived))

    def test_existing_behavior_survives(self):
        widget = Widget()
        singleton_class(widget)
        self.assertEqual(widget.name(), 'widget')

    def test_immutable_types(self):
        with self.assertRaises(TypeError):
            singleton_class(3)
        with self.assertRaises(TypeError):
            singleton_class(Widget)

    def test_copies_get_their_own_singleton_class(self):
        original = Widget()
        define_singleton_method(original, 'wave', lambda self: 'wave')
        twin = copy.copy(original)
        self.assertIs(type(twin), type(original))

        define_singleton_method(twin, 'secret', lambda self: 'secret')

        self.assertIsNot(type(twin), type(original))
        self.assertIs(singleton_class(original), type(original))
        self.assertFalse(hasattr(original, 'secret'))
        self.assertEqual(singleton_methods(original), ['wave'])
        self.assertEqual(twin.wave(), 'wave')
        self.assertEqual(singleton_methods(twin), ['secret', 'wave'])
        self.assertIs(class_of(twin), Widget)

    def test_define_singleton_method(self):
        widget, other = Widget(), Widget()
        define_singleton_method(widget, 'wave', lambda self: 'hi from ' + self.name())
        self.assertEqual(widget.wave(), 'hi from widget')
        self.assertFalse(hasattr(other, 'wave'))


class SingletonMethodsTests(unittest.TestCase):

    def test_plain_object(self):
        self.assertEqual(singleton_methods(Widget()), [])

    def test_sorted_and_merged(self):
        widget = Widget()
        define_singleton_method(widget, 'zeta', lambda self: None)
        define_singleton_method(widget, 'alpha', lambda self: None)
        self.assertEqual(singleton_methods(widget), ['alpha', 'zeta'])

    def test_ignores_plain_attributes(self):
        widget = Widget()
        widget.callback = print
        widget.size = 3
        self.assertEqual(singleton_methods(widget), [])

    def test_class_and_static_methods(self):
        class Factory:
            @classmethod
            def build(cls):
                return cls()

            @staticmethod
            def helper():
                return None

            def instance_method(self):
                return None

        self.assertEqual(singleton_methods(Factory), ['build', 'helper'])

    def test_objects_without_dict(self):
        self.assertEqual(singleton_methods(object()), [])


class ExtendTests(unittest.TestCase):

    def test_mixes_into_one_object(self):
        widget, other = Widget(), Widget()
        self.assertIs(extend(widget, Shiny), widget)
        self.assertEqual(widget.polish(), 'shiny widget')
        self.assertFalse(isinstance(other, Shiny))

    def test_latest_mixin_first(self):
        widget = extend(Widget(), Shiny, Loud)
        self.assertEqual(type(widget).__bases__, (Loud, Shiny, Widget))
        self.assertEqual(widget.shout(), 'WIDGET')
        self.assertIs(class_of(widget), Widget)

    def test_already_mixed_in(self):
        widget = extend(Widget(), Shiny)
        extend(widget, Shiny)
        self.assertEqual(type(widget).__bases__, (Shiny, Widget))
