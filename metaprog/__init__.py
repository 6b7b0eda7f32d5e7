"""Python 元编程入门：运行时定义方法、单例类和类宏"""

from metaprog.harness import DemoTestCase, DemonstrationError, show
from metaprog.macros import attr_accessor, attr_reader, attr_writer
from metaprog.reflection import (
    class_of,
    define_method,
    define_singleton_method,
    extend,
    is_singleton_class,
    singleton_class,
    singleton_methods,
)
