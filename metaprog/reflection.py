"""在运行时定义方法的几个小工具

Python 没有 `define_method` 也没有单例类，但 `setattr`、`types.MethodType`
和 `__class__` 赋值已经足够把它们拼出来。
"""

import inspect
import logging
import types

LOGGER = logging.getLogger(__name__)

# 单例类在自己的类字典里用这个名字记住它所属的对象
SINGLETON_MARKER = '__singleton__'


def define_method(cls, name, body):
    """在类 `cls` 上定义名为 `name` 的实例方法

    与 def 不同，方法名可以在运行时计算，方法体可以是闭包。
    内置类型不允许修改，会抛出 TypeError。
    """
    if not callable(body):
        raise TypeError("method body must be callable, not %r" % (body,))
    if inspect.isfunction(body):
        body.__name__ = name
        body.__qualname__ = '%s.%s' % (cls.__qualname__, name)
    setattr(cls, name, body)
    LOGGER.debug('defined %s.%s', cls.__qualname__, name)
    return body


def is_singleton_class(cls):
    return SINGLETON_MARKER in vars(cls)


def _belongs_to(cls, obj):
    return vars(cls).get(SINGLETON_MARKER, None) is obj


def singleton_class(obj):
    """返回 `obj` 的单例类，第一次访问时创建

    单例类是对象原来所属类的一个子类，只有这个对象是它的实例。
    对象的 `__class__` 不能被改写时（比如 dict 的实例，或者元类是
    type 的类）抛出 TypeError。

    copy.copy 得到的副本和原对象共用同一个类，这时为副本另建一个单例类，
    它继承原对象的单例类，所以副本已有的行为不变。
    """
    cls = type(obj)
    if _belongs_to(cls, obj):
        return cls
    namespace = {
        SINGLETON_MARKER: obj,
        '__slots__': (),
        '__module__': cls.__module__,
        '__qualname__': cls.__qualname__,
    }
    singleton = type(cls)(cls.__name__, (cls,), namespace)
    obj.__class__ = singleton
    LOGGER.debug('created singleton class for %r', obj)
    return singleton


def class_of(obj):
    """对象的类，跳过单例类"""
    cls = type(obj)
    while is_singleton_class(cls):
        # 原来的类总是最后一个基类，extend 混入的类排在它前面
        cls = cls.__bases__[-1]
    return cls


def define_singleton_method(obj, name, body):
    """只给 `obj` 这一个对象定义方法"""
    return define_method(singleton_class(obj), name, body)


def singleton_methods(obj):
    """返回只属于 `obj` 的方法名，按字母排序"""
    names = set()
    if isinstance(obj, type):
        names.update(
            name for name, value in vars(obj).items()
            if isinstance(value, (classmethod, staticmethod))
        )
    else:
        names.update(
            name for name, value in getattr(obj, '__dict__', {}).items()
            if isinstance(value, types.MethodType) and value.__self__ is obj
        )
    # 副本的单例类继承原对象的单例类，这些方法副本也能响应
    cls = type(obj)
    while is_singleton_class(cls):
        names.update(
            name for name, value in vars(cls).items() if inspect.isfunction(value)
        )
        cls = cls.__bases__[-1]
    return sorted(names)


def extend(obj, *mixins):
    """把 `mixins` 混入 `obj` 这一个对象，不影响同类的其他实例"""
    singleton = singleton_class(obj)
    for mixin in mixins:
        if issubclass(singleton, mixin):
            continue
        singleton.__bases__ = (mixin,) + singleton.__bases__
        LOGGER.debug('extended %r with %s', obj, mixin.__qualname__)
    return obj
