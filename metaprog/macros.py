"""类宏：在类上生成实例方法的函数

`attr_accessor('first_name', 'last_name')` 这样一次调用就为类生成了
一组读写属性，和 Ruby 的 Module#attr_accessor 一样。
"""

import logging

LOGGER = logging.getLogger(__name__)


def _storage(name):
    return '_' + name


def _check_names(names):
    for name in names:
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError("not a valid attribute name: %r" % (name,))


def _reader(name):
    key = _storage(name)

    def get(self):
        return self.__dict__.get(key)
    get.__name__ = name
    return get


def _writer(name):
    key = _storage(name)

    def set(self, value):
        self.__dict__[key] = value
    set.__name__ = name
    return set


def _install(names, reader, writer):
    _check_names(names)

    def decorator(cls):
        for name in names:
            prop = property(
                _reader(name) if reader else None,
                _writer(name) if writer else None,
                doc="%s attribute generated on %s" % (name, cls.__name__),
            )
            setattr(cls, name, prop)
            LOGGER.debug('generated %s.%s', cls.__qualname__, name)
        return cls
    return decorator


def attr_reader(*names):
    """类装饰器：为每个名字生成只读属性"""
    return _install(names, reader=True, writer=False)


def attr_writer(*names):
    """类装饰器：为每个名字生成只写属性"""
    return _install(names, reader=False, writer=True)


def attr_accessor(*names):
    """类装饰器：为每个名字生成可读可写的属性

    值保存在实例字典的 `_<name>` 中，还没赋值时读出 None。
    """
    return _install(names, reader=True, writer=True)
