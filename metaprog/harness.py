"""unittest 的一个小扩展：把文章里的每个示例注册成有名字的测试

    class Singletons(DemoTestCase):

        @show("a singleton method belongs to one object")
        def demo_singleton(self):
            ...

类创建时，被 `show` 标记的函数会以 `test_a_singleton_method_belongs_to_one_object`
的名字重新定义到类上，运行器输出测试结果时显示示例的名字。
"""

import logging
import re
import unittest

LOGGER = logging.getLogger(__name__)

# 除了字母、数字、下划线和空白以外的字符，包括非 ASCII 标点
_PUNCTUATION = re.compile(r'[^\w\s]')

# 被 show 标记的函数带着这个属性，值是示例的名字
DEMONSTRATION_ATTR = '__demonstration__'


class DemonstrationError(Exception):
    """示例的名字无法注册"""


def normalize_name(name):
    """去掉换行，把连续空格压缩成一个"""
    name = name.replace('\n', '')
    return re.sub(' +', ' ', name).strip()


def method_name_for(name):
    """由示例名字生成测试方法名：去掉标点，小写，用下划线连接"""
    words = _PUNCTUATION.sub('', normalize_name(name)).lower().split()
    if not words:
        raise DemonstrationError("demonstration name %r has no words" % (name,))
    return 'test_' + '_'.join(words)


def show(name):
    """装饰器：把函数标记为名为 `name` 的示例"""
    def decorator(body):
        setattr(body, DEMONSTRATION_ATTR, normalize_name(name))
        return body
    return decorator


class DemoTestCase(unittest.TestCase):
    """每个示例都是一个测试方法的 TestCase"""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for attr, body in list(vars(cls).items()):
            name = getattr(body, DEMONSTRATION_ATTR, None)
            if name is None:
                continue
            delattr(cls, attr)
            cls.register(name, body)

    @classmethod
    def register(cls, name, body):
        """把 `body` 注册成名为 `name` 的示例，返回生成的测试方法名"""
        name = normalize_name(name)
        method_name = method_name_for(name)
        if method_name in vars(cls):
            raise DemonstrationError(
                "%s already defines %s, cannot register %r" % (cls.__name__, method_name, name))
        LOGGER.info('* %s (Line %d)', name, body.__code__.co_firstlineno)
        body.__name__ = method_name
        body.__qualname__ = '%s.%s' % (cls.__qualname__, method_name)
        body.__doc__ = name
        setattr(cls, method_name, body)
        return method_name

    def assert_true(self, expression):
        self.assertIs(expression, True)

    def assert_false(self, expression):
        self.assertIs(expression, False)
