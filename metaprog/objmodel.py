"""一个带单例类的小对象模型

用 Python 写一个 Ruby 风格的对象模型：方法保存在类的方法表里，每个对象
都可以拥有一个隐藏的单例类，类方法就是类对象的单例方法。
"""

MISSING = object()


class NoMethodError(AttributeError):
    """对象无法响应某个消息"""

    def __init__(self, methname, receiver, private=False):
        if private:
            msg = "private method `%s' called for %s" % (methname, receiver.describe())
        else:
            msg = "undefined method `%s' for %s" % (methname, receiver.describe())
        super().__init__(msg)
        self.methname = methname
        self.receiver = receiver


class Base(object):
    """所有对象模型类都要继承的基类"""

    def __init__(self, cls, fields):
        """每个对象都有一个类，以及自己的实例变量"""
        self.cls = cls
        self._fields = fields

    def read_attr(self, fieldname):
        """读取实例变量 `fieldname`，未赋值时返回 None"""
        return self._fields.get(fieldname)

    def write_attr(self, fieldname, value):
        """写入实例变量 `fieldname`"""
        self._fields[fieldname] = value

    def klass(self):
        """对象的类，跳过单例类"""
        cls = self._lookup_class()
        while cls.is_singleton:
            cls = cls.base_class
        return cls

    def isinstance(self, cls):
        """如果对象是 cls 或其子类（含混入的模块）的实例则返回 True"""
        return self._lookup_class().issubclass(cls)

    def has_singleton_class(self):
        return self.cls is not None and self.cls.attached is self

    def singleton_class(self):
        """返回对象的单例类，第一次访问时创建

        单例类被插入到对象和它原来的类之间，查找方法时最先被搜索。
        """
        if self.has_singleton_class():
            return self.cls
        singleton = Class(
            name="#<Class:%s>" % self.describe(),
            base_class=self._singleton_base(),
            metaclass=CLASS,
        )
        singleton.attached = self
        self.cls = singleton
        return singleton

    def singleton_methods(self):
        """对象单例类中定义的公有方法名"""
        if not self.has_singleton_class():
            return []
        return self.cls.instance_methods()

    def extend(self, *modules):
        """把模块混入这一个对象，不影响同类的其他对象"""
        singleton = self.singleton_class()
        for module in modules:
            singleton.include(module)
        return self

    def respond_to(self, methname):
        meth, owner = self._lookup_class()._find_method(methname)
        return meth is not MISSING and not owner.is_private(methname)

    def callmethod(self, methname, *args):
        """像外部调用者一样调用方法 `methname`，私有方法不可见"""
        meth, owner = self._lookup_class()._find_method(methname)
        if meth is MISSING:
            raise NoMethodError(methname, self)
        if owner.is_private(methname):
            raise NoMethodError(methname, self, private=True)
        return meth(self, *args)

    def send(self, methname, *args):
        """调用方法 `methname`，忽略可见性"""
        meth, _ = self._lookup_class()._find_method(methname)
        if meth is MISSING:
            raise NoMethodError(methname, self)
        return meth(self, *args)

    def describe(self):
        return "#<%s>" % self.klass().name

    def _lookup_class(self):
        return self.cls

    def _singleton_base(self):
        return self.cls

    def __repr__(self):
        return self.describe()


class Instance(Base):
    """用户定义类的实例"""

    def __init__(self, cls):
        assert isinstance(cls, Class)
        Base.__init__(self, cls, {})


class Module(Base):
    """方法表的持有者，可以被混入类或对象"""

    def __init__(self, name, methods=None, metaclass=None):
        Base.__init__(self, metaclass, {})
        self.name = name
        self._methods = dict(methods or {})
        self._private = set()
        self.mixins = []
        self.attached = None

    @property
    def is_singleton(self):
        return self.attached is not None

    def define_method(self, methname, func):
        """在方法表中写入 `methname`"""
        self._methods[methname] = func
        return func

    def private(self, *methnames):
        self._private.update(methnames)

    def public(self, *methnames):
        self._private.difference_update(methnames)

    def is_private(self, methname):
        return methname in self._private

    def instance_methods(self):
        """本模块自己定义的公有方法名"""
        return sorted(name for name in self._methods if name not in self._private)

    def include(self, module):
        """混入模块，后混入的先被搜索"""
        if module not in self.mixins:
            self.mixins.insert(0, module)

    def method_resolution_order(self):
        """计算方法解析顺序：自己，然后是混入的模块"""
        mro = [self]
        for module in self.mixins:
            mro.extend(module.method_resolution_order())
        return _unique(mro)

    def issubclass(self, cls):
        return cls in self.method_resolution_order()

    def describe(self):
        return self.name

    def _find_method(self, methname):
        for cls in self.method_resolution_order():
            if methname in cls._methods:
                return cls._methods[methname], cls
        return MISSING, None


class Class(Module):
    """一个用户定义的类"""

    def __init__(self, name, base_class, methods=None, metaclass=None):
        Module.__init__(self, name, methods, metaclass)
        self.base_class = base_class

    def new(self):
        if self.is_singleton:
            raise TypeError("can't create instance of singleton class")
        return Instance(self)

    def superclass(self):
        return self.base_class

    def method_resolution_order(self):
        mro = Module.method_resolution_order(self)
        if self.base_class is not None:
            mro.extend(self.base_class.method_resolution_order())
        return _unique(mro)

    def _lookup_class(self):
        # 类方法总是通过单例类查找，这样才能沿着父类的单例类继承
        return self.singleton_class()

    def _singleton_base(self):
        # 类的单例类继承自父类的单例类，根类的单例类继承自它的元类
        if self.base_class is None:
            return self.cls
        return self.base_class.singleton_class()


def _unique(classes):
    seen = []
    for cls in classes:
        if cls not in seen:
            seen.append(cls)
    return seen


# 像 Ruby 那样设置基本层次结构
# 最终的基类是 OBJECT
OBJECT = Class(name="Object", base_class=None)
# MODULE 是 OBJECT 的子类，CLASS 是 MODULE 的子类
MODULE = Class(name="Module", base_class=OBJECT)
CLASS = Class(name="Class", base_class=MODULE)
# 它们都是 CLASS 的实例，CLASS 是它自己的实例
OBJECT.cls = MODULE.cls = CLASS.cls = CLASS


def define_class(name, base_class=None):
    """创建一个新类，默认继承 OBJECT"""
    if base_class is None:
        base_class = OBJECT
    return Class(name=name, base_class=base_class, metaclass=CLASS)


def define_module(name):
    return Module(name=name, metaclass=MODULE)
