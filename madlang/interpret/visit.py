from .error import Error


class Dispatch(dict):
    """Maps node classes to handler functions; bound as a method on access.

    Handlers registered for a base class also serve its subclasses. The
    first lookup for a subclass is cached in the table.
    """

    def __get__(self, instance, owner):
        if instance is None:
            return self
        def visit(node, *args, **kwargs):
            return self.handler(type(node))(instance, node, *args, **kwargs)
        return visit

    def handler(self, node_type):
        try:
            return self[node_type]
        except KeyError:
            pass
        for base in node_type.__mro__[1:]:
            if base in self:
                self[node_type] = self[base]
                return self[base]
        raise TypeError(f"no handler for {node_type.__name__} nodes")


class Namespace(dict):
    # successive ``@_(Node) def visit`` definitions merge into one table
    def __setitem__(self, name, value):
        previous = self.get(name)
        if isinstance(value, Dispatch) and isinstance(previous, Dispatch):
            value = Dispatch({**previous, **value})
        super().__setitem__(name, value)


class VisitorMeta(type):

    @classmethod
    def __prepare__(meta, name, bases):
        namespace = Namespace()
        def _(*node_types):
            def register(function):
                return Dispatch({t: function for t in node_types})
            return register
        namespace['_'] = _
        return namespace

    def __new__(meta, name, bases, namespace):
        namespace.pop('_')
        return super().__new__(meta, name, bases, dict(namespace))


class Visitor(Error, metaclass=VisitorMeta):
    """Base of the tree walkers; carries the source for error positions."""

    def __init__(self, filename="<stdin>", text=""):
        self.filename = filename
        self.text = text

    def visit_all(self, nodes, *args):
        return [self.visit(node, *args) for node in nodes]
