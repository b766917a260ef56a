from .error import EvaluationError


class Binding:
    __slots__ = ('value', 'mutable')

    def __init__(self, value, mutable=False):
        self.value = value
        self.mutable = mutable


class Environment:
    """One lexical scope frame.

    Frames form a chain through ``enclosing``. A block or call creates a
    frame whose enclosing frame is the scope the block appears in (for a
    block) or the frame captured by the closure (for a call), never the
    caller's frame.
    """

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def __contains__(self, name):
        return name in self.values

    def define(self, name, value, mutable=False, lineno=None):
        if name in self.values:
            raise EvaluationError(f'Cannot redeclare variable "{name}"', lineno)
        self.values[name] = Binding(value, mutable)

    def lookup(self, name):
        environment = self
        while environment is not None:
            binding = environment.values.get(name.lexeme)
            if binding is not None:
                return binding
            environment = environment.enclosing
        raise EvaluationError("Undefined variable", name.lineno, name.lexeme)

    def get(self, name):
        return self.lookup(name).value

    def mutate(self, name, value):
        binding = self.lookup(name)
        if not binding.mutable:
            raise EvaluationError(
                'Variable is immutable. It can be made mutable by declaring it with "let mut"',
                name.lineno,
                name.lexeme)
        binding.value = value
