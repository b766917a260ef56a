import logging
import sys
from .visit import Visitor
from .environment import Environment
from .error import MadError, EvaluationError
from .report import Reporter
from . import ast

logger = logging.getLogger(__name__)

RECURSION_LIMIT = 20000


class Closure:

    def __init__(self, declaration, environment):
        self.declaration = declaration
        self.environment = environment

    @property
    def name(self):
        return self.declaration.name.lexeme

    @property
    def parameters(self):
        return self.declaration.parameters

    @property
    def arity(self):
        return len(self.declaration.parameters)

    def __str__(self):
        return f"<func {self.name}>"


class Builtin:
    arity = 0

    def __init__(self, name, function):
        self.name = name
        self.function = function

    def __call__(self, *arguments):
        return self.function(*arguments)

    def __str__(self):
        return f"<builtin {self.name}>"


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value):
    return value is not None and value is not False


def is_equal(a, b):
    if a is None or b is None:
        return a is b
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def stringify(value):
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return ast.format_number(value)
    return str(value)


class Interpreter(Visitor):
    """Walks statements, threading environment frames through blocks and calls.

    One instance is one program run: the global frame holding ``log`` and the
    top-level frame below it live as long as the interpreter, so successive
    ``interpret`` calls (one per interactive input) share their definitions.
    """

    def __init__(self, reporter=None, filename="<stdin>"):
        super().__init__(filename)
        self.reporter = reporter or Reporter()
        self.globals = Environment()
        self.globals.define("log", Builtin("log", self.log))
        self.environment = Environment(self.globals)

    def log(self, *arguments):
        for argument in arguments:
            print(stringify(argument))

    def interpret(self, statements):
        try:
            self.execute(statements)
        except MadError as e:
            self.reporter.report(e)

    def execute(self, statements):
        # every user call costs several Python frames
        limit = sys.getrecursionlimit()
        if limit < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        try:
            for statement in statements:
                self.visit(statement, self.environment)
        except RecursionError:
            raise EvaluationError("Maximum recursion depth exceeded") from None
        finally:
            sys.setrecursionlimit(limit)

    def execute_block(self, statements, environment):
        value = None
        for statement in statements:
            value = self.visit(statement, environment)
        return value

    def check_number_operand(self, operator, operand):
        if not is_number(operand):
            self.error(operator, "Operand must be a number", f"operand: {stringify(operand)}", exc=EvaluationError)

    def check_number_operands(self, operator, left, right):
        if not (is_number(left) and is_number(right)):
            self.error(
                operator,
                "Operands must be numbers",
                f'operands: "{stringify(left)}" and "{stringify(right)}"',
                exc=EvaluationError)

    def call(self, node, closure, arguments):
        context = f'in call to "{closure.name}"'
        if len(arguments) < closure.arity:
            self.error(node, "Missing argument", context, exc=EvaluationError)
        if len(arguments) > closure.arity:
            self.error(node, "Too many arguments", context, exc=EvaluationError)

        environment = Environment(closure.environment)
        for parameter, argument in zip(closure.parameters, arguments):
            environment.define(parameter.lexeme, argument, lineno=parameter.lineno)
        logger.debug("calling %s with %d argument(s)", closure.name, len(arguments))
        return self.execute_block(closure.declaration.body.statements, environment)

    @_(ast.Literal)
    def visit(self, node, environment):
        return node.value

    @_(ast.Grouping)
    def visit(self, node, environment):
        return self.visit(node.expression, environment)

    @_(ast.Unary)
    def visit(self, node, environment):
        right = self.visit(node.right, environment)
        if node.operator.type == 'BANG':
            return not is_truthy(right)
        self.check_number_operand(node.operator, right)
        return -right

    @_(ast.Binary)
    def visit(self, node, environment):
        left = self.visit(node.left, environment)
        right = self.visit(node.right, environment)
        operator = node.operator
        kind = operator.type

        if kind == 'AND':
            return is_truthy(left) and is_truthy(right)
        if kind == 'OR':
            return is_truthy(left) or is_truthy(right)
        if kind == 'EQUAL_EQUAL':
            return is_equal(left, right)
        if kind == 'BANG_EQUAL':
            return not is_equal(left, right)

        if kind == 'PLUS':
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            if is_number(left) and is_number(right):
                return left + right
            self.error(
                operator,
                "Operands must be either two numbers or two strings",
                f'operands: "{stringify(left)}" and "{stringify(right)}"',
                exc=EvaluationError)

        self.check_number_operands(operator, left, right)
        if kind == 'MINUS':
            return left - right
        if kind == 'STAR':
            return left * right
        if kind == 'SLASH':
            if right == 0:
                self.error(
                    operator,
                    "Cannot divide by zero",
                    f"{stringify(left)} / {stringify(right)}",
                    exc=EvaluationError)
            return left / right
        if kind == 'GREATER':
            return left > right
        if kind == 'GREATER_EQUAL':
            return left >= right
        if kind == 'LESS':
            return left < right
        if kind == 'LESS_EQUAL':
            return left <= right
        raise AssertionError(f"unknown binary operator {kind}")

    @_(ast.Variable)
    def visit(self, node, environment):
        return environment.get(node.name)

    @_(ast.Block)
    def visit(self, node, environment):
        return self.execute_block(node.statements, Environment(environment))

    @_(ast.If)
    def visit(self, node, environment):
        for branch in node.branches:
            if branch.condition is None or is_truthy(self.visit(branch.condition, environment)):
                return self.visit(branch.block, environment)
        return None

    @_(ast.Call)
    def visit(self, node, environment):
        callee = self.visit(node.callee, environment)
        if not isinstance(callee, (Closure, Builtin)):
            self.error(node, "Can only call functions", stringify(callee), exc=EvaluationError)
        arguments = self.visit_all(node.arguments, environment)
        if isinstance(callee, Builtin):
            return callee(*arguments)
        return self.call(node, callee, arguments)

    @_(ast.ExpressionStmt)
    def visit(self, node, environment):
        return self.visit(node.expression, environment)

    @_(ast.PrintStmt)
    def visit(self, node, environment):
        print(stringify(self.visit(node.expression, environment)))

    @_(ast.LetStmt)
    def visit(self, node, environment):
        value = self.visit(node.initializer, environment)
        environment.define(node.name.lexeme, value, node.mutable, node.name.lineno)

    @_(ast.FuncDefStmt)
    def visit(self, node, environment):
        environment.define(node.name.lexeme, Closure(node, environment), lineno=node.name.lineno)

    @_(ast.ReassignmentStmt)
    def visit(self, node, environment):
        value = self.visit(node.expression, environment)
        environment.mutate(node.name, value)
