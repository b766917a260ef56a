import decimal
import math
import typing
from .visit import Visitor
from .scan import Token


class Node:

    def __init__(self, *args, **kwargs):
        if args:
            p = args[0]
            self.lineno = p.lineno
            self.index = p.index
        self.__dict__.update(kwargs)

    def __str__(self):
        return "<{} {}>".format(
            self.__class__.__name__,
            ", ".join(
                f"{key}={getattr(self, key)}"
                for key in self.__class__.__annotations__
                if hasattr(self, key))
        )

class Expression(Node):
    pass

class Statement(Node):
    pass

class Binary(Expression):
    left: Expression
    operator: Token
    right: Expression

class Unary(Expression):
    operator: Token
    right: Expression

class Grouping(Expression):
    expression: Expression

class Literal(Expression):
    value: typing.Union[float, str, bool, None]

class Variable(Expression):
    name: Token

class Call(Expression):
    callee: Expression
    arguments: typing.List[Expression]

class Block(Expression):
    statements: typing.List[Statement]

class Branch(Node):
    condition: typing.Optional[Expression]
    block: Block

class If(Expression):
    branches: typing.List[Branch]

class ExpressionStmt(Statement):
    expression: Expression

class PrintStmt(Statement):
    expression: Expression

class LetStmt(Statement):
    name: Token
    initializer: Expression
    mutable: bool

class FuncDefStmt(Statement):
    name: Token
    parameters: typing.List[Token]
    body: Block

class ReassignmentStmt(Statement):
    name: Token
    expression: Expression


def format_number(value):
    """Shortest round-trip digits, laid out like ECMAScript ``Number#toString``.

    Plain notation for magnitudes in [1e-6, 1e21), exponent notation with an
    explicit sign otherwise (``1e+22``, ``1e-7``).
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digits, exponent = decimal.Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digits))
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    k = len(digits)
    n = k + exponent

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if n > 0 else '-'}{abs(n - 1)}"
    return "-" + text if sign else text


class AstPrinter(Visitor):
    """Renders a tree as a parenthesized prefix expression, one line per node."""

    def parenthesize(self, name, *parts):
        return "({})".format(" ".join([name, *self.visit_all(parts)]))

    @_(Binary)
    def visit(self, node):
        return self.parenthesize(node.operator.lexeme, node.left, node.right)

    @_(Unary)
    def visit(self, node):
        return self.parenthesize(node.operator.lexeme, node.right)

    @_(Grouping)
    def visit(self, node):
        return self.parenthesize("group", node.expression)

    @_(Literal)
    def visit(self, node):
        if node.value is None:
            return "nil"
        if isinstance(node.value, bool):
            return "true" if node.value else "false"
        if isinstance(node.value, str):
            return f'"{node.value}"'
        return format_number(node.value)

    @_(Variable)
    def visit(self, node):
        return node.name.lexeme

    @_(Call)
    def visit(self, node):
        return self.parenthesize("call", node.callee, *node.arguments)

    @_(Block)
    def visit(self, node):
        return self.parenthesize("block", *node.statements)

    @_(Branch)
    def visit(self, node):
        if node.condition is None:
            return self.parenthesize("else", node.block)
        return "({} {})".format(self.visit(node.condition), self.visit(node.block))

    @_(If)
    def visit(self, node):
        return self.parenthesize("if", *node.branches)

    @_(ExpressionStmt)
    def visit(self, node):
        return self.visit(node.expression)

    @_(PrintStmt)
    def visit(self, node):
        return self.parenthesize("print", node.expression)

    @_(LetStmt)
    def visit(self, node):
        keyword = "let mut" if node.mutable else "let"
        return self.parenthesize(f"{keyword} {node.name.lexeme}", node.initializer)

    @_(FuncDefStmt)
    def visit(self, node):
        parameters = " ".join(p.lexeme for p in node.parameters)
        return self.parenthesize(f"func {node.name.lexeme} ({parameters})", node.body)

    @_(ReassignmentStmt)
    def visit(self, node):
        return self.parenthesize(f"= {node.name.lexeme}", node.expression)
