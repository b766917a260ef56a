import logging
from .error import Error
from .scan import Token
from . import ast

logger = logging.getLogger(__name__)

EXPECTED_SEMICOLON = 'Expected ";" after expression'


class Parser(Error):
    """Recursive-descent parser producing a list of statements.

    Parsing stops at the first error; there is no resynchronization, so a
    ParseError always means no part of the tree is usable.
    """

    def __init__(self, filename="<stdin>", text=""):
        self.filename = filename
        self.text = text
        self.tokens = []
        self.current = 0

    def error(self, t, msg):
        if t.type == 'EOF':
            super().error(t, f"{msg} at end of file", at_end=True)
        super().error(t, msg, f'at token "{t.lexeme}"')

    def parse(self, tokens):
        self.tokens = list(tokens)
        self.current = 0
        if not self.tokens or self.tokens[-1].type != 'EOF':
            last = self.tokens[-1] if self.tokens else None
            self.tokens.append(Token('EOF', '', None, last.lineno if last else 1, len(self.text)))

        statements = []
        try:
            while not self.is_at_end():
                statements.append(self.statement())
        except RecursionError:
            # bypasses self.error: never flagged at_end, even at EOF
            token = self.peek()
            Error.error(self, token, "Maximum nesting depth exceeded", f'at token "{token.lexeme}"')
        logger.debug("parsed %d statements from %s", len(statements), self.filename)
        return statements

    # helpers

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, type):
        if self.is_at_end():
            return False
        return self.peek().type == type

    def consume(self, type, message):
        if self.check(type):
            return self.advance()
        self.error(self.peek(), message)

    def is_at_end(self):
        return self.peek().type == 'EOF'

    def match(self, *types):
        for type in types:
            if self.check(type):
                self.advance()
                return True
        return False

    def peek(self):
        return self.tokens[self.current]

    def peek_next(self):
        if self.current + 1 < len(self.tokens):
            return self.tokens[self.current + 1]
        return None

    def previous(self):
        return self.tokens[self.current - 1]

    # statements

    def statement(self):
        if self.match('PRINT'):
            return self.print_statement()
        return self.declaration()

    def declaration(self):
        if self.match('LET'):
            keyword = self.previous()
            return self.variable_declaration(keyword, mutable=self.match('MUT'))
        if self.match('FUNC'):
            return self.function_declaration()
        return self.reassignment()

    def print_statement(self):
        keyword = self.previous()
        expression = self.expression()
        self.consume('SEMICOLON', EXPECTED_SEMICOLON)
        return ast.PrintStmt(keyword, expression=expression)

    def expression_statement(self):
        expression = self.expression()
        self.consume('SEMICOLON', EXPECTED_SEMICOLON)
        return ast.ExpressionStmt(expression, expression=expression)

    def variable_declaration(self, keyword, mutable):
        name = self.consume('IDENTIFIER', 'Expected variable name')
        self.consume('EQUAL', 'Expected "=" after variable name')
        initializer = self.expression()
        self.consume('SEMICOLON', 'Expected ";" after variable declaration')
        return ast.LetStmt(keyword, name=name, initializer=initializer, mutable=mutable)

    def function_declaration(self):
        name = self.consume('IDENTIFIER', 'Expected function name')
        self.consume('LEFT_PAREN', 'Expected "(" after function name')

        parameters = []
        if not self.check('RIGHT_PAREN'):
            parameters.append(self.parameter())
            while self.match('COMMA'):
                parameters.append(self.parameter())
        self.consume('RIGHT_PAREN', 'Expected ")" after parameters')

        body = self.block_expression()
        if body is None:
            self.error(self.peek(), 'Expected block as function body')
        self.consume('SEMICOLON', 'Expected ";" after function declaration')
        return ast.FuncDefStmt(name, name=name, parameters=parameters, body=body)

    def parameter(self):
        start = self.peek()
        expression = self.expression()
        if not isinstance(expression, ast.Variable):
            self.error(start, 'Invalid parameter')
        return expression.name

    def reassignment(self):
        following = self.peek_next()
        if self.check('IDENTIFIER') and following is not None and following.type == 'EQUAL':
            name = self.advance()
            self.advance()
            expression = self.expression()
            self.consume('SEMICOLON', 'Expected ";" after reassignment')
            return ast.ReassignmentStmt(name, name=name, expression=expression)
        return self.expression_statement()

    # expressions

    def expression(self):
        expression = self.stage()
        while self.match('PIPE'):
            expression = self.pipe(expression, self.stage())
        return expression

    def stage(self):
        if self.check('LEFT_BRACE'):
            return self.block_expression()
        return self.if_or_equality()

    def pipe(self, value, stage):
        if isinstance(stage, ast.Call):
            call = stage
            while isinstance(call.callee, ast.Call):
                call = call.callee
            call.arguments.insert(0, value)
            return stage
        return ast.Call(stage, callee=stage, arguments=[value])

    def block_expression(self):
        if not self.match('LEFT_BRACE'):
            return None
        brace = self.previous()
        statements = []
        while not self.check('RIGHT_BRACE') and not self.is_at_end():
            statements.append(self.statement())
        self.consume('RIGHT_BRACE', 'Expected "}" after block')
        return ast.Block(brace, statements=statements)

    def if_or_equality(self):
        if self.match('IF'):
            return self.if_chain(self.previous())
        return self.equality()

    def if_chain(self, keyword):
        branches = [self.branch()]
        while self.match('ELSE'):
            if self.match('IF'):
                branches.append(self.branch())
            else:
                branches.append(self.branch(conditional=False))
                break
        return ast.If(keyword, branches=branches)

    def branch(self, conditional=True):
        start = self.peek()
        condition = self.expression() if conditional else None
        block = self.block_expression()
        if block is None:
            self.error(self.peek(), 'Expected block after condition')
        return ast.Branch(start, condition=condition, block=block)

    def binary(self, operand, *operators):
        expression = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expression = ast.Binary(operator, left=expression, operator=operator, right=right)
        return expression

    def equality(self):
        return self.binary(self.comparison, 'BANG_EQUAL', 'EQUAL_EQUAL')

    def comparison(self):
        return self.binary(
            self.addition,
            'AND', 'GREATER', 'GREATER_EQUAL', 'LESS', 'LESS_EQUAL', 'OR')

    def addition(self):
        return self.binary(self.multiplication, 'MINUS', 'PLUS')

    def multiplication(self):
        return self.binary(self.unary, 'SLASH', 'STAR')

    def unary(self):
        if self.match('BANG', 'MINUS'):
            operator = self.previous()
            right = self.unary()
            return ast.Unary(operator, operator=operator, right=right)
        return self.call()

    def call(self):
        expression = self.primary()
        while self.match('LEFT_PAREN'):
            expression = self.finish_call(expression)
        return expression

    def finish_call(self, callee):
        arguments = []
        if not self.check('RIGHT_PAREN'):
            arguments.append(self.expression())
            while self.match('COMMA'):
                arguments.append(self.expression())
        self.consume('RIGHT_PAREN', 'Expected ")" after arguments')
        return ast.Call(callee, callee=callee, arguments=arguments)

    def primary(self):
        if self.match('FALSE'):
            return ast.Literal(self.previous(), value=False)
        if self.match('TRUE'):
            return ast.Literal(self.previous(), value=True)
        if self.match('NIL'):
            return ast.Literal(self.previous(), value=None)
        if self.match('NUMBER', 'STRING'):
            token = self.previous()
            return ast.Literal(token, value=token.literal)
        if self.match('IDENTIFIER'):
            token = self.previous()
            return ast.Variable(token, name=token)
        if self.match('LEFT_PAREN'):
            paren = self.previous()
            expression = self.expression()
            self.consume('RIGHT_PAREN', 'Expected ")" after expression')
            return ast.Grouping(paren, expression=expression)
        if self.check('LEFT_BRACE'):
            return self.block_expression()
        self.error(self.peek(), 'Expected expression')


def parse(tokens, filename="<stdin>", text=""):
    return Parser(filename, text).parse(tokens)
