import logging
import sly
from .error import Error, ScanError

logger = logging.getLogger(__name__)


class Token:
    __slots__ = ('type', 'lexeme', 'literal', 'lineno', 'index')

    def __init__(self, type, lexeme, literal=None, lineno=1, index=None):
        self.type = type
        self.lexeme = lexeme
        self.literal = literal
        self.lineno = lineno
        self.index = index

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.lexeme, self.literal, self.lineno) == \
            (other.type, other.lexeme, other.literal, other.lineno)

    def __repr__(self):
        return f'Token(type={self.type!r}, lexeme={self.lexeme!r}, literal={self.literal!r}, lineno={self.lineno})'


class Scanner(Error, sly.Lexer):

    tokens = {
        AND,
        BANG,
        BANG_EQUAL,
        CLASS,
        COMMA,
        DOT,
        ELSE,
        EQUAL,
        EQUAL_EQUAL,
        FALSE,
        FOR,
        FUNC,
        GREATER,
        GREATER_EQUAL,
        IDENTIFIER,
        IF,
        LEFT_BRACE,
        LEFT_PAREN,
        LESS,
        LESS_EQUAL,
        LET,
        MINUS,
        MUT,
        NIL,
        NUMBER,
        OR,
        PIPE,
        PLUS,
        PRINT,
        RETURN,
        RIGHT_BRACE,
        RIGHT_PAREN,
        SEMICOLON,
        SLASH,
        STAR,
        STRING,
        SUPER,
        THIS,
        TRUE,
        WHILE,
    }

    ignore = ' \t\r'

    ignore_comment = r'//[^\n]*'

    PIPE = r'->'
    BANG_EQUAL = r'!='
    EQUAL_EQUAL = r'=='
    GREATER_EQUAL = r'>='
    LESS_EQUAL = r'<='

    LEFT_PAREN = r'\('
    RIGHT_PAREN = r'\)'
    LEFT_BRACE = r'\{'
    RIGHT_BRACE = r'\}'
    COMMA = r','
    DOT = r'\.'
    MINUS = r'-'
    PLUS = r'\+'
    SEMICOLON = r';'
    SLASH = r'/'
    STAR = r'\*'
    BANG = r'!'
    EQUAL = r'='
    GREATER = r'>'
    LESS = r'<'

    NUMBER = r'[0-9]+(?:\.[0-9]+)?'

    IDENTIFIER = r'[a-zA-Z_][a-zA-Z0-9_]*'
    IDENTIFIER['and'] = AND
    IDENTIFIER['class'] = CLASS
    IDENTIFIER['else'] = ELSE
    IDENTIFIER['false'] = FALSE
    IDENTIFIER['for'] = FOR
    IDENTIFIER['func'] = FUNC
    IDENTIFIER['if'] = IF
    IDENTIFIER['let'] = LET
    IDENTIFIER['mut'] = MUT
    IDENTIFIER['nil'] = NIL
    IDENTIFIER['or'] = OR
    IDENTIFIER['print'] = PRINT
    IDENTIFIER['return'] = RETURN
    IDENTIFIER['super'] = SUPER
    IDENTIFIER['this'] = THIS
    IDENTIFIER['true'] = TRUE
    IDENTIFIER['while'] = WHILE

    @_(r'"[^"]*"')
    def STRING(self, t):
        self.lineno += t.value.count('\n')
        return t

    @_(r'\n+')
    def ignore_NEWLINE(self, t):
        self.lineno += len(t.value)

    def __init__(self, filename="<stdin>"):
        super().__init__()
        self.filename = filename
        self.text = ""

    def error(self, t):
        if t.value[0] == '"':
            super().error(t, "Unterminated string", exc=ScanError)
        super().error(t, "Unexpected token", repr(t.value[0]), exc=ScanError)

    def decode(self, t):
        if t.type == 'NUMBER':
            return float(t.value)
        if t.type == 'STRING':
            return t.value[1:-1]
        if t.type == 'IDENTIFIER':
            return t.value
        return None

    def scan(self, text):
        tokens = [
            Token(t.type, t.value, self.decode(t), t.lineno, t.index)
            for t in self.tokenize(text)
        ]
        tokens.append(Token('EOF', '', None, self.lineno, len(text)))
        logger.debug("scanned %d tokens from %s", len(tokens), self.filename)
        return tokens


def scan(text, filename="<stdin>"):
    return Scanner(filename).scan(text)
