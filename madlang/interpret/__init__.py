from .scan import Scanner, Token, scan
from .parse import Parser, parse
from .ast import AstPrinter
from .environment import Environment
from .evaluate import Interpreter, Closure, Builtin, stringify
from .error import MadError, ScanError, ParseError, EvaluationError, CliError
from .report import Reporter, configure_logging

def compile(text, filename="<stdin>"):
    return parse(scan(text, filename), filename, text)

def run(text, filename="<stdin>", interpreter=None):
    if interpreter is None:
        interpreter = Interpreter(filename=filename)
    try:
        statements = compile(text, filename)
    except MadError as e:
        interpreter.reporter.report(e)
        return
    interpreter.interpret(statements)
