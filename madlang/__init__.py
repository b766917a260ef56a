from .interpret import (
    compile,
    run,
    scan,
    parse,
    Interpreter,
    Reporter,
    AstPrinter,
    MadError,
    ScanError,
    ParseError,
    EvaluationError,
)

__version__ = "0.1.0"
