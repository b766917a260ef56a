import os
import sys
from code import InteractiveConsole
from .interpret import (
    compile, run, Interpreter, Reporter, AstPrinter, MadError, ParseError, CliError, configure_logging)


class InteractiveShell(InteractiveConsole):

    def __init__(self, interpreter=None):
        super().__init__({}, "<console>")
        del self.__dict__['compile']
        if interpreter is None:
            interpreter = Interpreter(Reporter(interactive=True), "<console>")
        self.interpreter = interpreter

    def compile(self, source, filename, symbol):
        try:
            return compile(source, filename)
        except ParseError as e:
            if e.at_end:
                return None
            raise

    def runsource(self, source, filename="<console>", symbol="single"):
        try:
            statements = self.compile(source, filename, symbol)
        except MadError as e:
            self.interpreter.reporter.report(e)
            return False
        if statements is None:
            return True
        self.runcode(statements)
        return False

    def runcode(self, code):
        self.interpreter.interpret(code)

    def raw_input(self, prompt=""):
        line = super().raw_input(prompt)
        if line.strip() == "exit" and not self.buffer:
            raise EOFError
        return line


def read_source(filename):
    path = os.path.abspath(filename)
    if os.path.splitext(path)[1] != ".mad":
        raise CliError("Wrong file extension. Expected '.mad'")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        raise CliError(f"File not found at {path}") from None
    except PermissionError:
        raise CliError(f"Unauthorized to read file at path {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise CliError(f"Unable to read file at path {path}", context=type(e).__name__) from None


def dump(filename, reporter):
    source = read_source(filename)
    try:
        statements = compile(source, filename)
    except MadError as e:
        reporter.report(e)
        return
    for line in AstPrinter(filename, source).visit_all(statements):
        print(line)


def interact():
    sys.ps1 = "> "
    sys.ps2 = ". "
    shell = InteractiveShell()
    shell.interact("madlang", exitmsg="")


def main(argv=None):
    configure_logging()
    args = sys.argv[1:] if argv is None else list(argv)
    reporter = Reporter()

    try:
        if not args:
            interact()
        elif args[0] == "--ast" and len(args) == 2:
            dump(args[1], reporter)
        elif len(args) == 1:
            source = read_source(args[0])
            run(source, args[0], Interpreter(reporter, args[0]))
        else:
            raise CliError("Invalid number of arguments")
    except CliError as e:
        reporter.report(e)


if __name__ == "__main__":
    main()
