
class MadError(Exception):
    """Base class of every fatal diagnostic raised while running a program."""

    def __init__(self, message, lineno=None, context=None, *, filename=None, line=None, column=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.context = context
        self.filename = filename
        self.line = line
        self.column = column

    def __str__(self):
        if self.context:
            return f"{self.message} ({self.context})"
        return self.message


class ScanError(MadError):
    pass


class ParseError(MadError):

    def __init__(self, message, lineno=None, context=None, *, at_end=False, **kwargs):
        super().__init__(message, lineno, context, **kwargs)
        self.at_end = at_end


class EvaluationError(MadError):
    pass


class CliError(MadError):
    pass


class Error:

    def line_of(self, t):
        last_cr = self.text.rfind('\n', 0, t.index)
        next_cr = self.text.find('\n', t.index)
        if next_cr < 0:
            next_cr = None
        return self.text[last_cr+1: next_cr]

    def col_offset(self, t):
        last_cr = self.text.rfind('\n', 0, t.index)
        return t.index - last_cr

    def error(self, t, msg, context=None, exc=ParseError, **kwargs):
        line = column = None
        if self.text and t.index is not None:
            line = self.line_of(t)
            column = self.col_offset(t)
        raise exc(
            msg,
            t.lineno,
            context,
            filename=self.filename,
            line=line,
            column=column,
            **kwargs)
