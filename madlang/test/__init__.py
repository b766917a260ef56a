import unittest
from contextlib import redirect_stdout, contextmanager
from io import StringIO
from ..interpret import compile, Interpreter


def run(source):
    interpreter = Interpreter()
    interpreter.execute(compile(source))
    return interpreter

@contextmanager
def assert_prints_context(test_case, output):
    buf = StringIO()
    with redirect_stdout(buf):
        yield
    if buf.getvalue() == output:
        return
    raise test_case.failureException(
        test_case._formatMessage(
            None,
            "{!r} does not match {!r}".format(buf.getvalue(), output)))


class TestCase(unittest.TestCase):

    def assertPrints(self, output):
        return assert_prints_context(self, output)
