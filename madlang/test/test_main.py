import os
import tempfile
from contextlib import redirect_stderr
from io import StringIO
from unittest import mock
from . import TestCase
from ..__main__ import main, InteractiveShell


class MainTest(TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, source):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(source)
        return path

    def main(self, *argv):
        stderr = StringIO()
        with redirect_stderr(stderr):
            try:
                main(argv)
            except SystemExit as e:
                return e.code, stderr.getvalue()
        return None, stderr.getvalue()


class ArgumentTest(MainTest):

    def test_extension(self):
        code, err = self.main(self.write("prog.txt", "print 1;"))
        self.assertEqual(code, 1)
        self.assertEqual(err, "Error: Wrong file extension. Expected '.mad'\n")

    def test_missing_file(self):
        path = os.path.join(self.tmp.name, "missing.mad")
        code, err = self.main(path)
        self.assertEqual(code, 1)
        self.assertEqual(err, f"Error: File not found at {path}\n")

    def test_directory(self):
        path = os.path.join(self.tmp.name, "dir.mad")
        os.mkdir(path)
        code, err = self.main(path)
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith(f"Error: Unable to read file at path {path} ("))

    def test_not_utf8(self):
        path = os.path.join(self.tmp.name, "latin.mad")
        with open(path, "wb") as f:
            f.write(b'print "\xff\xfe";')
        code, err = self.main(path)
        self.assertEqual(code, 1)
        self.assertEqual(err, f"Error: Unable to read file at path {path} (UnicodeDecodeError)\n")

    def test_too_many(self):
        code, err = self.main("a.mad", "b.mad")
        self.assertEqual(code, 1)
        self.assertEqual(err, "Error: Invalid number of arguments\n")


class RunTest(MainTest):

    def test_run(self):
        path = self.write("prog.mad", "func double(x) { x * 2; };\nprint 21 -> double;\n")
        with self.assertPrints("42\n"):
            code, err = self.main(path)
        self.assertIsNone(code)
        self.assertEqual(err, "")

    def test_runtime_error(self):
        path = self.write("prog.mad", "print 1;\nprint y;\nprint 2;\n")
        with self.assertPrints("1\n"):
            code, err = self.main(path)
        self.assertEqual(code, 1)
        self.assertEqual(err, "[line 2] Error: Undefined variable (y)\n")

    def test_parse_error(self):
        path = self.write("prog.mad", "print 1;\nlet = 2;\n")
        with self.assertPrints(""):
            code, err = self.main(path)
        self.assertEqual(code, 1)
        self.assertEqual(
            err,
            '[line 2] Error: Expected variable name (at token "=")\n'
            "    let = 2;\n"
            "        ^\n")

    def test_nesting_error(self):
        path = self.write("prog.mad", "print " + "(" * 400 + "1" + ")" * 400 + ";\n")
        with self.assertPrints(""):
            code, err = self.main(path)
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith("[line 1] Error: Maximum nesting depth exceeded"))

    def test_ast(self):
        path = self.write("prog.mad", "let x = 1 + 2;\nprint x -> f(3);\n")
        with self.assertPrints("(let x (+ 1 2))\n(print (call f x 3))\n"):
            code, err = self.main("--ast", path)
        self.assertIsNone(code)


class InteractiveTest(TestCase):

    def setUp(self):
        self.stderr = StringIO()
        redirect = redirect_stderr(self.stderr)
        redirect.__enter__()
        self.addCleanup(redirect.__exit__, None, None, None)
        self.shell = InteractiveShell()

    def test_state_persists(self):
        with self.assertPrints("1\n"):
            self.assertFalse(self.shell.push("let x = 1;"))
            self.assertFalse(self.shell.push("print x;"))

    def test_continuation(self):
        with self.assertPrints("2\n"):
            self.assertTrue(self.shell.push("print {"))
            self.assertTrue(self.shell.push("1;"))
            self.assertFalse(self.shell.push("2; };"))

    def test_error_continues(self):
        with self.assertPrints("1\n"):
            self.shell.push("let x = 1;")
            self.assertFalse(self.shell.push("y;"))
            self.assertFalse(self.shell.push("@;"))
            self.assertFalse(self.shell.push("let x = 2;"))
            self.shell.push("print x;")
        err = self.stderr.getvalue()
        self.assertIn("Undefined variable (y)", err)
        self.assertIn("Unexpected token ('@')", err)
        self.assertIn('Cannot redeclare variable "x"', err)

    def test_parse_error_resets(self):
        with self.assertPrints("3\n"):
            self.assertFalse(self.shell.push(") ;"))
            self.assertFalse(self.shell.push("print 3;"))
        self.assertIn("Expected expression", self.stderr.getvalue())

    def test_nesting_error_continues(self):
        with self.assertPrints("4\n"):
            self.assertFalse(self.shell.push("print " + "(" * 400 + "1" + ")" * 400 + ";"))
            self.assertFalse(self.shell.push("print 4;"))
        self.assertIn("Maximum nesting depth exceeded", self.stderr.getvalue())

    def test_exit(self):
        with mock.patch("builtins.input", side_effect=["let x = 2;", "print x;", "exit", "print 3;"]):
            with self.assertPrints("2\n"):
                self.shell.interact(banner="", exitmsg="")
