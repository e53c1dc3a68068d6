import io
import unittest
from contextlib import redirect_stdout

from ecalc.lang.error import ErrorHandler, EvaluationError, GenericException, LexError, ParseError


class GenericExceptionTestCase(unittest.TestCase):

    def test_message(self):
        error = GenericException("variable '{}' is not defined", "x")
        self.assertEqual("variable 'x' is not defined", str(error))
        self.assertIn("x", error.msg)
        self.assertFalse(error.located)

        error = ParseError("expected {} but got {}", ("')'", "end of statement"))
        self.assertEqual("expected ')' but got end of statement", str(error))

        self.assertEqual("division by zero", str(EvaluationError("division by zero")))

    def test_locate(self):
        error = LexError("unexpected character '{}'", "$")
        self.assertIs(error, error.locate("x = $", 4))
        self.assertEqual(("x = $", 4, 5), (error.expr, error.start, error.end))
        self.assertTrue(error.located)

        error.locate("print (1", 6, 8)
        self.assertEqual((6, 8), (error.start, error.end))


class ErrorHandlerTestCase(unittest.TestCase):

    def capture(self, handler, error):
        out = io.StringIO()
        with redirect_stdout(out):
            with handler:
                raise error
        return out.getvalue()

    def test_non_fatal(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("<in>")
        handler.register_line("<in>", "print z", 4)

        error = ParseError("expected {} but got {}", ("')'", "end of statement")).locate("print z", 6, 7)
        out = self.capture(handler, error)

        self.assertIn("File '<in>', line 4:", out)
        self.assertIn("error: ", out)
        self.assertIn("but got", out)
        self.assertIn("^", out)
        self.assertNotIn("Traceback", out)
        self.assertEqual((None, None), handler.traceback["<in>"])

    def test_fatal(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(SystemExit) as context:
                with ErrorHandler():
                    raise LexError("unexpected character '{}'", "$")
        self.assertEqual(1, context.exception.code)
        self.assertIn("unexpected character", out.getvalue())

    def test_python_errors(self):
        out = self.capture(ErrorHandler(fatal=False), RecursionError())
        self.assertIn("nested too deeply", out)

        out = self.capture(ErrorHandler(fatal=False), KeyboardInterrupt())
        self.assertIn("keyboard interrupt", out)

        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(ValueError):
                with ErrorHandler(fatal=False):
                    raise ValueError("boom")
        self.assertIn("[internal] ", out.getvalue())
        self.assertIn("unknown error: ", out.getvalue())

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(0)

    def test_diagnose(self):
        error = ParseError("expected primary expression").locate("x = * 2", 4, 5)
        lines = ErrorHandler.diagnose(error).split("\n")

        self.assertEqual(2, len(lines))
        self.assertIn("x = ", lines[0])
        self.assertIn("^", lines[1])
        self.assertEqual(" " * 6, lines[1][:6])

    def test_warn(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("<in>")

        out = io.StringIO()
        with redirect_stdout(out):
            handler.warn("'{}' no longer aliases '{}'", ("y", "x"))
        self.assertIn("warning: ", out.getvalue())
        self.assertNotIn("<in>", out.getvalue())

        handler.register_line("<in>", "y = 3", 2)
        out = io.StringIO()
        with redirect_stdout(out):
            handler.warn("'{}' no longer aliases '{}'", ("y", "x"), start=0, end=1)
        self.assertIn("<in>:2:1: ", out.getvalue())
        self.assertIn(" = 3", out.getvalue())


if __name__ == '__main__':
    unittest.main()
