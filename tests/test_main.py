import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from lambdaeval.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text):
        path = os.path.join(self.tmpdir.name, "main.lc")
        with open(path, "w", encoding="utf-8") as file:
            file.write(text)
        return path

    def run_main(self, text, *args):
        out = io.StringIO()
        with redirect_stdout(out):
            main([self.write(text), *args])
        return out.getvalue()

    def test_file(self):
        output = self.run_main(";; church numerals\n"
                               "(\\n.\\f.\\x.f (n f x)) (\\f.\\x.f x)\n"
                               "(\\x.\\y.x) a b\n")
        self.assertEqual("(λf. (λx. (f (f x))))  ;; 2\na\n", output)

    def test_trace(self):
        output = self.run_main("(\\x.x) y\n", "--trace")
        self.assertIn("Step 0:", output)
        self.assertIn(" (λx. x) y", output)
        self.assertTrue(output.endswith("\ny\n"))

    def test_missing_file(self):
        out = io.StringIO()
        with self.assertRaises(SystemExit) as context:
            with redirect_stdout(out):
                main([os.path.join(self.tmpdir.name, "missing.lc")])
        self.assertEqual(1, context.exception.code)
        self.assertIn("could not be opened", out.getvalue())

    def test_syntax_error(self):
        out = io.StringIO()
        with self.assertRaises(SystemExit) as context:
            with redirect_stdout(out):
                main([self.write("x\n\\x.\n")])
        self.assertEqual(1, context.exception.code)
        self.assertIn("main.lc:2: ", out.getvalue())

    def test_max_steps(self):
        out = io.StringIO()
        with self.assertRaises(SystemExit) as context:
            with redirect_stdout(out):
                main([self.write("(\\x.x x) (\\x.x x)\n"), "--max-steps", "5"])
        self.assertEqual(1, context.exception.code)
        self.assertIn("Evaluation exceeded ", out.getvalue())

    def test_results_before_failure(self):
        out = io.StringIO()
        with self.assertRaises(SystemExit):
            with redirect_stdout(out):
                main([self.write("(\\x.x) y\n(\\x.x x) (\\x.x x)\n"), "--max-steps", "5"])

        output = out.getvalue()
        self.assertTrue(output.startswith("y\n"))
        self.assertIn("main.lc:2: ", output)

    def test_trace_is_printed_per_line(self):
        output = self.run_main("(\\x.x) y\n(\\x.x) z\n", "--trace")
        self.assertLess(output.index("\ny\n"), output.rindex("Step 0:"))

    def test_bad_arguments(self):
        with self.assertRaises(SystemExit) as context:
            with redirect_stderr(io.StringIO()):
                main(["--max-steps", "many"])
        self.assertEqual(2, context.exception.code)


if __name__ == '__main__':
    unittest.main()
