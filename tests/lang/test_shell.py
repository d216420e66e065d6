import io
import unittest
from contextlib import redirect_stdout

from lambdaeval.lang.error import ErrorHandler
from lambdaeval.lang.session import Session
from lambdaeval.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def run_cmd(self, *lines):
        out = io.StringIO()
        stop = None
        with redirect_stdout(out):
            for line in lines:
                stop = self.shell.onecmd(line)
        return out.getvalue(), stop

    def test_evaluate(self):
        cases = {
            "(\\x.x) y": "y\n",
            "x y": "x y\n",
            "(\\x.\\y.x) y": "(λy'. y)\n",
            "(\\n.\\f.\\x.f (n f x)) (\\f.\\x.x)": "(λf. (λx. (f x)))  ;; 1\n",
            "λx.x ;; identity": "(λx. x)\n",
            ";; nothing to see": "",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.run_cmd(case)[0], case)

    def test_line_continuation(self):
        output, __ = self.run_cmd("(\\x.x")
        self.assertEqual("", output)
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        output, __ = self.run_cmd(") y")
        self.assertEqual("y\n", output)
        self.assertEqual("λ> ", self.shell.prompt)

    def test_errors_do_not_stop_shell(self):
        output, stop = self.run_cmd("x 1")
        self.assertIn("error: ", output)
        self.assertIn("Unexpected character: ", output)
        self.assertFalse(stop)

        output, __ = self.run_cmd("(\\x.x x) (\\x.x x)")
        self.assertIn("Evaluation exceeded ", output)

        self.assertEqual("y\n", self.run_cmd("(\\x.x) y")[0])

    def test_trace(self):
        self.assertEqual("trace is off\n", self.run_cmd("trace")[0])

        output, __ = self.run_cmd("trace on")
        self.assertEqual("trace is on\n", output)
        self.assertTrue(self.shell.sess.trace)

        output, __ = self.run_cmd("(\\x.x) y")
        self.assertIn("Step 0:", output)
        self.assertIn("Step 1:", output)
        self.assertTrue(output.endswith("y\n"))

        self.run_cmd("trace off")
        self.assertFalse(self.shell.sess.trace)

        output, __ = self.run_cmd("trace maybe")
        self.assertIn("warning: ", output)
        self.assertFalse(self.shell.sess.trace)

    def test_tree(self):
        output, __ = self.run_cmd("tree \\x.x y")
        self.assertIn("Abstraction('(λx. (x y))', parameter='x', nodes=[", output)
        self.assertIn("Identifier('y')", output)

        output, __ = self.run_cmd("tree (\\x.x")
        self.assertIn("error: ", output)

    def test_church(self):
        cases = {
            "church 0": "(λf. (λx. x))\n",
            "church 2": "(λf. (λx. (f (f x))))\n",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.run_cmd(case)[0], case)

        for case in ["church", "church -1", "church two", "church 1.5"]:
            self.assertIn("warning: ", self.run_cmd(case)[0], case)

    def test_church_numeral_evaluates(self):
        numeral, __ = self.run_cmd("church 3")
        output, __ = self.run_cmd(f"(\\n.\\f.\\x.f (n f x)) {numeral.strip()}")
        self.assertTrue(output.endswith("  ;; 4\n"))

    def test_help(self):
        output, __ = self.run_cmd("help")
        self.assertIn("trace [on|off]", output)

    def test_exit(self):
        self.assertTrue(self.run_cmd("exit")[1])
        self.assertTrue(self.run_cmd("EOF")[1])

        output, stop = self.run_cmd("exit now")
        self.assertFalse(stop)
        self.assertIn("warning: ", output)

    def test_emptyline(self):
        self.run_cmd("(\\x.x) y")
        self.assertEqual("", self.run_cmd("")[0])  # previous command is not repeated


if __name__ == '__main__':
    unittest.main()
