"""Handles interactive/command-line mode for lambdaeval. Uses cmd as backend."""

import cmd

from lambdaeval.lang.numerical import cnumber
from lambdaeval.pure.term import display


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: call-by-value\nType '?' or 'help' for more information."
    prompt = "λ> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = "λ> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Evaluates an arbitrary λ-term."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}", self.line_num, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            if not line:
                return  # comment-only line

            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_trace(self, arg):
        """trace [on|off]: shows or sets whether reduction steps are printed."""
        arg = arg.strip()
        if arg in ("on", "off"):
            self.sess.trace = arg == "on"
        elif arg:
            self.sess.error_handler.warn("trace expects 'on' or 'off', got '{}'", arg, diagnosis=False)
            return
        print(f"trace is {'on' if self.sess.trace else 'off'}")

    def do_tree(self, arg):
        """tree TERM: prints the parse tree of TERM without evaluating it."""
        with self.sess.error_handler:
            print(display(self.sess.interpreter.parse(arg.strip())))

    def do_church(self, arg):
        """church N: prints the Church numeral of natural number N, ready to be pasted into a term."""
        arg = arg.strip()
        if not arg.isdecimal():
            self.sess.error_handler.warn("church expects a natural number, got '{}'", arg, diagnosis=False)
            return
        print(cnumber(int(arg)))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lambdaeval interpreter!\n\n"
              "Type a λ-term to reduce it to normal form with call-by-value beta reduction. Write \\ for λ,\n"
              "single lowercase letters for variables and parentheses for grouping: '(\\x.x) y' reduces to 'y'.\n\n"
              "Commands:\n"
              "  trace [on|off]  print every reduction step\n"
              "  tree TERM       print the parse tree of TERM\n"
              "  church N        print the Church numeral of N\n"
              "  exit            leave the interpreter (so does Ctrl-D)")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn("unrecognized token: '{}'", arg, diagnosis=False)
            return False
        return True
