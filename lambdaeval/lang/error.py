"""Error handling for lambdaeval. Only GenericExceptions should be raised by the parser and the evaluator: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

ErrorHandler is also the only place that writes diagnostics to the console, so reduction steps are printed through it
as well.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a lambdaeval error/warning.

    msg is a format string whose '{}' fields are filled with exprs. source is the text the error occurred in (used to
    underline start:end in diagnoses); if not given, the first of exprs is used instead.
    """

    def __init__(self, msg, exprs=None, source=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.msg = msg.format(*self.exprs)

        if source is None:
            source = self.exprs[0] if self.exprs else ""
        self.expr = source
        self.start = start
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def colored_msg(self):
        """Returns self.msg with the templated expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class LambdaSyntaxError(GenericException):
    """Raised by the lexer and parser on the first malformed construct. There is no recovery."""


class EvaluationLimitExceeded(GenericException):
    """Raised by the evaluator when a term needs more than max_steps beta reductions. steps holds the trace recorded
    before giving up (empty if tracing was disabled).
    """

    def __init__(self, max_steps, steps, source=None):
        super().__init__("Evaluation exceeded {} steps", str(max_steps), source=source, diagnosis=False)
        self.max_steps = max_steps
        self.steps = list(steps)


class ErrorHandler:
    """Context manager that will report lambdaeval errors/warnings instead of letting them propagate."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def _location(self):
        """Returns 'file:line_num: ' for the last registered line, or an empty string if there is none."""
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                return f"{file}:{line_num}: "
        return ""

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded, underlined by a caret line."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        warning_msg = colored(self._location(), attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.colored_msg()
        print(warning_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    @staticmethod
    def step(step):
        """Prints a single reduction step."""
        print(colored(f"Step {step.index}:", ErrorHandler.STEP, attrs=["bold"]) + f" {step.term}")

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg
        else:
            error_msg = colored(self._location(), attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.colored_msg()

        if isinstance(error, EvaluationLimitExceeded):
            for step in error.steps:  # partial trace, so that divergence is still visible
                ErrorHandler.step(step)
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("beta normal form might exist, but maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
