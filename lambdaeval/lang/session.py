"""Session control for lambdaeval: runs λ-terms either from a file (one term per line) or from the command-line shell.

Lines are preprocessed before being parsed:

```
<line>     ::= <λ-term> [<comment>] | <comment> | ""
<comment>  ::= ";;" <char>*         ; runs to the end of the line
```

A line with more "(" than ")" is continued on the next line.
"""

from lambdaeval.interpreter import Interpreter
from lambdaeval.lang.error import GenericException
from lambdaeval.lang.numerical import number


class Session:
    """Governs a lambdaeval session: parses terms as they are added and evaluates them when run is called."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = ";;"

    def __init__(self, error_handler, path, cmd_line, trace=False, max_steps=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.trace = trace        # whether or not reduction steps are printed

        self.interpreter = Interpreter(max_steps)
        self.to_exec = {}  # dict of line num: (line, term) to evaluate on run
        self.results = []  # list of Evaluations, in order of execution

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev. Must be called before calling add.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments

        line = line.strip()
        if exprs is not None:
            if line and not add_to_prev:
                exprs.append((line, line_num))
            elif add_to_prev:
                prev, prev_num = exprs.pop()
                line = f"{prev} {line}".strip()
                exprs.append((line, prev_num))

        return line, line.count("(") > line.count(")")

    def add(self, line, line_num):
        """Parses line and queues it for evaluation. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        self.to_exec[line_num] = (line, self.interpreter.parse(line))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates every queued term, in line order. Outside command-line mode each result is printed as soon as
        it is known. Will raise any errors that are encountered.
        """
        for line_num, (line, term) in sorted(self.to_exec.items()):
            self.error_handler.register_line(self.path, line, line_num)

            try:
                evaluation = self.interpreter.reduce(term, self.trace)
            finally:
                del self.to_exec[line_num]

            for step in evaluation.steps:
                self.error_handler.step(step)
            if not self.cmd_line:
                print(Session.format(evaluation))  # shell prints through pop instead
            self.results.append(evaluation)

            self.error_handler.remove_line(self.path)

    @staticmethod
    def format(evaluation):
        """Rendered result, annotated with the number it stands for if it is a Church numeral."""
        num = number(evaluation.result)
        if num is None:
            return str(evaluation)
        return f"{evaluation}  {Session.COMMENT} {num}"

    def pop(self):
        """Removes and returns the formatted last result."""
        return Session.format(self.results.pop())
