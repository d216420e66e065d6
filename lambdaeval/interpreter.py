"""Lambda calculus interpreter.

Basic program flow:
    1. Lexer: splits the text into single-character tokens (see lambdaeval/pure/lexical.py)
    2. Parser: recursive descent over the token stream, produces a term tree (see lambdaeval/pure/parser.py)
        - Fails on the first malformed construct with a LambdaSyntaxError
    3. Evaluator: call-by-value beta reduction of the tree to normal form (see lambdaeval/pure/reducer.py)
        - Fails with EvaluationLimitExceeded if the term needs more than max_steps beta reductions

Interpreter.evaluate raises both errors unchanged. Interpreter.attempt returns an Outcome instead, so that callers
which prefer not to catch can check Outcome.status.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from lambdaeval.lang.error import EvaluationLimitExceeded, GenericException, LambdaSyntaxError
from lambdaeval.pure.parser import parse
from lambdaeval.pure.reducer import Evaluator, Step
from lambdaeval.pure.term import LambdaTerm, render

__all__ = ["Evaluation", "Interpreter", "Outcome", "parse", "render"]


@dataclass
class Evaluation:
    result: LambdaTerm
    steps: List[Step] = field(default_factory=list)

    def __str__(self):
        return self.result.render()


@dataclass
class Outcome:
    """Either a result (status 'ok') or the error that prevented one (status 'error'). steps holds the trace in both
    cases: the partial one if evaluation gave up.
    """
    result: Optional[LambdaTerm] = None
    steps: List[Step] = field(default_factory=list)
    error: Optional[GenericException] = None

    @property
    def status(self):
        return "error" if self.error is not None else "ok"

    def format_error(self):
        return "" if self.error is None else f"error: {self.error.msg}"


class Interpreter:
    """Parses and evaluates lambda calculus expressions. Each call gets its own evaluation state."""

    def __init__(self, max_steps=None):
        self.max_steps = Evaluator.MAX_STEPS if max_steps is None else max_steps

    @staticmethod
    def parse(text):
        return parse(text)

    def evaluate(self, text, trace=False):
        """Parses and evaluates text. Raises LambdaSyntaxError or EvaluationLimitExceeded."""
        return self.reduce(parse(text), trace)

    def reduce(self, term, trace=False):
        """Evaluates an already parsed term. Raises EvaluationLimitExceeded."""
        evaluator = Evaluator(self.max_steps, trace)
        result = evaluator.evaluate(term)
        return Evaluation(result, evaluator.steps)

    def attempt(self, text, trace=False):
        """Like evaluate, but returns an Outcome rather than raising the interpreter's own errors."""
        try:
            evaluation = self.evaluate(text, trace)
        except LambdaSyntaxError as error:
            return Outcome(error=error)
        except EvaluationLimitExceeded as error:
            return Outcome(steps=error.steps, error=error)
        return Outcome(evaluation.result, evaluation.steps)
