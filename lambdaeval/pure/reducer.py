"""Call-by-value beta reduction of pure lambda calculus terms.

The reduction loop threads the current term through each iteration, rebuilding Applications instead of mutating them,
so a term handed to the evaluator is never changed. Everything that varies during one evaluation (fresh names, the
step counter, the trace) lives in a Reduction object created by Evaluator.evaluate, so consecutive or concurrent
evaluations never see each other's state.

Sources: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html,
         https://en.wikipedia.org/wiki/Lambda_calculus#Capture-avoiding_substitutions
"""

from dataclasses import dataclass

from lambdaeval.lang.error import EvaluationLimitExceeded
from lambdaeval.pure.term import Abstraction, Application, Identifier, free_variables, is_value


@dataclass(frozen=True)
class Step:
    """One trace entry: the term (rendered) as it was before reduction step index."""
    index: int
    term: str


class NameSupply:
    """Generates parameter names that have not been generated before: x -> x', x'1, x'2, ..."""
    PRIME = "'"

    def __init__(self):
        self.used = set()

    def fresh(self, base):
        name = f"{base}{NameSupply.PRIME}"
        counter = 1
        while name in self.used:
            name = f"{base}{NameSupply.PRIME}{counter}"
            counter += 1
        self.used.add(name)
        return name


def substitute(parameter, replacement, term, names):
    """Returns term[parameter := replacement], renaming binders that would capture a free variable of replacement.
    names is the NameSupply used for renaming. Subtrees without free occurrences of parameter may be shared.
    """
    if isinstance(term, Identifier):
        return replacement if term.name == parameter else term

    if isinstance(term, Application):
        return Application(substitute(parameter, replacement, term.function, names),
                           substitute(parameter, replacement, term.argument, names))

    if isinstance(term, Abstraction):
        if term.parameter == parameter:
            return term  # parameter is shadowed in the body

        if term.parameter in free_variables(replacement):
            new_parameter = names.fresh(term.parameter)
            body = substitute(term.parameter, Identifier(new_parameter), term.body, names)
            return Abstraction(new_parameter, substitute(parameter, replacement, body, names))

        return Abstraction(term.parameter, substitute(parameter, replacement, term.body, names))

    raise TypeError(f"not a λ-term: {term!r}")


class Reduction:
    """State of a single evaluation: fresh names, beta step counter and (optionally) the trace."""

    def __init__(self, max_steps, trace=False):
        self.max_steps = max_steps
        self.trace = trace
        self.names = NameSupply()
        self.count = 0
        self.steps = []

    def beta(self, redex):
        """Contracts redex, an Application of an Abstraction to a fully reduced argument. Counts as one step."""
        if self.count >= self.max_steps:
            raise EvaluationLimitExceeded(self.max_steps, self.steps)

        if self.trace:
            self.steps.append(Step(self.count, redex.render()))
        self.count += 1

        abstraction = redex.function
        return substitute(abstraction.parameter, redex.argument, abstraction.body, self.names)

    def reduce(self, term):
        """Reduces term with call-by-value until it is a value or stuck. Arguments are reduced before the function is
        applied to them, functions before their arguments if the function itself is not a value yet.
        """
        while isinstance(term, Application):
            function, argument = term.function, term.argument

            if is_value(function) and is_value(argument):
                if not isinstance(function, Abstraction):
                    return term  # free variable at the head, e.g. x y
                term = self.beta(term)

            elif is_value(function):
                argument = self.reduce(argument)
                if is_value(argument):
                    term = Application(function, argument)
                elif isinstance(function, Abstraction):
                    # argument is stuck (e.g. a b) and will not reduce any further, so it is substituted as is
                    term = self.beta(Application(function, argument))
                else:
                    return Application(function, argument)  # x (y z) is as reduced as it gets

            else:
                function = self.reduce(function)
                if not is_value(function):
                    return Application(function, self.reduce(argument))
                term = Application(function, argument)

        return term

    def normalize(self, term):
        """Reduces term, then keeps reducing inside abstraction bodies and stuck applications until there is nothing
        left that call-by-value can reduce.
        """
        term = self.reduce(term)

        if isinstance(term, Abstraction):
            body = self.normalize(term.body)
            return term if body is term.body else Abstraction(term.parameter, body)

        if isinstance(term, Application):
            function, argument = self.normalize(term.function), self.normalize(term.argument)
            if function is term.function and argument is term.argument:
                return term
            return Application(function, argument)

        return term


class Evaluator:
    """Evaluates terms to normal form. max_steps bounds the number of beta reductions per evaluation, which is the only
    thing that stops divergent terms such as (λx.x x) (λx.x x).
    """
    MAX_STEPS = 1000

    def __init__(self, max_steps=None, trace=False):
        self.max_steps = Evaluator.MAX_STEPS if max_steps is None else max_steps
        self.trace = trace
        self.steps = []

    def evaluate(self, term, trace=None):
        """Returns the normal form of term. If tracing, self.steps holds one Step per beta reduction followed by a
        final Step with the normal form. Raises EvaluationLimitExceeded (carrying the partial trace) if max_steps
        beta reductions were not enough.
        """
        reduction = Reduction(self.max_steps, self.trace if trace is None else trace)
        self.steps = reduction.steps

        result = reduction.normalize(term)

        if reduction.trace:
            reduction.steps.append(Step(reduction.count, result.render()))
        return result
