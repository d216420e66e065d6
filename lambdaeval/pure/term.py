"""Pure lambda calculus terms.

A term is exactly one of

```
Identifier(name)                 ; "variable": a bound or free reference
Abstraction(parameter, body)     ; λparameter.body
Application(function, argument)  ; function argument
```

Terms are immutable: substitution and reduction build new nodes. Terms compare by identity, use render or
alpha_equals to compare them by content.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class LambdaTerm(ABC):
    """Superclass of the three kinds of λ-terms."""

    @abstractmethod
    def render(self):
        """Returns the canonical, fully parenthesized text form of this term."""

    @property
    @abstractmethod
    def nodes(self):
        """Child terms, in order (empty for Identifiers)."""

    def __str__(self):
        return self.render()


@dataclass(frozen=True, eq=False)
class Identifier(LambdaTerm):
    name: str

    def render(self):
        return self.name

    @property
    def nodes(self):
        return ()


@dataclass(frozen=True, eq=False)
class Abstraction(LambdaTerm):
    """λparameter.body. The body extends as far right as possible: λx.x y = λx.(x y)."""
    parameter: str
    body: LambdaTerm

    def render(self):
        return f"(λ{self.parameter}. {_wrap(self.body)})"

    @property
    def nodes(self):
        return (self.body,)


@dataclass(frozen=True, eq=False)
class Application(LambdaTerm):
    """function argument. Application associates to the left: f x y = (f x) y."""
    function: LambdaTerm
    argument: LambdaTerm

    def render(self):
        return f"{_wrap(self.function)} {_wrap(self.argument)}"

    @property
    def nodes(self):
        return (self.function, self.argument)


def _wrap(term):
    """Renders term, parenthesized if it is an Application. Abstractions parenthesize themselves."""
    if isinstance(term, Application):
        return f"({term.render()})"
    return term.render()


def render(term):
    return term.render()


def is_value(term):
    """Identifiers and Abstractions are values, Applications never are."""
    return isinstance(term, (Identifier, Abstraction))


def free_variables(term):
    """Returns the set of names in term that have no enclosing binder."""
    if isinstance(term, Identifier):
        return {term.name}
    if isinstance(term, Application):
        return free_variables(term.function) | free_variables(term.argument)
    if isinstance(term, Abstraction):
        return free_variables(term.body) - {term.parameter}
    raise TypeError(f"not a λ-term: {term!r}")


def alpha_equals(term, other, mapping=None, other_mapping=None):
    """Whether or not two terms are alpha-equivalent. mapping maps bound names of term to the bound names of other
    (innermost binder last), other_mapping is the same from the perspective of other.
    """
    if mapping is None:
        mapping = {}
    if other_mapping is None:
        other_mapping = {}

    if isinstance(term, Identifier) and isinstance(other, Identifier):
        bound, other_bound = mapping.get(term.name), other_mapping.get(other.name)
        if bound or other_bound:
            # both bound, and by binders at the same position
            return bool(bound and other_bound) and bound[-1] == other.name and other_bound[-1] == term.name
        return term.name == other.name

    if isinstance(term, Abstraction) and isinstance(other, Abstraction):
        mapping.setdefault(term.parameter, []).append(other.parameter)
        other_mapping.setdefault(other.parameter, []).append(term.parameter)
        try:
            return alpha_equals(term.body, other.body, mapping, other_mapping)
        finally:
            mapping[term.parameter].pop()
            other_mapping[other.parameter].pop()

    if isinstance(term, Application) and isinstance(other, Application):
        return (alpha_equals(term.function, other.function, mapping, other_mapping)
                and alpha_equals(term.argument, other.argument, mapping, other_mapping))

    return False


def display(term, indents=0):
    """Recursively displays a term tree with readable format.

    Format:
    <Kind>('<rendered>', nodes=[
        <Kind>('<rendered>', nodes=[
            ...
            <Kind>('<rendered>')  # <-- if nodes is empty
        ])
    ])
    """
    result = f"{'    ' * indents}{type(term).__name__}('{term.render()}'"
    if isinstance(term, Abstraction):
        result += f", parameter='{term.parameter}'"
    if term.nodes:
        result += ", nodes=["
        for node in term.nodes:
            result += "\n" + display(node, indents + 1) + ","
        result = result[:-1] + f"\n{'    ' * indents}]"
    return result + ")"
