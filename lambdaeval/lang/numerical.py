"""Natural numbers encoded as Church numerals. Numerals cannot be typed (digits are not valid tokens), but results
that happen to be numerals are recognized so the shell can show which number they stand for.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lambdaeval.lang.error import GenericException
from lambdaeval.pure.term import Abstraction, Application, Identifier


def cnumber(num):
    """Returns the Church numeral λf.λx.f (f (... x)) of natural number num (cnum = Church numeral)."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise GenericException("expected natural number, got '{}'", repr(num), internal=True)

    body = Identifier("x")
    for __ in range(num):
        body = Application(Identifier("f"), body)
    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns the natural number encoded by cnum, or None if cnum isn't a Church numeral. Binder names don't matter:
    λs.λz.s z is 1 just like λf.λx.f x.
    """
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    f, x = cnum.parameter, cnum.body.parameter
    if f == x:
        f = None  # shadowed, so only λf.λf.f (zero) can match

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        var, nth_body = nth_body.function, nth_body.argument
        if not isinstance(var, Identifier) or var.name != f:
            return None
        num += 1

    return num if isinstance(nth_body, Identifier) and nth_body.name == x else None
