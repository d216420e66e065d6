"""Pure lambda calculus recursive-descent parser.

Formally, the accepted grammar is

```
<term>        ::= LAMBDA LCID DOT <term>     ; "abstraction"
                                             ; - abstraction bodies are greedy: λx.x y = λx.(x y) != (λx.x) y
                | <application>
<application> ::= <atom> <atom>*             ; "application"
                                             ; - associating by left: a b c d = ((a b) c) d
<atom>        ::= LPAREN <term> RPAREN
                | LCID                       ; "variable"
```

Keeping <application> and <atom> apart is what lets juxtaposition mean application without ambiguity. The atom loop
stops at DOT as well as at EOF and RPAREN so that an abstraction body always runs as far right as possible.

Source: https://opendsa-server.cs.vt.edu/ODSA/Books/PL/html/Syntax.html
"""

from lambdaeval.lang.error import LambdaSyntaxError
from lambdaeval.pure.lexical import Lexer, TokenType
from lambdaeval.pure.term import Abstraction, Application, Identifier


class Parser:
    """Builds a term tree from a string, e.g.

    "λx. x y" -> Abstraction("x", Application(Identifier("x"), Identifier("y")))
    """

    def __init__(self, text):
        self.text = text
        self.lexer = Lexer(text)

    def parse(self):
        """Main entry point: parses one term and makes sure there is nothing after it."""
        try:
            term = self.parse_term()
        except RecursionError:
            raise LambdaSyntaxError("Term is nested too deeply", source=self.text, diagnosis=False) from None
        self.lexer.match(TokenType.EOF)
        return term

    def parse_term(self):
        """term ::= LAMBDA LCID DOT term | application"""
        if self.lexer.skip(TokenType.LAMBDA) is not None:
            parameter = self.lexer.match(TokenType.LCID)
            self.lexer.match(TokenType.DOT)
            return Abstraction(parameter, self.parse_term())

        return self.parse_application()

    def parse_application(self):
        """application ::= atom atom*, folded to the left: f x y z => ((f x) y) z"""
        lhs = self.parse_atom()

        while not any(self.lexer.next(stop) for stop in (TokenType.EOF, TokenType.RPAREN, TokenType.DOT)):
            lhs = Application(lhs, self.parse_atom())

        return lhs

    def parse_atom(self):
        """atom ::= LPAREN term RPAREN | LCID"""
        if self.lexer.skip(TokenType.LPAREN) is not None:
            term = self.parse_term()
            self.lexer.match(TokenType.RPAREN)
            return term

        if self.lexer.next(TokenType.LCID):
            return Identifier(self.lexer.match(TokenType.LCID))

        raise self.lexer.error("Expected atom")


def parse(text):
    """Parses text into a term. Raises LambdaSyntaxError on the first malformed construct."""
    return Parser(text).parse()
