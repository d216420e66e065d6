"""Pure lambda calculus token generator.

The `pure` directory contains the pure lambda calculus core: tokens (this module), terms (term.py), the parser
(parser.py) and the evaluator (reducer.py).

Every token is a single character:

```
"\" | "λ"   ->  LAMBDA      ; "\" is the ASCII stand-in for λ, rendered terms use λ itself
"("         ->  LPAREN
")"         ->  RPAREN
"."         ->  DOT
[a-z]       ->  LCID        ; identifiers are one lowercase letter: "xy" is two identifiers
<end>       ->  EOF         ; yielded forever once the input runs out
```

Spaces are skipped. Anything else is an error.
"""

from dataclasses import dataclass
from enum import Enum

from lambdaeval.lang.error import LambdaSyntaxError


class TokenType(Enum):
    """Kinds of tokens. The names are the ones used in error messages."""
    EOF = "end of input"
    LAMBDA = "lambda"
    LPAREN = "("
    RPAREN = ")"
    LCID = "identifier"
    DOT = "."


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    pos: int = 0


class Lexer:
    """Pull-based tokenizer: self.token is always the token under the cursor, advance moves past it."""
    SINGLE = {
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        ".": TokenType.DOT,
        "\\": TokenType.LAMBDA,
        "λ": TokenType.LAMBDA,
    }
    IDENTIFIERS = "abcdefghijklmnopqrstuvwxyz"

    def __init__(self, text):
        self.text = text
        self._index = 0
        self.token = None
        self.advance()

    def _next_char(self):
        """Returns the next char of the input or '' if we've reached the end."""
        if self._index >= len(self.text):
            return ""
        char = self.text[self._index]
        self._index += 1
        return char

    def advance(self):
        """Sets self.token based on the remainder of the input."""
        char = self._next_char()
        while char == " ":
            char = self._next_char()

        pos = self._index - 1
        if not char:
            self.token = Token(TokenType.EOF, "", len(self.text))
        elif char in Lexer.SINGLE:
            self.token = Token(Lexer.SINGLE[char], char, pos)
        elif char in Lexer.IDENTIFIERS:
            self.token = Token(TokenType.LCID, char, pos)
        else:
            raise LambdaSyntaxError("Unexpected character: {}", char, source=self.text, start=pos, end=pos + 1)

    def next(self, token_type):
        """Returns whether or not the current token is of type token_type."""
        return self.token.type is token_type

    def skip(self, token_type):
        """Consumes and returns the current token's value if it is of type token_type, otherwise returns None."""
        if self.next(token_type):
            value = self.token.value
            self.advance()
            return value
        return None

    def match(self, token_type):
        """Asserts that the current token is of type token_type, consumes it and returns its value."""
        if not self.next(token_type):
            raise self.error("Expected token: {}", token_type.name)
        value = self.token.value
        self.advance()
        return value

    def error(self, msg, exprs=None):
        """Returns a LambdaSyntaxError that points at the current token."""
        start = self.token.pos
        return LambdaSyntaxError(msg, exprs, source=self.text, start=start, end=start + max(len(self.token.value), 1))

    def __iter__(self):
        """Yields the remaining tokens, EOF included."""
        while True:
            token = self.token
            yield token
            if token.type is TokenType.EOF:
                return
            self.advance()
