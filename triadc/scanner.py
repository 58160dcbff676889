"""
triadc - Character Scanner
Cursor over a whitespace-free statement. There is no token stream: the
parser inspects the current character and asks the scanner to read
identifiers, numeric literals and character literals in place.
"""

import re


class ParseError(Exception):
    """Base class for every failure of a single parse."""

    def __init__(self, message: str, expected: str, remainder: str, position: int):
        super().__init__(
            f"[{type(self).__name__}] {message} (remaining input: {remainder!r})"
        )
        self.expected = expected
        self.remainder = remainder
        self.position = position


class UnexpectedCharacter(ParseError):
    """The current character starts no production."""


class TokenMismatch(ParseError):
    """An expected literal token was not found at the current position."""


class MalformedCharLiteral(ParseError):
    """A character literal is missing a quote or holds a non-alphanumeric character."""


_IDENTIFIER_RE = re.compile(r'[^\W\d_]\w*')
_NUMBER_RE     = re.compile(r'[\d.]+')

END_OF_INPUT = "end of input"


class Scanner:
    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    # ------------------------------------------------------------------ cursor

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remainder(self) -> str:
        return self._text[self._pos:]

    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def peek(self) -> str:
        """Current character, or '' at end of input."""
        if self.at_end():
            return ''
        return self._text[self._pos]

    def advance(self) -> str:
        ch = self.peek()
        self._pos += 1
        return ch

    def startswith(self, token: str) -> bool:
        return self._text.startswith(token, self._pos)

    def expect(self, token: str) -> None:
        """Consume `token` or fail with TokenMismatch."""
        if not self.startswith(token):
            found = self.remainder or END_OF_INPUT
            raise self.error(TokenMismatch, f"Expected token {token!r} but found {found!r}", token)
        self._pos += len(token)

    def expect_end(self) -> None:
        if not self.at_end():
            raise self.error(
                TokenMismatch,
                f"Expected {END_OF_INPUT} but found {self.remainder!r}",
                END_OF_INPUT,
            )

    def error(self, cls, message: str, expected: str) -> ParseError:
        return cls(message, expected, self.remainder, self._pos)

    def unexpected(self, expected: str) -> ParseError:
        """UnexpectedCharacter naming what was expected and what was found."""
        return self.error(
            UnexpectedCharacter,
            f"Expected {expected} but found {self.describe_current()}",
            expected,
        )

    # ------------------------------------------------------------------ literals

    def read_identifier(self) -> str:
        m = _IDENTIFIER_RE.match(self._text, self._pos)
        if not m:
            raise self.unexpected("identifier")
        self._pos = m.end()
        return m.group(0)

    def read_number(self) -> float:
        m = _NUMBER_RE.match(self._text, self._pos)
        if not m:
            raise self.unexpected("numeric literal")
        raw = m.group(0)
        try:
            value = float(raw)
        except ValueError:
            raise self.error(
                TokenMismatch, f"Malformed numeric literal {raw!r}", "numeric literal"
            ) from None
        self._pos = m.end()
        return value

    def read_char_literal(self) -> str:
        """Read 'c' where c is a single letter or digit; return c."""
        if self.peek() != "'":
            raise self.error(MalformedCharLiteral, "Expected opening single quote", "'")
        self._pos += 1

        ch = self.peek()
        if not ch.isalnum():
            raise self.error(MalformedCharLiteral, "Expected a letter or digit after quote", "letter or digit")
        self._pos += 1

        if self.peek() != "'":
            raise self.error(MalformedCharLiteral, "Expected closing single quote", "'")
        self._pos += 1
        return ch

    def describe_current(self) -> str:
        """Human-readable form of the current character, for error messages."""
        if self.at_end():
            return END_OF_INPUT
        return repr(self.peek())
