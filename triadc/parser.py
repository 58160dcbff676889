"""
triadc - Recursive Descent Parser
Recognizes one assignment statement and emits triads as a side effect.

    Statement := Term ":=" AddExpr ";"
    AddExpr   := MulExpr { ("+"|"-") MulExpr }
    MulExpr   := Atom { ("*"|"/") Atom }
    Atom      := "(" AddExpr ")" | "-" Atom | Term
    Term      := Identifier | NumberLiteral | CharLiteral

The left-hand side is a bare Term, never an expression.
"""

from typing import Optional

from .operands import (
    Operand, Operator, Variable, Constant,
    ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS,
)
from .scanner import (
    Scanner, ParseError, UnexpectedCharacter, TokenMismatch, MalformedCharLiteral,
)
from .triads import ParseSession, TriadStore

__all__ = [
    "Parser", "parse",
    "ParseError", "UnexpectedCharacter", "TokenMismatch", "MalformedCharLiteral",
]


class Parser:
    def __init__(self, source: str, session: Optional[ParseSession] = None):
        self._source = source
        self._session = session if session is not None else ParseSession()
        self._scanner: Scanner = None

    @property
    def session(self) -> ParseSession:
        return self._session

    # ------------------------------------------------------------------ public

    def parse(self) -> TriadStore:
        """
        Parse the statement and return its triads. The session is reset
        first, so numbering always starts at 1.
        Raises ParseError on the first mismatch, leaving the session empty.
        """
        self._session.reset()
        self._scanner = Scanner(self._source)
        try:
            self._parse_statement()
        except (ParseError, RecursionError):
            # No partial result survives a failed parse; RecursionError
            # means parentheses or unary minus nest deeper than the stack.
            self._session.reset()
            raise
        return self._session.triads

    # ------------------------------------------------------------------ statement

    def _parse_statement(self) -> None:
        target = self._parse_term()
        self._scanner.expect(':=')
        value = self._parse_additive()
        self._session.emit(Operator.ASSIGN, target, value)
        self._scanner.expect(';')
        self._scanner.expect_end()

    # ------------------------------------------------------------------ expressions

    def _parse_additive(self) -> Operand:
        left = self._parse_multiplicative()

        while self._scanner.peek() in ADDITIVE_OPERATORS:
            op = ADDITIVE_OPERATORS[self._scanner.advance()]
            right = self._parse_multiplicative()
            left = self._reduce(op, left, right)

        return left

    def _parse_multiplicative(self) -> Operand:
        left = self._parse_atom()

        while self._scanner.peek() in MULTIPLICATIVE_OPERATORS:
            op = MULTIPLICATIVE_OPERATORS[self._scanner.advance()]
            right = self._parse_atom()
            left = self._reduce(op, left, right)

        return left

    def _parse_atom(self) -> Operand:
        ch = self._scanner.peek()

        # Parenthesised expression
        if ch == '(':
            self._scanner.expect('(')
            value = self._parse_additive()
            self._scanner.expect(')')
            return value

        # Unary minus: no temporary, no triad
        if ch == '-':
            self._scanner.expect('-')
            return Operator.UNARY_MINUS.apply(self._parse_atom())

        return self._parse_term()

    def _parse_term(self) -> Operand:
        ch = self._scanner.peek()

        if ch.isalpha():
            return Variable(name=self._scanner.read_identifier())

        if ch.isdigit() or ch == '.':
            return Constant(value=self._scanner.read_number())

        if ch == "'":
            return Constant(value=self._scanner.read_char_literal())

        raise self._scanner.unexpected("identifier, number or character literal")

    # ------------------------------------------------------------------ helpers

    def _reduce(self, op: Operator, left: Operand, right: Operand) -> Operand:
        # The temporary must be allocated before its triad is numbered.
        result = self._session.new_temporary()
        self._session.emit(op, left, right, result)
        return result


def parse(source: str, session: Optional[ParseSession] = None) -> TriadStore:
    """Parse one whitespace-free statement into its triads."""
    return Parser(source, session).parse()
