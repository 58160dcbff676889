"""
triadc - Operand and Operator Model
Values referenced by triads, each able to render itself as triad text.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Optional, Union


class OperandKind(Enum):
    VARIABLE    = auto()
    CONSTANT    = auto()
    TEMPORARY   = auto()
    UNARY_MINUS = auto()


@dataclass(frozen=True)
class Operand:
    """Base class for all operands."""
    kind: ClassVar[OperandKind]

    def to_triad_string(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Variable(Operand):
    """A named variable, e.g. `z`."""
    name: str = ""
    kind: ClassVar[OperandKind] = OperandKind.VARIABLE

    def to_triad_string(self) -> str:
        return self.name


@dataclass(frozen=True)
class Constant(Operand):
    """
    A literal value: a float for numeric literals, a one-character string
    for character literals.
    """
    value: Union[float, str] = 0.0
    kind: ClassVar[OperandKind] = OperandKind.CONSTANT

    @property
    def is_char(self) -> bool:
        return isinstance(self.value, str)

    @property
    def is_numeric(self) -> bool:
        return not self.is_char

    def numeric_value(self) -> Optional[float]:
        """The constant as a float, or None for character constants."""
        if self.is_char:
            return None
        return float(self.value)

    def to_triad_string(self) -> str:
        v = self.value
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v)


@dataclass(frozen=True)
class Temporary(Operand):
    """Result slot of a reduced binary sub-expression, rendered as ^ident."""
    ident: int = 0
    kind: ClassVar[OperandKind] = OperandKind.TEMPORARY

    @property
    def name(self) -> str:
        return f"^{self.ident}"

    def to_triad_string(self) -> str:
        return self.name


@dataclass(frozen=True)
class UnaryMinusResult(Operand):
    """Negation of another operand. Never backed by a triad."""
    operand: Operand = None
    kind: ClassVar[OperandKind] = OperandKind.UNARY_MINUS

    def to_triad_string(self) -> str:
        depth, inner = 0, self
        while inner.kind is OperandKind.UNARY_MINUS:
            depth += 1
            inner = inner.operand
        return "- " * depth + inner.to_triad_string()


class Operator(Enum):
    ASSIGN      = auto()   # :=
    ADD         = auto()   # +
    SUBTRACT    = auto()   # -
    MULTIPLY    = auto()   # *
    DIVIDE      = auto()   # /
    UNARY_MINUS = auto()   # - (prefix)

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def is_binary(self) -> bool:
        return self is not Operator.UNARY_MINUS

    def to_triad_string(self, left: Operand, right: Operand) -> str:
        if not self.is_binary:
            raise ValueError("Unary minus is applied to an operand, it has no triad form")
        return f"{self.symbol} ({left.to_triad_string()} {right.to_triad_string()})"

    def apply(self, operand: Operand) -> UnaryMinusResult:
        if self.is_binary:
            raise ValueError(f"Operator {self.symbol!r} needs two operands")
        return UnaryMinusResult(operand=operand)

    def __str__(self):
        return self.symbol


_SYMBOLS = {
    Operator.ASSIGN:      ':=',
    Operator.ADD:         '+',
    Operator.SUBTRACT:    '-',
    Operator.MULTIPLY:    '*',
    Operator.DIVIDE:      '/',
    Operator.UNARY_MINUS: '-',
}

# Binary operators recognised by each precedence level of the grammar
ADDITIVE_OPERATORS       = {'+': Operator.ADD, '-': Operator.SUBTRACT}
MULTIPLICATIVE_OPERATORS = {'*': Operator.MULTIPLY, '/': Operator.DIVIDE}
