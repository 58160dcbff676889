"""
triadc - Triads
The three-address records produced by the parser, the ordered store that
holds them, and the parse session owning the numbering counters.
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional

from .operands import Operand, Operator, Temporary


@dataclass(frozen=True)
class Triad:
    """(seq, operator, left, right, result) - result is None only for assignments."""
    seq: int
    operator: Operator
    left: Operand
    right: Operand
    result: Optional[Temporary] = None

    @property
    def produces_temporary(self) -> bool:
        return self.result is not None

    def to_triad_string(self) -> str:
        return self.operator.to_triad_string(self.left, self.right)

    def same_operands(self, other: "Triad") -> bool:
        """True when both operand slots render identically."""
        return (
            self.left.to_triad_string() == other.left.to_triad_string()
            and self.right.to_triad_string() == other.right.to_triad_string()
        )

    def __str__(self):
        return f"{self.seq} {self.to_triad_string()}"


class TriadStore:
    """Ordered triad sequence with lookup by sequence number."""

    def __init__(self):
        self._triads: List[Triad] = []
        self._by_seq: Dict[int, int] = {}

    def append(self, triad: Triad) -> None:
        if triad.seq in self._by_seq:
            raise ValueError(f"Duplicate triad sequence number {triad.seq}")
        self._by_seq[triad.seq] = len(self._triads)
        self._triads.append(triad)

    def find(self, seq: int) -> Optional[Triad]:
        index = self._by_seq.get(seq)
        if index is None:
            return None
        return self._triads[index]

    def rewrite_operands(
        self,
        seq: int,
        left: Optional[Operand] = None,
        right: Optional[Operand] = None,
    ) -> Triad:
        """
        Replace the operand slots of triad `seq` and return the new record.
        The stored triad is swapped for a copy; triads already handed out
        are left untouched.
        """
        index = self._by_seq.get(seq)
        if index is None:
            raise KeyError(seq)
        old = self._triads[index]
        new = replace(
            old,
            left=old.left if left is None else left,
            right=old.right if right is None else right,
        )
        self._triads[index] = new
        return new

    @property
    def last(self) -> Optional[Triad]:
        return self._triads[-1] if self._triads else None

    def __iter__(self) -> Iterator[Triad]:
        return iter(self._triads)

    def __len__(self) -> int:
        return len(self._triads)

    def __getitem__(self, index):
        return self._triads[index]

    def __repr__(self):
        return f"TriadStore({self._triads!r})"


class SequenceCounter:
    """Monotonic counter starting at 1."""

    def __init__(self, start: int = 1):
        self._start = start
        self._next = start

    def peek(self) -> int:
        return self._next

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    def reset(self) -> None:
        self._next = self._start


class ParseSession:
    """
    State of one parse: the triad store plus the two counters that number
    triads and temporaries. A temporary must be allocated immediately
    before the triad that produces it, so that temporary k is produced by
    triad k.
    """

    def __init__(self):
        self.triads = TriadStore()
        self._sequence = SequenceCounter()
        self._temporaries = SequenceCounter()

    def reset(self) -> None:
        # A new store, so triads returned by an earlier parse stay intact
        self.triads = TriadStore()
        self._sequence.reset()
        self._temporaries.reset()

    @property
    def temporaries_allocated(self) -> int:
        return self._temporaries.peek() - 1

    def new_temporary(self) -> Temporary:
        return Temporary(ident=self._temporaries.next())

    def emit(
        self,
        op: Operator,
        left: Operand,
        right: Operand,
        result: Optional[Temporary] = None,
    ) -> Triad:
        triad = Triad(self._sequence.next(), op, left, right, result)
        self.triads.append(triad)
        return triad
