"""
triadc - Tree Reconstructor
Rebuilds a nested expression tree from a flat triad sequence by resolving
each temporary operand back to the triad that produced it.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .operands import Operand, OperandKind, Temporary
from .triads import Triad, TriadStore

BINDER_LABEL = "Triad"


class DanglingTemporaryReference(Exception):
    def __init__(self, ident: int, message: str = ""):
        super().__init__(
            f"[{type(self).__name__}] "
            f"{message or f'No triad produces temporary ^{ident}'}"
        )
        self.ident = ident


class CyclicTemporaryReference(DanglingTemporaryReference):
    """Temporary ^k is consumed, directly or not, by the triad that produces it."""

    def __init__(self, ident: int):
        super().__init__(ident, f"Triad {ident} depends on its own temporary ^{ident}")


@dataclass(eq=False)
class ExpressionTreeNode:
    label: str
    left: Optional["ExpressionTreeNode"] = None
    right: Optional["ExpressionTreeNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def children(self) -> List["ExpressionTreeNode"]:
        return [c for c in (self.left, self.right) if c is not None]

    def walk(self) -> Iterator["ExpressionTreeNode"]:
        """Pre-order traversal, left subtree before right."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def leaves(self) -> List["ExpressionTreeNode"]:
        return [n for n in self.walk() if n.is_leaf]

    def __str__(self):
        return self.label


class TreeBuilder:
    def __init__(self, triads: Iterable[Triad]):
        if not isinstance(triads, TriadStore):
            store = TriadStore()
            for t in triads:
                store.append(t)
            triads = store
        self._triads = triads
        # keyed by id(): two equal operands still get separate leaves
        self._leaves: Dict[int, ExpressionTreeNode] = {}
        self._pending: List[Tuple[ExpressionTreeNode, Triad]] = []

    # ------------------------------------------------------------------ public

    def build(self) -> Optional[ExpressionTreeNode]:
        """
        Expand every top-level triad and merge the results left to right
        under binder nodes. Returns None for an empty sequence.
        """
        self._check_acyclic()
        merged = None
        for triad in self.top_level():
            merged = self._merge(merged, self._expand(triad))
        return merged

    def top_level(self) -> List[Triad]:
        """Triads whose result is not used directly as an operand elsewhere."""
        consumed = set()
        for triad in self._triads:
            for operand in (triad.left, triad.right):
                if operand.kind is OperandKind.TEMPORARY:
                    consumed.add(operand.ident)
        return [
            t for t in self._triads
            if t.result is None or t.result.ident not in consumed
        ]

    def _producers(self, triad: Triad) -> List[Triad]:
        found = []
        for operand in (triad.left, triad.right):
            if operand.kind is OperandKind.TEMPORARY and operand.ident > 0:
                producer = self._triads.find(operand.ident)
                if producer is not None:
                    found.append(producer)
        return found

    def _check_acyclic(self) -> None:
        """Depth-first colouring over temporary references; raises on a cycle."""
        VISITING, DONE = 1, 2
        state: Dict[int, int] = {}
        for start in self._triads:
            if start.seq in state:
                continue
            state[start.seq] = VISITING
            stack = [(start, iter(self._producers(start)))]
            while stack:
                triad, deps = stack[-1]
                dep = next(deps, None)
                if dep is None:
                    state[triad.seq] = DONE
                    stack.pop()
                elif state.get(dep.seq) == VISITING:
                    raise CyclicTemporaryReference(dep.seq)
                elif dep.seq not in state:
                    state[dep.seq] = VISITING
                    stack.append((dep, iter(self._producers(dep))))

    # ------------------------------------------------------------------ expansion

    def _expand(self, triad: Triad) -> ExpressionTreeNode:
        """Expand `triad` into a subtree, depth-first with an explicit stack."""
        root = self._triad_node(triad)
        self._pending = [(root, triad)]
        while self._pending:
            node, current = self._pending.pop()
            node.left = self._operand_node(current.left)
            node.right = self._operand_node(current.right)
        return root

    @staticmethod
    def _triad_node(triad: Triad) -> ExpressionTreeNode:
        return ExpressionTreeNode(f"{triad.seq}: {triad.to_triad_string()}")

    def _operand_node(self, operand: Operand) -> ExpressionTreeNode:
        handler = getattr(self, f"_node_for_{operand.kind.name}")
        return handler(operand)

    def _node_for_TEMPORARY(self, operand: Temporary) -> ExpressionTreeNode:
        if operand.ident <= 0:
            return self._leaf(operand)
        producer = self._triads.find(operand.ident)
        if producer is None:
            raise DanglingTemporaryReference(operand.ident)
        # Children are filled in when the pending entry is popped
        node = self._triad_node(producer)
        self._pending.append((node, producer))
        return node

    def _node_for_VARIABLE(self, operand: Operand) -> ExpressionTreeNode:
        return self._leaf(operand)

    def _node_for_CONSTANT(self, operand: Operand) -> ExpressionTreeNode:
        return self._leaf(operand)

    def _node_for_UNARY_MINUS(self, operand: Operand) -> ExpressionTreeNode:
        # Rendered as-is, the wrapped operand is not expanded.
        return self._leaf(operand)

    def _leaf(self, operand: Operand) -> ExpressionTreeNode:
        key = id(operand)
        if key not in self._leaves:
            self._leaves[key] = ExpressionTreeNode(operand.to_triad_string())
        return self._leaves[key]

    @staticmethod
    def _merge(
        tree: Optional[ExpressionTreeNode], other: ExpressionTreeNode
    ) -> ExpressionTreeNode:
        if tree is None:
            return other
        return ExpressionTreeNode(BINDER_LABEL, left=tree, right=other)


def build_tree(triads: Iterable[Triad]) -> Optional[ExpressionTreeNode]:
    return TreeBuilder(triads).build()
