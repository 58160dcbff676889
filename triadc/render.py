"""
triadc - Rendering
Turns triads and expression trees into text: a numbered triad listing,
an indented tree outline, and a JSON document.
"""

import json
from typing import Iterable, List, Optional

from .triads import Triad
from .tree import ExpressionTreeNode

LAST_BRANCH  = "└─"
INNER_BRANCH = "├─"
TREE_HEADER  = "Expression Tree:"


def render_triads(triads: Iterable[Triad]) -> str:
    """One `<seq> <triad text>` line per triad."""
    return "\n".join(str(t) for t in triads)


def render_tree(root: Optional[ExpressionTreeNode], header: bool = True) -> str:
    lines: List[str] = [TREE_HEADER] if header else []
    if root is not None:
        _outline(root, "", True, lines)
    return "\n".join(lines)


def _outline(root: ExpressionTreeNode, indent: str, last: bool, lines: List[str]) -> None:
    stack = [(root, indent, last)]
    while stack:
        node, indent, last = stack.pop()
        if last:
            lines.append(f"{indent}{LAST_BRANCH}{node.label}")
            indent += "  "
        else:
            lines.append(f"{indent}{INNER_BRANCH}{node.label}")
            indent += "| "

        # Right is pushed first so the left subtree prints first.
        # The left child is only the last child when there is no right one.
        if node.right is not None:
            stack.append((node.right, indent, True))
        if node.left is not None:
            stack.append((node.left, indent, node.right is None))


# ── JSON serialization (for --emit-json) ──────────────────────────────────────

def to_json(triads: Iterable[Triad], root: Optional[ExpressionTreeNode]) -> str:
    doc = {
        "triads": [_triad_to_dict(t) for t in triads],
        "tree": _node_to_dict(root),
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)


def _triad_to_dict(triad: Triad) -> dict:
    return {
        "seq": triad.seq,
        "operator": triad.operator.symbol,
        "left": triad.left.to_triad_string(),
        "right": triad.right.to_triad_string(),
        "result": triad.result.to_triad_string() if triad.result is not None else None,
    }


def _node_to_dict(root: Optional[ExpressionTreeNode]):
    if root is None:
        return None
    doc = {"label": root.label, "left": None, "right": None}
    stack = [(root, doc)]
    while stack:
        node, d = stack.pop()
        for side in ("left", "right"):
            child = getattr(node, side)
            if child is not None:
                d[side] = {"label": child.label, "left": None, "right": None}
                stack.append((child, d[side]))
    return doc
