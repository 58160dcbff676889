"""
triadc - Translator Orchestrator
Runs the translation phases in sequence and returns the rendered report.
"""

import sys
from dataclasses import dataclass
from typing import Optional

from .parser import Parser, ParseError
from .triads import ParseSession, TriadStore
from .tree import ExpressionTreeNode, TreeBuilder, DanglingTemporaryReference
from .render import render_triads, render_tree, to_json

DEMO_STATEMENT = "c:=(z+a-1)/2+('A'*'T');"
NESTING_TOO_DEEP = "[TranslationError] Expression is nested too deeply to translate"


class TranslationError(Exception):
    """Unified translation error wrapper."""
    pass


@dataclass
class Translation:
    """Artifacts of one translated statement."""
    triads: TriadStore
    tree: Optional[ExpressionTreeNode]


def strip_whitespace(source: str) -> str:
    return "".join(source.split())


def translate(source: str, debug: bool = False) -> Translation:
    """
    Parse `source` into triads and rebuild its expression tree.

    Raises
    ------
    TranslationError on any phase failure
    """

    def log(msg):
        if debug:
            print(f"[triadc] {msg}", file=sys.stderr)

    # ── Phase 1: Whitespace stripping ─────────────────────────────────────────
    log("Phase 1: Whitespace stripping")
    text = strip_whitespace(source)
    log(f"  {len(text)} characters remain")

    # ── Phase 2: Parsing ──────────────────────────────────────────────────────
    log("Phase 2: Parsing")
    session = ParseSession()
    try:
        triads = Parser(text, session).parse()
    except ParseError as e:
        raise TranslationError(str(e)) from e
    except RecursionError as e:
        raise TranslationError(NESTING_TOO_DEEP) from e

    log(f"  {len(triads)} triads, {session.temporaries_allocated} temporaries")

    # ── Phase 3: Tree reconstruction ──────────────────────────────────────────
    log("Phase 3: Tree reconstruction")
    try:
        tree = TreeBuilder(triads).build()
    except DanglingTemporaryReference as e:
        raise TranslationError(str(e)) from e

    return Translation(triads=triads, tree=tree)


def translate_source(
    source: str,
    emit_json: bool = False,
    show_tree: bool = True,
    debug: bool = False,
) -> str:
    """
    Translate one statement and render the result.

    Parameters
    ----------
    source     : statement text; whitespace is ignored
    emit_json  : if True, return a JSON document of triads and tree
    show_tree  : append the expression tree outline to the text report
    debug      : print each phase summary to stderr

    Returns
    -------
    Text report (triad listing, then tree outline) or JSON

    Raises
    ------
    TranslationError on any phase failure
    """
    result = translate(source, debug=debug)

    if debug:
        print("[triadc] Phase 4: Rendering", file=sys.stderr)

    try:
        if emit_json:
            return to_json(result.triads, result.tree)

        parts = [render_triads(result.triads)]
        if show_tree:
            parts.append(render_tree(result.tree))
        return "\n".join(parts)
    except RecursionError as e:
        # json.dumps recurses once per tree level
        raise TranslationError(NESTING_TOO_DEEP) from e


def translate_file(
    input_path: str,
    output_path: Optional[str] = None,
    emit_json: bool = False,
    show_tree: bool = True,
    debug: bool = False,
) -> str:
    """Read a statement from input_path; write the report to output_path if given."""
    with open(input_path, "r", encoding="utf-8") as f:
        source = f.read()

    report = translate_source(source, emit_json=emit_json, show_tree=show_tree, debug=debug)

    if output_path is not None:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report + "\n")
    return report
