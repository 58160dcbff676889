"""
triadc - Command Line Interface

Usage:
    triadc "c:=(z+a-1)/2+('A'*'T');" [--emit-json] [--no-tree] [--debug]
    triadc -f statement.txt -o report.txt
    python -m triadc
"""

import sys
import argparse


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="triadc",
        description="Translate an assignment statement into triads and an expression tree",
    )
    parser.add_argument(
        "statement",
        nargs="?",
        help="Statement to translate, e.g. \"a:=b*(c+1);\" (default: a demonstration statement)",
    )
    parser.add_argument("-f", "--file", help="Read the statement from a file")
    parser.add_argument("-o", "--output", help="Write the report to a file instead of stdout")
    parser.add_argument(
        "--emit-json",
        action="store_true",
        dest="emit_json",
        help="Emit triads and tree as JSON instead of text",
    )
    parser.add_argument(
        "--no-tree",
        action="store_false",
        dest="show_tree",
        help="Only list the triads",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print translation phase info to stderr",
    )

    args = parser.parse_args(argv)

    if args.statement is not None and args.file is not None:
        parser.error("give either a statement or --file, not both")

    from .compiler import translate_source, TranslationError, DEMO_STATEMENT

    if args.file is not None:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                statement = f.read()
        except FileNotFoundError:
            print(f"[triadc] Error: Input file not found: {args.file!r}", file=sys.stderr)
            sys.exit(1)
    elif args.statement is not None:
        statement = args.statement
    else:
        statement = DEMO_STATEMENT

    try:
        report = translate_source(
            statement,
            emit_json=args.emit_json,
            show_tree=args.show_tree,
            debug=args.debug,
        )
    except TranslationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(report + "\n")
        except OSError as e:
            print(
                f"[triadc] Error: Cannot write output file {args.output!r}: {e.strerror}",
                file=sys.stderr,
            )
            sys.exit(1)
        print(f"[triadc] Wrote report to {args.output!r}")
    else:
        print(report)


if __name__ == "__main__":
    main()
