#!/usr/bin/env python3
"""
catalog2graph.py - Prerequisite graph compiler (course catalog -> JSON graph / Markdown report)

This is the main entry point for building graphs.
All default configuration (worker count, log format, etc.) lives here.
The req2graph/ package is abstract and holds no defaults.

Configuration hierarchy:
    1. CLI arguments (highest priority)
    2. The course file (the subjects it contains)
    3. Constants in this file (fallback)
"""

import argparse
import json
import logging
import os
import signal
import sys
from datetime import datetime

from req2graph.compiler import construct_graph
from req2graph.generators import GraphJSONGenerator, MarkdownReportGenerator
from req2graph.utils import load_courses, pretty_print, subject_ids_of
from req2graph.validator import validate_graph

# Clean exit when piping (e.g. | head, | grep)
if hasattr(signal, 'SIGPIPE'):
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)


# ---------------------------------------------------------------------------
# Default configuration
# ---------------------------------------------------------------------------
DEFAULT_WORKERS = 1
LOG_FILE_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_CONSOLE_FORMAT = '%(message)s'


def setup_logging(log_dir=None, verbose=False):
    """Configures the root logger: console always, file when log_dir is set."""
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.hasHandlers():
        logger.handlers.clear()

    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        timestamp = datetime.now().strftime('%Y-%m-%d-%H-%M')
        log_path = os.path.join(log_dir, f"catalog2graph.{timestamp}.log")
        fh = logging.FileHandler(log_path, encoding='utf-8')
        fh.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        logger.addHandler(fh)

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(logging.Formatter(LOG_CONSOLE_FORMAT))
    logger.addHandler(ch)
    return logger


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Builds a prerequisite graph (JSON/Markdown) from course descriptions."
    )

    # Input file
    parser.add_argument("-i", "--input", required=True,
                        help="Path to the courses JSON / JSON Lines file")

    # Output formats
    parser.add_argument("-j", "--json", help="Path for the graph JSON output")
    parser.add_argument("-m", "--md", help="Path for the Markdown parse report")

    # Debug and inspection
    parser.add_argument("-s", "--stdout", action="store_true",
                        help="Print the graph JSON to standard output")
    parser.add_argument("-a", "--ast", action="store_true",
                        help="Print the parsed clauses of every course (debug/inspection)")

    # Subject selection
    parser.add_argument("--subjects",
                        help="Comma-separated subject codes to include"
                             " (default: every subject in the input)")

    # Processing
    parser.add_argument("--workers", default=DEFAULT_WORKERS, type=int,
                        help=f"Parser worker threads (default: {DEFAULT_WORKERS})")

    # Logging
    parser.add_argument("--log-dir", help="Directory for a log file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every recovered parse error")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    # At least one output format is required
    has_output = any([args.json, args.md, args.stdout, args.ast])
    if not has_output:
        parser.print_help(sys.stderr)
        print("\nError: no output format given. Use -j, -m, -s or -a.", file=sys.stderr)
        return 1

    logger = setup_logging(args.log_dir, args.verbose)

    # -------------------------------------------------------------------
    # 1. Loading the catalog
    # -------------------------------------------------------------------
    try:
        courses = load_courses(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load courses from '{args.input}': {e}")
        return 1

    # -------------------------------------------------------------------
    # 2. Resolving the subject selection
    # -------------------------------------------------------------------
    # Hierarchy: CLI argument > every subject in the file
    if args.subjects:
        subjects = [s.strip() for s in args.subjects.split(",") if s.strip()]
    else:
        subjects = subject_ids_of(courses)

    logger.info(f"Loaded {len(courses)} courses, including subjects: {', '.join(subjects)}")

    # -------------------------------------------------------------------
    # 3. Compiling (Lexer -> Parser -> AST -> IR)
    # -------------------------------------------------------------------
    graph = construct_graph(courses, subjects, workers=args.workers)

    valid, invalid = validate_graph(graph)
    if invalid:
        logger.warning(f"{len(invalid)} of {len(valid) + len(invalid)} courses"
                       " have parse errors (see -m report or -v)")
        for node_id, reason in invalid:
            logger.debug(f"   {node_id}: {reason}")

    # -------------------------------------------------------------------
    # 4. AST dump (debug/inspection)
    # -------------------------------------------------------------------
    # Goes to stdout so it can be piped (| head, | grep, ...)
    if args.ast:
        _print_ast(graph)

    # -------------------------------------------------------------------
    # 5. Generating output
    # -------------------------------------------------------------------

    # JSON
    if args.json or args.stdout:
        output_data = GraphJSONGenerator(graph).generate()

        if args.json:
            with open(args.json, 'w', encoding='utf-8') as f:
                json.dump(output_data, f, indent=4, ensure_ascii=False)
            logger.info(f"Generated JSON: {args.json}")

        if args.stdout:
            print(json.dumps(output_data, indent=4, ensure_ascii=False))

    # Markdown
    if args.md:
        with open(args.md, 'w', encoding='utf-8') as f:
            f.write(MarkdownReportGenerator(graph).generate())
        logger.info(f"Generated Markdown: {args.md}")

    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _print_ast(graph):
    """Prints the parsed clauses of every course to stdout.
    Used with the -a/--ast flag for debugging and inspection."""
    print("=== PARSED CLAUSES ===")
    print(f"Summary: nodes={len(graph.nodes)}, links={len(graph.links)}")

    for node_id, parsed in graph.parsed.items():
        print(f"\n--- {node_id} ---")
        print(f"prereq: {pretty_print(parsed.prereq)}")
        print(f"        {parsed.prereq!r}")
        print(f"concur: {pretty_print(parsed.concur)}")
        print(f"        {parsed.concur!r}")

    print("======================")


if __name__ == "__main__":
    sys.exit(main())
