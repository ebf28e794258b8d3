"""
validator.py - Diagnostics for parsed clauses

Walks the expression trees and reports the ParseError nodes that
error recovery left behind. Nothing here raises: a description that
could not be parsed still contributes whatever links it can.

Used by the report generator and the CLI to point at descriptions that
need a closer look.
"""
from .models import Literal, Not, Operator, ParseError


def collect_errors(expression):
    """Returns the messages of every ParseError in the tree, left to right."""
    if expression is None or isinstance(expression, Literal):
        return []
    if isinstance(expression, ParseError):
        return [expression.message]
    if isinstance(expression, Operator):
        errors = []
        for value in expression.values:
            errors.extend(collect_errors(value))
        return errors
    if isinstance(expression, Not):
        return collect_errors(expression.value)
    raise TypeError(f"Unknown expression node: {expression!r}")


def validate_graph(graph):
    """Checks the parsed clauses of every node in the graph.

    Returns:
        (valid, invalid) - valid is a list of node ids whose clauses
        parsed cleanly, invalid is a list of (node_id, reason) pairs.
    """
    valid = []
    invalid = []

    for node_id, parsed in graph.parsed.items():
        reasons = []

        for label, expression in (('Prereq', parsed.prereq), ('Concur', parsed.concur)):
            for message in collect_errors(expression):
                reasons.append(f"{label}: {message}")

        if reasons:
            invalid.append((node_id, "; ".join(reasons)))
        else:
            valid.append(node_id)

    return valid, invalid
