"""
ir.py - Intermediate Representation (IR) of the dependency graph

The AST holds what the parser read from each description. The IR holds
the resolved graph: one Node per included course and one Link per
course reference that matched a catalogued course.

The compiler (compiler.py) turns the AST into the IR.
Generators (generators/) read from the IR.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from .models import ParsedClauses


# ---------------------------------------------------------------------------
# Links and nodes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Link:
    """Dependency edge: source must be taken before (or with) target."""
    source: str         # node id of the required course, e.g. "STAT 3460"
    target: str         # node id of the course whose description names it
    concurrent: bool    # True for 'Concur:' / 'Prereq or concur:'
    group: str = ""     # pretty-printed enclosing operator, display only


@dataclass
class Node:
    """One included course.

    links is filled in by the compiler after every link is known and
    holds each link where this node is the source or the target."""
    id: str             # "CSE 2231"
    label: str          # same as id
    group: str          # subject code, used for colouring
    hover_text: str
    links: List[Link] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Graph (root IR object)
# ---------------------------------------------------------------------------
@dataclass
class Graph:
    """Root IR object holding the compiled graph.

    parsed maps node id -> ParsedClauses so diagnostics can be produced
    without parsing the catalog a second time."""
    nodes: List[Node] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    parsed: Dict[str, ParsedClauses] = field(default_factory=dict)

    def get_node(self, node_id):
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @property
    def node_ids(self):
        return {node.id for node in self.nodes}
