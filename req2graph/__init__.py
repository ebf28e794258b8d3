"""
req2graph - Prerequisite graph compiler for course catalogs

Pipeline:  course description -> Lexer -> Parser -> AST -> GraphCompiler -> IR -> Generators

The package holds no defaults (which subjects to include, worker count,
output paths). All configuration comes from the caller (catalog2graph.py).
"""
from .callnumber import CallNumberKey, call_numbers_match, parse_call_number, same_course
from .compiler import GraphCompiler, construct_graph
from .ir import Graph, Link, Node
from .lexer import Lexer, Token, tokenize
from .models import Course, Literal, Not, Operator, ParseError, ParsedClauses
from .parser import parse, parse_description

__version__ = "0.1.0"
