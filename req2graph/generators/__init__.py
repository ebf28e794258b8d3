"""
generators - Output generators for the compiled graph

Available generators:
    GraphJSONGenerator      - JSON-ready dict for the graph renderer
    MarkdownReportGenerator - Markdown report of the parsed clauses
"""
from .json_gen import GraphJSONGenerator
from .md_gen import MarkdownReportGenerator
