from ..utils import pretty_print
from ..validator import validate_graph


class MarkdownReportGenerator:
    def __init__(self, graph):
        self.graph = graph

    def generate(self):
        valid, invalid = validate_graph(self.graph)
        errors = dict(invalid)

        report = "# Prerequisite Graph - Parse Report\n\n"
        report += f"- **Courses**: {len(self.graph.nodes)}\n"
        report += f"- **Links**: {len(self.graph.links)}\n"
        report += f"- **Parsed cleanly**: {len(valid)}\n"
        report += f"- **With parse errors**: {len(invalid)}\n\n"

        for node in self.graph.nodes:
            parsed = self.graph.parsed.get(node.id)
            if parsed is None or parsed.is_empty:
                continue

            incoming = [l.source for l in node.links if l.target == node.id]

            report += f"### {node.id}\n"
            report += f"- **Prereq**: `{pretty_print(parsed.prereq)}`\n"
            report += f"- **Concur**: `{pretty_print(parsed.concur)}`\n"
            report += f"- **Resolved**: {', '.join(incoming) if incoming else 'none'}\n"
            if node.id in errors:
                report += f"- **Errors**: {errors[node.id]}\n"
            report += "\n"
        return report
