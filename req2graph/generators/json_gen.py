from ..ir import Link, Node


class GraphJSONGenerator:
    def __init__(self, graph, include_node_links=True):
        self.graph = graph
        self.include_node_links = include_node_links

    def generate(self):
        return {
            "nodes": [self._node(n) for n in self.graph.nodes],
            "links": [self._link(l) for l in self.graph.links],
        }

    def _node(self, node: Node):
        data = {
            "id": node.id,
            "label": node.label,
            "group": node.group,
            "hoverText": node.hover_text,
        }
        if self.include_node_links:
            data["links"] = [self._link(l) for l in node.links]
        return data

    def _link(self, link: Link):
        return {
            "source": link.source,
            "target": link.target,
            "concurrent": link.concurrent,
            "group": link.group,
        }
