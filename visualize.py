from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from graph import Graph
from routing import ShortestPathResult, format_distance


def build_networkx_graph(graph: Graph) -> nx.Graph:
    """Collapse parallel connections into one edge carrying the cheapest weight."""
    g = nx.Graph()
    g.add_nodes_from(graph.locations)
    for connection in graph.connections:
        u, v, weight = connection.origin, connection.target, connection.weight
        if g.has_edge(u, v) and g[u][v]["weight"] <= weight:
            continue
        g.add_edge(u, v, weight=weight)
    return g


def compute_layout(graph_nx: nx.Graph) -> Dict[int, Tuple[float, float]]:
    return nx.spring_layout(graph_nx, seed=42)


def draw_route(
    graph: Graph,
    result: ShortestPathResult,
    output: Path | None = None,
    show: bool = False,
) -> None:
    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)

    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)

    route_edges = result.edges()
    if route_edges:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=route_edges,
            edge_color="#d62728",
            width=2.5,
            ax=ax,
        )

    on_route = set(result.path)
    node_colors = [
        "#d62728" if node in on_route else "#9ecae1" for node in graph_nx.nodes
    ]
    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colors, node_size=600, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=10, ax=ax)

    edge_labels = {(u, v): data["weight"] for u, v, data in graph_nx.edges(data=True)}
    nx.draw_networkx_edge_labels(graph_nx, layout, edge_labels=edge_labels, font_size=8, ax=ax)

    ax.set_axis_off()
    ax.set_title(
        f"Shortest path {result.source} -> {result.destination}: "
        f"{format_distance(result.distance)}"
    )

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)

