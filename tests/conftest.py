import random

import matplotlib
import pytest

from graph import Graph
from main import build_reference_graph

matplotlib.use("Agg")


@pytest.fixture
def reference_graph() -> Graph:
    return build_reference_graph()


def random_graph(rng: random.Random, max_locations: int = 12) -> Graph:
    """Sparse random multigraph; may be disconnected and contain self loops."""
    location_count = rng.randint(1, max_locations)
    graph = Graph(location_count)
    for _ in range(rng.randint(0, location_count * 2)):
        graph.add_connection(
            rng.randrange(location_count),
            rng.randrange(location_count),
            rng.randint(0, 20),
        )
    return graph
