import pytest

from graph import Connection, Graph, IndexOutOfRange, InvalidArgument


def test_new_graph_has_empty_adjacency():
    graph = Graph(4)
    assert len(graph) == 4
    assert list(graph.locations) == [0, 1, 2, 3]
    assert all(graph.neighbors(location) == () for location in graph.locations)


def test_empty_graph_is_allowed():
    graph = Graph(0)
    assert len(graph) == 0
    with pytest.raises(IndexOutOfRange):
        graph.neighbors(0)


def test_negative_location_count_rejected():
    with pytest.raises(InvalidArgument):
        Graph(-1)


def test_add_connection_is_symmetric(reference_graph):
    for connection in reference_graph.connections:
        assert (connection.target, connection.weight) in reference_graph.neighbors(
            connection.origin
        )
        assert (connection.origin, connection.weight) in reference_graph.neighbors(
            connection.target
        )


def test_neighbors_keep_insertion_order():
    graph = Graph(4, [(0, 2, 5), (0, 1, 3), (3, 0, 1)])
    assert graph.neighbors(0) == ((2, 5), (1, 3), (3, 1))


def test_parallel_connections_are_not_merged():
    graph = Graph(2)
    graph.add_connection(0, 1, 7)
    graph.add_connection(0, 1, 3)
    assert graph.neighbors(0) == ((1, 7), (1, 3))
    assert graph.neighbors(1) == ((0, 7), (0, 3))
    assert graph.path_cost([0, 1]) == 3


def test_self_loop_points_back_to_itself():
    graph = Graph(2)
    graph.add_connection(1, 1, 4)
    assert graph.neighbors(1) == ((1, 4), (1, 4))
    assert graph.neighbors(0) == ()


def test_neighbors_view_is_read_only():
    graph = Graph(2, [(0, 1, 1)])
    view = graph.neighbors(0)
    with pytest.raises(AttributeError):
        view.append((1, 2))
    assert graph.neighbors(0) == ((1, 1),)


def test_negative_weight_rejected_without_mutation():
    graph = Graph(3, [(0, 1, 2)])
    with pytest.raises(InvalidArgument):
        graph.add_connection(1, 2, -1)
    assert graph.neighbors(1) == ((0, 2),)
    assert graph.neighbors(2) == ()
    assert graph.connections == (Connection(0, 1, 2),)


@pytest.mark.parametrize("origin, target", [(-1, 0), (0, 3), (3, 3), (1, 99)])
def test_out_of_range_connection_rejected_without_mutation(origin, target):
    graph = Graph(3)
    with pytest.raises(IndexOutOfRange):
        graph.add_connection(origin, target, 1)
    assert all(graph.neighbors(location) == () for location in graph.locations)
    assert graph.connections == ()


@pytest.mark.parametrize("bad", [1.5, "2", None, True])
def test_non_integer_values_rejected(bad):
    graph = Graph(3)
    with pytest.raises(InvalidArgument):
        graph.add_connection(0, 1, bad)
    with pytest.raises(InvalidArgument):
        graph.add_connection(bad, 1, 1)


def test_domain_errors_are_builtin_subclasses():
    with pytest.raises(ValueError):
        Graph(-5)
    with pytest.raises(IndexError):
        Graph(1).neighbors(1)


def test_path_cost(reference_graph):
    assert reference_graph.path_cost([0, 1, 2, 8]) == 14
    assert reference_graph.path_cost([1, 7]) == 11
    assert reference_graph.path_cost([5]) == 0
    assert reference_graph.path_cost([]) == 0


def test_path_cost_rejects_missing_connection(reference_graph):
    with pytest.raises(InvalidArgument):
        reference_graph.path_cost([0, 8])


def test_from_config_builds_graph():
    graph = Graph.from_config({"locations": 3, "connections": [[0, 1, 2], [1, 2, 3]]})
    assert len(graph) == 3
    assert graph.connections == (Connection(0, 1, 2), Connection(1, 2, 3))


def test_from_config_without_connections():
    graph = Graph.from_config({"locations": 2})
    assert graph.connections == ()


@pytest.mark.parametrize(
    "config",
    [
        {},
        [],
        {"locations": 2, "connections": [[0, 1]]},
        {"locations": 2, "connections": ["abc"]},
        {"locations": "two"},
        {"locations": 2, "connections": 5},
        {"locations": 2, "connections": "0 1 2"},
    ],
)
def test_from_config_rejects_malformed_sections(config):
    with pytest.raises(InvalidArgument):
        Graph.from_config(config)
