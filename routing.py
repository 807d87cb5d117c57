from __future__ import annotations

import heapq
import itertools
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from graph import Distance, Graph, IndexOutOfRange, Location

logger = logging.getLogger(__name__)

UNREACHABLE = math.inf
NO_PARENT = -1

TentativeDistance = Union[Distance, float]


class Frontier:
    """Min-priority queue of ``(distance, location)`` pairs.

    At most one live entry exists per location. Re-pushing a location, or
    calling :meth:`discard`, marks its previous heap entry as removed; removed
    entries are dropped lazily when they reach the top of the heap.
    """

    _REMOVED = object()

    def __init__(self) -> None:
        self._heap: List[list] = []
        self._entries: Dict[Location, list] = {}
        # Entries order by (distance, location); the counter keeps them totally ordered.
        self._counter = itertools.count()

    def push(self, distance: TentativeDistance, location: Location) -> None:
        self.discard(location)
        entry = [distance, location, next(self._counter), location]
        self._entries[location] = entry
        heapq.heappush(self._heap, entry)

    def discard(self, location: Location) -> bool:
        entry = self._entries.pop(location, None)
        if entry is None:
            return False
        entry[-1] = self._REMOVED
        return True

    def pop(self) -> Tuple[TentativeDistance, Location]:
        while self._heap:
            distance, _, _, location = heapq.heappop(self._heap)
            if location is not self._REMOVED:
                del self._entries[location]
                return distance, location
        raise KeyError("pop from an empty frontier")

    def __contains__(self, location: Location) -> bool:
        return location in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


@dataclass
class ShortestPathTree:
    """Distances and parents computed from one source; owned by a single query."""

    source: Location
    distances: List[TentativeDistance]
    parents: List[Location]

    def _check(self, destination: Location) -> Location:
        if not 0 <= destination < len(self.distances):
            raise IndexOutOfRange(
                f"Location {destination} outside [0, {len(self.distances)})."
            )
        return destination

    def distance_to(self, destination: Location) -> TentativeDistance:
        return self.distances[self._check(destination)]

    def path_to(self, destination: Location) -> Tuple[Location, ...]:
        return reconstruct_path(self.parents, self.source, self._check(destination))


@dataclass(frozen=True)
class ShortestPathResult:
    source: Location
    destination: Location
    distance: TentativeDistance
    path: Tuple[Location, ...]

    @property
    def reachable(self) -> bool:
        return self.distance != UNREACHABLE

    def edges(self) -> List[Tuple[Location, Location]]:
        return list(zip(self.path[:-1], self.path[1:]))


def dijkstra(graph: Graph, source: Location) -> ShortestPathTree:
    """Compute single-source shortest paths using Dijkstra.

    distances[v] holds the best-known distance from source to v, or
    ``UNREACHABLE``; parents[v] is the previous location along that path, or
    ``NO_PARENT`` for the source and for unreached locations. The graph is only
    read, so concurrent queries against the same graph need no locking.
    """
    source = graph.validate_location(source)

    distances: List[TentativeDistance] = [UNREACHABLE] * graph.location_count
    parents: List[Location] = [NO_PARENT] * graph.location_count
    distances[source] = 0

    frontier = Frontier()
    frontier.push(0, source)

    while frontier:
        distance_u, u = frontier.pop()
        logger.debug("Finalised location %d at distance %s", u, distance_u)

        for v, weight in graph.neighbors(u):
            candidate = distance_u + weight
            if candidate < distances[v]:
                # push() drops the stale (old distance, v) entry, if any.
                distances[v] = candidate
                parents[v] = u
                frontier.push(candidate, v)
                logger.debug("Relaxed %d -> %d, distance now %s", u, v, candidate)

    return ShortestPathTree(source=source, distances=distances, parents=parents)


def reconstruct_path(
    parents: Sequence[Location], source: Location, destination: Location
) -> Tuple[Location, ...]:
    """Walk the parent chain back from destination and return it source-first.

    An empty tuple means destination was never reached from source.
    """
    if destination == source:
        return (source,)
    if parents[destination] == NO_PARENT:
        return ()

    path: List[Location] = [destination]
    while path[-1] != source:
        parent = parents[path[-1]]
        if parent == NO_PARENT or len(path) > len(parents):
            raise RuntimeError(
                f"Parent chain from {destination} does not lead back to {source}."
            )
        path.append(parent)
    path.reverse()
    return tuple(path)


def shortest_path(
    graph: Graph, source: Location, destination: Location
) -> ShortestPathResult:
    """Recover both length and explicit path between source and destination."""
    source = graph.validate_location(source)
    destination = graph.validate_location(destination)

    tree = dijkstra(graph, source)
    distance = tree.distance_to(destination)
    if distance == UNREACHABLE:
        logger.info("Location %d is unreachable from %d", destination, source)
        return ShortestPathResult(source, destination, UNREACHABLE, ())

    return ShortestPathResult(source, destination, distance, tree.path_to(destination))


def fewest_hops(
    graph: Graph, source: Location, destination: Location
) -> ShortestPathResult:
    """Breadth-first search on hop count, ignoring connection weights.

    The reported distance is the number of connections on the path.
    """
    source = graph.validate_location(source)
    destination = graph.validate_location(destination)

    hops: List[TentativeDistance] = [UNREACHABLE] * graph.location_count
    parents: List[Location] = [NO_PARENT] * graph.location_count
    hops[source] = 0

    queue = deque([source])
    while queue and hops[destination] == UNREACHABLE:
        u = queue.popleft()
        for v, _ in graph.neighbors(u):
            if hops[v] == UNREACHABLE:
                hops[v] = hops[u] + 1
                parents[v] = u
                queue.append(v)

    if hops[destination] == UNREACHABLE:
        return ShortestPathResult(source, destination, UNREACHABLE, ())
    return ShortestPathResult(
        source,
        destination,
        hops[destination],
        reconstruct_path(parents, source, destination),
    )


def iter_simple_paths(
    graph: Graph, source: Location, destination: Location
) -> Iterator[Tuple[Location, ...]]:
    """Yield every simple path from source to destination by depth-first search.

    Exponential in the graph size; meant for cross-checking small graphs.
    """
    source = graph.validate_location(source)
    destination = graph.validate_location(destination)

    def dfs(path: List[Location], visited: set) -> Iterator[Tuple[Location, ...]]:
        node = path[-1]
        if node == destination:
            yield tuple(path)
            return
        # parallel connections lead to the same simple path
        for neighbor in dict.fromkeys(v for v, _ in graph.neighbors(node)):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            path.append(neighbor)
            yield from dfs(path, visited)
            path.pop()
            visited.discard(neighbor)

    yield from dfs([source], {source})


def brute_force_distance(
    graph: Graph, source: Location, destination: Location
) -> TentativeDistance:
    best: Optional[TentativeDistance] = None
    for path in iter_simple_paths(graph, source, destination):
        cost = graph.path_cost(path)
        if best is None or cost < best:
            best = cost
    return UNREACHABLE if best is None else best


def verify_shortest_path(graph: Graph, result: ShortestPathResult) -> TentativeDistance:
    """Explicitly verify the result against exhaustive search over simple paths."""

    expected = brute_force_distance(graph, result.source, result.destination)
    if expected != result.distance:
        raise RuntimeError(
            "Shortest path is not optimal: "
            f"exhaustive search found {format_distance(expected)}, "
            f"engine reported {format_distance(result.distance)}."
        )

    if result.reachable:
        if result.path[0] != result.source or result.path[-1] != result.destination:
            raise RuntimeError(
                f"Path {result.path} does not run from {result.source} to {result.destination}."
            )
        walked = graph.path_cost(result.path)
        if walked != result.distance:
            raise RuntimeError(
                f"Path cost mismatch: walking the path costs {walked}, "
                f"expected {result.distance}."
            )
    elif result.path:
        raise RuntimeError("Unreachable result carries a non-empty path.")

    return expected


def format_distance(distance: TentativeDistance) -> str:
    return "unreachable" if distance == UNREACHABLE else str(distance)


def format_report(result: ShortestPathResult) -> str:
    if not result.reachable:
        return (
            "Shortest path length is: unreachable\n"
            f"Path is: no path from {result.source} to {result.destination}"
        )
    path = " ".join(str(location) for location in result.path)
    return f"Shortest path length is: {result.distance}\nPath is: {path}"
