from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence, Tuple

logger = logging.getLogger(__name__)

Location = int
Distance = int


class InvalidArgument(ValueError):
    """Raised for a negative location count or a negative connection weight."""


class IndexOutOfRange(IndexError):
    """Raised when a location index falls outside ``[0, location_count)``."""


@dataclass(frozen=True)
class Connection:
    origin: Location
    target: Location
    weight: Distance


def _require_int(value, name: str) -> int:
    # bool is an int subclass but never a meaningful index or weight
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}.")
    return value


class Graph:
    """Undirected weighted multigraph over the locations ``0 .. location_count - 1``.

    Each location owns an insertion-ordered list of ``(neighbor, weight)``
    pairs. Adding the connection ``(u, v, w)`` appends ``(v, w)`` to ``u`` and
    ``(u, w)`` to ``v``, so the adjacency stays symmetric by construction.
    Parallel connections are kept as they are.
    """

    def __init__(
        self,
        location_count: int,
        connections: Iterable[Tuple[Location, Location, Distance]] = (),
    ) -> None:
        location_count = _require_int(location_count, "location_count")
        if location_count < 0:
            raise InvalidArgument(
                f"location_count must be non-negative, got {location_count}."
            )

        self.location_count = location_count
        self._adjacency: List[List[Tuple[Location, Distance]]] = [
            [] for _ in range(location_count)
        ]
        self._connections: List[Connection] = []

        for origin, target, weight in connections:
            self.add_connection(origin, target, weight)

        logger.debug(
            "Built graph with %d locations and %d connections",
            self.location_count,
            len(self._connections),
        )

    @classmethod
    def from_config(cls, graph_config: Mapping) -> "Graph":
        """Build a graph from the ``graph`` section of a YAML configuration."""
        if not isinstance(graph_config, Mapping):
            raise InvalidArgument("graph section must be a mapping.")
        try:
            location_count = graph_config["locations"]
        except KeyError:
            raise InvalidArgument("graph section is missing 'locations'.") from None

        entries = graph_config.get("connections") or []
        if isinstance(entries, str) or not isinstance(entries, Sequence):
            raise InvalidArgument(
                f"connections must be a list of triples, got {entries!r}."
            )

        triples: List[Tuple[Location, Location, Distance]] = []
        for entry in entries:
            if (
                isinstance(entry, str)
                or not isinstance(entry, Sequence)
                or len(entry) != 3
            ):
                raise InvalidArgument(
                    f"connection must be a [origin, target, weight] triple, got {entry!r}."
                )
            origin, target, weight = entry
            triples.append((origin, target, weight))

        return cls(location_count, triples)

    @property
    def locations(self) -> range:
        return range(self.location_count)

    @property
    def connections(self) -> Tuple[Connection, ...]:
        return tuple(self._connections)

    def validate_location(self, location: Location) -> Location:
        location = _require_int(location, "location")
        if not 0 <= location < self.location_count:
            raise IndexOutOfRange(
                f"Location {location} outside [0, {self.location_count})."
            )
        return location

    def add_connection(self, origin: Location, target: Location, weight: Distance) -> None:
        # Validate everything first so a rejected call leaves the graph untouched.
        origin = self.validate_location(origin)
        target = self.validate_location(target)
        weight = _require_int(weight, "weight")
        if weight < 0:
            raise InvalidArgument(
                f"Connection {origin}-{target} has negative weight {weight}."
            )

        self._adjacency[origin].append((target, weight))
        self._adjacency[target].append((origin, weight))
        self._connections.append(Connection(origin, target, weight))

    def neighbors(self, location: Location) -> Tuple[Tuple[Location, Distance], ...]:
        return tuple(self._adjacency[self.validate_location(location)])

    def path_cost(self, path: Sequence[Location]) -> Distance:
        """Return the total weight of walking along the given location sequence.

        Between parallel connections the cheapest one is taken.
        """
        if len(path) < 2:
            return 0

        total_cost = 0
        for u, v in zip(path[:-1], path[1:]):
            weights = [weight for neighbor, weight in self.neighbors(u) if neighbor == v]
            if not weights:
                raise InvalidArgument(f"Connection {u}-{v} not present in graph.")
            total_cost += min(weights)
        return total_cost

    def __len__(self) -> int:
        return self.location_count

    def __repr__(self) -> str:
        return (
            f"Graph(location_count={self.location_count}, "
            f"connections={len(self._connections)})"
        )
