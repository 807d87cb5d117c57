from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

from graph import Graph, IndexOutOfRange, InvalidArgument
from routing import (
    ShortestPathResult,
    fewest_hops,
    format_report,
    shortest_path,
    verify_shortest_path,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_ARGUMENT = 2
EXIT_INDEX_OUT_OF_RANGE = 3

REFERENCE_LOCATIONS = 9
REFERENCE_CONNECTIONS = [
    (0, 1, 4),
    (0, 7, 8),
    (1, 2, 8),
    (1, 7, 11),
    (2, 3, 7),
    (2, 8, 2),
    (2, 5, 4),
    (3, 4, 9),
    (3, 5, 14),
    (4, 5, 10),
    (5, 6, 2),
    (6, 7, 1),
    (6, 8, 6),
    (7, 8, 7),
]
DEFAULT_SOURCE = 1
DEFAULT_DESTINATION = 7

ALGORITHMS = {
    "dijkstra": shortest_path,
    "bfs": fewest_hops,
}


def load_config(path: Path) -> Dict:
    try:
        with path.open("r", encoding="utf-8") as handle:
            config = yaml.safe_load(handle)
    except OSError as exc:
        raise InvalidArgument(f"Unable to read configuration {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidArgument(f"Configuration {path} is not valid UTF-8: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidArgument(f"Malformed YAML in {path}: {exc}") from exc

    if not isinstance(config, dict) or "graph" not in config:
        raise InvalidArgument(f"Configuration {path} has no 'graph' section.")
    return config


def build_reference_graph() -> Graph:
    return Graph(REFERENCE_LOCATIONS, REFERENCE_CONNECTIONS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report the shortest path between two locations of a weighted graph."
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML graph description. Defaults to the built-in reference graph.",
    )
    parser.add_argument("--source", type=int, help="Source location index.")
    parser.add_argument("--destination", type=int, help="Destination location index.")
    parser.add_argument(
        "--algorithm",
        choices=sorted(ALGORITHMS),
        default="dijkstra",
        help="dijkstra minimises total weight, bfs minimises the number of hops.",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Cross-check the Dijkstra result against exhaustive search (small graphs only).",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Draw the graph with the route highlighted.",
    )
    parser.add_argument(
        "--figure-out",
        type=Path,
        help="Optional path to save the drawing as an image instead of showing it.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every frontier extraction and relaxation.",
    )
    return parser


def run(args: argparse.Namespace) -> ShortestPathResult:
    query: Dict = {}
    if args.config is not None:
        config = load_config(args.config)
        graph = Graph.from_config(config["graph"])
        query = config.get("query") or {}
        if not isinstance(query, Mapping):
            raise InvalidArgument("query section must be a mapping.")
    else:
        graph = build_reference_graph()

    source = args.source if args.source is not None else query.get("source", DEFAULT_SOURCE)
    destination = (
        args.destination
        if args.destination is not None
        else query.get("destination", DEFAULT_DESTINATION)
    )

    result = ALGORITHMS[args.algorithm](graph, source, destination)
    print(format_report(result))

    if args.verify:
        verify_shortest_path(graph, result)
        print("Verified against exhaustive search.")

    if args.visualize or args.figure_out is not None:
        from visualize import draw_route

        draw_route(graph, result, output=args.figure_out, show=args.figure_out is None)
        if args.figure_out is not None:
            print(f"Visualisation stored at: {args.figure_out}")

    return result


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verify and args.algorithm != "dijkstra":
        parser.error("--verify is only available for the dijkstra algorithm.")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except IndexOutOfRange as exc:
        logger.error("%s", exc)
        return EXIT_INDEX_OUT_OF_RANGE
    except InvalidArgument as exc:
        logger.error("%s", exc)
        return EXIT_INVALID_ARGUMENT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
