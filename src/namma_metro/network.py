"""Metro network graph built from line definitions."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .config import INCLUDE_PLANNED
from .stations import LINE_DEFINITIONS, Station, StationRegistry, normalize_name

logger = logging.getLogger(__name__)

# label -> ordered [(station name, planned)]
LineDefinitions = dict[str, list[tuple[str, bool]]]


class MetroNetwork:
    """Undirected, unweighted station graph.

    Stations live in a StationRegistry; adjacency is kept as per-station
    neighbor sets. A network is built once and then only read; rebuilding
    produces a new MetroNetwork instead of mutating this one.
    """

    def __init__(self, include_planned: bool = True):
        self.registry = StationRegistry()
        self.adjacency: dict[int, set[int]] = {}
        self.include_planned = include_planned

    def connect(self, a: int, b: int):
        """Add an undirected edge; self-edges are ignored."""
        if a == b:
            return
        self.adjacency.setdefault(a, set()).add(b)
        self.adjacency.setdefault(b, set()).add(a)

    def neighbors(self, station_id: int) -> list[int]:
        """Neighbors in ascending id (creation) order."""
        return sorted(self.adjacency.get(station_id, ()))

    def has_edge(self, a: int, b: int) -> bool:
        return b in self.adjacency.get(a, ())

    def edges(self) -> Iterator[tuple[int, int]]:
        """Each undirected edge once, as (low id, high id)."""
        for a in sorted(self.adjacency):
            for b in sorted(self.adjacency[a]):
                if a < b:
                    yield a, b

    def station(self, station_id: int) -> Station:
        return self.registry.get(station_id)

    def stations(self) -> list[Station]:
        """Stations visible to queries, in id order."""
        return [s for s in self.registry if self.include_planned or not s.planned]

    def find_station(self, text: str) -> Optional[Station]:
        """Resolve free text to a station by normalized key."""
        station = self.registry.lookup(normalize_name(text))
        if station is None:
            return None
        if station.planned and not self.include_planned:
            return None
        return station

    def __len__(self) -> int:
        return len(self.registry)


def build_network(
    line_definitions: Optional[LineDefinitions] = None,
    include_planned: bool = INCLUDE_PLANNED,
) -> MetroNetwork:
    """Build a fresh network from line definitions (defaults to Namma Metro).

    Each line is an open path: consecutive entries are connected, the last
    and first are not.
    """
    if line_definitions is None:
        line_definitions = LINE_DEFINITIONS

    network = MetroNetwork(include_planned=include_planned)
    for line, entries in line_definitions.items():
        ids = []
        for name, planned in entries:
            station_id = network.registry.resolve(normalize_name(name), name, planned)
            network.registry.tag_line(station_id, line)
            ids.append(station_id)

        for a, b in zip(ids, ids[1:]):
            network.connect(a, b)

    logger.debug(
        f"Built network: {len(network)} stations, "
        f"{sum(1 for _ in network.edges())} edges, {len(line_definitions)} lines"
    )
    return network


# Cached network - built lazily on first use
_network: Optional[MetroNetwork] = None


def get_network() -> MetroNetwork:
    """Return the process-wide network, building it on first call."""
    global _network
    if _network is None:
        _network = build_network()
    return _network


def rebuild_network(
    include_planned: bool = INCLUDE_PLANNED,
    line_definitions: Optional[LineDefinitions] = None,
) -> MetroNetwork:
    """Build a new network and swap it in as the cached one."""
    global _network
    network = build_network(line_definitions, include_planned=include_planned)
    _network = network
    logger.info(f"Network rebuilt (include_planned={include_planned})")
    return network


def edge_key(a: int, b: int) -> frozenset[int]:
    """Unordered key for an edge, used for blocked-edge sets."""
    return frozenset((a, b))
