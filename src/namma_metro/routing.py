"""Metro routing with breadth-first search and alternate routes."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .config import AUTOCOMPLETE_LIMIT, MAX_ALTERNATES
from .itinerary import Itinerary, summarize_route
from .network import MetroNetwork, edge_key, get_network
from .stations import Station, normalize_name

logger = logging.getLogger(__name__)


class RouteStatus(str, Enum):
    OK = "ok"
    BOTH_NOT_FOUND = "both_not_found"
    SOURCE_NOT_FOUND = "source_not_found"
    DESTINATION_NOT_FOUND = "destination_not_found"
    NO_PATH = "no_path"


@dataclass
class RouteResult:
    """Outcome of a route query.

    `from_text` / `to_text` are the raw inputs, kept so callers can offer
    suggestions when a station was not found.
    """
    status: RouteStatus
    from_text: str
    to_text: str
    itinerary: Optional[Itinerary] = None
    alternates: list[list[Station]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == RouteStatus.OK

    @property
    def route(self) -> list[Station]:
        return self.itinerary.route if self.itinerary else []

    @property
    def station_names(self) -> list[str]:
        return [s.name for s in self.route]


def shortest_path(
    network: MetroNetwork,
    src: int,
    dest: int,
    blocked: Iterable[Iterable[int]] = (),
) -> Optional[list[int]]:
    """Fewest-hops path from src to dest, or None if unreachable.

    Edges listed in `blocked` (unordered pairs) are skipped for this call
    only. Neighbors are explored in ascending id order and each station is
    reached once, so the result is deterministic for a given graph.
    """
    blocked_edges = {frozenset(pair) for pair in blocked}
    parent: dict[int, Optional[int]] = {src: None}
    queue = deque([src])

    while queue:
        current = queue.popleft()
        if current == dest:
            path = []
            node: Optional[int] = current
            while node is not None:
                path.append(node)
                node = parent[node]
            path.reverse()
            return path

        for neighbor in network.neighbors(current):
            if neighbor in parent:
                continue
            if edge_key(current, neighbor) in blocked_edges:
                continue
            parent[neighbor] = current
            queue.append(neighbor)

    return None


def find_alternates(
    network: MetroNetwork,
    primary: list[int],
    max_count: int = MAX_ALTERNATES,
) -> list[list[int]]:
    """Alternate routes that each avoid one edge of the primary route.

    Edges are blocked one at a time, first edge first; duplicate paths
    (equal to the primary or to an earlier alternate) are dropped.
    """
    alternates: list[list[int]] = []
    if len(primary) < 2:
        return alternates

    src, dest = primary[0], primary[-1]
    for a, b in zip(primary, primary[1:]):
        if len(alternates) >= max_count:
            break
        path = shortest_path(network, src, dest, blocked=[(a, b)])
        if path is None or path == primary or path in alternates:
            continue
        alternates.append(path)

    return alternates


def find_route(
    from_text: str,
    to_text: str,
    network: Optional[MetroNetwork] = None,
    max_alternates: int = MAX_ALTERNATES,
) -> RouteResult:
    """Find the shortest route between two stations given by name."""
    if network is None:
        network = get_network()
    from_station = network.find_station(from_text)
    to_station = network.find_station(to_text)

    if not from_station and not to_station:
        logger.debug(f"Stations not found: {from_text!r}, {to_text!r}")
        return RouteResult(RouteStatus.BOTH_NOT_FOUND, from_text, to_text)
    if not from_station:
        logger.debug(f"Start station not found: {from_text!r}")
        return RouteResult(RouteStatus.SOURCE_NOT_FOUND, from_text, to_text)
    if not to_station:
        logger.debug(f"Destination station not found: {to_text!r}")
        return RouteResult(RouteStatus.DESTINATION_NOT_FOUND, from_text, to_text)

    path = shortest_path(network, from_station.id, to_station.id)
    if path is None:
        logger.info(f"No route between {from_station.name} and {to_station.name}")
        return RouteResult(RouteStatus.NO_PATH, from_text, to_text)

    alternates = find_alternates(network, path, max_alternates)
    logger.debug(
        f"Route {from_station.name} -> {to_station.name}: "
        f"{len(path) - 1} stops, {len(alternates)} alternate(s)"
    )

    return RouteResult(
        status=RouteStatus.OK,
        from_text=from_text,
        to_text=to_text,
        itinerary=summarize_route(network, path),
        alternates=[[network.station(i) for i in alt] for alt in alternates],
    )


def autocomplete(
    prefix: str,
    network: Optional[MetroNetwork] = None,
    limit: int = AUTOCOMPLETE_LIMIT,
) -> list[str]:
    """Station names whose normalized key starts with the normalized prefix.

    A trailing space in the prefix is kept, so "kr " only matches keys with
    a word break there.
    """
    if network is None:
        network = get_network()
    key = normalize_name(prefix)
    if key and prefix[-1:].isspace():
        key += " "
    matches = [s.name for s in network.stations() if s.key.startswith(key)]
    return matches[:limit]


def list_stations(
    include_planned: Optional[bool] = None,
    network: Optional[MetroNetwork] = None,
) -> list[Station]:
    """All stations in id order.

    Planned stations are listed when `include_planned` is true; None follows
    the network's own setting.
    """
    if network is None:
        network = get_network()
    if include_planned is None:
        include_planned = network.include_planned
    return [s for s in network.registry if include_planned or not s.planned]
