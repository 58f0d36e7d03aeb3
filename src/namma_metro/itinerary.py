"""Trip breakdown: line segments, interchanges, distance, time and fare."""

from __future__ import annotations

from dataclasses import dataclass

from .config import FARE_SLABS, INTERCHANGE_MINUTES, KM_PER_EDGE, MAX_FARE, MINUTES_PER_EDGE
from .network import MetroNetwork
from .stations import Station

UNKNOWN_LINE = "unknown"


@dataclass
class Leg:
    """One hop between adjacent stations."""
    from_station: Station
    to_station: Station
    line: str
    distance_km: float = KM_PER_EDGE
    time_minutes: int = MINUTES_PER_EDGE

    @property
    def fare(self) -> int:
        return fare_from_distance(self.distance_km)


@dataclass
class RouteSegment:
    """A run of consecutive hops on one line."""
    line: str
    stations: list[Station]

    @property
    def from_station(self) -> Station:
        return self.stations[0]

    @property
    def to_station(self) -> Station:
        return self.stations[-1]

    @property
    def stops(self) -> int:
        return len(self.stations) - 1


@dataclass
class Itinerary:
    """Summary of a route."""
    route: list[Station]
    edge_lines: list[str]
    segments: list[RouteSegment]
    interchanges: list[Station]
    legs: list[Leg]
    distance_km: float
    base_time_minutes: int
    interchange_minutes: int
    fare: int

    @property
    def total_stops(self) -> int:
        return len(self.edge_lines)

    @property
    def total_time_minutes(self) -> int:
        return self.base_time_minutes + self.interchange_minutes

    @property
    def interchange_count(self) -> int:
        return len(self.interchanges)


def fare_from_distance(km: float) -> int:
    """Fare slab for a trip distance; slab limits are inclusive."""
    for limit, fare in FARE_SLABS:
        if km <= limit:
            return fare
    return MAX_FARE


def shared_line(a: Station, b: Station) -> str:
    """First line label both stations carry, scanning a's lines then b's."""
    for line in a.lines:
        if line in b.lines:
            return line
    return UNKNOWN_LINE


def group_segments(route: list[Station], edge_lines: list[str]) -> list[RouteSegment]:
    """Group maximal runs of equally-labelled edges into segments."""
    segments = []
    start = 0
    for i in range(1, len(edge_lines) + 1):
        if i == len(edge_lines) or edge_lines[i] != edge_lines[start]:
            segments.append(RouteSegment(line=edge_lines[start], stations=route[start:i + 1]))
            start = i
    return segments


def summarize_route(network: MetroNetwork, route: list[int]) -> Itinerary:
    """Derive segments, interchanges, distance, time and fare for a route of station ids.

    Every multi-line station on the route counts as an interchange, the
    first and last stations included, whether or not the rider changes
    lines there.
    """
    stations = [network.station(station_id) for station_id in route]
    edge_lines = [shared_line(a, b) for a, b in zip(stations, stations[1:])]
    legs = [
        Leg(from_station=a, to_station=b, line=line)
        for (a, b), line in zip(zip(stations, stations[1:]), edge_lines)
    ]
    interchanges = [s for s in stations if s.is_interchange]

    edges = len(edge_lines)
    distance = round(edges * KM_PER_EDGE, 2)

    return Itinerary(
        route=stations,
        edge_lines=edge_lines,
        segments=group_segments(stations, edge_lines),
        interchanges=interchanges,
        legs=legs,
        distance_km=distance,
        base_time_minutes=edges * MINUTES_PER_EDGE,
        interchange_minutes=len(interchanges) * INTERCHANGE_MINUTES,
        fare=fare_from_distance(distance),
    )
