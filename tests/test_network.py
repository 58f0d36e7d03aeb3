"""Tests for building the metro network graph."""

import pytest
from namma_metro.network import build_network, get_network, rebuild_network


@pytest.fixture
def network():
    return build_network()


def test_stations_deduplicated(network):
    """Test that stations shared between lines are created once."""
    # 36 purple + 31 green + 18 pink, minus majestic, mg road and jayadeva hospital
    assert len(network) == 82


def test_shared_station_accumulates_lines(network):
    """Test that a station listed by two lines carries both tags."""
    mg_road = network.find_station("M.G. Road")
    assert mg_road is not None
    assert mg_road.lines == ["purple", "pink"]
    assert mg_road.display_name == "m.g. road"

    majestic = network.find_station("Majestic")
    assert majestic.lines == ["purple", "green"]

    jayadeva = network.find_station("Jayadeva Hospital")
    assert jayadeva.lines == ["green", "pink"]


def test_interchange_stations(network):
    """Test that exactly the three shared stations are multi-line."""
    names = sorted(s.key for s in network.stations() if s.is_interchange)
    assert names == ["jayadeva hospital", "majestic", "mg road"]


def test_adjacency_symmetric(network):
    """Test that every edge is stored in both directions."""
    for a, neighbors in network.adjacency.items():
        for b in neighbors:
            assert a in network.adjacency[b]


def test_no_self_edges(network):
    """Test that no station is its own neighbor."""
    for a, neighbors in network.adjacency.items():
        assert a not in neighbors


def test_consecutive_stations_connected(network):
    """Test that consecutive line entries are adjacent and lines are open paths."""
    challaghatta = network.find_station("challaghatta")
    kengeri = network.find_station("kengeri")
    whitefield = network.find_station("whitefield(Kadugodi)")

    assert network.has_edge(challaghatta.id, kengeri.id)
    assert network.has_edge(kengeri.id, challaghatta.id)
    assert not network.has_edge(challaghatta.id, whitefield.id)


def test_lines_only_connect_consecutive_entries(network):
    """Test that sharing a line does not connect non-consecutive stations."""
    trinity = network.find_station("trinity")
    majestic = network.find_station("majestic")
    assert not network.has_edge(trinity.id, majestic.id)


def test_edge_count(network):
    """Test that each line contributes one edge per consecutive pair."""
    assert len(list(network.edges())) == 35 + 30 + 17


def test_neighbors_in_id_order(network):
    """Test that neighbors come back sorted by station id."""
    majestic = network.find_station("majestic")
    neighbors = network.neighbors(majestic.id)
    assert neighbors == sorted(neighbors)
    assert len(neighbors) == 4


def test_build_is_deterministic():
    """Test that two builds produce the same ids and edges."""
    first = build_network()
    second = build_network()

    assert [(s.id, s.key, s.lines) for s in first.stations()] == \
        [(s.id, s.key, s.lines) for s in second.stations()]
    assert list(first.edges()) == list(second.edges())


def test_custom_line_definitions():
    """Test building from caller-supplied line definitions."""
    network = build_network({
        "red": [("A", False), ("B", False), ("C", False)],
        "blue": [("C", False), ("D", False)],
    })
    assert len(network) == 4
    assert network.find_station("c").lines == ["red", "blue"]
    assert list(network.edges()) == [(0, 1), (1, 2), (2, 3)]


def test_planned_stations_hidden_when_excluded():
    """Test that planned stations are not matched when include_planned is off."""
    lines = {"red": [("Open", False), ("Future", True)]}

    with_planned = build_network(lines, include_planned=True)
    assert with_planned.find_station("future") is not None

    without_planned = build_network(lines, include_planned=False)
    assert without_planned.find_station("future") is None
    assert [s.name for s in without_planned.stations()] == ["Open"]
    # Graph shape is unchanged
    assert without_planned.has_edge(0, 1)


def test_find_station_unknown(network):
    """Test that unknown names resolve to None."""
    assert network.find_station("Nonexistent Place") is None
    assert network.find_station("") is None


def test_rebuild_swaps_cached_network():
    """Test that rebuilding replaces the cached network with a new object."""
    before = get_network()
    after = rebuild_network()

    assert after is not before
    assert get_network() is after
    assert len(after) == len(before)
