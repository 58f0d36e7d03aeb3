"""Tests for station name normalization and the station registry."""

import pytest
from namma_metro.stations import LINE_STATIONS, StationRegistry, normalize_name


def test_normalize_equivalent_spellings():
    """Test that common spellings of the same station give one key."""
    assert normalize_name("M.G. Road") == "mg road"
    assert normalize_name("mg road") == "mg road"
    assert normalize_name("M G ROAD") == "mg road"


def test_normalize_strips_punctuation_and_spaces():
    """Test punctuation removal and whitespace collapsing."""
    assert normalize_name("  Kengeri   Bus\tTerminal ") == "kengeri bus terminal"
    assert normalize_name("Channasandra(HopeFarm)") == "channasandrahopefarm"
    assert normalize_name("whitefield (Kadugodi)") == "whitefield kadugodi"


def test_normalize_fuses_single_letters_pairwise():
    """Test that single-letter tokens fuse two at a time, left to right."""
    assert normalize_name("m g road") == "mg road"
    assert normalize_name("j p nagar 4th phase") == "jp nagar 4th phase"
    assert normalize_name("a b c") == "ab c"
    assert normalize_name("a b c d") == "ab cd"


def test_normalize_leaves_longer_tokens_alone():
    """Test that fusion only touches one-letter tokens."""
    assert normalize_name("kr puram") == "kr puram"
    assert normalize_name("jp nagar") == "jp nagar"
    assert normalize_name("4 b") == "4 b"


def test_normalize_empty_and_junk():
    """Test that normalization never fails."""
    assert normalize_name("") == ""
    assert normalize_name("   ") == ""
    assert normalize_name("...,,!") == ""
    assert normalize_name(None) == ""


def test_normalize_truncates_long_input():
    """Test that long input is truncated rather than rejected."""
    key = normalize_name("x" * 500)
    assert len(key) == 79


@pytest.mark.parametrize("raw", [
    "M.G. Road",
    "m g road",
    "a b c d e",
    "  Sri  Satya Sai Hospital ",
    "Channasandra(HopeFarm)",
    "x y" * 40,
    "Peenya Industry",
    "",
])
def test_normalize_idempotent(raw):
    """Test that normalizing twice gives the same key."""
    once = normalize_name(raw)
    assert normalize_name(once) == once


def test_normalize_idempotent_for_all_stations():
    """Test idempotence over the whole station list."""
    for names in LINE_STATIONS.values():
        for name in names:
            key = normalize_name(name)
            assert normalize_name(key) == key


def test_registry_assigns_sequential_ids():
    """Test that new keys get the next id."""
    registry = StationRegistry()
    assert registry.resolve("a", "A") == 0
    assert registry.resolve("b", "B") == 1
    assert len(registry) == 2


def test_registry_first_write_wins():
    """Test that resolving an existing key keeps the original entry."""
    registry = StationRegistry()
    first = registry.resolve("mg road", "  m.g. road ", planned=False)
    second = registry.resolve("mg road", "MG Road", planned=True)

    assert first == second
    station = registry.get(first)
    assert station.display_name == "m.g. road"
    assert station.planned is False


def test_registry_name_falls_back_to_key():
    """Test that a blank display name falls back to the key."""
    registry = StationRegistry()
    station = registry.get(registry.resolve("hoodi", "   "))
    assert station.display_name == ""
    assert station.name == "hoodi"


def test_registry_tag_line_deduplicates():
    """Test that line tags are unique and keep first-seen order."""
    registry = StationRegistry()
    station_id = registry.resolve("majestic", "majestic")
    registry.tag_line(station_id, "purple")
    registry.tag_line(station_id, "green")
    registry.tag_line(station_id, "purple")

    station = registry.get(station_id)
    assert station.lines == ["purple", "green"]
    assert station.is_interchange


def test_registry_lookup_and_unknown_id():
    """Test key lookup and unknown id handling."""
    registry = StationRegistry()
    registry.resolve("trinity", "trinity")

    assert registry.lookup("trinity").id == 0
    assert registry.lookup("missing") is None
    with pytest.raises(KeyError):
        registry.get(5)
