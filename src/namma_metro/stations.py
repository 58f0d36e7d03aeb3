"""Namma Metro station data, name normalization and the station registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from .config import MAX_KEY_LENGTH


@dataclass
class Station:
    """Represents a metro station (open or planned)."""
    id: int
    key: str
    display_name: str
    lines: list[str] = field(default_factory=list)
    planned: bool = False

    def __hash__(self):
        return hash(self.id)

    @property
    def name(self) -> str:
        """Name to show to riders; falls back to the key when no display name was given."""
        return self.display_name or self.key

    @property
    def is_interchange(self) -> bool:
        return len(self.lines) > 1


def normalize_name(raw: str) -> str:
    """Turn free-text station input into the canonical matching key.

    Punctuation is dropped, whitespace collapsed, adjacent single-letter
    tokens fused pairwise ("m g road" -> "mg road") and the result lowercased.
    So "M.G. Road", "mg road" and "M G ROAD" all give "mg road".

    Never fails; empty or junk input gives an empty key.
    """
    text = (raw or "")[:MAX_KEY_LENGTH].lower()
    text = "".join(c for c in text if c.isalnum() or c.isspace())
    tokens = text.split()

    fused = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if (
            i + 1 < len(tokens)
            and len(token) == 1 and token.isalpha()
            and len(tokens[i + 1]) == 1 and tokens[i + 1].isalpha()
        ):
            # Pairwise only: "a b c" -> "ab c"
            fused.append(token + tokens[i + 1])
            i += 2
            continue
        fused.append(token)
        i += 1

    return " ".join(fused)


class StationRegistry:
    """Deduplicated stations keyed by normalized name, with sequential ids."""

    def __init__(self):
        self._stations: list[Station] = []
        self._by_key: dict[str, int] = {}

    def resolve(self, key: str, display_name: str, planned: bool = False) -> int:
        """Return the id for `key`, creating the station on first sight.

        An existing station keeps its original display name and planned flag.
        """
        if key in self._by_key:
            return self._by_key[key]

        station_id = len(self._stations)
        self._stations.append(Station(
            id=station_id,
            key=key,
            display_name=(display_name or "").strip(),
            planned=bool(planned),
        ))
        self._by_key[key] = station_id
        return station_id

    def tag_line(self, station_id: int, line: str):
        """Attach a line label to a station (no duplicates, first-seen order)."""
        station = self.get(station_id)
        if line not in station.lines:
            station.lines.append(line)

    def get(self, station_id: int) -> Station:
        if not 0 <= station_id < len(self._stations):
            raise KeyError(f"Unknown station id: {station_id}")
        return self._stations[station_id]

    def lookup(self, key: str) -> Optional[Station]:
        station_id = self._by_key.get(key)
        return self._stations[station_id] if station_id is not None else None

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)


# Namma Metro (Bengaluru) lines, stations in running order.
# Spellings vary on purpose ("m.g. road" / "mg road"); normalization merges them.
LINE_STATIONS = {
    "purple": [
        "challaghatta", "kengeri", "Kengeri Bus Terminal", "Pattanagere", "Jnanbharati",
        "Rajarajeshwari Nagar", "Nayandahalli", "mysore road", "deepanjali nagar", "attiguppe",
        "vijayanagar", "Hosahalli", "magadi road", "majestic", "Central Road", "Vidhana Soudha",
        "Cubbon Park", "m.g. road", "trinity", "halasuru", "indiranagar",
        "swami vivekananda road", "baiyappanahalli", "Benniganahalli", "kr puram",
        "Singayyanapalya", "Garudacharpalaya", "hoodi", "Seetharampalya", "Kundalahalli",
        "Nallurhalli", "Sri Satya Sai Hospital", "Pattandur Agrahara", "Kadugodi Tree Park",
        "Channasandra(HopeFarm)", "whitefield(Kadugodi)",
    ],
    "green": [
        "Madavara", "Chikkabidarakallu", "Manjunathanagar", "nagasandra", "Dasarhalli",
        "Jalahalli", "Peenya Industry", "Peenya", "Gorguntepalya", "Yeswantpur",
        "Sandal Soap Factory", "Mahalakshmi", "Rajijnagar", "Kuvempu road", "Srirampura",
        "Sampige Road", "majestic", "Chickpete", "Krishna Rajendra Market", "National College",
        "Lalbagh", "South End Circle", "Jayanagar", "Rashtreeya Vidyalaya Road", "Banashankari",
        "jayadeva hospital", "Yelachenahalli", "Konanakunte Cross", "Vajarahalli",
        "Thalaghattapura", "Silk Institute",
    ],
    "pink": [
        "kalena agrahara", "hulimavu", "iim bangalore", "jp nagar 4th phase",
        "jayadeva hospital", "Tavarekere", "dairy circle", "lakkasandra", "langford town",
        "rashtriya military school", "mg road", "shivajinagar", "Cantonment", "Pottery Town",
        "tannery road", "Venkateshpura", "kadugundanahalli", "nagawara",
    ],
}

# Normalized keys of stations not yet open. None at the moment.
PLANNED_STATIONS: set[str] = set()

# label -> ordered [(station name, planned)]
LINE_DEFINITIONS = {
    line: [(name, normalize_name(name) in PLANNED_STATIONS) for name in names]
    for line, names in LINE_STATIONS.items()
}
