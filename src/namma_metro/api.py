"""FastAPI web interface for the metro route finder."""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import API_HOST, API_PORT, INCLUDE_PLANNED
from .database import Database, get_db
from .itinerary import Itinerary
from .network import get_network, rebuild_network
from .routing import RouteStatus, autocomplete, find_route, list_stations

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Namma Metro Route Finder",
    description="Shortest routes, alternates, time and fare estimates for Namma Metro",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RouteRequest(BaseModel):
    from_station: str
    to_station: str


def _not_found(message: str, text: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"message": message, "suggestions": autocomplete(text)},
    )


def _itinerary_payload(itinerary: Itinerary) -> dict:
    return {
        "route": [s.name for s in itinerary.route],
        "segments": [
            {
                "line": seg.line,
                "from_station": seg.from_station.name,
                "to_station": seg.to_station.name,
                "stops": seg.stops,
            }
            for seg in itinerary.segments
        ],
        "interchanges": [
            {"station": s.name, "lines": s.lines}
            for s in itinerary.interchanges
        ],
        "legs": [
            {
                "from_station": leg.from_station.name,
                "to_station": leg.to_station.name,
                "line": leg.line,
                "distance_km": leg.distance_km,
                "time_minutes": leg.time_minutes,
                "fare": leg.fare,
            }
            for leg in itinerary.legs
        ],
        "total_stops": itinerary.total_stops,
        "distance_km": itinerary.distance_km,
        "time_minutes": itinerary.total_time_minutes,
        "interchange_minutes": itinerary.interchange_minutes,
        "fare": itinerary.fare,
    }


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Namma Metro Route Finder"}


@app.post("/route")
async def get_route_endpoint(request: RouteRequest, db: Database = Depends(get_db)):
    """Get the shortest route and alternates between two stations."""
    result = find_route(request.from_station, request.to_station)

    if result.status == RouteStatus.BOTH_NOT_FOUND:
        raise HTTPException(status_code=404, detail={
            "message": f"Stations not found: {request.from_station}, {request.to_station}",
            "suggestions": {
                "from_station": autocomplete(request.from_station),
                "to_station": autocomplete(request.to_station),
            },
        })
    if result.status == RouteStatus.SOURCE_NOT_FOUND:
        raise _not_found(f"Start station not found: {request.from_station}", request.from_station)
    if result.status == RouteStatus.DESTINATION_NOT_FOUND:
        raise _not_found(f"Destination station not found: {request.to_station}", request.to_station)
    if result.status == RouteStatus.NO_PATH:
        raise HTTPException(status_code=404, detail="No route found")

    itinerary = result.itinerary
    first, last = itinerary.route[0], itinerary.route[-1]
    db.add_trip(first.key, last.key, itinerary.total_stops)

    now = datetime.now()
    return {
        "from": first.name,
        "to": last.name,
        **_itinerary_payload(itinerary),
        "alternates": [[s.name for s in alt] for alt in result.alternates],
        "departure": now.isoformat(timespec="minutes"),
        "eta": (now + timedelta(minutes=itinerary.total_time_minutes)).isoformat(timespec="minutes"),
    }


@app.get("/stations")
async def stations_endpoint(include_planned: Optional[bool] = None, line: Optional[str] = None):
    """List all stations, optionally filtered by line."""
    stations = list_stations(include_planned)

    if line:
        stations = [s for s in stations if line.lower() in s.lines]

    return {
        "count": len(stations),
        "stations": [
            {
                "id": s.id,
                "name": s.name,
                "lines": s.lines,
                "planned": s.planned,
            }
            for s in stations
        ]
    }


@app.get("/autocomplete")
async def autocomplete_endpoint(prefix: str = ""):
    """Station names matching a typed prefix."""
    return {"prefix": prefix, "matches": autocomplete(prefix)}


@app.post("/network/rebuild")
async def rebuild_endpoint(include_planned: bool = INCLUDE_PLANNED):
    """Rebuild the station graph and swap it in."""
    network = rebuild_network(include_planned)
    return {
        "status": "rebuilt",
        "include_planned": network.include_planned,
        "stations": len(network),
    }


@app.get("/trips/common")
async def common_trips(limit: int = Query(5, ge=1, le=100), db: Database = Depends(get_db)):
    """Most frequently requested trips."""
    network = get_network()
    trips = []
    for from_key, to_key, count in db.get_common_trips(limit):
        from_st = network.registry.lookup(from_key)
        to_st = network.registry.lookup(to_key)
        trips.append({
            "from": from_st.name if from_st else from_key,
            "to": to_st.name if to_st else to_key,
            "count": count,
        })
    return {"trips": trips}


def run_server(host: str = API_HOST, port: int = API_PORT):
    """Run the FastAPI server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info(f"Starting Namma Metro API on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
