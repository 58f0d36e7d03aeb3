"""SQLite trip history for route queries."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, func, Column, Integer, String, DateTime
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import DB_PATH

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TripHistory(Base):
    """Successful route queries, stored by normalized station key."""
    __tablename__ = "trip_history"

    id = Column(Integer, primary_key=True)
    from_station = Column(String(100), nullable=False)
    to_station = Column(String(100), nullable=False)
    stops = Column(Integer, nullable=False, default=0)
    timestamp = Column(DateTime, default=_utcnow)


class Database:
    """Database manager for trip history."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(f"sqlite:///{self.db_path}")
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine)

    def add_trip(self, from_station: str, to_station: str, stops: int = 0):
        """Record a trip in history."""
        session = self.Session()
        try:
            trip = TripHistory(
                from_station=from_station,
                to_station=to_station,
                stops=stops,
            )
            session.add(trip)
            session.commit()
        finally:
            session.close()

    def get_common_trips(self, limit: int = 5) -> list[tuple[str, str, int]]:
        """Most frequent (from, to, count) trips, most frequent first."""
        session = self.Session()
        try:
            results = session.query(
                TripHistory.from_station,
                TripHistory.to_station,
                func.count().label("count")
            ).group_by(
                TripHistory.from_station, TripHistory.to_station
            ).order_by(func.count().desc()).limit(limit).all()

            return [(r[0], r[1], r[2]) for r in results]
        finally:
            session.close()

    def get_recent_trips(self, limit: int = 10) -> list[dict]:
        """Latest trips, oldest first."""
        session = self.Session()
        try:
            trips = session.query(TripHistory).order_by(
                TripHistory.id.desc()
            ).limit(limit).all()

            return [
                {
                    "from_station": t.from_station,
                    "to_station": t.to_station,
                    "stops": t.stops,
                    "timestamp": t.timestamp,
                }
                for t in reversed(trips)
            ]
        finally:
            session.close()

    def clear_trips(self):
        """Delete all trip history."""
        session = self.Session()
        try:
            session.query(TripHistory).delete()
            session.commit()
        finally:
            session.close()


# Singleton instance - created on first use
_db: Optional[Database] = None


def get_db() -> Database:
    global _db
    if _db is None:
        _db = Database()
    return _db
