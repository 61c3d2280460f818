"""
Shared fixtures for the PetBnB search backend test suite.

Every test runs against one in-memory SQLite database created per session.
Each test gets its own connection-level transaction that is rolled back at
teardown, so tests never see each other's rows.
"""

from datetime import date, datetime, timedelta, timezone
import math
import os
from typing import Callable, Iterable, Optional, Sequence, Tuple

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RATING_CACHE_ENABLED", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.constants import EARTH_RADIUS_METERS
from app.core.ulid_helper import generate_ulid
from app.database import Base

# Import models so Base.metadata is populated for create_all.
import app.models  # noqa: F401
from app.models import Availability, Review, Sitter, SitterService, User

ORIGIN: Tuple[float, float] = (40.7128, -74.0060)


@pytest.fixture(scope="session")
def _unit_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_connection(_unit_engine):
    connection = _unit_engine.connect()
    transaction = connection.begin()
    try:
        yield connection
    finally:
        transaction.rollback()
        connection.close()


@pytest.fixture
def session_factory(db_connection: Connection) -> Callable[[], Session]:
    """Opens extra sessions inside the test's transaction (used for refreshes)."""
    return sessionmaker(bind=db_connection, autoflush=False, expire_on_commit=False)


@pytest.fixture
def unit_db(session_factory) -> Session:
    """
    Provide a session bound to the test's connection.

    Nothing is committed; the surrounding transaction is rolled back at
    teardown.
    """
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def km_north(lat: float, km: float) -> float:
    """Latitude `km` kilometres due north of `lat` on the haversine sphere."""
    return lat + math.degrees(km * 1000.0 / EARTH_RADIUS_METERS)


class Seeder:
    """Builds rows directly through the session and flushes after each one."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _add(self, obj):
        self.session.add(obj)
        self.session.flush()
        return obj

    def user(self, email: Optional[str] = None) -> User:
        return self._add(User(id=generate_ulid(), email=email or f"user-{generate_ulid().lower()}@example.com"))

    def sitter(
        self,
        *,
        lat: float = ORIGIN[0],
        lng: float = ORIGIN[1],
        km_away: Optional[float] = None,
        radius_km: float = 10.0,
        email: Optional[str] = None,
        sitter_id: Optional[str] = None,
        bio: Optional[str] = "Loves dogs",
        rate_boarding_cents: Optional[int] = None,
        rate_daycare_cents: Optional[int] = None,
        response_time_minutes: Optional[int] = None,
        repeat_client_pct: Optional[int] = None,
        services: Sequence[Tuple[str, int]] = (),
    ) -> Sitter:
        """Create a sitter; `km_away` places it that far north of ORIGIN."""
        if km_away is not None:
            lat, lng = km_north(ORIGIN[0], km_away), ORIGIN[1]
        owner = self.user(email)
        sitter = self._add(
            Sitter(
                id=sitter_id or generate_ulid(),
                user_id=owner.id,
                bio=bio,
                rate_boarding_cents=rate_boarding_cents,
                rate_daycare_cents=rate_daycare_cents,
                response_time_minutes=response_time_minutes,
                repeat_client_pct=repeat_client_pct,
                radius_km=radius_km,
                lat=lat,
                lng=lng,
            )
        )
        for kind, price_cents in services:
            self._add(
                SitterService(id=generate_ulid(), sitter_id=sitter.id, service=kind, price_cents=price_cents)
            )
        return sitter

    def availability(
        self, sitter: Sitter, start: date, days: int, *, available: bool = True
    ) -> None:
        self.on_dates(sitter, (start + timedelta(days=i) for i in range(days)), available=available)

    def on_dates(self, sitter: Sitter, dates: Iterable[date], *, available: bool = True) -> None:
        for day in dates:
            self.session.add(Availability(sitter_id=sitter.id, date=day, is_available=available))
        self.session.flush()

    def review(
        self,
        sitter: Sitter,
        rating: int,
        *,
        owner: Optional[User] = None,
        comment: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Review:
        owner = owner or self.user()
        return self._add(
            Review(
                id=generate_ulid(),
                sitter_id=sitter.id,
                owner_id=owner.id,
                rating=rating,
                comment=comment,
                created_at=created_at or datetime.now(timezone.utc),
            )
        )


@pytest.fixture
def seed(unit_db) -> Seeder:
    return Seeder(unit_db)


@pytest.fixture
def origin() -> Tuple[float, float]:
    return ORIGIN
