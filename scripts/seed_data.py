"""Seed script to populate the database with sample data."""

import math
from datetime import date, timedelta
from decimal import Decimal

from solarpro.core.config import settings
from solarpro.core.database import Base, SessionLocal, engine
from solarpro.models.reading import DailyReading
from solarpro.services.auth import ensure_admin_user


def _sample_reading(day: date) -> DailyReading:
    """Build a plausible reading with a summer peak in production."""
    season = math.cos((day.timetuple().tm_yday - 172) / 365 * 2 * math.pi)
    produced = 14 + 10 * season
    exported = produced * (0.45 + 0.15 * season)
    imported = 9 - 5 * season
    return DailyReading(
        date=day,
        produced=Decimal(f"{produced:.2f}"),
        exported=Decimal(f"{exported:.2f}"),
        imported=Decimal(f"{imported:.2f}"),
    )


def seed_database(start: date = date(2025, 1, 1), days: int = 365) -> None:
    """Seed the database with sample data."""
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        if db.query(DailyReading).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")
        for offset in range(days):
            db.add(_sample_reading(start + timedelta(days=offset)))
        db.commit()
        print(f"Created {days} daily readings from {start.isoformat()}")

        password = settings.ADMIN_PASSWORD or "changeme123"
        user = ensure_admin_user(db, settings.ADMIN_USERNAME, password)
        print(f"Admin user: {user.username}")


if __name__ == "__main__":
    seed_database()
