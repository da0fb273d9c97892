#!/usr/bin/env python3
"""
Reference Route Seed Script
Loads the five reference routes (R001-R005) into the database.

Usage:
    python -m scripts.seed_routes
"""
import sys
import os

# Add the parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session
from fueleu.database import SessionLocal, init_db
from fueleu.repositories import SqlRouteRepository
from fueleu.seed import seed_routes


def main():
    # Ensure tables exist
    init_db()

    db: Session = SessionLocal()
    try:
        routes = seed_routes(SqlRouteRepository(db))
        db.commit()
    except Exception as e:
        print(f"Error seeding routes: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()

    print(f"Seeded {len(routes)} routes:")
    for route in routes:
        marker = " (baseline)" if route.is_baseline else ""
        print(f"  {route.route_code}: {route.vessel_type.value}/{route.fuel_type.value} {route.year}{marker}")


if __name__ == "__main__":
    main()
