#!/usr/bin/env python3
"""
Seed the vehicles table with a deterministic demo garage.

Features:
- Deterministic: fixed seed → same garage every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: mileage correlated with vehicle age

Usage:
    DATABASE_URL=postgresql+psycopg://... python scripts/seed_vehicles.py
"""

from __future__ import annotations

import random
import sys
from datetime import date
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import delete

from parts_finder.domain.vehicle import VehicleDraft
from parts_finder.infra.db.models.vehicle import VehicleRow
from parts_finder.infra.db.session import session_scope


RANDOM_SEED = 42
NUM_VEHICLES = 4

MODELS_BY_MAKE = {
    "Toyota": ["Corolla", "Camry", "RAV4", "Hilux", "Yaris"],
    "Honda": ["Civic", "Accord", "CR-V", "HR-V", "Fit"],
    "Nissan": ["Versa", "Sentra", "Kicks", "X-Trail", "March"],
    "Mazda": ["Mazda3", "Mazda6", "CX-3", "CX-5", "CX-30"],
    "Volkswagen": ["Jetta", "Tiguan", "Taos", "Vento", "Golf"],
}

# Typical yearly distance driven, in km
KM_PER_YEAR_MIN = 8_000
KM_PER_YEAR_MAX = 20_000


def generate_draft(current_year: int) -> VehicleDraft:
    """Generate one random, valid vehicle draft."""
    make = random.choice(list(MODELS_BY_MAKE))
    model = random.choice(MODELS_BY_MAKE[make])
    year = random.randint(current_year - 12, current_year)

    years_old = max(1, current_year - year)
    mileage = years_old * random.randint(KM_PER_YEAR_MIN, KM_PER_YEAR_MAX)

    draft = VehicleDraft(make=make, model=model, year=year, mileage=mileage)
    draft.validate(current_year=current_year)
    return draft


def main() -> None:
    random.seed(RANDOM_SEED)
    current_year = date.today().year

    drafts = [generate_draft(current_year) for _ in range(NUM_VEHICLES)]

    with session_scope() as session:
        session.execute(delete(VehicleRow))
        for draft in drafts:
            session.add(
                VehicleRow(
                    make=draft.make,
                    model=draft.model,
                    year=draft.year,
                    mileage=draft.mileage,
                    vin=draft.vin,
                )
            )

    print(f"Seeded {len(drafts)} vehicles:")
    for draft in drafts:
        print(f"  - {draft.year} {draft.make} {draft.model} ({draft.mileage:,} km)")


if __name__ == "__main__":
    main()
