#!/usr/bin/env python3
"""
Seed the fleet tables (categories, car models, cars, customers) with deterministic data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: rates follow the category band, mileage follows car age

Usage:
    python scripts/seed_fleet.py
"""

from __future__ import annotations

import random
import string
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from car_rental_admin.domain.car import CarStatus
from car_rental_admin.infra.db.models.car import CarRow
from car_rental_admin.infra.db.models.car_model import CarModelRow
from car_rental_admin.infra.db.models.category import CategoryRow
from car_rental_admin.infra.db.models.customer import CustomerRow
from car_rental_admin.infra.db.models.rental import RentalRow
from car_rental_admin.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42
NUM_CARS = 40
NUM_CUSTOMERS = 25
CURRENT_YEAR = 2026


# ==============================================================================
# Fleet Data
# ==============================================================================

# name -> (description, daily discount %, weekly discount %, hourly rate band)
CATEGORIES = {
    "Economy": ("Small city cars", None, Decimal("5"), (Decimal("8"), Decimal("12"))),
    "Compact": ("Compact sedans and hatchbacks", Decimal("5"), Decimal("10"), (Decimal("12"), Decimal("18"))),
    "SUV": ("Sport utility vehicles", Decimal("5"), Decimal("15"), (Decimal("18"), Decimal("28"))),
    "Premium": ("Executive and luxury cars", Decimal("10"), Decimal("20"), (Decimal("30"), Decimal("45"))),
}

MODELS_BY_CATEGORY = {
    "Economy": [("Fiat", "Panda"), ("Toyota", "Aygo"), ("Kia", "Picanto")],
    "Compact": [("Volkswagen", "Golf"), ("Toyota", "Corolla"), ("Skoda", "Octavia")],
    "SUV": [("Toyota", "RAV4"), ("Hyundai", "Tucson"), ("Nissan", "Qashqai")],
    "Premium": [("BMW", "5 Series"), ("Audi", "A6"), ("Mercedes-Benz", "E-Class")],
}

COLORS = ["White", "Black", "Silver", "Grey", "Blue", "Red"]

FIRST_NAMES = ["Ana", "Marek", "Julia", "Tomas", "Ewa", "Lukas", "Sofia", "Piotr", "Nina", "Jan"]
LAST_NAMES = ["Nowak", "Kowalski", "Novak", "Schmidt", "Rossi", "Garcia", "Weber", "Horvat"]

# VINs never use I, O or Q
VIN_ALPHABET = "".join(c for c in string.ascii_uppercase + string.digits if c not in "IOQ")


# ==============================================================================
# Rate Calculation
# ==============================================================================


def calculate_rates(hourly_band: tuple[Decimal, Decimal]) -> tuple[Decimal, Decimal, Decimal]:
    """
    Pick an hourly rate inside the band and derive daily and weekly rates.

    Logic:
    - Daily rate is worth ~6 billed hours
    - Weekly rate is worth ~5 billed days
    """
    low, high = hourly_band
    hourly = Decimal(random.randint(int(low * 100), int(high * 100))) / 100
    daily = (hourly * 6).quantize(Decimal("1"))
    weekly = (daily * 5).quantize(Decimal("1"))
    return hourly.quantize(Decimal("0.01")), daily, weekly


# ==============================================================================
# Seed Generation
# ==============================================================================


def generate_vin() -> str:
    return "".join(random.choices(VIN_ALPHABET, k=17))


def generate_plate(index: int) -> str:
    letters = "".join(random.choices(string.ascii_uppercase, k=3))
    return f"{letters}-{1000 + index}"


def generate_car(
    index: int, category: CategoryRow, model: CarModelRow, hourly_band: tuple[Decimal, Decimal]
) -> CarRow:
    production_year = random.choices(
        range(CURRENT_YEAR - 6, CURRENT_YEAR + 1),
        weights=[1, 2, 3, 4, 5, 6, 4],  # Favor newer cars
        k=1,
    )[0]
    years_old = CURRENT_YEAR - production_year
    hourly, daily, weekly = calculate_rates(hourly_band)

    # A few cars start in the workshop
    status = CarStatus.MAINTENANCE if random.random() < 0.1 else CarStatus.AVAILABLE

    return CarRow(
        vin=generate_vin(),
        license_plate=generate_plate(index),
        production_year=production_year,
        color=random.choice(COLORS),
        status=status.value,
        model_id=model.id,
        category_id=category.id,
        hourly_rate=hourly,
        daily_rate=daily,
        weekly_rate=weekly,
        mileage_km=random.randint(0, max(1000, years_old * 25000)),
    )


def generate_customer(index: int) -> CustomerRow:
    first_name = random.choice(FIRST_NAMES)
    last_name = random.choice(LAST_NAMES)
    return CustomerRow(
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}.{last_name.lower()}{index}@example.com",
        phone=f"+48 {random.randint(500, 799)} {random.randint(100, 999)} {random.randint(100, 999)}",
    )


def seed_fleet(num_cars: int = NUM_CARS, num_customers: int = NUM_CUSTOMERS, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with a deterministic fleet.

    Args:
        num_cars: Number of cars to generate
        num_customers: Number of customers to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)

    print(f"🌱 Seeding fleet: {num_cars} cars, {num_customers} customers (seed={seed})...")

    with get_session() as session:
        # Step 1: Clear existing data, children first (foreign keys are RESTRICT)
        print("🗑️  Clearing existing data...")
        for row_class in (RentalRow, CarRow, CustomerRow, CarModelRow, CategoryRow):
            deleted = session.query(row_class).delete()
            print(f"   Deleted {deleted} rows from {row_class.__tablename__}")

        # Step 2: Categories and models
        categories: dict[str, CategoryRow] = {}
        models: dict[str, list[CarModelRow]] = {}
        for name, (description, daily_discount, weekly_discount, _) in CATEGORIES.items():
            categories[name] = CategoryRow(
                name=name,
                description=description,
                daily_discount_percent=daily_discount,
                weekly_discount_percent=weekly_discount,
            )
            models[name] = [CarModelRow(brand=brand, name=model) for brand, model in MODELS_BY_CATEGORY[name]]
            session.add(categories[name])
            session.add_all(models[name])
        session.flush()  # Assign ids

        # Step 3: Cars
        print(f"🚗 Generating {num_cars} cars...")
        cars = []
        for index in range(num_cars):
            name = random.choice(list(CATEGORIES))
            cars.append(
                generate_car(index, categories[name], random.choice(models[name]), CATEGORIES[name][3])
            )
        session.add_all(cars)

        # Step 4: Customers
        print(f"👤 Generating {num_customers} customers...")
        customers = [generate_customer(index) for index in range(num_customers)]
        session.add_all(customers)
        session.flush()

        print(f"✅ Successfully seeded {len(cars)} cars and {len(customers)} customers!")

        print("\n📊 Sample cars:")
        for i, car in enumerate(cars[:5], 1):
            print(
                f"   {i}. {car.license_plate} ({car.production_year}, {car.status}) - "
                f"{car.hourly_rate}/h, {car.daily_rate}/day, {car.weekly_rate}/week"
            )

        if len(cars) > 5:
            print(f"   ... and {len(cars) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_fleet()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
