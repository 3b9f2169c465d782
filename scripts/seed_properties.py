#!/usr/bin/env python3
"""
Seed the configured property store with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Realism-lite: prices correlated with city and property type

Usage:
    PROPERTY_STORE=mongodb python scripts/seed_properties.py
    PROPERTY_STORE=postgres DATABASE_URL=... python scripts/seed_properties.py
"""

from __future__ import annotations

import random
import sys
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from property_manager.adapters.mongo_property_repository import MongoPropertyRepository
from property_manager.adapters.postgres_property_repository import PostgresPropertyRepository
from property_manager.domain.property import NewProperty
from property_manager.infra.config import storage_backend
from property_manager.infra.db.models.property import PropertyRow
from property_manager.infra.db.session import get_session
from property_manager.infra.mongo.client import (
    close_client,
    ensure_indexes,
    get_properties_collection,
)
from property_manager.ports.property_repository import PropertyRepository


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_PROPERTIES = 60
NUM_OWNERS = 8


# ==============================================================================
# Listing Data
# ==============================================================================

# Cities with price bands
CITIES = {
    "Bogotá": (Decimal("180000"), Decimal("650000")),
    "Medellín": (Decimal("150000"), Decimal("520000")),
    "Cartagena": (Decimal("220000"), Decimal("900000")),
    "Cali": (Decimal("120000"), Decimal("400000")),
    "Barranquilla": (Decimal("110000"), Decimal("380000")),
}

# Property types with a price multiplier
PROPERTY_TYPES = {
    "Apartamento": Decimal("1.00"),
    "Casa": Decimal("1.35"),
    "Loft": Decimal("0.85"),
    "Penthouse": Decimal("2.10"),
    "Casa Campestre": Decimal("1.80"),
}

ADJECTIVES = ["Verde", "del Parque", "Colonial", "Moderno", "del Lago", "Azul", "Central"]

STREETS = ["Calle", "Carrera", "Avenida", "Transversal", "Diagonal"]


# ==============================================================================
# Seed Generation
# ==============================================================================


def calculate_price(city: str, property_type: str) -> Decimal:
    """Random price inside the city band, scaled by type and rounded to 1000."""
    band_min, band_max = CITIES[city]
    base_price = Decimal(random.randint(int(band_min), int(band_max)))
    price = base_price * PROPERTY_TYPES[property_type]
    return (price / 1000).quantize(Decimal("1")) * 1000


def generate_property() -> NewProperty:
    """Generate a single random property."""
    city = random.choice(list(CITIES))
    property_type = random.choice(list(PROPERTY_TYPES))
    name = f"{property_type} {random.choice(ADJECTIVES)}"
    address = (
        f"{random.choice(STREETS)} {random.randint(1, 150)} "
        f"# {random.randint(1, 99)}-{random.randint(1, 99)}, {city}"
    )
    image_slug = name.lower().replace(" ", "-")

    return NewProperty(
        owner_id=f"owner-{random.randint(1, NUM_OWNERS)}",
        name=name,
        address=address,
        price=calculate_price(city, property_type),
        image=f"https://images.example.com/{image_slug}-{random.randint(1, 999)}.jpg",
    )


def seed_into(repository: PropertyRepository, num_properties: int) -> None:
    print(f"🏠 Generating {num_properties} properties...")
    created = [repository.create(generate_property()) for _ in range(num_properties)]

    print(f"✅ Successfully seeded {len(created)} properties!")

    print("\n📊 Sample properties:")
    for i, prop in enumerate(created[:5], 1):
        print(f"   {i}. {prop.name} - {prop.address} - ${prop.price:,.2f} ({prop.owner_id})")

    if len(created) > 5:
        print(f"   ... and {len(created) - 5} more")


def seed_properties(num_properties: int = NUM_PROPERTIES, seed: int = RANDOM_SEED) -> None:
    """
    Seed the configured store (PROPERTY_STORE) with random properties.

    Args:
        num_properties: Number of properties to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)
    backend = storage_backend()

    print(f"🌱 Seeding {backend} with {num_properties} properties (seed={seed})...")

    if backend == "mongodb":
        collection = get_properties_collection()
        try:
            print("🗑️  Clearing existing properties...")
            deleted_count = collection.delete_many({}).deleted_count
            print(f"   Deleted {deleted_count} existing properties")

            ensure_indexes(collection)
            seed_into(MongoPropertyRepository(collection=collection), num_properties)
        finally:
            close_client()

    elif backend == "postgres":
        with get_session() as session:
            print("🗑️  Clearing existing properties...")
            deleted_count = session.query(PropertyRow).delete()
            print(f"   Deleted {deleted_count} existing properties")

            seed_into(PostgresPropertyRepository(session=session), num_properties)

    else:
        raise RuntimeError("The memory store lives inside the API process and cannot be seeded")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_properties()
    except Exception as e:
        print(f"❌ Error seeding properties: {e}", file=sys.stderr)
        sys.exit(1)
