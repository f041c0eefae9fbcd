"""Shared fixtures for store and business tests.

Every test gets its own StudioStore backed by a private in-memory SQLite
database, so no state leaks between tests.
"""
from datetime import datetime

import pytest

from store import StudioStore, seed_store
from store.models import Booking, Client, Gallery, Package


@pytest.fixture
def store():
    """Yield a fresh, empty StudioStore."""
    studio = StudioStore()
    try:
        yield studio
    finally:
        studio.close()


@pytest.fixture
def seeded_store(store):
    """Yield a StudioStore loaded with the demo studio fixture."""
    seed_store(store)
    return store


@pytest.fixture
def now():
    """Stable reference time for deterministic date comparisons."""
    return datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def make_client():
    """Factory for detached Client rows used by pure view tests."""
    def _make(client_id, name="Client", **fields):
        values = {
            "email": f"client{client_id}@example.com",
            "phone": "",
            "status": "active",
            "total_spent": 0,
            "referred_by": None,
            "referrals": [],
            "created_at": datetime(2024, 1, 1),
        }
        values.update(fields)
        return Client(id=client_id, name=name, **values)
    return _make


@pytest.fixture
def make_booking():
    """Factory for detached Booking rows used by pure view tests."""
    def _make(booking_id, price=0, date=None, **fields):
        values = {
            "client_id": None,
            "type": "portrait",
            "title": f"Booking {booking_id}",
            "status": "pending",
            "reminders": [],
        }
        values.update(fields)
        return Booking(id=booking_id, price=price, date=date, **values)
    return _make


@pytest.fixture
def make_gallery():
    """Factory for detached Gallery rows used by pure view tests."""
    def _make(gallery_id, images=None, created_at=None, **fields):
        values = {
            "client_id": None,
            "title": f"Gallery {gallery_id}",
            "is_public": False,
        }
        values.update(fields)
        return Gallery(
            id=gallery_id,
            images=images or [],
            created_at=created_at or datetime(2024, 1, 1),
            **values
        )
    return _make


@pytest.fixture
def make_package():
    """Factory for detached Package rows used by pure view tests."""
    def _make(package_id, price=0, is_active=True, **fields):
        return Package(
            id=package_id, price=price, is_active=is_active,
            name=fields.pop("name", f"Package {package_id}"), **fields
        )
    return _make
