import random
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from tests.factories import ListingFactory

VANCOUVER = ZoneInfo("America/Vancouver")


@pytest.fixture
def factory() -> ListingFactory:
    """Factory for listings with seeded Faker."""
    return ListingFactory(seed=42)


@pytest.fixture
def rng() -> random.Random:
    """Seeded RNG for coordinate jitter."""
    return random.Random(7)


@pytest.fixture
def monday_10am() -> datetime:
    """Monday 2026-10-19 10:00 in Vancouver."""
    return datetime(2026, 10, 19, 10, 0, tzinfo=VANCOUVER)


@pytest.fixture
def tuesday_10am() -> datetime:
    """Tuesday 2026-10-20 10:00 in Vancouver."""
    return datetime(2026, 10, 20, 10, 0, tzinfo=VANCOUVER)
