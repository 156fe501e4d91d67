import itertools
import random
from datetime import datetime

import pytest

from healthpoint_pos.db import DB
from healthpoint_pos.ids import IdGenerator
from healthpoint_pos.inventory import Inventory


class TickingClock:
    """Millisecond clock that advances by one on every read."""

    def __init__(self, start=1_700_000_000_000):
        self._ticks = itertools.count(start)

    def __call__(self):
        return next(self._ticks)


@pytest.fixture
def db(tmp_path):
    d = DB(str(tmp_path / 'pharmacy.db'))
    yield d
    d.close()


@pytest.fixture
def ids():
    return IdGenerator(clock=TickingClock(), rng=random.Random(7), sleep=lambda s: None)


@pytest.fixture
def inventory(db, ids):
    return Inventory(db, ids)


@pytest.fixture
def fixed_now():
    return lambda: datetime(2024, 3, 5, 14, 30, 15)


@pytest.fixture
def stocked(inventory):
    """Two available products: 10 x 5.00 and 3 x 12.50."""
    a = inventory.add_product({'name': 'Paracetamol 500mg', 'category': 'Pain Reliever',
                               'price': '5.00', 'stock': '10', 'status': 'Available'})
    b = inventory.add_product({'name': 'Amoxicillin 500mg', 'category': 'Antibiotic',
                               'price': '12.50', 'stock': '3', 'status': 'Available'})
    return a, b


@pytest.fixture
def ticking_clock():
    return TickingClock
